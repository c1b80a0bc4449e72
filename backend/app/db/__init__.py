"""Database Infrastructure — SQLAlchemy declarative Base.

Invariants:
    - All models share one metadata (Base.metadata)
"""
