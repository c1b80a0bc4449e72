"""Infrastructure Layer — database access, repositories, file handling and logging.

Invariants:
    - Repositories implement the Protocols in core/repository_protocols.py
    - Resources (sessions, temp files) are scoped by context managers

Design Decisions:
    - SQLAlchemy stays behind the repository classes; services see Protocols only
"""
