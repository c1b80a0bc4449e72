"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - NameEntry is the aggregate root; duplicates are scoped by name_entry_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from app.models.geo_location import GeoLocation  # noqa: F401
from app.models.name_entry import NameEntry  # noqa: F401
from app.models.duplicate_name_entry import DuplicateNameEntry  # noqa: F401
