"""DuplicateNameEntry ORM — a later submission of a name that already has a canonical entry.

Invariants:
    - Always belongs to exactly one NameEntry (name_entry_id FK, NOT NULL)
    - Deleted together with its canonical entry (ON DELETE CASCADE)
    - Not independently addressable as a name record (name is NOT unique here)
"""

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.name_entry import NameFields


class DuplicateNameEntry(NameFields, Base):
    """Alternate spelling or repeated submission mapped to a canonical entry."""
    __tablename__ = "duplicate_name_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name_entry_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("name_entries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
