"""GeoLocation ORM — reference places a name can be associated with.

Invariants:
    - place is the primary key, stored upper-case (e.g. IBADAN)
    - region is non-nullable
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class GeoLocation(Base):
    """Place reference entity, looked up by place when binding payloads."""
    __tablename__ = "geo_locations"

    place: Mapped[str] = mapped_column(String(100), primary_key=True)
    region: Mapped[str] = mapped_column(String(100), nullable=False)
