"""NameEntry ORM — the canonical record for a lower-cased name.

Invariants:
    - name is lower-case and UNIQUE (uq_name_entries_name) — the store decides duplicates
    - etymology is a JSON list of strings
    - geo_location_place references geo_locations.place (nullable)
    - duplicates are removed with their canonical entry (FK ON DELETE CASCADE)

Design Decisions:
    - Descriptive columns live in NameFields so DuplicateNameEntry stores the full
      alternate submission with identical shape (ADR: duplicates are complete submissions)
    - geo_location loaded with selectin: DTO projection never lazy-loads in async context
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    Boolean, DateTime, ForeignKey, Integer, JSON, String, Text, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, declared_attr, mapped_column, relationship

from app.core.domain_types import DEFAULT_SUBMITTED_BY
from app.db.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Columns copied verbatim between a submission and its stored row
DESCRIPTIVE_FIELDS = (
    "tonal_mark", "meaning", "extended_meaning", "morphology", "etymology",
    "famous_people", "in_other_languages", "media", "tags", "variants",
    "submitted_by",
)


class NameFields:
    """Descriptive columns shared by canonical entries and their duplicates."""

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    tonal_mark: Mapped[str | None] = mapped_column(String(255), nullable=True)
    meaning: Mapped[str | None] = mapped_column(Text, nullable=True)
    extended_meaning: Mapped[str | None] = mapped_column(Text, nullable=True)
    morphology: Mapped[str | None] = mapped_column(Text, nullable=True)
    etymology: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    famous_people: Mapped[str | None] = mapped_column(Text, nullable=True)
    in_other_languages: Mapped[str | None] = mapped_column(Text, nullable=True)
    media: Mapped[str | None] = mapped_column(Text, nullable=True)
    tags: Mapped[str | None] = mapped_column(Text, nullable=True)
    variants: Mapped[str | None] = mapped_column(Text, nullable=True)
    submitted_by: Mapped[str] = mapped_column(
        String(255), nullable=False, default=DEFAULT_SUBMITTED_BY,
    )
    geo_location_place: Mapped[str | None] = mapped_column(
        String(100),
        ForeignKey("geo_locations.place", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )

    @declared_attr
    def geo_location(cls) -> Mapped[Optional["GeoLocation"]]:
        return relationship("GeoLocation", lazy="selectin")

    def descriptive_values(self) -> dict:
        """Column values of the descriptive fields, geolocation resolved to its place."""
        values = {f: getattr(self, f) for f in DESCRIPTIVE_FIELDS}
        values["etymology"] = list(values["etymology"] or [])
        if values["submitted_by"] is None:
            values["submitted_by"] = DEFAULT_SUBMITTED_BY
        values["geo_location_place"] = (
            self.geo_location.place if self.geo_location is not None
            else self.geo_location_place
        )
        return values


class NameEntry(NameFields, Base):
    """Canonical name entity — first writer of a name wins."""
    __tablename__ = "name_entries"
    __table_args__ = (UniqueConstraint("name", name="uq_name_entries_name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    is_indexed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
