"""Name Repositories — SQLAlchemy implementations of the store protocols.

Invariants:
    - Repositories never commit: NameEntryService owns the transaction boundary
    - insert_if_absent is ONE statement (INSERT ... ON CONFLICT (name) DO NOTHING RETURNING id)
    - Listing is ordered by id so pages are stable absent mutation

Design Decisions:
    - Dialect-specific insert (postgresql / sqlite) over SAVEPOINT + IntegrityError:
      pysqlite SAVEPOINT handling is unreliable, ON CONFLICT works on both
    - Bulk DELETE statements over session.delete(): no need to load rows to remove them
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import NameKey
from app.models.duplicate_name_entry import DuplicateNameEntry
from app.models.geo_location import GeoLocation
from app.models.name_entry import NameEntry, utcnow

logger = logging.getLogger(__name__)

_INSERT_BY_DIALECT = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class SqlNameEntryRepository:
    """Canonical entries in the name_entries table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert_if_absent(self, entry: NameEntry) -> int | None:
        """Insert entry unless its name exists. Returns new id, or None on conflict."""
        dialect = self.db.get_bind().dialect.name
        insert = _INSERT_BY_DIALECT.get(dialect)
        if insert is None:
            raise NotImplementedError(f"Unsupported database dialect: {dialect}")

        now = utcnow()
        values = entry.descriptive_values()
        values.update(
            name=entry.name,
            is_indexed=bool(entry.is_indexed),
            created_at=now,
            updated_at=now,
        )
        stmt = (
            insert(NameEntry)
            .values(**values)
            .on_conflict_do_nothing(index_elements=[NameEntry.name])
            .returning(NameEntry.id)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_name(self, name: NameKey) -> NameEntry | None:
        result = await self.db.execute(
            select(NameEntry).where(NameEntry.name == name),
        )
        return result.scalar_one_or_none()

    async def list_page(self, offset: int, limit: int) -> list[NameEntry]:
        result = await self.db.execute(
            select(NameEntry).order_by(NameEntry.id).offset(offset).limit(limit),
        )
        return list(result.scalars().all())

    async def delete(self, entry: NameEntry) -> None:
        await self.db.execute(delete(NameEntry).where(NameEntry.id == entry.id))

    async def delete_all(self) -> int:
        result = await self.db.execute(delete(NameEntry))
        return result.rowcount or 0


class SqlDuplicateNameRepository:
    """Duplicate submissions in the duplicate_name_entries table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, duplicate: DuplicateNameEntry) -> None:
        self.db.add(duplicate)
        await self.db.flush()

    async def list_for(self, name_entry_id: int) -> list[DuplicateNameEntry]:
        result = await self.db.execute(
            select(DuplicateNameEntry)
            .where(DuplicateNameEntry.name_entry_id == name_entry_id)
            .order_by(DuplicateNameEntry.id),
        )
        return list(result.scalars().all())

    async def delete_for(self, name_entry_id: int) -> int:
        result = await self.db.execute(
            delete(DuplicateNameEntry)
            .where(DuplicateNameEntry.name_entry_id == name_entry_id),
        )
        return result.rowcount or 0

    async def delete_all(self) -> int:
        result = await self.db.execute(delete(DuplicateNameEntry))
        return result.rowcount or 0


class SqlGeoLocationRepository:
    """Geolocation reference data in the geo_locations table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, place: str) -> GeoLocation | None:
        return await self.db.get(GeoLocation, place)

    async def list_all(self) -> list[GeoLocation]:
        result = await self.db.execute(
            select(GeoLocation).order_by(GeoLocation.place),
        )
        return list(result.scalars().all())

    async def add(self, geo_location: GeoLocation) -> None:
        self.db.add(geo_location)
        await self.db.flush()
