"""Name Entry Service — mediates between the API and the stores; owns the duplicate policy.

Invariants:
    - First writer of a name wins as canonical; later writers become DuplicateNameEntry rows
    - Exactly one row (entry or duplicate) is created per insert — nothing silently dropped
    - Names are lower-cased before any lookup or write
    - Deleting a canonical entry deletes its duplicates in the same transaction
    - load_name returns None for "not found"; the caller decides the HTTP error

Design Decisions:
    - Service owns commit/rollback; repositories only stage statements
    - Existence check delegated to the store's unique constraint (insert_if_absent)
      instead of read-then-write (ADR: closes the concurrent-insert race)
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import InsertOutcome, ListOptions, normalize_name
from app.core.errors import DatabaseError
from app.core.repository_protocols import DuplicateNameRepository, NameEntryRepository
from app.models.duplicate_name_entry import DuplicateNameEntry
from app.models.name_entry import DESCRIPTIVE_FIELDS, NameEntry, utcnow

logger = logging.getLogger(__name__)


class NameEntryService:
    """Name entry use cases over the entry and duplicate stores."""

    def __init__(
        self,
        db: AsyncSession,
        entries: NameEntryRepository,
        duplicates: DuplicateNameRepository,
    ):
        self.db = db
        self.entries = entries
        self.duplicates = duplicates

    async def insert_taking_care_of_duplicates(self, entry: NameEntry) -> InsertOutcome:
        """Persist entry as canonical, or as a duplicate of the existing canonical entry."""
        entry.name = normalize_name(entry.name)
        try:
            outcome = await self._insert_or_duplicate(entry)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        logger.info(
            f"Inserted name '{entry.name}' as {outcome.value}",
            extra={"name_key": entry.name, "outcome": outcome.value},
        )
        return outcome

    async def _insert_or_duplicate(self, entry: NameEntry) -> InsertOutcome:
        # Second attempt covers a canonical row deleted between conflict and lookup
        for _ in range(2):
            if await self.entries.insert_if_absent(entry) is not None:
                return InsertOutcome.CREATED
            existing = await self.entries.get_by_name(entry.name)
            if existing is not None:
                await self.duplicates.add(_as_duplicate(entry, existing))
                return InsertOutcome.DUPLICATE
            logger.warning(
                f"Name '{entry.name}' vanished after insert conflict, retrying",
                extra={"name_key": entry.name},
            )
        raise DatabaseError(f"name '{entry.name}' kept conflicting", "insert")

    async def load_all_names(self, options: ListOptions | None = None) -> list[NameEntry]:
        options = options or ListOptions()
        return await self.entries.list_page(options.offset, options.count)

    async def load_name(self, name: str) -> NameEntry | None:
        return await self.entries.get_by_name(normalize_name(name))

    async def load_name_duplicates(self, name: str) -> list[DuplicateNameEntry]:
        entry = await self.load_name(name)
        if entry is None:
            return []
        return await self.duplicates.list_for(entry.id)

    async def update_name(self, entry: NameEntry) -> NameEntry:
        """Full replace of the canonical entry's fields. Caller verified it exists."""
        existing = await self.load_name(entry.name)
        for field in DESCRIPTIVE_FIELDS:
            setattr(existing, field, getattr(entry, field))
        existing.geo_location = entry.geo_location
        existing.is_indexed = bool(entry.is_indexed)
        existing.updated_at = utcnow()
        await self.db.commit()
        logger.info(f"Updated name '{existing.name}'", extra={"name_key": existing.name})
        return existing

    async def delete_name_entry_and_duplicates(self, name: str) -> bool:
        """Delete the canonical entry and all its duplicates. False if absent."""
        entry = await self.load_name(name)
        if entry is None:
            return False
        try:
            removed = await self.duplicates.delete_for(entry.id)
            await self.entries.delete(entry)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        logger.info(
            f"Deleted name '{entry.name}' and {removed} duplicate(s)",
            extra={"name_key": entry.name},
        )
        return True

    async def delete_all_and_duplicates(self) -> int:
        try:
            await self.duplicates.delete_all()
            deleted = await self.entries.delete_all()
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        logger.info(f"Deleted all names ({deleted})")
        return deleted


def _as_duplicate(entry: NameEntry, canonical: NameEntry) -> DuplicateNameEntry:
    """Copy a rejected canonical submission into a duplicate of `canonical`."""
    return DuplicateNameEntry(
        name=entry.name,
        name_entry_id=canonical.id,
        **entry.descriptive_values(),
    )
