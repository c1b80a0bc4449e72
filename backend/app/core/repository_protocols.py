"""Boundary Protocols — contracts between the name service and its stores.

Invariants:
    - Core NEVER imports shell modules at runtime — ORM types appear in annotations only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Repositories never commit; the service owns the transaction

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - insert_if_absent is a single atomic statement: the unique constraint decides,
      not a read-then-write in application code (ADR: closes the check-then-act race)
"""

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from app.core.domain_types import NameKey
from app.core.import_status import ImportStatus

if TYPE_CHECKING:
    from app.models.duplicate_name_entry import DuplicateNameEntry
    from app.models.geo_location import GeoLocation
    from app.models.name_entry import NameEntry


class NameEntryRepository(Protocol):
    """Contract for canonical name persistence — implemented by shell."""
    async def insert_if_absent(self, entry: "NameEntry") -> int | None: ...
    async def get_by_name(self, name: NameKey) -> "NameEntry | None": ...
    async def list_page(self, offset: int, limit: int) -> list["NameEntry"]: ...
    async def delete(self, entry: "NameEntry") -> None: ...
    async def delete_all(self) -> int: ...


class DuplicateNameRepository(Protocol):
    """Contract for duplicate submission persistence — implemented by shell."""
    async def add(self, duplicate: "DuplicateNameEntry") -> None: ...
    async def list_for(self, name_entry_id: int) -> list["DuplicateNameEntry"]: ...
    async def delete_for(self, name_entry_id: int) -> int: ...
    async def delete_all(self) -> int: ...


class GeoLocationRepository(Protocol):
    """Contract for geolocation reference data — implemented by shell."""
    async def get(self, place: str) -> "GeoLocation | None": ...
    async def list_all(self) -> list["GeoLocation"]: ...
    async def add(self, geo_location: "GeoLocation") -> None: ...


class NameImporter(Protocol):
    """Contract for bulk import of a stored spreadsheet file."""
    async def do_import(self, path: Path) -> ImportStatus: ...
