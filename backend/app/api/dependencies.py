"""API Dependencies — FastAPI providers wiring repositories and services per request.

Invariants:
    - One AsyncSession per request (get_db is cached by FastAPI within a request)
    - Service, repositories and importer share that session

Design Decisions:
    - Plain Depends() providers over a container: every wire visible, overridable in tests
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database import get_db
from app.infrastructure.name_repositories import (
    SqlDuplicateNameRepository, SqlGeoLocationRepository, SqlNameEntryRepository,
)
from app.infrastructure.spreadsheet_importer import SpreadsheetNameImporter
from app.services.name_entry_service import NameEntryService


def get_geo_locations(db: AsyncSession = Depends(get_db)) -> SqlGeoLocationRepository:
    return SqlGeoLocationRepository(db)


def get_name_service(db: AsyncSession = Depends(get_db)) -> NameEntryService:
    return NameEntryService(
        db, SqlNameEntryRepository(db), SqlDuplicateNameRepository(db),
    )


def get_importer(
    service: NameEntryService = Depends(get_name_service),
    geo_locations: SqlGeoLocationRepository = Depends(get_geo_locations),
) -> SpreadsheetNameImporter:
    return SpreadsheetNameImporter(service, geo_locations)
