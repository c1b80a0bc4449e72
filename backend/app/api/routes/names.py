"""Names — /v1/names endpoints: create, list, fetch, update, import, delete.

Invariants:
    - Names are lower-cased before they reach NameEntryService
    - Listing filters (submittedBy, indexed) run AFTER the page is loaded —
      a filtered page may hold fewer than `count` items
    - Update requires the URL name to equal the payload name exactly; target must exist
    - Upload rejects an empty file before any temp file exists; the temp file is
      removed on every exit path
    - Batch elements are inserted independently (no all-or-nothing)
    - Deletes are idempotent: absent names are not distinguished in the response

Design Decisions:
    - Errors raised as DictionaryError subclasses; status codes come from the
      category mapping in core/errors.py, never from literals here
"""

import logging

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from app.api.dependencies import get_geo_locations, get_importer, get_name_service
from app.config import Settings, get_settings
from app.core.domain_types import DEFAULT_PAGE, ListOptions
from app.core.errors import (
    FieldError, ImportFailedError, NameMismatchError, NameNotFoundError,
    PayloadValidationError,
)
from app.core.import_status import ImportStatus
from app.core.name_filters import filter_names
from app.core.repository_protocols import GeoLocationRepository, NameImporter
from app.infrastructure.upload_files import is_empty_upload, temporary_upload
from app.schemas.name import (
    MessageResponse, NameDto, NameEntryPayload, NameWithDuplicates,
    to_duplicate_dto, to_name_dto,
)
from app.services.name_entry_binding import bind_name_entries, bind_name_entry
from app.services.name_entry_service import NameEntryService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/v1/names", tags=["names"])


@router.post(
    "", response_model=MessageResponse, status_code=status.HTTP_201_CREATED,
)
async def add_name(
    payload: NameEntryPayload,
    service: NameEntryService = Depends(get_name_service),
    geo_locations: GeoLocationRepository = Depends(get_geo_locations),
):
    """Add one name; an existing name is recorded as a duplicate."""
    entry = await bind_name_entry(payload, geo_locations)
    await service.insert_taking_care_of_duplicates(entry)
    return MessageResponse(message="Name successfully added")


@router.get("", response_model=list[NameDto])
async def get_all_names(
    page: int = Query(DEFAULT_PAGE, ge=0),
    count: int | None = Query(None, ge=1),
    submitted_by: str | None = Query(None, alias="submittedBy"),
    indexed: bool | None = Query(None),
    service: NameEntryService = Depends(get_name_service),
    settings: Settings = Depends(get_settings),
):
    """List a page of names, then filter it by submittedBy / indexed."""
    options = ListOptions(
        page=page,
        count=count or settings.default_page_size,
        submitted_by=submitted_by,
        indexed=indexed,
    )
    entries = await service.load_all_names(options)
    return filter_names([to_name_dto(e) for e in entries], options)


@router.get("/{name}", response_model=NameDto | NameWithDuplicates)
async def get_name(
    name: str,
    duplicates: bool = Query(False),
    service: NameEntryService = Depends(get_name_service),
):
    """Get one name, optionally bundled with its duplicates."""
    entry = await service.load_name(name)
    if entry is None:
        raise NameNotFoundError(name)
    if duplicates:
        found = await service.load_name_duplicates(name)
        return NameWithDuplicates(
            main_entry=to_name_dto(entry),
            duplicates=[to_duplicate_dto(d) for d in found],
        )
    return to_name_dto(entry)


@router.put(
    "/{name}", response_model=MessageResponse, status_code=status.HTTP_201_CREATED,
)
async def update_name(
    name: str,
    payload: NameEntryPayload,
    service: NameEntryService = Depends(get_name_service),
    geo_locations: GeoLocationRepository = Depends(get_geo_locations),
):
    """Replace every field of an existing name."""
    if payload.name != name:
        raise NameMismatchError(name, payload.name)
    if await service.load_name(name) is None:
        raise NameNotFoundError(name)
    entry = await bind_name_entry(payload, geo_locations)
    await service.update_name(entry)
    return MessageResponse(message="Name successfully updated")


@router.post(
    "/upload", response_model=MessageResponse, status_code=status.HTTP_201_CREATED,
)
async def upload_names(
    name_files: UploadFile = File(..., alias="nameFiles"),
    importer: NameImporter = Depends(get_importer),
    settings: Settings = Depends(get_settings),
):
    """Import names from an uploaded spreadsheet."""
    if is_empty_upload(name_files):
        raise PayloadValidationError(
            [FieldError("nameFiles", "You can't upload an empty file")],
        )

    import_status = ImportStatus()
    try:
        async with temporary_upload(name_files, settings.upload_tmp_dir) as path:
            import_status = await importer.do_import(path)
    except OSError as e:
        logger.warning(f"Failed to import file with error {e}")
        import_status.add_error(str(e))

    if import_status.has_errors:
        raise ImportFailedError(import_status.error_messages)
    return MessageResponse(message="File successfully imported")


@router.post(
    "/batch", response_model=MessageResponse, status_code=status.HTTP_201_CREATED,
)
async def add_names(
    payloads: list[NameEntryPayload],
    service: NameEntryService = Depends(get_name_service),
    geo_locations: GeoLocationRepository = Depends(get_geo_locations),
):
    """Add an array of names; each element follows the single-insert duplicate policy."""
    if not payloads:
        raise PayloadValidationError(
            [FieldError("body", "must contain at least one name")],
        )
    entries = await bind_name_entries(payloads, geo_locations)
    for entry in entries:
        await service.insert_taking_care_of_duplicates(entry)
    return MessageResponse(message="Names successfully imported")


@router.delete("", response_model=MessageResponse)
async def delete_all_names(
    service: NameEntryService = Depends(get_name_service),
):
    """Delete every name and every duplicate."""
    await service.delete_all_and_duplicates()
    return MessageResponse(message="Names deleted")


@router.delete("/{name}", response_model=MessageResponse)
async def delete_name(
    name: str,
    service: NameEntryService = Depends(get_name_service),
):
    """Delete a name and its duplicates. Absent names still return 200."""
    await service.delete_name_entry_and_duplicates(name)
    return MessageResponse(message=f"{name} deleted")
