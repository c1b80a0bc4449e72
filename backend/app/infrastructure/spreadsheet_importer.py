"""Spreadsheet Importer — bulk-loads names from the first worksheet of an .xlsx file.

Invariants:
    - Row 1 is the header; headers match case-insensitively, spaces/dashes folded to underscores
    - A workbook without a `name` column fails as a whole (one error message)
    - Blank rows are skipped; every invalid row yields exactly one "Row <n>: <reason>" message
    - Valid rows go through the same duplicate policy as single inserts

Design Decisions:
    - Parsing runs in a worker thread (asyncio.to_thread): openpyxl is blocking
    - Rows validated through NameEntryPayload so spreadsheet and JSON share one rulebook
    - etymology cells split on ';' into the list the model stores
"""

import asyncio
import logging
import zipfile
from pathlib import Path
from typing import Any

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from pydantic import ValidationError

from app.core.errors import FieldError, PayloadValidationError, format_field_errors
from app.core.import_status import ImportStatus
from app.core.repository_protocols import GeoLocationRepository
from app.services.name_entry_binding import bind_name_entry
from app.services.name_entry_service import NameEntryService
from app.schemas.name import NameEntryPayload

logger = logging.getLogger(__name__)

KNOWN_COLUMNS = frozenset({
    "name", "tonal_mark", "meaning", "extended_meaning", "morphology",
    "etymology", "geo_location", "famous_people", "in_other_languages",
    "media", "tags", "variants", "submitted_by",
})


class SpreadsheetFormatError(Exception):
    """Workbook is readable but not shaped like a names sheet."""


def normalize_header(value: Any) -> str:
    return str(value or "").strip().lower().replace(" ", "_").replace("-", "_")


def _cell_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def read_name_rows(path: Path) -> list[tuple[int, dict[str, str | None]]]:
    """Read (row_number, {column: text}) pairs for every non-blank data row."""
    # A file object, not a path: openpyxl rejects paths by extension
    with path.open("rb") as fh:
        workbook = load_workbook(fh, read_only=True, data_only=True)
        try:
            rows = workbook.worksheets[0].iter_rows(values_only=True)
            header = next(rows, None)
            columns = [normalize_header(h) for h in (header or ())]
            if "name" not in columns:
                raise SpreadsheetFormatError("Spreadsheet has no 'name' column")

            records = []
            for row_number, row in enumerate(rows, start=2):
                values = {
                    column: _cell_text(cell)
                    for column, cell in zip(columns, row)
                    if column in KNOWN_COLUMNS
                }
                if any(values.values()):
                    records.append((row_number, values))
            return records
        finally:
            workbook.close()


def row_to_payload(values: dict[str, str | None]) -> NameEntryPayload:
    data: dict[str, Any] = {k: v for k, v in values.items() if v is not None}
    if "etymology" in data:
        data["etymology"] = [
            part.strip() for part in data["etymology"].split(";") if part.strip()
        ]
    return NameEntryPayload.model_validate(data)


def _validation_message(exc: ValidationError) -> str:
    return format_field_errors([
        FieldError(".".join(str(p) for p in e["loc"]) or "row", e["msg"])
        for e in exc.errors()
    ])


def _reject(status: ImportStatus, row_number: int, reason: str) -> None:
    logger.debug(f"Skipping row {row_number}: {reason}", extra={"row": row_number})
    status.add_error(f"Row {row_number}: {reason}")


class SpreadsheetNameImporter:
    """Imports an uploaded workbook through NameEntryService."""

    def __init__(self, service: NameEntryService, geo_locations: GeoLocationRepository):
        self.service = service
        self.geo_locations = geo_locations

    async def do_import(self, path: Path) -> ImportStatus:
        status = ImportStatus()
        try:
            rows = await asyncio.to_thread(read_name_rows, path)
        except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
            logger.warning(f"Failed to import file with error {e}")
            status.add_error(f"Unable to read spreadsheet: {e}")
            return status
        except SpreadsheetFormatError as e:
            status.add_error(str(e))
            return status

        for row_number, values in rows:
            if not values.get("name"):
                _reject(status, row_number, "name is missing")
                continue
            try:
                payload = row_to_payload(values)
                entry = await bind_name_entry(payload, self.geo_locations)
            except ValidationError as e:
                _reject(status, row_number, _validation_message(e))
                continue
            except PayloadValidationError as e:
                _reject(status, row_number, e.message)
                continue
            status.record(await self.service.insert_taking_care_of_duplicates(entry))

        logger.info(
            f"Imported {status.created} new name(s), {status.duplicates} duplicate(s), "
            f"{len(status.error_messages)} error(s)",
            extra={"imported": status.created + status.duplicates},
        )
        return status
