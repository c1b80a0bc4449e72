"""Name Entry Binding — turns validated payloads into NameEntry rows.

Invariants:
    - Bound names are already lower-cased (normalize_name)
    - A geoLocation reference must name a known place; unknown places are field errors
    - Batches are bound completely before anything is written: one bad element rejects the batch

Design Decisions:
    - Geolocation lookup at binding time, not in the service: the service only sees
      fully-resolved entries
"""

from app.core.domain_types import DEFAULT_SUBMITTED_BY, normalize_name, normalize_place
from app.core.errors import FieldError, PayloadValidationError
from app.core.repository_protocols import GeoLocationRepository
from app.models.name_entry import NameEntry
from app.schemas.name import NameEntryPayload


async def _resolve_geo_location(
    payload: NameEntryPayload, geo_locations: GeoLocationRepository, field: str,
):
    place = payload.geo_place
    if not place or not place.strip():
        return None, None
    geo = await geo_locations.get(normalize_place(place))
    if geo is None:
        return None, FieldError(field, f"unknown place {place}")
    return geo, None


def _build_entry(payload: NameEntryPayload, geo) -> NameEntry:
    return NameEntry(
        name=normalize_name(payload.name),
        tonal_mark=payload.tonal_mark,
        meaning=payload.meaning,
        extended_meaning=payload.extended_meaning,
        morphology=payload.morphology,
        etymology=list(payload.etymology),
        famous_people=payload.famous_people,
        in_other_languages=payload.in_other_languages,
        media=payload.media,
        tags=payload.tags,
        variants=payload.variants,
        submitted_by=(payload.submitted_by or "").strip() or DEFAULT_SUBMITTED_BY,
        is_indexed=payload.indexed,
        geo_location=geo,
    )


async def bind_name_entry(
    payload: NameEntryPayload, geo_locations: GeoLocationRepository,
) -> NameEntry:
    """Bind one payload. Raises PayloadValidationError on an unknown place."""
    geo, error = await _resolve_geo_location(payload, geo_locations, "geoLocation")
    if error:
        raise PayloadValidationError([error])
    return _build_entry(payload, geo)


async def bind_name_entries(
    payloads: list[NameEntryPayload], geo_locations: GeoLocationRepository,
) -> list[NameEntry]:
    """Bind a batch, aggregating field errors across all elements."""
    entries: list[NameEntry] = []
    errors: list[FieldError] = []
    for index, payload in enumerate(payloads):
        geo, error = await _resolve_geo_location(
            payload, geo_locations, f"[{index}].geoLocation",
        )
        if error:
            errors.append(error)
            continue
        entries.append(_build_entry(payload, geo))
    if errors:
        raise PayloadValidationError(errors)
    return entries
