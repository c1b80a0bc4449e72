"""Name Schemas — Pydantic request/response models for the /v1/names endpoints.

Invariants:
    - Wire format is camelCase (submittedBy, tonalMark, geoLocation); Python attributes are snake_case
    - NameEntryPayload.name is required, stripped and non-empty
    - geoLocation accepts a place string or a {place, region} object
    - DTOs are projections of stored rows, never persisted

Design Decisions:
    - alias_generator=to_camel + populate_by_name: existing dashboard payloads keep working
      while tests and services use snake_case
    - Explicit to_*_dto() mappers over from_attributes: is_indexed → indexed, geo relationship → object
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.models.duplicate_name_entry import DuplicateNameEntry
from app.models.geo_location import GeoLocation
from app.models.name_entry import NameEntry, NameFields


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GeoLocationRef(CamelModel):
    """Reference to a geolocation inside a name payload."""
    place: str = Field(min_length=1, max_length=100)
    region: str | None = None


class NameEntryPayload(CamelModel):
    """Incoming name entry — create, batch and update bodies."""
    name: str = Field(min_length=1, max_length=255)
    tonal_mark: str | None = Field(None, max_length=255)
    meaning: str | None = None
    extended_meaning: str | None = None
    morphology: str | None = None
    etymology: list[str] = []
    famous_people: str | None = None
    in_other_languages: str | None = None
    media: str | None = None
    tags: str | None = None
    variants: str | None = None
    submitted_by: str | None = Field(None, max_length=255)
    indexed: bool = False
    geo_location: GeoLocationRef | str | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    @property
    def geo_place(self) -> str | None:
        if isinstance(self.geo_location, GeoLocationRef):
            return self.geo_location.place
        return self.geo_location


class GeoLocationDto(CamelModel):
    place: str
    region: str


class DuplicateNameDto(CamelModel):
    """Read model of one duplicate submission."""
    name: str
    tonal_mark: str | None = None
    meaning: str | None = None
    extended_meaning: str | None = None
    morphology: str | None = None
    etymology: list[str] = []
    famous_people: str | None = None
    in_other_languages: str | None = None
    media: str | None = None
    tags: str | None = None
    variants: str | None = None
    submitted_by: str | None = None
    geo_location: GeoLocationDto | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class NameDto(DuplicateNameDto):
    """Read model of a canonical entry."""
    indexed: bool = False


class NameWithDuplicates(CamelModel):
    main_entry: NameDto
    duplicates: list[DuplicateNameDto]


class MessageResponse(BaseModel):
    message: str


def to_geo_location_dto(geo: GeoLocation | None) -> GeoLocationDto | None:
    if geo is None:
        return None
    return GeoLocationDto(place=geo.place, region=geo.region)


def _common_fields(row: NameFields) -> dict:
    return {
        "name": row.name,
        "tonal_mark": row.tonal_mark,
        "meaning": row.meaning,
        "extended_meaning": row.extended_meaning,
        "morphology": row.morphology,
        "etymology": list(row.etymology or []),
        "famous_people": row.famous_people,
        "in_other_languages": row.in_other_languages,
        "media": row.media,
        "tags": row.tags,
        "variants": row.variants,
        "submitted_by": row.submitted_by,
        "geo_location": to_geo_location_dto(row.geo_location),
        "created_at": row.created_at,
        "updated_at": row.updated_at,
    }


def to_name_dto(entry: NameEntry) -> NameDto:
    return NameDto(indexed=entry.is_indexed, **_common_fields(entry))


def to_duplicate_dto(duplicate: DuplicateNameEntry) -> DuplicateNameDto:
    return DuplicateNameDto(**_common_fields(duplicate))
