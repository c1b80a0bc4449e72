"""GeoLocation Schemas — request model for registering a place.

Invariants:
    - place is stripped and upper-cased before it reaches the store
"""

from pydantic import Field, field_validator

from app.core.domain_types import normalize_place
from app.schemas.name import CamelModel


class GeoLocationCreate(CamelModel):
    place: str = Field(min_length=1, max_length=100)
    region: str = Field(min_length=1, max_length=100)

    @field_validator("place")
    @classmethod
    def normalize(cls, v: str) -> str:
        v = normalize_place(v)
        if not v:
            raise ValueError("place cannot be empty or whitespace")
        return v
