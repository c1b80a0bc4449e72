"""Name Schemas — payload validation and DTO projection.

Invariants:
    - Payload accepts camelCase (wire) and snake_case (internal) keys
    - name is required, stripped, and may not be blank
    - geoLocation accepts a place string or a {place, region} object
    - DTOs serialize camelCase with indexed taken from is_indexed
"""

import pytest
from pydantic import ValidationError

from app.models.duplicate_name_entry import DuplicateNameEntry
from app.models.geo_location import GeoLocation
from app.models.name_entry import NameEntry
from app.schemas.geo_location import GeoLocationCreate
from app.schemas.name import (
    GeoLocationRef, NameEntryPayload, to_duplicate_dto, to_name_dto,
)


def test_payload_accepts_camel_case_keys():
    payload = NameEntryPayload.model_validate({
        "name": "Ade", "tonalMark": "àdé", "submittedBy": "Alice",
        "extendedMeaning": "crown", "indexed": True,
    })
    assert payload.tonal_mark == "àdé"
    assert payload.submitted_by == "Alice"
    assert payload.extended_meaning == "crown"
    assert payload.indexed is True


def test_payload_accepts_snake_case_keys():
    payload = NameEntryPayload(name="Ade", submitted_by="Alice")
    assert payload.submitted_by == "Alice"


def test_payload_requires_name():
    with pytest.raises(ValidationError) as exc:
        NameEntryPayload.model_validate({"meaning": "crown"})
    assert exc.value.errors()[0]["loc"] == ("name",)


def test_payload_rejects_blank_name():
    with pytest.raises(ValidationError):
        NameEntryPayload(name="   ")


def test_payload_strips_name():
    assert NameEntryPayload(name="  Ade ").name == "Ade"


def test_geo_location_as_string():
    payload = NameEntryPayload.model_validate({"name": "Ade", "geoLocation": "IBADAN"})
    assert payload.geo_place == "IBADAN"


def test_geo_location_as_object():
    payload = NameEntryPayload.model_validate({
        "name": "Ade", "geoLocation": {"place": "IBADAN", "region": "NWY"},
    })
    assert isinstance(payload.geo_location, GeoLocationRef)
    assert payload.geo_place == "IBADAN"


def test_etymology_defaults_to_empty_list():
    assert NameEntryPayload(name="Ade").etymology == []


def test_name_dto_projection_uses_camel_case():
    geo = GeoLocation(place="IBADAN", region="NWY")
    entry = NameEntry(
        name="ade", meaning="crown", etymology=["adé: crown"],
        submitted_by="Alice", is_indexed=True, geo_location=geo,
    )
    body = to_name_dto(entry).model_dump(by_alias=True)
    assert body["name"] == "ade"
    assert body["indexed"] is True
    assert body["submittedBy"] == "Alice"
    assert body["etymology"] == ["adé: crown"]
    assert body["geoLocation"] == {"place": "IBADAN", "region": "NWY"}


def test_duplicate_dto_has_no_indexed_flag():
    duplicate = DuplicateNameEntry(name="ade", meaning="crowned", etymology=[])
    body = to_duplicate_dto(duplicate).model_dump(by_alias=True)
    assert "indexed" not in body
    assert body["meaning"] == "crowned"
    assert body["geoLocation"] is None


def test_geo_location_create_uppercases_place():
    assert GeoLocationCreate(place=" ibadan ", region="NWY").place == "IBADAN"
