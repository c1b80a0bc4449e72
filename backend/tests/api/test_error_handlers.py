"""Error Handlers — location flattening for validation field names."""

import pytest

from app.api.error_handlers import field_name


@pytest.mark.parametrize("loc, expected", [
    (("body", "name"), "name"),
    (("body", 0, "name"), "[0].name"),
    (("body", "geoLocation", "place"), "geoLocation.place"),
    (("query", "page"), "page"),
    (("body",), "body"),
])
def test_field_name(loc, expected):
    assert field_name(loc) == expected
