"""GeoLocations API — listing and registering reference places."""


async def test_register_and_list_places(client):
    first = await client.post("/v1/geolocations", json={"place": "oyo", "region": "NWY"})
    await client.post("/v1/geolocations", json={"place": "Abeokuta", "region": "SWY"})

    assert first.status_code == 201
    assert first.json() == {"place": "OYO", "region": "NWY"}
    listed = (await client.get("/v1/geolocations")).json()
    assert [g["place"] for g in listed] == ["ABEOKUTA", "OYO"]


async def test_registering_existing_place_is_409(client):
    await client.post("/v1/geolocations", json={"place": "OYO", "region": "NWY"})

    res = await client.post("/v1/geolocations", json={"place": " oyo ", "region": "SWY"})

    assert res.status_code == 409
    assert res.json()["error"]["code"] == "RESOURCE_CONFLICT"


async def test_blank_place_is_400(client):
    res = await client.post("/v1/geolocations", json={"place": "   ", "region": "NWY"})

    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "place"
