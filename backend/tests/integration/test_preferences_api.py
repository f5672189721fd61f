"""API tests for the per-user preference endpoints."""

import pytest

BASE = "/api/v1/users/figma-42/preferences"


@pytest.mark.asyncio
async def test_first_read_creates_defaults(client):
    response = await client.get(BASE)

    assert response.status_code == 200
    body = response.json()
    assert body["userId"] == "figma-42"
    assert body["defaultCloud"] is None
    assert body["onboardingCompleted"] is False
    assert body["skipSplash"] is False
    assert body["hiddenClouds"] == []


@pytest.mark.asyncio
async def test_put_updates_only_supplied_fields(client):
    await client.put(BASE, json={"defaultCloud": "sales", "skipSplash": True})

    response = await client.put(BASE, json={"hiddenClouds": ["hr", "hr", "ops"]})

    body = response.json()
    assert response.status_code == 200
    assert body["defaultCloud"] == "sales"
    assert body["skipSplash"] is True
    assert body["hiddenClouds"] == ["hr", "ops"]


@pytest.mark.asyncio
async def test_put_with_unknown_field_is_400(client):
    response = await client.put(BASE, json={"theme": "dark"})

    assert response.status_code == 400
    assert "theme" in response.json()["detail"]


@pytest.mark.asyncio
async def test_default_cloud_set_and_clear(client):
    response = await client.put(f"{BASE}/default-cloud", json={"cloudId": "sales"})
    assert response.json() == {"cloudId": "sales"}

    await client.put(f"{BASE}/default-cloud", json={"cloudId": None})

    assert (await client.get(f"{BASE}/default-cloud")).json() == {"cloudId": None}


@pytest.mark.asyncio
async def test_onboarding_updates_provided_flags_only(client):
    await client.put(f"{BASE}/onboarding", json={"skipSplash": True})

    response = await client.put(f"{BASE}/onboarding", json={"hasCompleted": True})

    assert response.json() == {"hasCompleted": True, "skipSplash": True}
    assert (await client.get(f"{BASE}/onboarding")).json() == {"hasCompleted": True, "skipSplash": True}


@pytest.mark.asyncio
async def test_hidden_clouds_round_trip(client):
    await client.put(f"{BASE}/hidden-clouds", json={"hiddenClouds": ["ops"]})

    response = await client.get(f"{BASE}/hidden-clouds")

    assert response.json() == {"hiddenClouds": ["ops"]}


@pytest.mark.asyncio
async def test_field_endpoint_on_unseen_user(client):
    response = await client.put(f"{BASE}/fields/onboardingCompleted", json={"value": True})

    body = response.json()
    assert response.status_code == 200
    assert body["onboardingCompleted"] is True
    assert body["skipSplash"] is False
    assert body["hiddenClouds"] == []


@pytest.mark.asyncio
async def test_field_endpoint_rejects_unknown_field(client):
    response = await client.put(f"{BASE}/fields/favoriteColor", json={"value": "blue"})

    assert response.status_code == 400
    assert "favoriteColor" in response.json()["detail"]


@pytest.mark.asyncio
async def test_field_endpoint_rejects_wrong_type(client):
    response = await client.put(f"{BASE}/fields/hiddenClouds", json={"value": "ops"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_put_does_not_coerce_strings_to_booleans(client):
    response = await client.put(BASE, json={"onboardingCompleted": "yes"})

    assert response.status_code == 422
    assert (await client.get(BASE)).json()["onboardingCompleted"] is False


@pytest.mark.asyncio
async def test_put_and_field_endpoint_agree_on_wrong_types(client):
    for name, value in (("skipSplash", 1), ("defaultCloud", 7), ("hiddenClouds", [1])):
        whole = await client.put(BASE, json={name: value})
        single = await client.put(f"{BASE}/fields/{name}", json={"value": value})

        assert whole.status_code == 422, name
        assert single.status_code == 422, name


@pytest.mark.asyncio
async def test_onboarding_rejects_string_flags(client):
    response = await client.put(f"{BASE}/onboarding", json={"hasCompleted": "true"})
    assert response.status_code == 422
