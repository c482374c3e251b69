import pytest

from app.services import vendor_service
from tests.conftest import VENDOR_ID


@pytest.fixture
def saved_schedules(monkeypatch, patch_vendor_lookup):
    saved = {}

    async def fake_update_vendor_schedule(vendor_id, schedule):
        saved[vendor_id] = schedule
        return True

    monkeypatch.setattr(vendor_service, "update_vendor_schedule", fake_update_vendor_schedule)
    return saved


@pytest.mark.asyncio
async def test_get_schedule_is_canonical(client, patch_vendor_lookup):
    response = await client.get(f"/api/v1/vendors/{VENDOR_ID}/schedule")

    assert response.status_code == 200
    schedule = response.json()
    assert schedule["monday"] == {"isOpen": True, "openTime": "09:00", "closeTime": "17:00"}
    assert schedule["tuesday"]["openTime"] == "09:00"
    assert schedule["saturday"]["isOpen"] is False
    assert schedule["sunday"]["isOpen"] is False

@pytest.mark.asyncio
async def test_get_schedule_for_unknown_vendor(client, patch_vendor_lookup):
    response = await client.get("/api/v1/vendors/unknown/schedule")

    assert response.status_code == 404

@pytest.mark.asyncio
async def test_update_schedule_stores_canonical_form(client, saved_schedules):
    payload = {
        "monday": {"isOpen": True, "openTime": "10:00", "closeTime": "19:00"},
        "sunday": {"isOpen": False},
    }

    response = await client.put(f"/api/v1/vendors/{VENDOR_ID}/schedule", json=payload)

    assert response.status_code == 200
    stored = saved_schedules[VENDOR_ID]
    assert stored["monday"] == {"isOpen": True, "openTime": "10:00", "closeTime": "19:00"}
    assert stored["tuesday"]["isOpen"] is False
    assert response.json()["schedule"] == stored

@pytest.mark.asyncio
@pytest.mark.parametrize("day", [
    {"isOpen": True, "openTime": "18:00", "closeTime": "09:00"},
    {"isOpen": True, "openTime": "9am", "closeTime": "17:00"},
])
async def test_update_schedule_rejects_invalid_hours(client, saved_schedules, day):
    response = await client.put(f"/api/v1/vendors/{VENDOR_ID}/schedule", json={"monday": day})

    assert response.status_code == 422
    assert saved_schedules == {}
