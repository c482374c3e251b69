import pytest
import pytest_asyncio
from datetime import datetime
from bson import ObjectId
from httpx import AsyncClient, ASGITransport
from mongomock_motor import AsyncMongoMockClient

from main import app
from app.db.mongodb import db
from app.services import availability_service


VENDOR_ID = "65f1c0ffee0000000000abcd"

# Open Monday to Friday 09:00-17:00, stored with the loose field names
# vendor documents carry in practice
vendor_document = {
    "_id": VENDOR_ID,
    "id": VENDOR_ID,
    "slug": "luxe-salon",
    "businessName": "Luxe Salon",
    "schedule": {
        "monday": {"isOpen": True, "start": "09:00", "end": "17:00"},
        "tuesday": {"isOpen": True, "open": "09:00", "close": "17:00"},
        "wednesday": {"isOpen": True, "start": "09:00", "end": "17:00"},
        "thursday": {"isOpen": True, "start": "09:00", "end": "17:00"},
        "friday": {"isOpen": True, "start": "09:00", "end": "17:00"},
        "saturday": {"isOpen": False},
    }
}

@pytest.fixture
def vendor():
    return {**vendor_document, "schedule": dict(vendor_document["schedule"])}

@pytest.fixture
def patch_vendor_lookup(monkeypatch, vendor):
    """Serve `vendor` for its id or slug, nothing else."""
    async def fake_get_vendor_by_id(vendor_id):
        if vendor_id in (vendor["id"], vendor["slug"]):
            return vendor
        return None

    monkeypatch.setattr(availability_service, "get_vendor_by_id", fake_get_vendor_by_id)
    return vendor

def appointment(start: datetime, duration=60, status="confirmed"):
    return {
        "vendorId": VENDOR_ID,
        "date": start,
        "time": start.strftime("%H:%M"),
        "duration": duration,
        "status": status,
    }

@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

@pytest.fixture
def mongo(monkeypatch):
    """Point the app at an in-memory MongoDB."""
    database = AsyncMongoMockClient()["salonslots_test"]
    monkeypatch.setattr(db, "db", database)
    return database

@pytest_asyncio.fixture
async def stored_vendor(mongo):
    document = {**vendor_document, "_id": ObjectId(VENDOR_ID)}
    document.pop("id")
    await mongo.vendors.insert_one(document)
    return document
