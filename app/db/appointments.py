from typing import Any, Dict, Iterable, List, Optional
from datetime import date, datetime, time, timedelta
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING
from app.db.mongodb import db
from app.schemas.booking import ACTIVE_STATUSES

# Appointment collection helpers

def _with_id(appointment: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if appointment:
        appointment["id"] = str(appointment["_id"])
    return appointment

async def get_active_appointments_for_day(vendor_id: str, day: date) -> List[Dict[str, Any]]:
    """
    Get a vendor's pending and confirmed appointments starting on a calendar day
    """
    start_of_day = datetime.combine(day, time.min)
    end_of_day = start_of_day + timedelta(days=1)

    cursor = db.db.appointments.find({
        "vendorId": vendor_id,
        "date": {"$gte": start_of_day, "$lt": end_of_day},
        "status": {"$in": list(ACTIVE_STATUSES)}
    }).sort("date", 1)
    return await cursor.to_list(length=None)

async def insert_appointment(appointment_data: Dict[str, Any]) -> Dict[str, Any]:
    appointment_data = dict(appointment_data)
    appointment_data["active"] = appointment_data.get("status") in ACTIVE_STATUSES

    result = await db.db.appointments.insert_one(appointment_data)
    created = await db.db.appointments.find_one({"_id": result.inserted_id})
    return _with_id(created)

async def get_appointment(vendor_id: str, appointment_id: str) -> Optional[Dict[str, Any]]:
    try:
        appointment = await db.db.appointments.find_one(
            {"_id": ObjectId(appointment_id), "vendorId": vendor_id}
        )
    except (InvalidId, TypeError):
        return None
    return _with_id(appointment)

async def set_appointment_status(
    vendor_id: str,
    appointment_id: str,
    status: str,
    from_statuses: Iterable[str],
    updated_at: datetime
) -> Optional[Dict[str, Any]]:
    """
    Move an appointment to `status` if it is currently in one of `from_statuses`.

    Returns the updated document, or None when no appointment of this vendor
    matched in an allowed status.
    """
    try:
        object_id = ObjectId(appointment_id)
    except (InvalidId, TypeError):
        return None

    result = await db.db.appointments.update_one(
        {"_id": object_id, "vendorId": vendor_id, "status": {"$in": list(from_statuses)}},
        {"$set": {
            "status": status,
            "active": status in ACTIVE_STATUSES,
            "updatedAt": updated_at
        }}
    )
    if result.matched_count == 0:
        return None
    return await get_appointment(vendor_id, appointment_id)

async def get_customer_appointments(customer_id: str, skip: int = 0, limit: int = 50) -> List[Dict[str, Any]]:
    cursor = db.db.appointments.find({"customerId": customer_id}).sort("date", DESCENDING).skip(skip).limit(limit)
    appointments = await cursor.to_list(length=limit)
    return [_with_id(appointment) for appointment in appointments]
