from typing import Any, Dict, Optional
from bson import ObjectId
from bson.errors import InvalidId
from app.db.mongodb import db

# Vendor collection helpers

async def get_vendor_by_id(vendor_id: str) -> Optional[Dict[str, Any]]:
    """
    Get a vendor document by its ObjectId, falling back to its public slug
    """
    try:
        vendor = await db.db.vendors.find_one({"_id": ObjectId(vendor_id)})
    except (InvalidId, TypeError):
        vendor = None

    if not vendor:
        vendor = await db.db.vendors.find_one({"slug": vendor_id})

    if vendor:
        vendor["id"] = str(vendor["_id"])
    return vendor

async def update_vendor_schedule(vendor_id: str, schedule: Dict[str, Any]) -> bool:
    """Replace a vendor's weekly schedule"""
    result = await db.db.vendors.update_one(
        {"_id": ObjectId(vendor_id)},
        {"$set": {"schedule": schedule}}
    )
    return result.matched_count > 0
