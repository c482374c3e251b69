from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING
from app.core.config import settings
import logging

logger = logging.getLogger(__name__)

class Database:
    client: AsyncIOMotorClient = None
    db = None

db = Database()

async def connect_to_mongo():
    """Connect to MongoDB."""
    try:
        logger.info("Connecting to MongoDB...")
        db.client = AsyncIOMotorClient(settings.MONGO_URI)
        db.db = db.client[settings.DB_NAME]
        logger.info("Connected to MongoDB.")

        # Create indexes for collections
        await create_indexes()

    except Exception as e:
        logger.error(f"Could not connect to MongoDB: {e}")
        raise e

async def close_mongo_connection():
    """Close MongoDB connection."""
    if db.client:
        logger.info("Closing MongoDB connection...")
        db.client.close()
        logger.info("MongoDB connection closed.")

async def get_database():
    """Get MongoDB database instance."""
    return db.db

async def create_unique_slot_index():
    """
    One active (pending/confirmed) appointment per vendor start instant.

    Failure propagates: bookings must not be accepted without this index.
    """
    await db.db.appointments.create_index(
        [("vendorId", ASCENDING), ("date", ASCENDING)],
        unique=True,
        name="unique_active_slot",
        partialFilterExpression={"active": True}
    )

async def create_indexes():
    """Create indexes for collections."""
    await create_unique_slot_index()

    try:
        # Vendors collection indexes
        await db.db.vendors.create_index("slug", unique=True, sparse=True)

        # Appointments collection indexes
        await db.db.appointments.create_index([("customerId", ASCENDING), ("date", DESCENDING)])

        logger.info("MongoDB indexes created successfully.")
    except Exception as e:
        logger.error(f"Failed to create MongoDB indexes: {e}")
