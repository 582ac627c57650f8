"""
MongoDB index definitions for the trips collection.
Supports the group keys and the time field used by the analytics pipelines.
"""
from motor.motor_asyncio import AsyncIOMotorDatabase
import logging

from db.client import TRIPS_COLLECTION

logger = logging.getLogger(__name__)

TRIP_INDEXES = [
    ([("start time", 1)], "idx_start_time"),
    ([("usertype", 1)], "idx_usertype"),
    ([("start station id", 1), ("start station name", 1)], "idx_start_station"),
]


async def create_indexes(db: AsyncIOMotorDatabase):
    """
    Create the indexes used by the trip analytics queries.

    Args:
        db: MongoDB database instance
    """
    logger.info("Creating MongoDB indexes...")

    try:
        trips = db[TRIPS_COLLECTION]
        for keys, name in TRIP_INDEXES:
            await trips.create_index(keys, name=name)
        logger.info("✓ Trips indexes created")

    except Exception as e:
        logger.error(f"Failed to create indexes: {str(e)}")
        raise


async def list_indexes(db: AsyncIOMotorDatabase) -> dict:
    """
    List the indexes on the trips collection.

    Returns:
        Dictionary mapping index names to their definitions
    """
    return await db[TRIPS_COLLECTION].index_information()
