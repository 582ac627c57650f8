"""
FastAPI dependencies exposing the application-owned database client.
"""
from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorCollection

from db.client import DatabaseClient, TRIPS_COLLECTION


def get_db_client(request: Request) -> DatabaseClient:
    """Return the DatabaseClient stored on app.state by create_app()."""
    return request.app.state.db_client


async def get_trips_collection(
    db_client: DatabaseClient = Depends(get_db_client)
) -> AsyncIOMotorCollection:
    """
    Dependency injection helper for the trips collection.

    Usage in FastAPI:
        @router.get("/1.1")
        async def endpoint(trips = Depends(get_trips_collection)):
            ...
    """
    db = await db_client.get_database()
    return db[TRIPS_COLLECTION]
