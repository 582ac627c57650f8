"""
Trip analytics endpoints.
Each endpoint runs one aggregation pipeline over the trips collection and
optionally post-filters the aggregated rows.
"""
from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError
from typing import Any, Dict, List, Optional
import logging

from analytics.filters import filter_rows, parse_int, resolve_limit
from analytics.pipelines import (
    Pipeline,
    build_daily_pipeline,
    build_hour_weekday_pipeline,
    build_hourly_pipeline,
    build_top_stations_pipeline,
    build_user_type_pipeline,
)
from api.dependencies import get_trips_collection
from db.errors import QueryExecutionError
from db.models import (
    DaySummary,
    HourSummary,
    HourWeekdaySummary,
    StationSummary,
    UserTypeSummary,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def run_pipeline(
    trips: AsyncIOMotorCollection,
    pipeline: Pipeline,
    query: str
) -> List[Dict[str, Any]]:
    """
    Execute a pipeline and collect every row.

    Raises:
        QueryExecutionError: If the server rejects or fails the aggregation
    """
    try:
        cursor = trips.aggregate(pipeline)
        return await cursor.to_list(length=None)
    except PyMongoError as e:
        logger.error(f"Error in query {query}: {str(e)}")
        raise QueryExecutionError(query, str(e)) from e


@router.get("/1.1", response_model=List[UserTypeSummary])
async def trips_by_user_type(
    trips: AsyncIOMotorCollection = Depends(get_trips_collection)
):
    """Total trips and mean duration per rider type."""
    return await run_pipeline(trips, build_user_type_pipeline(), "1.1")


@router.get("/1.2", response_model=List[HourSummary])
async def trips_by_hour(
    hour: Optional[str] = Query(None, description="Hour of day, 0-23"),
    trips: AsyncIOMotorCollection = Depends(get_trips_collection)
):
    """
    Total trips and mean duration per hour of day.

    All 24 buckets are aggregated first; ?hour= then keeps only the matching
    row. A non-numeric hour is ignored.
    """
    rows = await run_pipeline(trips, build_hourly_pipeline(), "1.2")
    return filter_rows(rows, hora=parse_int(hour))


@router.get("/1.3", response_model=List[DaySummary])
async def trips_by_day(
    trips: AsyncIOMotorCollection = Depends(get_trips_collection)
):
    """Total trips per calendar day (UTC)."""
    return await run_pipeline(trips, build_daily_pipeline(), "1.3")


@router.get("/1.4", response_model=List[StationSummary])
async def top_stations(
    limit: Optional[str] = Query(None, description="Number of stations, default 10"),
    trips: AsyncIOMotorCollection = Depends(get_trips_collection)
):
    """Start stations with the most departures."""
    pipeline = build_top_stations_pipeline(resolve_limit(limit))
    return await run_pipeline(trips, pipeline, "1.4")


@router.get("/1.5", response_model=List[HourWeekdaySummary])
async def trips_by_hour_and_weekday(
    hour: Optional[str] = Query(None, description="Hour of day, 0-23"),
    day: Optional[str] = Query(None, description="Day of week, 1=Sunday .. 7=Saturday"),
    trips: AsyncIOMotorCollection = Depends(get_trips_collection)
):
    """
    Trip counts per (hour, weekday) pair, busiest first.

    ?hour= and ?day= filter the aggregated rows independently.
    """
    rows = await run_pipeline(trips, build_hour_weekday_pipeline(), "1.5")
    return filter_rows(rows, hora=parse_int(hour), dia_Semana=parse_int(day))
