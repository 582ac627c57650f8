#!/usr/bin/env python3
"""
Load a bike-share trips CSV into the trips collection and create its indexes.

Accepts Citi Bike style headers (tripduration, starttime or "start time",
start station id, start station name, usertype).
"""
import argparse
import asyncio
import csv
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from api.config import Settings
from db.client import DatabaseClient, TRIPS_COLLECTION
from db.errors import TripAnalyticsError
from db.indexes import create_indexes, list_indexes

logger = logging.getLogger("seed_data")

DATETIME_FORMATS = (
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%d %H:%M:%S",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
)


def normalize_header(name: str) -> str:
    return " ".join(name.strip().lower().replace("_", " ").split())


def parse_datetime(value: str) -> Optional[datetime]:
    value = (value or "").strip()
    if not value:
        return None
    for fmt in DATETIME_FORMATS:
        try:
            return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    raise ValueError(f"Unrecognized datetime: {value!r}")


def parse_number(value: str) -> Optional[Any]:
    value = (value or "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return float(value)


def parse_station_id(value: str) -> Optional[Any]:
    """Numeric ids become numbers; codes such as "HB101" are kept as strings."""
    try:
        return parse_number(value)
    except ValueError:
        return value.strip()


def to_trip(row: Dict[str, str]) -> Dict[str, Any]:
    """Map one CSV row (already header-normalized) to a trip document."""
    start = row.get("start time") or row.get("starttime")
    return {
        "tripduration": parse_number(row.get("tripduration", "")),
        "start time": parse_datetime(start or ""),
        "start station id": parse_station_id(row.get("start station id", "")),
        "start station name": (row.get("start station name") or "").strip() or None,
        "usertype": (row.get("usertype") or "").strip() or None,
    }


def read_trips(csv_path: str, limit: Optional[int] = None):
    """Yield trip documents, skipping (and logging) rows with unparsable values."""
    with open(csv_path, encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        for i, raw in enumerate(reader):
            if limit is not None and i >= limit:
                break
            row = {normalize_header(k): v for k, v in raw.items() if k}
            try:
                yield to_trip(row)
            except ValueError as e:
                # Line 1 is the header.
                logger.warning(f"Skipping CSV line {i + 2}: {str(e)}")


async def seed(csv_path: str, batch_size: int, limit: Optional[int], drop: bool) -> int:
    settings = Settings.from_env()
    settings.validate()

    db_client = DatabaseClient(settings)
    db = await db_client.get_database()
    trips = db[TRIPS_COLLECTION]

    try:
        if drop:
            logger.warning(f"Dropping collection {TRIPS_COLLECTION}")
            await trips.drop()

        inserted = 0
        batch: List[Dict[str, Any]] = []
        for doc in read_trips(csv_path, limit):
            batch.append(doc)
            if len(batch) >= batch_size:
                result = await trips.insert_many(batch)
                inserted += len(result.inserted_ids)
                logger.info(f"Inserted {inserted} trips")
                batch = []
        if batch:
            result = await trips.insert_many(batch)
            inserted += len(result.inserted_ids)

        await create_indexes(db)
        indexes = await list_indexes(db)
        logger.info(f"Indexes on {TRIPS_COLLECTION}: {', '.join(sorted(indexes))}")
        return inserted
    finally:
        await db_client.disconnect()


def main():
    parser = argparse.ArgumentParser(description="Seed the trips collection from a CSV file")
    parser.add_argument("csv_path", help="Path to the trips CSV")
    parser.add_argument("--batch-size", type=int, default=2000)
    parser.add_argument("--limit", type=int, default=None, help="Only load the first N rows")
    parser.add_argument("--drop", action="store_true", help="Drop the collection first")
    args = parser.parse_args()

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout
    )

    if not os.path.isfile(args.csv_path):
        logger.error(f"CSV not found: {args.csv_path}")
        return 1

    try:
        count = asyncio.run(seed(args.csv_path, args.batch_size, args.limit, args.drop))
    except TripAnalyticsError as e:
        logger.error(e.message)
        return 1

    logger.info(f"SEED COMPLETED: {count} trips loaded")
    return 0


if __name__ == "__main__":
    sys.exit(main())
