"""
Aggregation pipeline builders for the trips collection.

Each builder is a pure function returning a fresh list of stages. Filtering by
hour or weekday is not part of any pipeline: the handlers apply it to the
aggregated rows (see analytics.filters).
"""
from typing import Any, Dict, List

Pipeline = List[Dict[str, Any]]

START_TIME = "$start time"

# $hour and $dayOfWeek use the server default (UTC); $dateTrunc is pinned to it.
GROUPING_TIMEZONE = "UTC"

DEFAULT_STATION_LIMIT = 10


def build_user_type_pipeline() -> Pipeline:
    """
    Trips per rider type with mean duration (1.1).

    Rows: {usertype, total_Viajes, duracion_Promedio}, sorted by usertype.
    """
    return [
        {
            "$group": {
                "_id": "$usertype",
                "total_Viajes": {"$sum": 1},
                "duracion_Promedio": {"$avg": "$tripduration"}
            }
        },
        {
            "$project": {
                "_id": 0,
                "usertype": "$_id",
                "total_Viajes": 1,
                "duracion_Promedio": 1
            }
        },
        {"$sort": {"usertype": 1}}
    ]


def build_hourly_pipeline() -> Pipeline:
    """
    Trips per hour of day (0-23) with mean duration (1.2).

    Rows: {hora, total_Viajes, duracion_Promedio}, ascending by hora.
    """
    return [
        {"$addFields": {"hora": {"$hour": START_TIME}}},
        {
            "$group": {
                "_id": "$hora",
                "total_Viajes": {"$sum": 1},
                "duracion_Promedio": {"$avg": "$tripduration"}
            }
        },
        {
            "$project": {
                "_id": 0,
                "hora": "$_id",
                "total_Viajes": 1,
                "duracion_Promedio": 1
            }
        },
        {"$sort": {"hora": 1}}
    ]


def build_daily_pipeline() -> Pipeline:
    """
    Trips per calendar day (1.3).

    Rows: {fecha, total_Viajes}, ascending by fecha (midnight UTC).
    """
    return [
        {
            "$addFields": {
                "fecha": {
                    "$dateTrunc": {
                        "date": START_TIME,
                        "unit": "day",
                        "timezone": GROUPING_TIMEZONE
                    }
                }
            }
        },
        {
            "$group": {
                "_id": "$fecha",
                "total_Viajes": {"$sum": 1}
            }
        },
        {
            "$project": {
                "_id": 0,
                "fecha": "$_id",
                "total_Viajes": 1
            }
        },
        {"$sort": {"fecha": 1}}
    ]


def build_top_stations_pipeline(limit: int = DEFAULT_STATION_LIMIT) -> Pipeline:
    """
    Busiest start stations by number of departures (1.4).

    Args:
        limit: Maximum rows to return; values below 1 are clamped to 1

    Returns:
        Pipeline producing {estacion_id, estacion_nombre, total_Salidas,
        duracion_Promedio}, descending by total_Salidas. Ties are ordered by
        estacion_id ascending.
    """
    limit = max(1, int(limit))
    return [
        {
            "$group": {
                "_id": {
                    "id": "$start station id",
                    "nombre": "$start station name"
                },
                "total_Salidas": {"$sum": 1},
                "duracion_Promedio": {"$avg": "$tripduration"}
            }
        },
        {
            "$project": {
                "_id": 0,
                "estacion_id": "$_id.id",
                "estacion_nombre": "$_id.nombre",
                "total_Salidas": 1,
                "duracion_Promedio": 1
            }
        },
        {"$sort": {"total_Salidas": -1, "estacion_id": 1}},
        {"$limit": limit}
    ]


def build_hour_weekday_pipeline() -> Pipeline:
    """
    Trips per (hour, day of week) pair (1.5).

    dia_Semana follows MongoDB's $dayOfWeek: 1=Sunday .. 7=Saturday.
    Rows are sorted by total_Viajes descending, then hora and dia_Semana.
    """
    return [
        {
            "$addFields": {
                "hora": {"$hour": START_TIME},
                "dia_Semana": {"$dayOfWeek": START_TIME}
            }
        },
        {
            "$group": {
                "_id": {"hora": "$hora", "dia_Semana": "$dia_Semana"},
                "total_Viajes": {"$sum": 1}
            }
        },
        {
            "$project": {
                "_id": 0,
                "hora": "$_id.hora",
                "dia_Semana": "$_id.dia_Semana",
                "total_Viajes": 1
            }
        },
        {"$sort": {"total_Viajes": -1, "hora": 1, "dia_Semana": 1}}
    ]
