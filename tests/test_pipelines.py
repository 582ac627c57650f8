from analytics.pipelines import (
    DEFAULT_STATION_LIMIT,
    build_daily_pipeline,
    build_hour_weekday_pipeline,
    build_hourly_pipeline,
    build_top_stations_pipeline,
    build_user_type_pipeline,
)


def _stage_names(pipeline):
    return [next(iter(stage)) for stage in pipeline]


def test_user_type_pipeline_groups_by_usertype() -> None:
    pipeline = build_user_type_pipeline()

    assert _stage_names(pipeline) == ["$group", "$project", "$sort"]
    group = pipeline[0]["$group"]
    assert group["_id"] == "$usertype"
    assert group["total_Viajes"] == {"$sum": 1}
    assert group["duracion_Promedio"] == {"$avg": "$tripduration"}
    assert pipeline[1]["$project"]["usertype"] == "$_id"


def test_hourly_pipeline_derives_hour_and_never_prefilters() -> None:
    pipeline = build_hourly_pipeline()

    assert _stage_names(pipeline) == ["$addFields", "$group", "$project", "$sort"]
    assert pipeline[0]["$addFields"] == {"hora": {"$hour": "$start time"}}
    assert pipeline[-1] == {"$sort": {"hora": 1}}


def test_daily_pipeline_truncates_to_utc_day() -> None:
    pipeline = build_daily_pipeline()

    trunc = pipeline[0]["$addFields"]["fecha"]["$dateTrunc"]
    assert trunc == {"date": "$start time", "unit": "day", "timezone": "UTC"}
    assert pipeline[1]["$group"] == {"_id": "$fecha", "total_Viajes": {"$sum": 1}}
    assert pipeline[-1] == {"$sort": {"fecha": 1}}


def test_top_stations_pipeline_groups_by_id_and_name() -> None:
    pipeline = build_top_stations_pipeline()

    assert pipeline[0]["$group"]["_id"] == {
        "id": "$start station id",
        "nombre": "$start station name",
    }
    assert pipeline[-2]["$sort"] == {"total_Salidas": -1, "estacion_id": 1}
    assert pipeline[-1] == {"$limit": DEFAULT_STATION_LIMIT}


def test_top_stations_pipeline_clamps_limit() -> None:
    assert build_top_stations_pipeline(0)[-1] == {"$limit": 1}
    assert build_top_stations_pipeline(-7)[-1] == {"$limit": 1}
    assert build_top_stations_pipeline(3)[-1] == {"$limit": 3}


def test_hour_weekday_pipeline_uses_mongo_day_of_week() -> None:
    pipeline = build_hour_weekday_pipeline()

    assert pipeline[0]["$addFields"] == {
        "hora": {"$hour": "$start time"},
        "dia_Semana": {"$dayOfWeek": "$start time"},
    }
    assert pipeline[1]["$group"]["_id"] == {"hora": "$hora", "dia_Semana": "$dia_Semana"}
    assert pipeline[-1]["$sort"] == {"total_Viajes": -1, "hora": 1, "dia_Semana": 1}
    assert "$match" not in _stage_names(pipeline)


def test_builders_return_fresh_pipelines() -> None:
    first = build_hourly_pipeline()
    first.append({"$limit": 1})
    first[0]["$addFields"]["hora"] = None

    assert build_hourly_pipeline()[0]["$addFields"]["hora"] == {"$hour": "$start time"}
    assert len(build_hourly_pipeline()) == 4
