"""
Pydantic response models for aggregation rows, health and errors.
Field names match the JSON contract of the /api/trips endpoints.
"""
from datetime import datetime
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel


StationId = Union[int, float, str, None]


class UserTypeSummary(BaseModel):
    """Trips grouped by rider type (1.1)."""
    usertype: Optional[str] = None
    total_Viajes: int
    duracion_Promedio: Optional[float] = None


class HourSummary(BaseModel):
    """Trips grouped by hour of day (1.2)."""
    hora: Optional[int] = None
    total_Viajes: int
    duracion_Promedio: Optional[float] = None


class DaySummary(BaseModel):
    """Trips grouped by calendar day, UTC (1.3)."""
    fecha: Optional[datetime] = None
    total_Viajes: int


class StationSummary(BaseModel):
    """Departures per start station (1.4)."""
    estacion_id: StationId = None
    estacion_nombre: Optional[str] = None
    total_Salidas: int
    duracion_Promedio: Optional[float] = None


class HourWeekdaySummary(BaseModel):
    """Trips grouped by hour and day of week, 1=Sunday..7=Saturday (1.5)."""
    hora: Optional[int] = None
    dia_Semana: Optional[int] = None
    total_Viajes: int


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    database: str
    ping: Optional[Dict[str, Any]] = None
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None
