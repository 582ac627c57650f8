"""
Exception hierarchy for the trip analytics service.
Each error carries a human-readable message and optional details.
"""
from typing import Any, Dict, Optional


class TripAnalyticsError(Exception):
    """Base exception for all application-specific errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(TripAnalyticsError):
    """Required settings are missing or invalid."""


class DatabaseConnectionError(TripAnalyticsError):
    """MongoDB is unreachable (connect timeout, refused, failed ping)."""


class QueryExecutionError(TripAnalyticsError):
    """An aggregation pipeline failed while running on the server."""

    def __init__(self, query: str, message: str):
        super().__init__(message, details={"query": query})
        self.query = query
