"""
UTC timestamps for responses and request timing.
"""
from datetime import datetime, timezone


def utc_isoformat() -> str:
    """Current UTC time as ISO 8601, e.g. "2025-11-12T10:30:00.123456+00:00"."""
    return datetime.now(timezone.utc).isoformat()


def elapsed_ms(started: float, finished: float) -> float:
    return (finished - started) * 1000
