"""
Query-parameter parsing and post-aggregation filtering.
"""
from typing import Any, Dict, List, Optional
import re

from analytics.pipelines import DEFAULT_STATION_LIMIT

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

# Largest $limit MongoDB accepts (64-bit signed); also stands in for huge values.
MAX_INT64 = 2 ** 63 - 1


def parse_int(value: Optional[str]) -> Optional[int]:
    """
    Parse the leading integer of a query-string value.

    "10" -> 10, " 7" -> 7, "10abc" -> 10, "1.5" -> 1.
    Absent, empty or non-numeric values return None.
    """
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    if not match:
        return None
    digits = match.group(1)
    try:
        return int(digits)
    except ValueError:
        # Past the interpreter's digit limit: out of every valid range.
        return -MAX_INT64 if digits.startswith("-") else MAX_INT64


def resolve_limit(value: Optional[str], default: int = DEFAULT_STATION_LIMIT) -> int:
    """
    Station limit from the raw query value.

    Unparsable means default, below 1 means 1, above MAX_INT64 means MAX_INT64.
    """
    parsed = parse_int(value)
    if parsed is None:
        return default
    return min(max(1, parsed), MAX_INT64)


def filter_rows(rows: List[Dict[str, Any]], **criteria: Optional[int]) -> List[Dict[str, Any]]:
    """
    Keep aggregated rows matching every given criterion.

    Criteria set to None are ignored, so filter_rows(rows, hora=None) returns
    rows unchanged.
    """
    active = {field: value for field, value in criteria.items() if value is not None}
    if not active:
        return rows
    return [
        row for row in rows
        if all(row.get(field) == value for field, value in active.items())
    ]
