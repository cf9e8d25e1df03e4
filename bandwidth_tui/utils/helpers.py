"""
Helper Functions

This module contains utility functions used throughout the application.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from dateutil import parser as dtparser

BYTE_UNITS = ("B", "KB", "MB", "GB", "TB")


def parse_ts(x: Any) -> Optional[datetime]:
    """Parse timestamp from various formats"""
    if not x:
        return None
    try:
        dt = dtparser.isoparse(str(x))
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
    except Exception:
        return None


def safe_size(x: Any) -> Optional[int]:
    """
    Read a byte count from a JSON value.
    Accepts non-negative integers and strings of digits; anything else is absent.
    """
    if isinstance(x, bool):
        return None
    if isinstance(x, int):
        return x if x >= 0 else None
    if isinstance(x, float):
        return int(x) if x >= 0 and x.is_integer() else None
    if isinstance(x, str) and x.isascii() and x.isdigit():
        return int(x)
    return None


def get_nested(d: Dict[str, Any], path: Tuple[str, ...]) -> Any:
    """Safely read nested dict keys"""
    cur: Any = d
    for k in path:
        if not isinstance(cur, dict) or k not in cur:
            return None
        cur = cur[k]
    return cur


def format_bytes(value: int) -> str:
    """1536 -> '1.50 KB'; plain bytes are shown without decimals"""
    size = float(value)
    unit = 0
    while size >= 1024.0 and unit + 1 < len(BYTE_UNITS):
        size /= 1024.0
        unit += 1
    if unit == 0:
        return f"{value} {BYTE_UNITS[0]}"
    return f"{size:.2f} {BYTE_UNITS[unit]}"


def format_count(value: int) -> str:
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}K"
    return str(value)


def truncate_with_ellipsis(value: str, width: int) -> str:
    """Cut text to width, ending with '...' when there is room for it"""
    if len(value) <= width:
        return value
    if width <= 3:
        return value[:max(width, 0)]
    return value[: width - 3] + "..."
