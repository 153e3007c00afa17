"""
UTC-first datetime utilities for the Ward Service.

All timestamps are handled as timezone-aware UTC datetimes internally and
persisted as ISO 8601 strings with millisecond precision and a 'Z' suffix,
e.g. "2024-01-15T10:30:00.000Z". Parsing is lenient and accepts any ISO 8601
form, normalising to UTC.

Usage:
    from core.datetime_utils import utc_now, parse_datetime, format_iso

    now = utc_now()
    stored = format_iso(now)          # "2024-01-15T10:30:00.123Z"
    restored = parse_datetime(stored)
"""
from datetime import datetime, timezone
from typing import Union


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """
    Convert a datetime to UTC.

    Naive datetimes are assumed to already be UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_datetime(value: Union[str, datetime]) -> datetime:
    """
    Parse an ISO 8601 string (or pass through a datetime) as UTC.

    Args:
        value: ISO 8601 string, with or without offset or 'Z' suffix.

    Returns:
        datetime: Timezone-aware datetime in UTC.

    Raises:
        ValueError: If the value cannot be parsed.
    """
    if isinstance(value, datetime):
        return to_utc(value)

    if not isinstance(value, str):
        raise ValueError(f"Expected datetime or string, got {type(value).__name__}")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return to_utc(datetime.fromisoformat(text))
    except ValueError:
        raise ValueError(f"Cannot parse datetime: '{value}'") from None


def format_iso(dt: datetime) -> str:
    """
    Format a datetime as an ISO 8601 UTC string with millisecond precision.

    Example:
        >>> format_iso(datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc))
        '2024-01-15T10:30:00.000Z'
    """
    utc_dt = to_utc(dt)
    return utc_dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc_dt.microsecond // 1000:03d}Z"


def truncate_to_millis(dt: datetime) -> datetime:
    """Drop sub-millisecond precision so a value survives a format/parse round trip."""
    utc_dt = to_utc(dt)
    return utc_dt.replace(microsecond=(utc_dt.microsecond // 1000) * 1000)
