"""
UTC datetime helpers.

Definitions, execution records and notifications all carry timezone-aware UTC
timestamps. Repositories normalize anything read back from storage with ensure_utc.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Normalize a datetime to UTC.

    Naive values are assumed to already be UTC (some drivers drop tzinfo);
    aware values are converted.

    Args:
        dt: A datetime that may be naive or aware, or None

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def elapsed_ms(start: float, end: float) -> float:
    """Milliseconds between two time.perf_counter() readings, rounded to 0.01 ms."""
    return round((end - start) * 1000, 2)
