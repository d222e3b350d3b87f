"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the engine are timezone-aware UTC. Reminder
fire times are compared against the sweep clock, so naive values must
never leak past the repository boundary.
"""

from datetime import UTC, date, datetime, time


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Use this instead of datetime.now() or datetime.utcnow().

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    SQLite returns naive datetimes, so repositories normalize on read.

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def as_utc_datetime(value: date | datetime | None) -> datetime | None:
    """
    Promote a date or datetime to a UTC-aware datetime.

    Date-only values (e.g. a task due date) are read as midnight UTC.

    Args:
        value: date, datetime, or None

    Returns:
        UTC-aware datetime or None
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    return datetime.combine(value, time.min, tzinfo=UTC)
