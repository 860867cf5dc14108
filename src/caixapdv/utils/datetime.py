"""Datetime utilities. Everything is stored as naive UTC."""

from datetime import date, datetime, time, timedelta, timezone


def now_utc() -> datetime:
    """Get current UTC datetime as NAIVE for database storage."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC already."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_iso_datetime(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp (``Z`` suffix allowed) into naive UTC.

    Returns None for empty or unparseable input.
    """
    if not value or not isinstance(value, str):
        return None
    cleaned = value.strip()
    if cleaned.endswith(("Z", "z")):
        cleaned = cleaned[:-1] + "+00:00"
    try:
        return to_naive_utc(datetime.fromisoformat(cleaned))
    except ValueError:
        return None


def utc_isoformat(value: datetime) -> str:
    """ISO-8601 with a Z suffix, as JavaScript clients send and expect."""
    return to_naive_utc(value).isoformat(timespec="milliseconds") + "Z"


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Half-open [start, end) range covering one calendar day."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)
