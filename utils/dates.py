from datetime import date, datetime, timedelta, timezone
from typing import Optional

from utils.errors import MalformedInput


def parse_day(value: Optional[str], field: str = "date") -> Optional[date]:
    """Parse a YYYY-MM-DD query parameter; None passes through."""
    if value is None or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise MalformedInput(f"Invalid {field}. Use YYYY-MM-DD")


def day_bounds(day: date) -> tuple[datetime, datetime]:
    start = datetime(day.year, day.month, day.day)
    return start, start + timedelta(days=1)


def to_utc_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
