from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from ..settings import settings


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def localize(dt: datetime) -> datetime:
    """Convert a timestamp to the timezone used for calendar day and month boundaries."""

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(ZoneInfo(settings.calendar_timezone))
