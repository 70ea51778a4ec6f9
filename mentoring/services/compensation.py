"""Conversion of finished meetings into payable hours."""

from datetime import datetime, timezone
from typing import Iterable

from ..logger import get_logger
from ..schemas.mentorings import MeetingSpan
from ..settings import settings
from ..utils.utc import localize


logger = get_logger(__name__)


def hours_between(start: datetime, end: datetime) -> int:
    """Number of full hours between two timestamps."""

    return max(0, int((end - start).total_seconds() // 3600))


def month_bounds(dt: datetime) -> tuple[datetime, datetime]:
    """
    Return the first instant of the calendar month containing `dt` and the first instant of the next one.

    The month is determined in the calendar timezone, the bounds are returned in UTC.
    """

    local = localize(dt)
    since = local.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if since.month == 12:
        until = since.replace(year=since.year + 1, month=1)
    else:
        until = since.replace(month=since.month + 1)
    return since.astimezone(timezone.utc), until.astimezone(timezone.utc)


def payable_hours(
    mentor_id: str,
    meeting_start: datetime,
    meeting_end: datetime,
    completed_history: Iterable[MeetingSpan],
    *,
    exclude: str | None = None,
    daily_cap: int | None = None,
    monthly_cap: int | None = None,
) -> int:
    """
    Compute the hours a mentor is paid for a meeting.

    The duration of the meeting is truncated to full hours and then capped, first by the hours the mentor has
    already been paid for on the same day, then by the hours paid in the same month. Day and month are evaluated in
    the configured calendar timezone. `exclude` is the id of the meeting itself, which is skipped if it already
    appears in the history.
    """

    daily_cap = settings.daily_hour_cap if daily_cap is None else daily_cap
    monthly_cap = settings.monthly_hour_cap if monthly_cap is None else monthly_cap

    start = localize(meeting_start)
    in_month = []
    for meeting in completed_history:
        if meeting.mentor_id != mentor_id or (exclude is not None and meeting.id == exclude):
            continue
        local = localize(meeting.start)
        if (local.year, local.month) == (start.year, start.month):
            in_month.append((local, hours_between(meeting.start, meeting.end)))

    hours = hours_between(meeting_start, meeting_end)

    daily = sum(h for local, h in in_month if local.day == start.day)
    if daily >= daily_cap:
        return 0
    hours = min(hours, daily_cap - daily)

    monthly = sum(h for _, h in in_month)
    if monthly >= monthly_cap:
        return 0
    hours = min(hours, monthly_cap - monthly)

    logger.debug(f"mentor {mentor_id}: {hours}h payable ({daily}h today, {monthly}h this month)")
    return hours
