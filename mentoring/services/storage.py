from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol

from .. import models
from ..database import db, filter_by
from ..models.report_status import ReportStatus
from ..schemas.mentorings import MeetingSpan, MentoringLog
from ..schemas.reports import Report


class ReportStore(Protocol):
    """Persistence used by the report lifecycle."""

    async def get_mentoring_log(self, mentoring_log_id: str) -> MentoringLog | None:
        ...

    async def get_report(self, report_id: str) -> Report | None:
        ...

    async def completed_meetings(self, mentor_id: str, since: datetime, until: datetime) -> list[MeetingSpan]:
        """Return the meetings of a mentor with a completed report which started in `[since, until)`."""

    async def open_report(self, mentoring_log_id: str, expected: ReportStatus, target: ReportStatus) -> str | None:
        """
        Atomically move the mentoring log from `expected` to `target` and create an empty report for it.

        Return the id of the new report, or None if the status of the log was not `expected` anymore.
        """

    async def write_report(self, report_id: str, values: dict[str, Any], statuses: frozenset[ReportStatus]) -> bool:
        """Overwrite fields of a report in one write if its status is one of `statuses`."""

    async def finalize(self, mentoring_log_id: str, expected: ReportStatus, target: ReportStatus, money: int) -> bool:
        """Atomically move the mentoring log from `expected` to `target` and store the payout."""


async def fetch(cls: Any, **kwargs: Any) -> Any | None:
    """Load a row, refreshing any stale copy the session holds after a conditional update."""

    return await db.first(filter_by(cls, **kwargs).execution_options(populate_existing=True))


class DatabaseReportStore:
    async def get_mentoring_log(self, mentoring_log_id: str) -> MentoringLog | None:
        log = await fetch(models.MentoringLog, id=mentoring_log_id)
        return log.serialize if log else None

    async def get_report(self, report_id: str) -> Report | None:
        report = await fetch(models.Report, id=report_id)
        if not report:
            return None

        # the status lives on the mentoring log
        await fetch(models.MentoringLog, id=report.mentoring_log_id)
        return report.serialize

    async def completed_meetings(self, mentor_id: str, since: datetime, until: datetime) -> list[MeetingSpan]:
        return [log.span for log in await models.MentoringLog.completed_between(mentor_id, since, until)]

    async def open_report(self, mentoring_log_id: str, expected: ReportStatus, target: ReportStatus) -> str | None:
        if not await models.MentoringLog.advance(mentoring_log_id, expected, target):
            return None

        log = await fetch(models.MentoringLog, id=mentoring_log_id)
        if not log:
            return None
        report = await models.Report.create(log)
        return report.id

    async def write_report(self, report_id: str, values: dict[str, Any], statuses: frozenset[ReportStatus]) -> bool:
        return await models.Report.write(report_id, values, statuses)

    async def finalize(self, mentoring_log_id: str, expected: ReportStatus, target: ReportStatus, money: int) -> bool:
        return await models.MentoringLog.advance(mentoring_log_id, expected, target, money=money)
