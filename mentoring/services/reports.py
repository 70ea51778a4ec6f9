"""Lifecycle of the reports mentors write after their meetings."""

from ..exceptions.reports import (
    IncompleteReportError,
    MeetingNotEligibleError,
    MentoringLogNotFoundError,
    NotReportOwnerError,
    ReportAlreadyCompletedError,
    ReportAlreadyExistsError,
    ReportNotEditableError,
    ReportNotFoundError,
)
from ..logger import get_logger
from ..models.report_status import EDITABLE, ReportStatus
from ..schemas.reports import CompletedReport, Report, UpdateReport
from ..settings import settings
from .compensation import month_bounds, payable_hours
from .storage import ReportStore


logger = get_logger(__name__)


def missing_fields(report: Report) -> list[str]:
    """Return the names of the fields which have to be filled in before the report can be submitted."""

    required = {
        "cadet": report.cadet_id,
        "mentor": report.mentor_id,
        "image_urls": report.image_urls,
        "mentoring_log": report.mentoring_log_id,
        "topic": report.topic,
        "place": report.place,
        "content": report.content,
        "feedback1": report.feedback1,
        "feedback2": report.feedback2,
        "feedback3": report.feedback3,
    }
    return [name for name, value in required.items() if not value]


def is_entered_report(report: Report) -> bool:
    return not missing_fields(report)


class ReportLifecycle:
    def __init__(self, store: ReportStore):
        self.store = store

    async def get_report(self, report_id: str) -> Report:
        if not (report := await self.store.get_report(report_id)):
            raise ReportNotFoundError
        return report

    async def create_report(self, mentoring_log_id: str, acting_mentor_id: str | None = None) -> str:
        """Create an empty report for a finished meeting and return its id."""

        log = await self.store.get_mentoring_log(mentoring_log_id)
        if not log:
            raise MentoringLogNotFoundError
        if acting_mentor_id is not None and log.mentor_id != acting_mentor_id:
            raise NotReportOwnerError
        if log.report_id is not None:
            raise ReportAlreadyExistsError
        if log.report_status != ReportStatus.READY:
            raise MeetingNotEligibleError

        target = log.report_status.transition(ReportStatus.IN_PROGRESS)
        report_id = await self.store.open_report(log.id, log.report_status, target)
        if report_id is None:
            logger.warning(f"Lost race creating a report for mentoring log {log.id}")
            raise ReportAlreadyExistsError

        logger.info(f"Created report {report_id} for mentoring log {log.id}")
        return report_id

    async def update_report(
        self, report_id: str, patch: UpdateReport, acting_mentor_id: str
    ) -> CompletedReport | None:
        """
        Apply the non-null fields of `patch` to a report.

        If `patch.is_done` is set, the report is submitted afterwards and the payout is returned.
        """

        report = await self.get_report(report_id)
        if not report.status.editable:
            raise ReportNotEditableError
        if report.mentor_id != acting_mentor_id:
            raise NotReportOwnerError

        if (values := patch.values) and not await self.store.write_report(report.id, values, EDITABLE):
            logger.warning(f"Report {report.id} stopped being editable during an update")
            raise ReportNotEditableError

        if patch.is_done:
            return await self.complete_report(report.id, acting_mentor_id)
        return None

    async def complete_report(self, report_id: str, acting_mentor_id: str | None = None) -> CompletedReport:
        """Submit a report and credit the payout of its meeting to the mentor."""

        report = await self.get_report(report_id)
        if acting_mentor_id is not None and report.mentor_id != acting_mentor_id:
            raise NotReportOwnerError
        if report.status == ReportStatus.COMPLETED:
            raise ReportAlreadyCompletedError

        target = report.status.transition(ReportStatus.COMPLETED)
        if missing := missing_fields(report):
            raise IncompleteReportError(missing)

        log = await self.store.get_mentoring_log(report.mentoring_log_id)  # type: ignore[arg-type]
        if not log:
            raise MentoringLogNotFoundError

        since, until = month_bounds(log.start)
        history = await self.store.completed_meetings(log.mentor_id, since, until)
        hours = payable_hours(log.mentor_id, log.start, log.end, history, exclude=log.id)
        money = hours * settings.hourly_rate

        if not await self.store.finalize(log.id, report.status, target, money):
            logger.warning(f"Lost race completing report {report.id}")
            raise ReportAlreadyCompletedError

        logger.info(f"Completed report {report.id}: {hours}h, {money} paid to mentor {log.mentor_id}")
        return CompletedReport(hours=hours, money=money)
