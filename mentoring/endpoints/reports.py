"""Endpoints related to mentoring reports"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from mentoring import models
from mentoring.auth import mentor_auth, user_auth
from mentoring.exceptions.auth import mentor_responses, user_responses
from mentoring.exceptions.reports import (
    IncompleteReportError,
    InvalidTransitionError,
    MeetingNotEligibleError,
    MentoringLogNotFoundError,
    NotReportOwnerError,
    ReportAlreadyCompletedError,
    ReportAlreadyExistsError,
    ReportNotEditableError,
    ReportNotFoundError,
)
from mentoring.schemas.reports import CompletedReport, Report, ReportPage, UpdateReport
from mentoring.schemas.user import User
from mentoring.services.reports import ReportLifecycle
from mentoring.services.storage import DatabaseReportStore


router = APIRouter()


def get_lifecycle() -> ReportLifecycle:
    return ReportLifecycle(DatabaseReportStore())


lifecycle_dependency = Depends(get_lifecycle)


@router.get("/reports", dependencies=[user_auth], responses=user_responses(ReportPage))
async def list_reports(
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    take: int = Query(20, ge=1, le=100, description="Number of reports per page"),
) -> Any:
    """
    Return a page of reports, newest first.

    *Requirements:* **USER**
    """

    reports, total = await models.Report.page(page, take)
    return ReportPage(items=[report.serialize for report in reports], total=total)


@router.get("/reports/{report_id}", dependencies=[user_auth], responses=user_responses(Report, ReportNotFoundError))
async def get_report(report_id: str, lifecycle: ReportLifecycle = lifecycle_dependency) -> Any:
    """
    Return a report.

    *Requirements:* **USER**
    """

    return await lifecycle.get_report(report_id)


@router.post(
    "/reports/{mentoring_log_id}",
    responses=mentor_responses(
        Report, MentoringLogNotFoundError, NotReportOwnerError, ReportAlreadyExistsError, MeetingNotEligibleError
    ),
)
async def create_report(
    mentoring_log_id: str, user: User = mentor_auth, lifecycle: ReportLifecycle = lifecycle_dependency
) -> Any:
    """
    Create an empty report for a finished meeting.

    *Requirements:* **MENTOR** of the meeting
    """

    report_id = await lifecycle.create_report(mentoring_log_id, user.id)
    return await lifecycle.get_report(report_id)


@router.patch(
    "/reports/{report_id}",
    responses=mentor_responses(
        Report,
        ReportNotFoundError,
        ReportNotEditableError,
        NotReportOwnerError,
        IncompleteReportError,
        ReportAlreadyCompletedError,
    ),
)
async def update_report(
    report_id: str, data: UpdateReport, user: User = mentor_auth, lifecycle: ReportLifecycle = lifecycle_dependency
) -> Any:
    """
    Update the fields of a report. Fields which are not set are left unchanged.

    If `is_done` is set, the report is submitted afterwards.

    *Requirements:* **MENTOR** of the meeting
    """

    await lifecycle.update_report(report_id, data, user.id)
    return await lifecycle.get_report(report_id)


@router.post(
    "/reports/{report_id}/complete",
    responses=mentor_responses(
        CompletedReport,
        ReportNotFoundError,
        NotReportOwnerError,
        IncompleteReportError,
        ReportAlreadyCompletedError,
        InvalidTransitionError,
    ),
)
async def complete_report(
    report_id: str, user: User = mentor_auth, lifecycle: ReportLifecycle = lifecycle_dependency
) -> Any:
    """
    Submit a report and credit the payout of the meeting to the mentor.

    *Requirements:* **MENTOR** of the meeting
    """

    return await lifecycle.complete_report(report_id, user.id)
