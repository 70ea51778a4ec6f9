import asyncio
import os
from datetime import datetime, timedelta, timezone
from typing import Any, AsyncIterator, Iterator
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient


os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["CALENDAR_TIMEZONE"] = "UTC"

from mentoring.app import app  # noqa: E402
from mentoring.auth import encode_jwt  # noqa: E402
from mentoring.database import db  # noqa: E402
from mentoring.endpoints.reports import get_lifecycle  # noqa: E402
from mentoring.models.report_status import ReportStatus  # noqa: E402
from mentoring.schemas.mentorings import MeetingSpan, MentoringLog  # noqa: E402
from mentoring.schemas.reports import Report  # noqa: E402
from mentoring.services.reports import ReportLifecycle  # noqa: E402


class MemoryReportStore:
    """Report store keeping everything in dictionaries. Conditional writes never yield to the event loop."""

    def __init__(self) -> None:
        self.logs: dict[str, MentoringLog] = {}
        self.reports: dict[str, Report] = {}
        self.payouts: list[tuple[str, int]] = []

    def add_log(
        self,
        mentor_id: str = "mentor",
        cadet_id: str = "cadet",
        start: datetime = datetime(2022, 10, 21, 10, 0, tzinfo=timezone.utc),
        hours: float = 2,
        status: ReportStatus = ReportStatus.READY,
    ) -> MentoringLog:
        log = MentoringLog(
            id=str(uuid4()),
            mentor_id=mentor_id,
            cadet_id=cadet_id,
            start=start,
            end=start + timedelta(hours=hours),
            report_status=status,
        )
        self.logs[log.id] = log
        return log

    async def get_mentoring_log(self, mentoring_log_id: str) -> MentoringLog | None:
        await asyncio.sleep(0)
        return self.logs.get(mentoring_log_id)

    async def get_report(self, report_id: str) -> Report | None:
        await asyncio.sleep(0)
        if not (report := self.reports.get(report_id)):
            return None
        return report.model_copy(update={"status": self.logs[report.mentoring_log_id].report_status})  # type: ignore

    async def completed_meetings(self, mentor_id: str, since: datetime, until: datetime) -> list[MeetingSpan]:
        await asyncio.sleep(0)
        return [
            MeetingSpan(id=log.id, mentor_id=log.mentor_id, cadet_id=log.cadet_id, start=log.start, end=log.end)
            for log in self.logs.values()
            if log.mentor_id == mentor_id and log.report_status == ReportStatus.COMPLETED and since <= log.start < until
        ]

    async def open_report(self, mentoring_log_id: str, expected: ReportStatus, target: ReportStatus) -> str | None:
        log = self.logs[mentoring_log_id]
        if log.report_status != expected:
            return None

        report = Report(
            id=str(uuid4()), mentoring_log_id=log.id, mentor_id=log.mentor_id, cadet_id=log.cadet_id, status=target
        )
        self.reports[report.id] = report
        self.logs[log.id] = log.model_copy(update={"report_status": target, "report_id": report.id})
        return report.id

    async def write_report(self, report_id: str, values: dict[str, Any], statuses: frozenset[ReportStatus]) -> bool:
        report = self.reports[report_id]
        if self.logs[report.mentoring_log_id].report_status not in statuses:  # type: ignore[index]
            return False

        self.reports[report_id] = report.model_copy(update=values)
        return True

    async def finalize(self, mentoring_log_id: str, expected: ReportStatus, target: ReportStatus, money: int) -> bool:
        log = self.logs[mentoring_log_id]
        if log.report_status != expected:
            return False

        self.logs[log.id] = log.model_copy(update={"report_status": target, "money": money})
        self.payouts.append((log.id, money))
        return True


@pytest.fixture
def store() -> MemoryReportStore:
    return MemoryReportStore()


@pytest.fixture
def lifecycle(store: MemoryReportStore) -> ReportLifecycle:
    return ReportLifecycle(store)


@pytest.fixture
async def tables() -> AsyncIterator[None]:
    await db.create_tables()
    yield
    await db.drop_tables()
    await db.engine.dispose()


@pytest.fixture
def client(lifecycle: ReportLifecycle) -> Iterator[TestClient]:
    app.dependency_overrides[get_lifecycle] = lambda: lifecycle
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(uid: str = "mentor", intra_id: str = "jdoe", role: str = "mentor") -> dict[str, str]:
    return {"Authorization": f"Bearer {encode_jwt({'uid': uid, 'intra_id': intra_id, 'role': role})}"}
