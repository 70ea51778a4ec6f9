from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import BigInteger, Enum, ForeignKey, String, update
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .report_status import ReportStatus
from ..database import Base, UTCDateTime, db, select
from ..schemas import mentorings
from ..utils.utc import utcnow


if TYPE_CHECKING:
    from .reports import Report


class MentoringLog(Base):
    __tablename__ = "mentoring_logs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, unique=True)
    mentor_id: Mapped[str] = mapped_column(String(36), ForeignKey("mentors.id"))
    cadet_id: Mapped[str] = mapped_column(String(36), ForeignKey("cadets.id"))
    created_at: Mapped[datetime] = mapped_column(UTCDateTime)
    meeting_start: Mapped[datetime] = mapped_column(UTCDateTime)
    meeting_end: Mapped[datetime] = mapped_column(UTCDateTime)
    report_status: Mapped[ReportStatus] = mapped_column(Enum(ReportStatus), default=ReportStatus.READY)
    money: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    report: Mapped[Report | None] = relationship(
        "Report", back_populates="mentoring_log", lazy="selectin", uselist=False
    )

    @property
    def span(self) -> mentorings.MeetingSpan:
        return mentorings.MeetingSpan(
            id=self.id, mentor_id=self.mentor_id, cadet_id=self.cadet_id, start=self.meeting_start, end=self.meeting_end
        )

    @property
    def serialize(self) -> mentorings.MentoringLog:
        return mentorings.MentoringLog(
            **self.span.model_dump(),
            report_status=self.report_status,
            report_id=self.report.id if self.report else None,
            money=self.money,
        )

    @classmethod
    async def create(cls, mentor_id: str, cadet_id: str, start: datetime, end: datetime) -> MentoringLog:
        return await db.add(
            cls(
                id=str(uuid4()),
                mentor_id=mentor_id,
                cadet_id=cadet_id,
                created_at=utcnow(),
                meeting_start=start,
                meeting_end=end,
                report_status=ReportStatus.READY,
                money=None,
            )
        )

    @classmethod
    async def completed_between(cls, mentor_id: str, since: datetime, until: datetime) -> list[MentoringLog]:
        return await db.all(
            select(cls)
            .filter_by(mentor_id=mentor_id, report_status=ReportStatus.COMPLETED)
            .where(cls.meeting_start >= since, cls.meeting_start < until)
        )

    @classmethod
    async def list_by_cadet(cls, cadet_id: str) -> list[MentoringLog]:
        return await db.all(select(cls).filter_by(cadet_id=cadet_id).order_by(cls.meeting_start.desc()))

    @classmethod
    async def advance(
        cls, mentoring_log_id: str, expected: ReportStatus, target: ReportStatus, money: int | None = None
    ) -> bool:
        """Move the report status from `expected` to `target`. Return False if the status was not `expected`."""

        values: dict[str, object] = {"report_status": target}
        if money is not None:
            values["money"] = money

        result = await db.exec(
            update(cls)
            .where(cls.id == mentoring_log_id, cls.report_status == expected)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # type: ignore[attr-defined, no-any-return]
