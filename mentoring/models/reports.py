from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import uuid4

from sqlalchemy import JSON, ForeignKey, SmallInteger, String, Text, update
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .mentoring_logs import MentoringLog
from .report_status import ReportStatus
from ..database import Base, UTCDateTime, db, select
from ..schemas import reports
from ..utils.utc import utcnow


class Report(Base):
    __tablename__ = "reports"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, unique=True)
    mentoring_log_id: Mapped[str] = mapped_column(String(36), ForeignKey("mentoring_logs.id"), unique=True)
    mentor_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("mentors.id"), nullable=True)
    cadet_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("cadets.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime)
    topic: Mapped[str | None] = mapped_column(String(256), nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    place: Mapped[str | None] = mapped_column(String(256), nullable=True)
    image_urls: Mapped[list[str]] = mapped_column(JSON, default=list)
    signature_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    feedback1: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    feedback2: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    feedback3: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    feedback_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    mentoring_log: Mapped[MentoringLog] = relationship("MentoringLog", back_populates="report", lazy="selectin")

    @property
    def serialize(self) -> reports.Report:
        return reports.Report(
            id=self.id,
            mentoring_log_id=self.mentoring_log_id,
            mentor_id=self.mentor_id,
            cadet_id=self.cadet_id,
            status=self.mentoring_log.report_status,
            topic=self.topic,
            content=self.content,
            place=self.place,
            image_urls=self.image_urls or [],
            signature_url=self.signature_url,
            feedback1=self.feedback1,
            feedback2=self.feedback2,
            feedback3=self.feedback3,
            feedback_message=self.feedback_message,
            created_at=self.created_at,
        )

    @classmethod
    async def create(cls, mentoring_log: MentoringLog) -> Report:
        return await db.add(
            cls(
                id=str(uuid4()),
                mentoring_log_id=mentoring_log.id,
                mentoring_log=mentoring_log,
                mentor_id=mentoring_log.mentor_id,
                cadet_id=mentoring_log.cadet_id,
                created_at=utcnow(),
                image_urls=[],
            )
        )

    @classmethod
    async def write(cls, report_id: str, values: dict[str, Any], statuses: frozenset[ReportStatus]) -> bool:
        """Overwrite the given fields in a single statement if the report status is one of `statuses`."""

        result = await db.exec(
            update(cls)
            .where(cls.id == report_id)
            .where(
                select(MentoringLog.id)
                .where(MentoringLog.id == cls.mentoring_log_id, MentoringLog.report_status.in_(list(statuses)))
                .correlate(cls)
                .exists()
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # type: ignore[attr-defined, no-any-return]

    @classmethod
    async def page(cls, page: int, take: int) -> tuple[list[Report], int]:
        query = select(cls).order_by(cls.created_at.desc())
        total = await db.count(query)
        return await db.all(query.offset((page - 1) * take).limit(take)), total
