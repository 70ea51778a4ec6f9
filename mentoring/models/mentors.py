from __future__ import annotations

from typing import Any
from uuid import uuid4

from sqlalchemy import JSON, Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..database import Base, db
from ..exceptions.availability import AvailabilityRequiredError
from ..schemas import mentors
from ..schemas.availability import WeeklySchedule
from ..services.availability import parse_schedule


class Mentor(Base):
    __tablename__ = "mentors"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, unique=True)
    intra_id: Mapped[str] = mapped_column(String(64), unique=True)
    name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    email: Mapped[str | None] = mapped_column(String(256), nullable=True)
    slack_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=False)
    markdown_content: Mapped[str | None] = mapped_column(Text, nullable=True)
    available_time: Mapped[list[Any] | None] = mapped_column(JSON, nullable=True)

    @property
    def schedule(self) -> WeeklySchedule:
        if not self.available_time:
            return WeeklySchedule()
        return WeeklySchedule.from_raw(self.available_time)

    @schedule.setter
    def schedule(self, schedule: WeeklySchedule) -> None:
        self.available_time = schedule.serialize

    @property
    def complete_profile(self) -> bool:
        return bool(self.name) and not self.schedule.empty

    @property
    def serialize(self) -> mentors.Mentor:
        return mentors.Mentor(
            id=self.id,
            intra_id=self.intra_id,
            name=self.name,
            email=self.email,
            slack_id=self.slack_id,
            is_active=bool(self.is_active),
            markdown_content=self.markdown_content,
            available_time=[list(day) for day in self.schedule.days],
            complete_profile=self.complete_profile,
        )

    @classmethod
    async def create(cls, intra_id: str, name: str | None = None, email: str | None = None) -> Mentor:
        return await db.add(cls(id=str(uuid4()), intra_id=intra_id, name=name, email=email, is_active=False))

    @classmethod
    async def get_by_intra_id(cls, intra_id: str) -> Mentor | None:
        return await db.get(cls, intra_id=intra_id)

    def update_details(self, data: mentors.UpdateMentor) -> None:
        """
        Overwrite the profile of the mentor.

        An active mentor must submit a valid schedule, which replaces the stored one as a whole.
        The stored schedule of an inactive mentor is kept.
        """

        schedule: WeeklySchedule | None = None
        if data.is_active:
            if data.available_time is None:
                raise AvailabilityRequiredError
            schedule = parse_schedule(data.available_time)

        self.name = data.name
        self.email = data.email
        self.slack_id = data.slack_id
        self.is_active = data.is_active
        self.markdown_content = data.markdown_content
        if schedule is not None:
            self.schedule = schedule
