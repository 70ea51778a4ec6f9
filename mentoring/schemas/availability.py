from __future__ import annotations

from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, Field


WEEKDAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


class TimeSlot(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    start_hour: int = Field(alias="startHour", description="Hour at which the slot starts (0-23)")
    start_minute: int = Field(alias="startMinute", description="Minute at which the slot starts (0 or 30)")
    end_hour: int = Field(alias="endHour", description="Hour at which the slot ends (0-23)")
    end_minute: int = Field(alias="endMinute", description="Minute at which the slot ends (0 or 30)")

    @property
    def start(self) -> int:
        """Start of the slot in minutes since midnight"""

        return self.start_hour * 60 + self.start_minute

    @property
    def end(self) -> int:
        """End of the slot in minutes since midnight"""

        return self.end_hour * 60 + self.end_minute

    @property
    def serialize(self) -> dict[str, int]:
        return self.model_dump(by_alias=True)

    def __str__(self) -> str:
        return f"{self.start_hour:02}:{self.start_minute:02}-{self.end_hour:02}:{self.end_minute:02}"


class WeeklySchedule(BaseModel):
    """
    Recurring weekly availability of a mentor.

    `days[0]` is Sunday and `days[6]` is Saturday.
    """

    model_config = ConfigDict(frozen=True)

    days: tuple[tuple[TimeSlot, ...], ...] = Field(default=((),) * 7)

    @classmethod
    def from_raw(cls, raw: Sequence[Sequence[TimeSlot | dict[str, Any]]]) -> WeeklySchedule:
        return cls(
            days=tuple(
                tuple(slot if isinstance(slot, TimeSlot) else TimeSlot.model_validate(slot) for slot in day)
                for day in raw
            )
        )

    @property
    def serialize(self) -> list[list[dict[str, int]]]:
        return [[slot.serialize for slot in day] for day in self.days]

    @property
    def empty(self) -> bool:
        return not any(self.days)

