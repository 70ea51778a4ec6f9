"""Validation of the weekly availability of mentors."""

from itertools import combinations
from typing import Any, Sequence

from ..exceptions.availability import InvalidScheduleError, InvalidSlotError, SlotOverlapError
from ..schemas.availability import WEEKDAYS, TimeSlot, WeeklySchedule


def is_valid_slot(slot: TimeSlot) -> bool:
    if not (0 <= slot.start_hour < 24 and 0 <= slot.end_hour < 24):
        return False
    if slot.start_minute not in (0, 30) or slot.end_minute not in (0, 30):
        return False
    if slot.start_hour >= slot.end_hour:
        return False
    return slot.end - slot.start >= 60


def _overlaps(a: TimeSlot, b: TimeSlot) -> bool:
    if a.start_hour <= b.start_hour < a.end_hour:
        return True
    # a slot ending at half past is considered to run into a slot starting at that hour if that one ends on the hour
    return a.end_hour == b.start_hour and a.end_minute == 30 and b.end_minute == 0


def overlap(a: TimeSlot, b: TimeSlot) -> bool:
    """Return whether two slots of the same day collide."""

    return _overlaps(a, b) or _overlaps(b, a)


def validate_schedule(schedule: WeeklySchedule) -> WeeklySchedule:
    """
    Check every slot of a weekly schedule and make sure no two slots of the same day overlap.

    The schedule is returned unchanged. The first violation raises an `InvalidSlotError` or a
    `SlotOverlapError` naming the day and the offending slots.
    """

    if len(schedule.days) != len(WEEKDAYS):
        raise InvalidScheduleError

    for day, slots in enumerate(schedule.days):
        for slot in slots:
            if not is_valid_slot(slot):
                raise InvalidSlotError(day, slot.serialize)

    for day, slots in enumerate(schedule.days):
        for a, b in combinations(slots, 2):
            if overlap(a, b):
                raise SlotOverlapError(day, a.serialize, b.serialize)

    return schedule


def parse_schedule(raw: Sequence[Sequence[TimeSlot | dict[str, Any]]]) -> WeeklySchedule:
    """Build a weekly schedule from its nested list representation and validate it."""

    if len(raw) != len(WEEKDAYS):
        raise InvalidScheduleError
    return validate_schedule(WeeklySchedule.from_raw(raw))
