from typing import Any

from .api_exception import ValidationError


class InvalidScheduleError(ValidationError):
    detail = "Invalid schedule"
    description = "The weekly schedule must consist of exactly seven days."


class InvalidSlotError(ValidationError):
    detail = "Invalid time slot"
    description = "A time slot has invalid hours or minutes or is shorter than one hour."

    def __init__(self, day: int, slot: Any):
        super().__init__({"msg": self.detail, "day": day, "slot": slot})


class SlotOverlapError(ValidationError):
    detail = "Slot overlap"
    description = "Two time slots on the same day overlap."

    def __init__(self, day: int, slot_a: Any, slot_b: Any):
        super().__init__({"msg": self.detail, "reason": "slot overlap", "day": day, "slot_a": slot_a, "slot_b": slot_b})


class AvailabilityRequiredError(ValidationError):
    detail = "Availability required"
    description = "A mentor who marks themselves as active must submit their available time."
