"""Endpoints related to mentors"""

from typing import Any

from fastapi import APIRouter, Body

from mentoring import models
from mentoring.auth import mentor_auth, user_auth
from mentoring.exceptions.auth import mentor_responses, user_responses
from mentoring.exceptions.availability import (
    AvailabilityRequiredError,
    InvalidScheduleError,
    InvalidSlotError,
    SlotOverlapError,
)
from mentoring.exceptions.mentors import MentorNotFoundError
from mentoring.logger import get_logger
from mentoring.schemas.availability import TimeSlot
from mentoring.schemas.mentors import Mentor, UpdateMentor
from mentoring.schemas.user import User
from mentoring.services.availability import parse_schedule


router = APIRouter()

logger = get_logger(__name__)


@router.get("/mentors/{intra_id}", dependencies=[user_auth], responses=user_responses(Mentor, MentorNotFoundError))
async def get_mentor(intra_id: str) -> Any:
    """
    Return the profile of a mentor.

    *Requirements:* **USER**
    """

    if not (mentor := await models.Mentor.get_by_intra_id(intra_id)):
        raise MentorNotFoundError

    return mentor.serialize


@router.patch(
    "/mentors/me",
    responses=mentor_responses(
        Mentor,
        MentorNotFoundError,
        AvailabilityRequiredError,
        InvalidScheduleError,
        InvalidSlotError,
        SlotOverlapError,
    ),
)
async def update_mentor_details(data: UpdateMentor, user: User = mentor_auth) -> Any:
    """
    Update the profile of the authenticated mentor.

    Mentors marking themselves as active have to submit their weekly availability, which replaces the stored one.

    *Requirements:* **MENTOR**
    """

    if not (mentor := await models.Mentor.get_by_intra_id(user.intra_id)):
        raise MentorNotFoundError

    mentor.update_details(data)
    logger.info(f"Updated details of mentor {mentor.intra_id} (active: {mentor.is_active})")

    return mentor.serialize


@router.post(
    "/mentors/availability/validate",
    dependencies=[mentor_auth],
    responses=mentor_responses(list[list[TimeSlot]], InvalidScheduleError, InvalidSlotError, SlotOverlapError),
)
async def validate_availability(available_time: list[list[TimeSlot]] = Body(embed=True)) -> Any:
    """
    Validate a weekly availability without storing it.

    *Requirements:* **MENTOR**
    """

    return [list(day) for day in parse_schedule(available_time).days]
