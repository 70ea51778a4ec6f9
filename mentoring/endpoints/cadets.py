"""Endpoints related to cadets"""

from typing import Any

from fastapi import APIRouter

from mentoring import models
from mentoring.auth import user_auth
from mentoring.database import db, filter_by
from mentoring.exceptions.auth import user_responses
from mentoring.exceptions.mentors import CadetNotFoundError
from mentoring.schemas.mentorings import MentoringLog


router = APIRouter()


@router.get(
    "/cadets/{cadet_id}/mentorings",
    dependencies=[user_auth],
    responses=user_responses(list[MentoringLog], CadetNotFoundError),
)
async def get_mentoring_logs(cadet_id: str) -> Any:
    """
    Return all mentoring logs of a cadet, latest meeting first.

    *Requirements:* **USER**
    """

    if not await db.exists(filter_by(models.Cadet, id=cadet_id)):
        raise CadetNotFoundError

    return [log.serialize for log in await models.MentoringLog.list_by_cadet(cadet_id)]
