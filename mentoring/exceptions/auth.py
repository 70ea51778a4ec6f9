from typing import Any, Type

from fastapi import status

from .api_exception import APIException, AuthorizationError
from ..utils.docs import responses


class InvalidTokenError(APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid token"
    description = "This access token is invalid or missing."


class PermissionDeniedError(AuthorizationError):
    detail = "Permission denied"
    description = "The user is not allowed to use this endpoint."


def user_responses(default: type, *args: Type[APIException]) -> dict[int | str, dict[str, Any]]:
    """api responses for user_auth dependency"""

    return responses(default, *args, InvalidTokenError)


def mentor_responses(default: type, *args: Type[APIException]) -> dict[int | str, dict[str, Any]]:
    """api responses for mentor_auth dependency"""

    return responses(default, *args, InvalidTokenError, PermissionDeniedError)
