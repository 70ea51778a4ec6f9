from typing import Any

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError

from .exceptions.auth import InvalidTokenError, PermissionDeniedError
from .schemas.user import User, UserAccessToken
from .settings import settings


bearer = HTTPBearer(auto_error=False)


def decode_jwt(token: str) -> dict[str, Any] | None:
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=["HS256"])  # type: ignore[no-any-return]
    except jwt.InvalidTokenError:
        return None


def encode_jwt(data: dict[str, Any]) -> str:
    return jwt.encode(data, settings.jwt_secret, algorithm="HS256")


async def _get_user(credentials: HTTPAuthorizationCredentials | None = Depends(bearer)) -> User:
    if not credentials or not (data := decode_jwt(credentials.credentials)):
        raise InvalidTokenError

    try:
        return UserAccessToken.model_validate(data).to_user()
    except ValidationError:
        raise InvalidTokenError


async def _get_mentor(user: User = Depends(_get_user)) -> User:
    if not user.mentor:
        raise PermissionDeniedError

    return user


user_auth = Depends(_get_user)
mentor_auth = Depends(_get_mentor)
