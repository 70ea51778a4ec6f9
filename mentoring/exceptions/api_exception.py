from typing import Any

from fastapi import HTTPException, status


class APIException(HTTPException):
    status_code: int
    detail: Any
    description: str

    def __init__(self, detail: Any = None) -> None:
        super().__init__(self.status_code, self.detail if detail is None else detail)


class ValidationError(APIException):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    detail = "Validation failed"
    description = "The submitted data is malformed."


class ConflictError(APIException):
    status_code = status.HTTP_409_CONFLICT
    detail = "Conflict"
    description = "The operation is not allowed in the current state of the resource."


class NotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"
    description = "The requested resource does not exist."


class AuthorizationError(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Permission denied"
    description = "The user is not allowed to modify this resource."
