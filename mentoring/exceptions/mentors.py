from .api_exception import NotFoundError


class MentorNotFoundError(NotFoundError):
    detail = "Mentor not found"
    description = "The requested mentor does not exist."


class CadetNotFoundError(NotFoundError):
    detail = "Cadet not found"
    description = "The requested cadet does not exist."
