from .api_exception import AuthorizationError, ConflictError, NotFoundError, ValidationError


class MentoringLogNotFoundError(NotFoundError):
    detail = "Mentoring log not found"
    description = "The requested mentoring log does not exist."


class ReportNotFoundError(NotFoundError):
    detail = "Report not found"
    description = "The requested report does not exist."


class ReportAlreadyExistsError(ConflictError):
    detail = "Report already exists"
    description = "The mentoring log already has a report."


class MeetingNotEligibleError(ConflictError):
    detail = "Meeting not eligible"
    description = "A report can only be created for a finished meeting that has no report yet."


class ReportNotEditableError(ConflictError):
    detail = "Report not editable"
    description = "The report cannot be modified in its current state."


class ReportAlreadyCompletedError(ConflictError):
    detail = "Report already completed"
    description = "The report has already been submitted."


class InvalidTransitionError(ConflictError):
    detail = "Invalid status transition"
    description = "The report status cannot change this way."

    def __init__(self, source: str, target: str):
        super().__init__({"msg": self.detail, "from": source, "to": target})


class NotReportOwnerError(AuthorizationError):
    detail = "Not the owner of this report"
    description = "Only the mentor of the meeting may modify its report."


class IncompleteReportError(ValidationError):
    detail = "Incomplete submission"
    description = "The report cannot be submitted before all required fields are filled in."

    def __init__(self, missing: list[str]):
        super().__init__({"msg": self.detail, "missing": missing})
