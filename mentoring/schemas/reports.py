from datetime import datetime

from pydantic import BaseModel, Field

from ..models.report_status import ReportStatus


class Report(BaseModel):
    id: str = Field(description="Report ID")
    mentoring_log_id: str | None = Field(description="ID of the mentoring log this report belongs to")
    mentor_id: str | None = Field(description="ID of the mentor")
    cadet_id: str | None = Field(description="ID of the cadet")
    status: ReportStatus = Field(description="Status of the report")
    topic: str | None = Field(None, description="Topic of the meeting")
    content: str | None = Field(None, description="What was discussed in the meeting")
    place: str | None = Field(None, description="Where the meeting took place")
    image_urls: list[str] = Field(default_factory=list, description="Photos taken during the meeting")
    signature_url: str | None = Field(None, description="Signature of the cadet")
    feedback1: int | None = Field(None, description="First feedback score (1-5)")
    feedback2: int | None = Field(None, description="Second feedback score (1-5)")
    feedback3: int | None = Field(None, description="Third feedback score (1-5)")
    feedback_message: str | None = Field(None, description="Free text feedback")
    created_at: datetime | None = Field(None, description="Creation date of the report")


class UpdateReport(BaseModel):
    """Changes to a report. Fields required for submission can be replaced but never cleared."""

    topic: str | None = Field(None, min_length=1, description="Topic of the meeting")
    content: str | None = Field(None, min_length=1, description="What was discussed in the meeting")
    place: str | None = Field(None, min_length=1, description="Where the meeting took place")
    image_urls: list[str] | None = Field(None, min_length=1, description="Photos taken during the meeting")
    signature_url: str | None = Field(None, description="Signature of the cadet")
    feedback1: int | None = Field(None, ge=1, le=5, description="First feedback score (1-5)")
    feedback2: int | None = Field(None, ge=1, le=5, description="Second feedback score (1-5)")
    feedback3: int | None = Field(None, ge=1, le=5, description="Third feedback score (1-5)")
    feedback_message: str | None = Field(None, description="Free text feedback")
    is_done: bool = Field(False, description="Submit the report after applying the changes")

    @property
    def values(self) -> dict[str, object]:
        """The fields which should overwrite the stored report"""

        return {k: v for k, v in self.model_dump(exclude={"is_done"}).items() if v is not None}


class CompletedReport(BaseModel):
    hours: int = Field(description="Payable hours credited for the meeting")
    money: int = Field(description="Payout for the meeting")


class ReportPage(BaseModel):
    items: list[Report] = Field(description="Reports on this page, newest first")
    total: int = Field(description="Total number of reports")
