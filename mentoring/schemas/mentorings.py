from datetime import datetime

from pydantic import BaseModel, Field

from ..models.report_status import ReportStatus


class MeetingSpan(BaseModel):
    id: str = Field(description="ID of the mentoring log")
    mentor_id: str = Field(description="ID of the mentor")
    cadet_id: str = Field(description="ID of the cadet")
    start: datetime = Field(description="Start of the meeting")
    end: datetime = Field(description="End of the meeting")


class MentoringLog(MeetingSpan):
    report_status: ReportStatus = Field(description="Status of the report for this meeting")
    report_id: str | None = Field(None, description="ID of the report, if one has been created")
    money: int | None = Field(None, description="Payout for this meeting, set when the report is completed")
