from pydantic import BaseModel, Field

from .availability import TimeSlot


class Mentor(BaseModel):
    id: str = Field(description="Mentor ID")
    intra_id: str = Field(description="Intra login of the mentor")
    name: str | None = Field(description="Full name of the mentor")
    email: str | None = Field(description="Email address")
    slack_id: str | None = Field(description="Slack member ID")
    is_active: bool = Field(description="Whether the mentor currently accepts mentorings")
    markdown_content: str | None = Field(description="Profile text (markdown)")
    available_time: list[list[TimeSlot]] = Field(description="Weekly availability, Sunday first")
    complete_profile: bool = Field(description="Whether name and availability have been filled in")


class UpdateMentor(BaseModel):
    name: str = Field(min_length=1, max_length=256, description="Full name of the mentor")
    email: str = Field(max_length=256, description="Email address")
    slack_id: str | None = Field(None, max_length=64, description="Slack member ID")
    is_active: bool = Field(description="Whether the mentor currently accepts mentorings")
    markdown_content: str | None = Field(None, max_length=65535, description="Profile text (markdown)")
    available_time: list[list[TimeSlot]] | None = Field(
        None, description="Weekly availability, Sunday first. Required if `is_active` is set."
    )
