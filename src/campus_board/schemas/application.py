# src/campus_board/schemas/application.py
"""Application (interest expression) Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from campus_board.models.application import ApplicationStatus

from .common import UTCDateTime


class ApplicationStatusUpdate(BaseModel):
    """Schema for moving an application to a new status."""

    status: ApplicationStatus = Field(..., description="Target status")


class ApplicationResponse(BaseModel):
    """Schema for application information returned by the API."""

    id: int
    user_id: str
    opportunity_id: str
    status: ApplicationStatus
    created_at: UTCDateTime
    updated_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)
