# src/campus_board/schemas/message.py
"""Message-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from .common import UTCDateTime


class MessageCreate(BaseModel):
    """Schema for appending a message to a conversation.

    Length limits are enforced by the message ledger so that violations
    surface as 400 responses rather than schema errors.
    """

    conversation_id: int = Field(..., description="Conversation to post into")
    content: str = Field(..., description="Plain-text message body")


class MessageResponse(BaseModel):
    """Schema for message information returned by the API."""

    id: int
    conversation_id: int
    sender_id: str
    content: str
    read: bool
    created_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)
