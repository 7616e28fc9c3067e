# src/campus_board/schemas/conversation.py
"""Conversation and inbox Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from .common import UTCDateTime
from .message import MessageResponse


class ConversationCreate(BaseModel):
    """Schema for starting (or resuming) a conversation with another participant."""

    participant_id: str = Field(..., description="Participant to talk to")
    opportunity_id: str | None = Field(None, description="Optional opportunity the conversation is about")
    message: str | None = Field(None, description="Optional first message to send")


class ConversationResponse(BaseModel):
    """Schema for conversation information returned by the API."""

    id: int
    participant_a: str
    participant_b: str
    opportunity_id: str | None
    last_message_at: UTCDateTime
    created_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)


class ParticipantResponse(BaseModel):
    """Display attributes of the other participant in an inbox entry."""

    id: str
    name: str | None
    avatar_url: str | None


class InboxEntryResponse(BaseModel):
    """One inbox row: conversation, counterpart, latest message and unread flag."""

    conversation: ConversationResponse
    other_participant: ParticipantResponse
    preview: MessageResponse | None
    unread: bool


class UnreadCountResponse(BaseModel):
    """Number of conversations whose latest message is unread."""

    unread: int


class MarkedReadResponse(BaseModel):
    """Number of messages flipped to read."""

    marked: int
