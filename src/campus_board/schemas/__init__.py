# src/campus_board/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .application import ApplicationResponse, ApplicationStatusUpdate
from .common import ErrorResponse
from .conversation import (
    ConversationCreate,
    ConversationResponse,
    InboxEntryResponse,
    MarkedReadResponse,
    ParticipantResponse,
    UnreadCountResponse,
)
from .message import MessageCreate, MessageResponse

__all__ = [
    "ApplicationResponse", "ApplicationStatusUpdate",
    "ConversationCreate", "ConversationResponse",
    "ErrorResponse",
    "InboxEntryResponse", "MarkedReadResponse", "ParticipantResponse", "UnreadCountResponse",
    "MessageCreate", "MessageResponse",
]
