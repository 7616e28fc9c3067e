# src/campus_board/models/__init__.py
"""SQLAlchemy models for the Campus Board service."""

from .application import Application, ApplicationStatus
from .conversation import Conversation
from .message import Message
from .opportunity import Opportunity
from .profile import UserProfile

__all__ = [
    "Application", "ApplicationStatus",
    "Conversation",
    "Message",
    "Opportunity",
    "UserProfile",
]
