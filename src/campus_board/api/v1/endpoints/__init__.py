# src/campus_board/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .applications import router as applications_router
from .conversations import router as conversations_router
from .messages import router as messages_router
from .opportunities import router as opportunities_router

__all__ = [
    "applications_router",
    "conversations_router",
    "messages_router",
    "opportunities_router",
]
