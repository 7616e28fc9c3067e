# src/campus_board/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    applications_router,
    conversations_router,
    messages_router,
    opportunities_router,
)

__all__ = [
    "applications_router",
    "conversations_router",
    "messages_router",
    "opportunities_router",
]
