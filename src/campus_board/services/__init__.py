"""Business logic services for the Campus Board application."""

from .conversations import ConversationResult, get_or_create_conversation, list_conversations_for
from .identity import DisplayInfo, ProfileDirectory
from .inbox import InboxEntry, project_inbox
from .interest import express_interest, transition_application
from .messages import append_message, list_messages, preview_for

__all__ = [
    "ConversationResult",
    "DisplayInfo",
    "InboxEntry",
    "ProfileDirectory",
    "append_message",
    "express_interest",
    "get_or_create_conversation",
    "list_conversations_for",
    "list_messages",
    "preview_for",
    "project_inbox",
    "transition_application",
]
