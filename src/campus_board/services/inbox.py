"""Conversation list projector: the per-participant inbox view."""
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from campus_board.models import Conversation, Message

from .conversations import list_conversations_for
from .identity import DisplayInfo, ProfileDirectory
from .messages import preview_for

__all__ = ["InboxEntry", "is_unread", "project_inbox", "unread_count"]


@dataclass(frozen=True)
class InboxEntry:
    """One row of a participant's inbox."""

    conversation: Conversation
    other_participant: DisplayInfo
    preview: Message | None
    unread: bool


def is_unread(preview: Message | None, participant: str) -> bool:
    """A conversation is unread when its latest message came from the other side and is unread."""
    if preview is None:
        return False
    return preview.sender_id != participant and not preview.read


def project_inbox(db: Session, participant: str, identity: ProfileDirectory) -> list[InboxEntry]:
    """Compose conversations, previews and display data for ``participant``.

    Read-only. Order follows ``list_conversations_for``: most recently active
    first.
    """
    conversations = list_conversations_for(db, participant)
    others = identity.get_many(
        conversation.other_participant(participant) for conversation in conversations
    )

    entries: list[InboxEntry] = []
    for conversation in conversations:
        preview = preview_for(db, conversation.id)
        entries.append(
            InboxEntry(
                conversation=conversation,
                other_participant=others[conversation.other_participant(participant)],
                preview=preview,
                unread=is_unread(preview, participant),
            )
        )
    return entries


def unread_count(db: Session, participant: str, identity: ProfileDirectory) -> int:
    """Return how many inbox entries are flagged unread."""
    return sum(1 for entry in project_inbox(db, participant, identity) if entry.unread)
