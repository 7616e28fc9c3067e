"""Message ledger: append-only, totally ordered conversation history."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import timedelta

from sqlalchemy import and_, or_, select, update
from sqlalchemy.orm import Session

from campus_board.core.settings import settings
from campus_board.db.time import as_utc, utcnow
from campus_board.models import Conversation, Message

from .conversations import get_conversation, require_participant
from .errors import Forbidden, InvalidContent, NotFound

__all__ = [
    "append_message",
    "list_messages",
    "mark_conversation_read",
    "mark_message_read",
    "preview_for",
    "validate_content",
]

logger = logging.getLogger(__name__)

# Smallest step the DateTime columns keep.
_TICK = timedelta(microseconds=1)


def validate_content(content: str | None) -> str:
    """Return ``content`` unchanged if it is a sendable message body.

    Raises:
        InvalidContent: If the body is empty, whitespace only, or too long.
    """
    if content is None or not content.strip():
        raise InvalidContent("Message content must not be empty")
    if len(content) > settings.message_max_length:
        raise InvalidContent(
            f"Message content must be at most {settings.message_max_length} characters"
        )
    return content


def append_message(db: Session, conversation_id: int, sender_id: str, content: str) -> Message:
    """Append a message and bump the conversation's ``last_message_at``.

    All validation runs before anything is written, so a rejected call leaves
    no row behind.

    Args:
        db: Request-scoped database session.
        conversation_id: Target conversation.
        sender_id: Participant sending the message.
        content: Plain-text body, 1 to ``MESSAGE_MAX_LENGTH`` characters.

    Returns:
        The persisted message with its id and timestamp.

    Raises:
        NotFound: If the conversation does not exist.
        Forbidden: If the sender is not one of the two participants.
        InvalidContent: If the body is empty or too long.
    """
    conversation = get_conversation(db, conversation_id)
    require_participant(conversation, sender_id)
    validate_content(content)

    created_at = utcnow()
    last_message_at = as_utc(conversation.last_message_at)
    if created_at <= last_message_at:
        # Clock skew or a same-tick append: stay ahead of the previous message.
        created_at = last_message_at + _TICK

    message = Message(
        conversation_id=conversation.id,
        sender_id=sender_id,
        content=content,
        read=False,
        created_at=created_at,
    )
    db.add(message)
    # Conditional bump so a concurrent, later append is never overwritten.
    db.execute(
        update(Conversation)
        .where(
            Conversation.id == conversation.id,
            Conversation.last_message_at < created_at,
        )
        .values(last_message_at=created_at)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    db.expire(conversation, ["last_message_at"])
    db.refresh(message)
    logger.debug("Appended message %s to conversation %s", message.id, conversation.id)
    return message


def list_messages(
    db: Session,
    conversation_id: int,
    *,
    after_id: int | None = None,
    limit: int | None = None,
) -> Sequence[Message]:
    """Return messages ascending by ``(created_at, id)``.

    ``after_id`` is a cursor: only messages strictly after that message are
    returned. A cursor that is unknown or belongs to another conversation is
    ignored and the full history is returned.
    """
    stmt = select(Message).where(Message.conversation_id == conversation_id)

    if after_id is not None:
        cursor = db.get(Message, after_id)
        if cursor is not None and cursor.conversation_id == conversation_id:
            stmt = stmt.where(
                or_(
                    Message.created_at > cursor.created_at,
                    and_(Message.created_at == cursor.created_at, Message.id > cursor.id),
                )
            )

    stmt = stmt.order_by(Message.created_at.asc(), Message.id.asc())
    if limit is not None:
        stmt = stmt.limit(limit)
    return db.scalars(stmt).all()


def preview_for(db: Session, conversation_id: int) -> Message | None:
    """Return the latest message of a conversation, or None if it is empty."""
    stmt = (
        select(Message)
        .where(Message.conversation_id == conversation_id)
        .order_by(Message.created_at.desc(), Message.id.desc())
        .limit(1)
    )
    return db.scalars(stmt).first()


def mark_message_read(db: Session, message_id: int, reader: str) -> Message:
    """Set ``read`` on a message on behalf of its recipient.

    Raises:
        NotFound: If the message is unknown or ``reader`` is not a participant.
        Forbidden: If ``reader`` sent the message.
    """
    message = db.get(Message, message_id)
    if message is None:
        raise NotFound("Message not found")
    conversation = db.get(Conversation, message.conversation_id)
    if conversation is None or not conversation.has_participant(reader):
        raise NotFound("Message not found")
    if message.sender_id == reader:
        raise Forbidden("Only the recipient can mark a message as read")

    if not message.read:
        message.read = True
        db.commit()
        db.refresh(message)
    return message


def mark_conversation_read(db: Session, conversation_id: int, reader: str) -> int:
    """Mark every unread message from the other participant as read.

    Returns:
        Number of messages that flipped to read.
    """
    conversation = get_conversation(db, conversation_id)
    require_participant(conversation, reader)

    result = db.execute(
        update(Message)
        .where(
            Message.conversation_id == conversation.id,
            Message.sender_id != reader,
            Message.read == False,  # noqa: E712
        )
        .values(read=True)
        .execution_options(synchronize_session="evaluate")
    )
    db.commit()
    marked = result.rowcount or 0
    logger.debug("Marked %d messages read in conversation %s", marked, conversation.id)
    return marked
