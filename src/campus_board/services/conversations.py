"""Conversation directory: one conversation per unordered pair and context."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_board.db.time import utcnow
from campus_board.models import Conversation

from . import opportunities
from .errors import Forbidden, InvalidParticipants, NotFound, Unavailable

__all__ = [
    "ConversationResult",
    "canonical_pair",
    "get_conversation",
    "get_or_create_conversation",
    "list_conversations_for",
    "require_participant",
]

PARTICIPANT_ID_MAX_LENGTH = 64

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversationResult:
    """Outcome of ``get_or_create_conversation``.

    ``created`` is False both for a plain lookup hit and when a concurrent
    request won the insert race.
    """

    conversation: Conversation
    created: bool


def canonical_pair(participant_x: str, participant_y: str) -> tuple[str, str]:
    """Return the two participant ids sorted, validating them on the way.

    Raises:
        InvalidParticipants: If either id is blank or too long, or both are equal.
    """
    for participant in (participant_x, participant_y):
        if not participant or not participant.strip():
            raise InvalidParticipants("Participant id must not be empty")
        if len(participant) > PARTICIPANT_ID_MAX_LENGTH:
            raise InvalidParticipants("Participant id is too long")
    if participant_x == participant_y:
        raise InvalidParticipants("Cannot start a conversation with yourself")
    if participant_x < participant_y:
        return participant_x, participant_y
    return participant_y, participant_x


def _find_conversation(
    db: Session,
    pair: tuple[str, str],
    context: str | None,
) -> Conversation | None:
    stmt = select(Conversation).where(
        Conversation.participant_a == pair[0],
        Conversation.participant_b == pair[1],
    )
    if context is None:
        stmt = stmt.where(Conversation.opportunity_id.is_(None))
    else:
        stmt = stmt.where(Conversation.opportunity_id == context)
    return db.scalars(stmt).first()


def get_or_create_conversation(
    db: Session,
    participant_x: str,
    participant_y: str,
    context: str | None = None,
) -> ConversationResult:
    """Return the conversation for the pair and context, creating it if absent.

    Argument order never matters. The insert runs inside a SAVEPOINT; when the
    storage layer reports a uniqueness violation, another request created the
    row first and that row is returned instead.

    Args:
        db: Request-scoped database session.
        participant_x: One participant id.
        participant_y: The other participant id.
        context: Optional opportunity id narrowing the uniqueness scope.

    Raises:
        InvalidParticipants: If the pair is not two distinct, valid ids.
        NotFound: If ``context`` names an opportunity that does not exist.
    """
    pair = canonical_pair(participant_x, participant_y)
    if context is not None and not opportunities.exists(db, context):
        raise NotFound("Opportunity not found")

    existing = _find_conversation(db, pair, context)
    if existing is not None:
        return ConversationResult(conversation=existing, created=False)

    now = utcnow()
    conversation = Conversation(
        participant_a=pair[0],
        participant_b=pair[1],
        opportunity_id=context,
        created_at=now,
        last_message_at=now,
    )
    try:
        with db.begin_nested():
            db.add(conversation)
            db.flush()
    except IntegrityError as err:
        winner = _find_conversation(db, pair, context)
        if winner is None:
            logger.error("Conversation insert conflicted but no row was found for %s", pair, exc_info=err)
            raise Unavailable("Conversation could not be created") from err
        logger.debug("Conversation %s was created concurrently; reusing it", winner.id)
        return ConversationResult(conversation=winner, created=False)

    db.commit()
    db.refresh(conversation)
    logger.info("Created conversation %s (context=%s)", conversation.id, context)
    return ConversationResult(conversation=conversation, created=True)


def list_conversations_for(db: Session, participant: str) -> Sequence[Conversation]:
    """Return the participant's conversations, most recently active first."""
    stmt = (
        select(Conversation)
        .where(
            or_(
                Conversation.participant_a == participant,
                Conversation.participant_b == participant,
            )
        )
        .order_by(Conversation.last_message_at.desc(), Conversation.id.desc())
    )
    return db.scalars(stmt).all()


def get_conversation(db: Session, conversation_id: int) -> Conversation:
    """Return a conversation by id or raise ``NotFound``."""
    conversation = db.get(Conversation, conversation_id)
    if conversation is None:
        raise NotFound("Conversation not found")
    return conversation


def require_participant(conversation: Conversation, participant: str) -> None:
    """Raise ``Forbidden`` unless ``participant`` belongs to the conversation."""
    if not conversation.has_participant(participant):
        raise Forbidden("You are not a participant in this conversation")
