# src/campus_board/api/v1/endpoints/conversations.py
"""Conversation and inbox endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from campus_board.schemas.conversation import (
    ConversationCreate,
    ConversationResponse,
    InboxEntryResponse,
    MarkedReadResponse,
    ParticipantResponse,
    UnreadCountResponse,
)
from campus_board.schemas.message import MessageResponse
from campus_board.services import conversations as conversation_service
from campus_board.services import inbox as inbox_service
from campus_board.services import messages as message_service
from campus_board.services.inbox import InboxEntry

from ..dependencies import CurrentParticipantDep, ProfileDirectoryDep, SessionDep

router = APIRouter(prefix="/conversations", tags=["conversations"])


def _serialize_entry(entry: InboxEntry) -> InboxEntryResponse:
    other = entry.other_participant
    return InboxEntryResponse(
        conversation=ConversationResponse.model_validate(entry.conversation),
        other_participant=ParticipantResponse(
            id=other.participant_id,
            name=other.name,
            avatar_url=other.avatar_url,
        ),
        preview=MessageResponse.model_validate(entry.preview) if entry.preview else None,
        unread=entry.unread,
    )


@router.post("/", response_model=ConversationResponse, status_code=status.HTTP_201_CREATED)
async def start_conversation(
    payload: ConversationCreate,
    response: Response,
    current_participant: CurrentParticipantDep,
    db: SessionDep,
) -> ConversationResponse:
    """Get or create the conversation with another participant.

    Answers 201 when a conversation was created and 200 when an existing one
    was found; the body has the same shape either way.
    """
    if payload.message is not None:
        message_service.validate_content(payload.message)

    result = conversation_service.get_or_create_conversation(
        db,
        current_participant,
        payload.participant_id,
        payload.opportunity_id,
    )
    if not result.created:
        response.status_code = status.HTTP_200_OK

    if payload.message is not None:
        message_service.append_message(
            db,
            result.conversation.id,
            current_participant,
            payload.message,
        )
        db.refresh(result.conversation)

    return ConversationResponse.model_validate(result.conversation)


@router.get("/", response_model=list[InboxEntryResponse])
async def list_inbox(
    current_participant: CurrentParticipantDep,
    db: SessionDep,
    identity: ProfileDirectoryDep,
) -> list[InboxEntryResponse]:
    """List the caller's conversations, most recently active first."""
    entries = inbox_service.project_inbox(db, current_participant, identity)
    return [_serialize_entry(entry) for entry in entries]


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    current_participant: CurrentParticipantDep,
    db: SessionDep,
    identity: ProfileDirectoryDep,
) -> UnreadCountResponse:
    """Count conversations whose latest message the caller has not read."""
    return UnreadCountResponse(
        unread=inbox_service.unread_count(db, current_participant, identity)
    )


@router.put("/{conversation_id}/read", response_model=MarkedReadResponse)
async def mark_conversation_read(
    conversation_id: int,
    current_participant: CurrentParticipantDep,
    db: SessionDep,
) -> MarkedReadResponse:
    """Mark every message the other participant sent as read."""
    marked = message_service.mark_conversation_read(db, conversation_id, current_participant)
    return MarkedReadResponse(marked=marked)
