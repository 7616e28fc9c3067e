# src/campus_board/api/v1/endpoints/messages.py
"""Message endpoints for the Campus Board API."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from campus_board.core.settings import settings
from campus_board.models import Message
from campus_board.schemas.message import MessageCreate, MessageResponse
from campus_board.services import conversations as conversation_service
from campus_board.services import messages as message_service

from ..dependencies import CurrentParticipantDep, SessionDep

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("/", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    message_data: MessageCreate,
    current_participant: CurrentParticipantDep,
    db: SessionDep,
) -> Message:
    """Append a message to a conversation the caller belongs to."""
    return message_service.append_message(
        db,
        message_data.conversation_id,
        current_participant,
        message_data.content,
    )


@router.get("/", response_model=list[MessageResponse])
async def list_messages(
    current_participant: CurrentParticipantDep,
    db: SessionDep,
    conversation_id: int = Query(..., description="Conversation to read"),
    after_id: int | None = Query(None, description="Only return messages after this one"),
    limit: int | None = Query(None, ge=1, le=settings.message_page_max),
) -> list[Message]:
    """Return a conversation's messages, oldest first."""
    conversation = conversation_service.get_conversation(db, conversation_id)
    conversation_service.require_participant(conversation, current_participant)
    return list(
        message_service.list_messages(
            db,
            conversation.id,
            after_id=after_id,
            limit=limit,
        )
    )


@router.put("/{message_id}/read")
async def mark_message_read(
    message_id: int,
    current_participant: CurrentParticipantDep,
    db: SessionDep,
) -> dict[str, str]:
    """Mark a message as read on behalf of its recipient."""
    message_service.mark_message_read(db, message_id, current_participant)
    return {"status": "marked_as_read"}
