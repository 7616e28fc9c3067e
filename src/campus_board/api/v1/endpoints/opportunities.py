# src/campus_board/api/v1/endpoints/opportunities.py
"""Interest-expression endpoints scoped to an opportunity."""

from __future__ import annotations

from fastapi import APIRouter, status

from campus_board.models import Application
from campus_board.schemas.application import ApplicationResponse
from campus_board.services import interest as interest_service

from ..dependencies import CurrentParticipantDep, SessionDep

router = APIRouter(prefix="/opportunities", tags=["opportunities"])


@router.post(
    "/{opportunity_id}/interest",
    response_model=ApplicationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def express_interest(
    opportunity_id: str,
    current_participant: CurrentParticipantDep,
    db: SessionDep,
) -> Application:
    """Record the caller's interest in an opportunity."""
    return interest_service.express_interest(db, current_participant, opportunity_id)


@router.get("/{opportunity_id}/applications", response_model=list[ApplicationResponse])
async def list_opportunity_applications(
    opportunity_id: str,
    current_participant: CurrentParticipantDep,
    db: SessionDep,
) -> list[Application]:
    """List applications on an opportunity the caller owns."""
    return list(
        interest_service.list_applications_for_opportunity(
            db,
            opportunity_id,
            owner=current_participant,
        )
    )
