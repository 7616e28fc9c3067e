# src/campus_board/api/v1/endpoints/applications.py
"""Application listing and status endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from campus_board.models import Application
from campus_board.schemas.application import ApplicationResponse, ApplicationStatusUpdate
from campus_board.services import interest as interest_service

from ..dependencies import CurrentParticipantDep, SessionDep

router = APIRouter(prefix="/applications", tags=["applications"])


@router.get("/", response_model=list[ApplicationResponse])
async def list_my_applications(
    current_participant: CurrentParticipantDep,
    db: SessionDep,
) -> list[Application]:
    """List the caller's applications, newest first."""
    return list(interest_service.list_applications_for_user(db, current_participant))


@router.put("/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: int,
    payload: ApplicationStatusUpdate,
    current_participant: CurrentParticipantDep,
    db: SessionDep,
) -> Application:
    """Accept, reject or withdraw a pending application."""
    return interest_service.transition_application(
        db,
        application_id,
        payload.status,
        actor=current_participant,
    )
