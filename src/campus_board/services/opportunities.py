"""Opportunity store collaborator: existence and ownership lookups."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from campus_board.models import Opportunity

from .errors import NotFound

__all__ = ["exists", "get_owner"]


def exists(db: Session, opportunity_id: str) -> bool:
    """Return True when the opportunity is present."""
    return db.scalar(select(Opportunity.id).where(Opportunity.id == opportunity_id)) is not None


def get_owner(db: Session, opportunity_id: str) -> str:
    """Return the owner's participant id, raising ``NotFound`` when absent."""
    owner_id = db.scalar(select(Opportunity.owner_id).where(Opportunity.id == opportunity_id))
    if owner_id is None:
        raise NotFound("Opportunity not found")
    return owner_id

