# src/campus_board/models/opportunity.py
"""Opportunity listings as seen by the messaging core."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_board.db.session import Base
from campus_board.db.time import utcnow


def _new_opportunity_id() -> str:
    return str(uuid.uuid4())


class Opportunity(Base):
    """Listing record owned by the opportunity store.

    Listing CRUD lives elsewhere; this core only checks existence and
    ownership when scoping conversations and guarding applications.
    """

    __tablename__ = "opportunities"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_opportunity_id)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str | None] = mapped_column(String(64), nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="open")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
