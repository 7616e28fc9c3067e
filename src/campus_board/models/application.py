# src/campus_board/models/application.py
"""Interest expressions (applications) against opportunities."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from campus_board.db.session import Base
from campus_board.db.time import utcnow


class ApplicationStatus(str, enum.Enum):
    """Lifecycle states; everything except ``pending`` is terminal."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"

    @property
    def is_terminal(self) -> bool:
        return self is not ApplicationStatus.PENDING


class Application(Base):
    """A user's recorded interest in an opportunity.

    At most one ``pending`` row may exist per (user, opportunity); terminal
    rows are kept as history and do not block a fresh application.
    """

    __tablename__ = "applications"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected', 'withdrawn')",
            name="ck_application_status",
        ),
        Index(
            "uq_application_pending",
            "user_id",
            "opportunity_id",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
        Index("ix_application_opportunity", "opportunity_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    opportunity_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("opportunities.id", ondelete="CASCADE"),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=ApplicationStatus.PENDING.value,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
