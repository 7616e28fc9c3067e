# src/campus_board/models/conversation.py
"""Two-party conversations, optionally scoped to an opportunity."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from campus_board.db.session import Base
from campus_board.db.time import utcnow


class Conversation(Base):
    """Thread between exactly two participants.

    The pair is stored sorted (``participant_a < participant_b``) so each
    unordered pair has a single spelling. Uniqueness per pair and context is
    enforced by two partial indexes because NULL contexts never collide in a
    plain unique constraint.
    """

    __tablename__ = "conversations"
    __table_args__ = (
        CheckConstraint("participant_a < participant_b", name="ck_conversation_pair_sorted"),
        Index(
            "uq_conversation_pair_no_context",
            "participant_a",
            "participant_b",
            unique=True,
            sqlite_where=text("opportunity_id IS NULL"),
            postgresql_where=text("opportunity_id IS NULL"),
        ),
        Index(
            "uq_conversation_pair_context",
            "participant_a",
            "participant_b",
            "opportunity_id",
            unique=True,
            sqlite_where=text("opportunity_id IS NOT NULL"),
            postgresql_where=text("opportunity_id IS NOT NULL"),
        ),
        Index("ix_conversation_participant_b", "participant_b"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    participant_a: Mapped[str] = mapped_column(String(64), nullable=False)
    participant_b: Mapped[str] = mapped_column(String(64), nullable=False)
    opportunity_id: Mapped[str | None] = mapped_column(
        String(64),
        ForeignKey("opportunities.id"),
        nullable=True,
    )
    # Bumped on every append; never moves backwards.
    last_message_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    @property
    def participants(self) -> tuple[str, str]:
        """Return both participant ids in canonical order."""
        return (self.participant_a, self.participant_b)

    def has_participant(self, participant_id: str) -> bool:
        """Return True when ``participant_id`` is party to this conversation."""
        return participant_id in (self.participant_a, self.participant_b)

    def other_participant(self, participant_id: str) -> str:
        """Return the participant that is not ``participant_id``."""
        if participant_id == self.participant_a:
            return self.participant_b
        return self.participant_a
