# src/campus_board/models/message.py
"""Messages appended to a conversation."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_board.db.session import Base
from campus_board.db.time import utcnow


class Message(Base):
    """Plain-text message owned by exactly one conversation.

    Ordering within a conversation is ``(created_at, id)``; rows are never
    reordered or edited after insert, except for the recipient's ``read`` flag.
    """

    __tablename__ = "messages"
    __table_args__ = (
        CheckConstraint("length(content) >= 1", name="ck_message_content_not_empty"),
        Index("ix_message_conversation_order", "conversation_id", "created_at", "id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    conversation_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("conversations.id", ondelete="CASCADE"),
        nullable=False,
    )
    sender_id: Mapped[str] = mapped_column(String(64), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
