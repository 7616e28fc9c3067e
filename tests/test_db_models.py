"""Unit tests for the ORM models defined in campus_board.models.

These tests verify mapping details the services rely on: table names, the
partial unique indexes that make get-or-create and interest expression
idempotent, and the check constraints guarding stored values.
"""

import pytest
from sqlalchemy import CheckConstraint
from sqlalchemy.exc import IntegrityError

from campus_board.db.time import utcnow
from campus_board.models import (
    Application,
    ApplicationStatus,
    Conversation,
    Message,
    Opportunity,
    UserProfile,
)


def _indexes(model):
    return {index.name: index for index in model.__table__.indexes}


def _check_names(model):
    return {
        constraint.name
        for constraint in model.__table__.constraints
        if isinstance(constraint, CheckConstraint)
    }


def test_table_names():
    """Model classes expose expected __tablename__ values."""
    assert UserProfile.__tablename__ == "user_profiles"
    assert Opportunity.__tablename__ == "opportunities"
    assert Conversation.__tablename__ == "conversations"
    assert Message.__tablename__ == "messages"
    assert Application.__tablename__ == "applications"


def test_conversation_uniqueness_indexes():
    indexes = _indexes(Conversation)

    no_context = indexes["uq_conversation_pair_no_context"]
    with_context = indexes["uq_conversation_pair_context"]
    assert no_context.unique and with_context.unique
    assert [c.name for c in no_context.columns] == ["participant_a", "participant_b"]
    assert [c.name for c in with_context.columns] == [
        "participant_a",
        "participant_b",
        "opportunity_id",
    ]
    assert "ck_conversation_pair_sorted" in _check_names(Conversation)


def test_pending_application_index():
    index = _indexes(Application)["uq_application_pending"]
    assert index.unique
    assert [c.name for c in index.columns] == ["user_id", "opportunity_id"]
    assert "ck_application_status" in _check_names(Application)


def test_conversation_helpers():
    conversation = Conversation(participant_a="alice", participant_b="bob")

    assert conversation.participants == ("alice", "bob")
    assert conversation.has_participant("bob")
    assert not conversation.has_participant("carol")
    assert conversation.other_participant("alice") == "bob"
    assert conversation.other_participant("bob") == "alice"


def test_application_status_terminal_flags():
    assert not ApplicationStatus.PENDING.is_terminal
    assert all(
        status.is_terminal
        for status in (
            ApplicationStatus.ACCEPTED,
            ApplicationStatus.REJECTED,
            ApplicationStatus.WITHDRAWN,
        )
    )


def test_unsorted_pair_rejected_by_database(db_session):
    now = utcnow()
    db_session.add(
        Conversation(participant_a="bob", participant_b="alice", last_message_at=now, created_at=now)
    )
    with pytest.raises(IntegrityError):
        db_session.flush()
    db_session.rollback()


def test_duplicate_context_free_pair_rejected_by_database(db_session):
    now = utcnow()
    db_session.add(
        Conversation(participant_a="alice", participant_b="bob", last_message_at=now, created_at=now)
    )
    db_session.commit()

    db_session.add(
        Conversation(participant_a="alice", participant_b="bob", last_message_at=now, created_at=now)
    )
    with pytest.raises(IntegrityError):
        db_session.flush()
    db_session.rollback()


def test_generated_opportunity_ids_avoid_fixed_ids(db_session, opportunity, make_opportunity):
    """Factory-made opportunities coexist with the fixed ``op1`` listing."""
    first = make_opportunity("alice")
    second = make_opportunity("alice")

    assert {first.id, second.id, opportunity.id} == {first.id, second.id, "op1"}
    assert len({first.id, second.id, opportunity.id}) == 3
