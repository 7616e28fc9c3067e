# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from campus_board.core.security import create_access_token
from campus_board.db.session import Base
from campus_board.db.session import get_db as app_get_session
from campus_board.main import app as fastapi_app
from campus_board.models import Conversation, Opportunity, UserProfile
from campus_board.services.conversations import get_or_create_conversation

TEST_DB_URL = "sqlite://"

_OPPORTUNITY_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def auth_headers(participant_id: str) -> dict[str, str]:
    """Return bearer headers for ``participant_id``."""
    token = create_access_token(participant_id)
    return {"Authorization": f"Bearer {token}"}


def _add_profile(db: Session, user_id: str, full_name: str) -> UserProfile:
    profile = UserProfile(
        user_id=user_id,
        full_name=full_name,
        avatar_url=f"https://cdn.example.test/avatars/{user_id}.png",
    )
    db.add(profile)
    db.commit()
    return profile


@pytest.fixture()
def alice(db_session: Session) -> str:
    """Create a profile for alice and return their participant id."""
    return _add_profile(db_session, "alice", "Alice Adams").user_id


@pytest.fixture()
def bob(db_session: Session) -> str:
    """Create a profile for bob and return their participant id."""
    return _add_profile(db_session, "bob", "Bob Brown").user_id


@pytest.fixture()
def carol(db_session: Session) -> str:
    """Create a profile for carol and return their participant id."""
    return _add_profile(db_session, "carol", "Carol Chen").user_id


@pytest.fixture()
def alice_headers(alice: str) -> dict[str, str]:
    return auth_headers(alice)


@pytest.fixture()
def bob_headers(bob: str) -> dict[str, str]:
    return auth_headers(bob)


@pytest.fixture()
def carol_headers(carol: str) -> dict[str, str]:
    return auth_headers(carol)


@pytest.fixture()
def make_opportunity(db_session: Session):
    """Factory creating an opportunity owned by the given participant."""

    def _make(owner_id: str, opportunity_id: str | None = None) -> Opportunity:
        opportunity = Opportunity(
            id=opportunity_id or f"opp-{next(_OPPORTUNITY_COUNTER)}",
            owner_id=owner_id,
            title="Research assistant",
            category="job",
        )
        db_session.add(opportunity)
        db_session.commit()
        return opportunity

    return _make


@pytest.fixture()
def opportunity(make_opportunity, bob: str) -> Opportunity:
    """An opportunity posted by bob."""
    return make_opportunity(bob, "op1")


@pytest.fixture()
def conversation(db_session: Session, alice: str, bob: str) -> Conversation:
    """A context-free conversation between alice and bob."""
    return get_or_create_conversation(db_session, alice, bob).conversation
