# mypy: ignore-errors
# tests/v1/test_dependencies.py
"""Tests for shared API dependencies and token helpers."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from campus_board.api.v1.dependencies import get_current_participant, get_profile_directory
from campus_board.core.security import InvalidTokenError, create_access_token, decode_subject
from campus_board.core.settings import settings
from campus_board.services.identity import ProfileDirectory


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def test_current_participant_from_token() -> None:
    token = create_access_token("alice")
    assert get_current_participant(_credentials(token)) == "alice"


def test_current_participant_without_credentials() -> None:
    with pytest.raises(HTTPException) as exc_info:
        get_current_participant(None)

    assert exc_info.value.status_code == 401
    assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}


def test_current_participant_with_garbage_token() -> None:
    with pytest.raises(HTTPException) as exc_info:
        get_current_participant(_credentials("garbage"))

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Could not validate credentials"


def test_decode_subject_rejects_wrong_signature() -> None:
    token = jwt.encode({"sub": "alice"}, "some-other-secret", algorithm=settings.jwt_algorithm)
    with pytest.raises(InvalidTokenError):
        decode_subject(token)


def test_decode_subject_rejects_expired_token() -> None:
    expired = datetime.now(UTC) - timedelta(minutes=5)
    token = jwt.encode(
        {"sub": "alice", "exp": expired},
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    with pytest.raises(InvalidTokenError):
        decode_subject(token)


def test_decode_subject_requires_subject() -> None:
    token = jwt.encode({"role": "student"}, settings.secret_key, algorithm=settings.jwt_algorithm)
    with pytest.raises(InvalidTokenError):
        decode_subject(token)


def test_profile_directory_dependency(db_session) -> None:
    directory = get_profile_directory(db_session)
    assert isinstance(directory, ProfileDirectory)
    assert directory.get_display_info("nobody").name is None
