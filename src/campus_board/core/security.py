"""Bearer token helpers for participant identity.

Tokens are issued by the identity provider; this service only needs to read
the subject claim. ``create_access_token`` exists for tooling and tests that
have to mint a token signed with the shared secret.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from campus_board.core.settings import settings


class InvalidTokenError(ValueError):
    """Raised when a bearer token cannot be decoded into a participant id."""


def create_access_token(subject: str, extra_claims: dict[str, str] | None = None) -> str:
    """Create a JWT access token whose subject is the participant id."""
    to_encode: dict[str, object] = {"sub": subject}
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_subject(token: str) -> str:
    """Return the participant id carried in ``token``.

    Raises:
        InvalidTokenError: If the signature, expiry or subject claim is invalid.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise InvalidTokenError("Could not validate credentials") from err

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject.strip():
        raise InvalidTokenError("Could not validate credentials")
    return subject
