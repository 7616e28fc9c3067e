"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from campus_board.core.security import InvalidTokenError, decode_subject
from campus_board.db.session import get_db
from campus_board.services.identity import ProfileDirectory

# Missing credentials are reported as 401 below rather than by the scheme.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_participant(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str:
    """Return the participant id of the authenticated caller.

    Args:
        credentials: HTTP Bearer token credentials, if any were sent

    Returns:
        Opaque participant id taken from the token subject

    Raises:
        HTTPException: 401 if no token was sent or it cannot be validated
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        return decode_subject(credentials.credentials)
    except InvalidTokenError as err:
        raise _unauthorized("Could not validate credentials") from err


def get_profile_directory(db: SessionDep) -> ProfileDirectory:
    """Return an identity reference bound to the request's session."""
    return ProfileDirectory(db)


# Type aliases for current participant and identity dependencies
CurrentParticipantDep = Annotated[str, Depends(get_current_participant)]
ProfileDirectoryDep = Annotated[ProfileDirectory, Depends(get_profile_directory)]
