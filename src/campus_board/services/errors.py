"""Error taxonomy shared by the service layer.

Each error carries the HTTP status the API layer should answer with and a
short machine-readable ``code``. Services raise these; ``campus_board.main``
translates them into responses.
"""

from __future__ import annotations

from fastapi import status


class ServiceError(Exception):
    """Base class for errors raised by domain services."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "service_error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.__class__.__doc__ or self.code
        super().__init__(self.detail)


class InvalidInput(ServiceError):
    """Malformed or out-of-range input."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_input"


class InvalidParticipants(InvalidInput):
    """A conversation needs two distinct participants."""

    code = "invalid_participants"


class InvalidContent(InvalidInput):
    """Message content is empty or too long."""

    code = "invalid_content"


class Unauthenticated(ServiceError):
    """No valid caller identity."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"


class Forbidden(ServiceError):
    """Caller is not entitled to perform this action."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"


class SelfApplication(Forbidden):
    """You cannot express interest in your own opportunity."""

    code = "self_application"


class NotFound(ServiceError):
    """Referenced resource does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class Conflict(ServiceError):
    """Request conflicts with the current state of the resource."""

    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


class DuplicateInterest(Conflict):
    """You already expressed interest in this opportunity."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "duplicate_interest"


class InvalidTransition(Conflict):
    """Application status cannot change from its current state."""

    code = "invalid_transition"


class Unavailable(ServiceError):
    """Storage layer failure."""

    code = "unavailable"


__all__ = [
    "Conflict",
    "DuplicateInterest",
    "Forbidden",
    "InvalidContent",
    "InvalidInput",
    "InvalidParticipants",
    "InvalidTransition",
    "NotFound",
    "SelfApplication",
    "ServiceError",
    "Unauthenticated",
    "Unavailable",
]
