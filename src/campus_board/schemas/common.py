"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, PlainSerializer

from campus_board.db.time import as_utc

# SQLite returns naive datetimes; every stored timestamp is UTC.
UTCDateTime = Annotated[
    datetime,
    PlainSerializer(lambda value: as_utc(value).isoformat(), return_type=str, when_used="json"),
]


class ErrorResponse(BaseModel):
    """Body returned for service errors."""

    detail: str
    code: str
