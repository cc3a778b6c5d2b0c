"""Error envelope schemas shared across API handlers."""

from __future__ import annotations

from pydantic import BaseModel


class ValidationFailure(BaseModel):
    """Single field-level validation failure."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Top-level API error response envelope.

    Validation rejections carry ``errors``; every other failure carries
    ``message``.
    """

    success: bool = False
    error: str
    message: str | None = None
    errors: list[ValidationFailure] | None = None
