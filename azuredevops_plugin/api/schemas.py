"""Pydantic schemas owned by the HTTP layer."""

from __future__ import annotations

from pydantic import BaseModel


class APIMessage(BaseModel):
    """Simple message envelope."""

    message: str


class ErrorResponse(BaseModel):
    detail: str
    stage: str | None = None


__all__ = ["APIMessage", "ErrorResponse"]
