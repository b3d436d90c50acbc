"""Helpers that interpret remote responses for the orchestrators."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from azuredevops_plugin.errors import RemoteCallError, TransportError

from .client import RemoteClient, RemoteResponse

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

def checked_call(
    client: RemoteClient,
    method: str,
    url: str,
    auth_header: str,
    payload: dict[str, Any] | None = None,
    *,
    expected: int,
    action: str,
    stage: str | None = None,
) -> RemoteResponse:
    """Run one call and insist on ``expected``; anything else is terminal."""

    try:
        response = client.call_json(method, url, auth_header, payload)
    except TransportError as exc:
        raise RemoteCallError(f"failed to {action}: {exc.message}", stage=stage) from exc
    if response.status_code != expected:
        logger.info(
            "Azure DevOps returned status %s (expected %s) while trying to %s: %s",
            response.status_code,
            expected,
            action,
            response.text,
        )
        raise RemoteCallError(
            f"failed to {action}",
            remote_status=response.status_code,
            remote_body=response.body,
            stage=stage,
        )
    return response

def parse_model(
    model: type[ModelT], response: RemoteResponse, *, action: str, stage: str | None = None
) -> ModelT:
    """Validate a response body against ``model``."""

    try:
        return model.model_validate(response.json())
    except (ValueError, ValidationError) as exc:
        raise RemoteCallError(
            f"failed to parse response while trying to {action}: {exc}", stage=stage
        ) from exc


__all__ = ["checked_call", "parse_model"]
