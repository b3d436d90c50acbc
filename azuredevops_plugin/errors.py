"""Error taxonomy shared by the orchestrators and the HTTP layer."""

from __future__ import annotations

from fastapi import status


class PluginError(RuntimeError):
    """Base error carrying the HTTP status the façade should answer with."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage


class RequestValidationError(PluginError):
    """Raised before any remote call when the inbound request is unusable."""

    status_code = status.HTTP_400_BAD_REQUEST


class PreconditionFailedError(PluginError):
    """Raised when a read-only check against the backend does not hold."""

    status_code = status.HTTP_400_BAD_REQUEST


class MissingCredentialsError(PluginError):
    """Raised locally when a remote call is attempted without credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class TransportError(PluginError):
    """The remote call never produced an HTTP response."""


class RemoteCallError(PluginError):
    """A remote call failed or answered with an unexpected status."""

    def __init__(
        self,
        message: str,
        *,
        remote_status: int | None = None,
        remote_body: bytes | None = None,
        stage: str | None = None,
    ) -> None:
        detail = message
        if remote_status is not None:
            text = (remote_body or b"").decode("utf-8", errors="replace")
            detail = f"{message}: Azure DevOps returned status {remote_status}: {text}"
        super().__init__(detail, stage=stage)
        self.remote_status = remote_status
        self.remote_body = remote_body


__all__ = [
    "MissingCredentialsError",
    "PluginError",
    "PreconditionFailedError",
    "RemoteCallError",
    "RequestValidationError",
    "TransportError",
]
