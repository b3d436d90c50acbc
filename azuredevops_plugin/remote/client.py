"""HTTP client powered by urllib for the Azure DevOps REST API."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from http.client import HTTPException, HTTPResponse
from typing import Any, cast
from urllib import error, request

from azuredevops_plugin import __version__
from azuredevops_plugin.errors import MissingCredentialsError, TransportError

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class RemoteResponse:
    """Status code and raw payload of a completed remote call."""

    status_code: int
    body: bytes

    def json(self) -> Any:
        if not self.body:
            return {}
        return json.loads(self.body.decode("utf-8"))

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class RemoteClient:
    """Thin synchronous call primitive; holds no orchestration logic."""

    def __init__(self, *, timeout: float = 30.0) -> None:
        self._timeout = timeout

    def close(self) -> None:  # pragma: no cover - kept for API symmetry
        return None

    def call(
        self,
        method: str,
        url: str,
        auth_header: str | None,
        body: bytes | None = None,
    ) -> RemoteResponse:
        """Issue one request, forwarding ``auth_header`` verbatim.

        Backend error statuses come back as a :class:`RemoteResponse`; only
        failures that never produced a response raise :class:`TransportError`.
        """

        if not auth_header:
            logger.debug("No Authorization header provided, refusing %s %s", method, url)
            raise MissingCredentialsError(
                "no Authorization header provided, Basic authentication required"
            )
        headers = {
            "User-Agent": f"azuredevops-plugin/{__version__}",
            "Accept": "application/json",
            "Authorization": auth_header,
        }
        if body:
            headers["Content-Type"] = "application/json"
        req = request.Request(url, data=body or None, headers=headers, method=method)
        return self._send(req)

    def call_json(
        self,
        method: str,
        url: str,
        auth_header: str | None,
        payload: dict[str, Any] | None = None,
    ) -> RemoteResponse:
        body = None
        if payload is not None:
            body = json.dumps(payload).encode()
            logger.debug("%s %s body=%s", method, url, body.decode())
        return self.call(method, url, auth_header, body)

    def probe(self, url: str) -> RemoteResponse:
        """Unauthenticated GET used by the readiness check."""

        req = request.Request(url, headers={"Accept": "application/json"}, method="GET")
        return self._send(req)

    def _send(self, req: request.Request) -> RemoteResponse:
        try:
            with cast(HTTPResponse, request.urlopen(req, timeout=self._timeout)) as resp:
                return RemoteResponse(status_code=resp.status, body=resp.read())
        except error.HTTPError as exc:
            payload = exc.read() or b""
            return RemoteResponse(status_code=exc.code, body=payload)
        except (error.URLError, HTTPException, TimeoutError, OSError) as exc:
            raise TransportError(f"failed to execute request: {exc}") from exc


__all__ = ["RemoteClient", "RemoteResponse"]
