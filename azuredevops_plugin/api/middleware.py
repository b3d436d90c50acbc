"""Custom FastAPI middleware for the plugin API."""

from __future__ import annotations

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp


class AuditLoggerMiddleware(BaseHTTPMiddleware):
    """Emit one structured audit log record for each HTTP request."""

    def __init__(self, app: ASGIApp) -> None:
        super().__init__(app)
        self.logger = logging.getLogger("azuredevops_plugin.api.audit")

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        response: Response | None = None
        try:
            response = await call_next(request)
            return response
        finally:
            duration = time.perf_counter() - start
            self.logger.info(
                "api.request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status": response.status_code if response else None,
                    "duration_ms": round(duration * 1000, 3),
                    "api_version": request.query_params.get("api-version"),
                },
            )


__all__ = ["AuditLoggerMiddleware"]
