# ruff: noqa: B008
"""FastAPI application entry point."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError as FastAPIValidationError
from fastapi.responses import JSONResponse

from azuredevops_plugin.api.context import AppContext, get_app_context
from azuredevops_plugin.api.middleware import AuditLoggerMiddleware
from azuredevops_plugin.api.routers import gitrepository, pullrequest
from azuredevops_plugin.api.schemas import APIMessage
from azuredevops_plugin.config import load_settings
from azuredevops_plugin.errors import PluginError, TransportError
from azuredevops_plugin.version import __version__

logger = logging.getLogger(__name__)


def create_app(context: AppContext | None = None) -> FastAPI:
    """Instantiate the FastAPI application with all routers."""

    if context is None:
        context = AppContext.from_settings(load_settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        context.health.alive = True
        context.health.ready = True
        logger.info("server is ready to handle requests")
        try:
            yield
        finally:
            context.health.ready = False
            context.remote_client.close()
            context.health.alive = False
            logger.info("server gracefully stopped")

    app = FastAPI(
        title="Azure DevOps Plugin API",
        description="Consistent REST wrapper around Azure DevOps Git repositories "
        "and pull requests for declarative controllers.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.context = context
    app.add_middleware(AuditLoggerMiddleware)

    app.include_router(gitrepository.router)
    app.include_router(pullrequest.router)

    @app.exception_handler(PluginError)
    async def plugin_error_handler(_: Request, exc: PluginError) -> JSONResponse:
        logger.info("request failed at stage %s: %s", exc.stage, exc.message)
        content: dict[str, str] = {"detail": exc.message}
        if exc.stage:
            content["stage"] = exc.stage
        return JSONResponse(content, status_code=exc.status_code)

    @app.exception_handler(FastAPIValidationError)
    async def validation_error_handler(_: Request, exc: FastAPIValidationError) -> JSONResponse:
        errors = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        return JSONResponse(
            {"detail": f"Invalid request: {errors}"}, status_code=status.HTTP_400_BAD_REQUEST
        )

    @app.get("/healthz", response_model=APIMessage, tags=["system"])
    def healthz(context: AppContext = Depends(get_app_context)) -> JSONResponse:
        if context.health.alive:
            return JSONResponse({"message": "ok"})
        return JSONResponse(
            {"message": "Service Unavailable"}, status_code=status.HTTP_503_SERVICE_UNAVAILABLE
        )

    @app.get("/readyz", response_model=APIMessage, tags=["system"])
    def readyz(context: AppContext = Depends(get_app_context)) -> JSONResponse:
        unavailable = status.HTTP_503_SERVICE_UNAVAILABLE
        if not context.health.ready:
            return JSONResponse({"message": "Service Not Ready"}, status_code=unavailable)
        try:
            response = context.remote_client.probe(context.settings.status_url)
        except TransportError as exc:
            logger.debug("failed to reach Azure DevOps for readiness check: %s", exc.message)
            return JSONResponse({"message": "AzureDevOps API Unreachable"}, status_code=unavailable)
        # Any answer below 500 means the API is up.
        if response.status_code < status.HTTP_500_INTERNAL_SERVER_ERROR:
            return JSONResponse({"message": "ready"})
        logger.debug("Azure DevOps readiness check returned status %s", response.status_code)
        return JSONResponse({"message": "AzureDevOps API Error"}, status_code=unavailable)

    return app


__all__ = ["create_app"]
