"""Basic-auth checks for credentials that are forwarded to Azure DevOps."""

from __future__ import annotations

from fastapi import HTTPException, Request, status
from fastapi.security import HTTPBasic


class ForwardedBasicAuth:
    """FastAPI dependency returning the caller's Authorization header verbatim.

    The plugin never inspects the credential beyond checking that it is a
    well-formed Basic header with both a user name and a password.
    """

    def __init__(self) -> None:
        self.scheme = HTTPBasic(auto_error=False)

    async def __call__(self, request: Request) -> str:
        try:
            credentials = await self.scheme(request)
        except HTTPException:
            credentials = None
        if credentials is None or not credentials.username or not credentials.password:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Request rejected due to missing or invalid Basic authentication",
            )
        return request.headers["authorization"]


__all__ = ["ForwardedBasicAuth"]
