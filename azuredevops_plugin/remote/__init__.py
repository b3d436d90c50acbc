"""Remote call primitive and endpoint builders for Azure DevOps."""

from .client import RemoteClient, RemoteResponse
from .endpoints import GitEndpoints
from .responses import checked_call, parse_model

__all__ = ["GitEndpoints", "RemoteClient", "RemoteResponse", "checked_call", "parse_model"]
