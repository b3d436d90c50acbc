"""Application context helpers shared across routers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import cast

from fastapi import Request

from azuredevops_plugin.config import PluginSettings
from azuredevops_plugin.git import PullRequestReconciler, RepositoryProvisioner
from azuredevops_plugin.remote import RemoteClient


@dataclass(slots=True)
class HealthState:
    """Process liveness/readiness flags; only the probes and lifespan use them."""

    alive: bool = False
    ready: bool = False


@dataclass(slots=True)
class AppContext:
    """Container for shared application dependencies."""

    settings: PluginSettings
    remote_client: RemoteClient
    provisioner: RepositoryProvisioner
    reconciler: PullRequestReconciler
    health: HealthState = field(default_factory=HealthState)

    @classmethod
    def from_settings(
        cls, settings: PluginSettings, remote_client: RemoteClient | None = None
    ) -> AppContext:
        client = remote_client or RemoteClient(timeout=settings.timeout)
        return cls(
            settings=settings,
            remote_client=client,
            provisioner=RepositoryProvisioner(
                client,
                base_url=settings.base_url,
                branch_check_delay=settings.branch_check_delay,
                branch_check_attempts=settings.branch_check_attempts,
            ),
            reconciler=PullRequestReconciler(client, base_url=settings.base_url),
        )


def get_app_context(request: Request) -> AppContext:
    """Return the configured :class:`AppContext`."""

    context = getattr(request.app.state, "context", None)
    if context is None:  # pragma: no cover
        raise RuntimeError("Application context missing")
    return cast(AppContext, context)


__all__ = ["AppContext", "HealthState", "get_app_context"]
