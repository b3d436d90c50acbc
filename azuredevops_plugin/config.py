"""Runtime settings for the plugin server."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace

_DEFAULT_BASE_URL = "https://dev.azure.com"
_DEFAULT_STATUS_URL = (
    "https://status.dev.azure.com/_apis/status/health?api-version=7.1-preview.1"
)
_ENV_BASE_URL = "AZUREDEVOPS_BASE_URL"
_ENV_STATUS_URL = "AZUREDEVOPS_STATUS_URL"
_ENV_TIMEOUT = "AZUREDEVOPS_TIMEOUT"
_ENV_DELAY = "BRANCH_CHECK_DELAY"
_ENV_ATTEMPTS = "BRANCH_CHECK_ATTEMPTS"
_ENV_DEBUG = "DEBUG"
_ENV_NO_COLOR = "NO_COLOR"
_ENV_HOST = "HOST"
_ENV_PORT = "PORT"

_FALSE_VALUES = {"0", "false", "False", "no", "off"}


@dataclass(slots=True)
class PluginSettings:
    """Process-wide configuration, resolved once at startup."""

    base_url: str = _DEFAULT_BASE_URL
    status_url: str = _DEFAULT_STATUS_URL
    timeout: float = 30.0
    branch_check_delay: float = 1.0
    branch_check_attempts: int = 1
    debug: bool = True
    no_color: bool = False
    host: str = "0.0.0.0"
    port: int = 8080

    def merged(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        debug: bool | None = None,
        no_color: bool | None = None,
    ) -> PluginSettings:
        """Return a copy that applies CLI overrides."""

        return replace(
            self,
            host=host or self.host,
            port=self.port if port is None else port,
            debug=self.debug if debug is None else debug,
            no_color=self.no_color if no_color is None else no_color,
        )


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw not in _FALSE_VALUES


def load_settings() -> PluginSettings:
    """Build settings from environment variables."""

    return PluginSettings(
        base_url=os.environ.get(_ENV_BASE_URL, _DEFAULT_BASE_URL).rstrip("/"),
        status_url=os.environ.get(_ENV_STATUS_URL, _DEFAULT_STATUS_URL),
        timeout=float(os.environ.get(_ENV_TIMEOUT, "30")),
        branch_check_delay=float(os.environ.get(_ENV_DELAY, "1.0")),
        branch_check_attempts=max(1, int(os.environ.get(_ENV_ATTEMPTS, "1"))),
        debug=_env_bool(_ENV_DEBUG, True),
        no_color=_env_bool(_ENV_NO_COLOR, False),
        host=os.environ.get(_ENV_HOST, "0.0.0.0"),
        port=int(os.environ.get(_ENV_PORT, "8080")),
    )


def configure_logging(debug: bool) -> None:
    """Install the root handler; DEBUG when verbose output is requested."""

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        force=True,
    )


__all__ = ["PluginSettings", "configure_logging", "load_settings"]
