from __future__ import annotations

import pytest

from azuredevops_plugin.config import PluginSettings, load_settings


def test_load_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "AZUREDEVOPS_BASE_URL",
        "AZUREDEVOPS_TIMEOUT",
        "BRANCH_CHECK_DELAY",
        "BRANCH_CHECK_ATTEMPTS",
        "DEBUG",
        "PORT",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.base_url == "https://dev.azure.com"
    assert settings.branch_check_delay == 1.0
    assert settings.branch_check_attempts == 1
    assert settings.debug is True
    assert settings.port == 8080


def test_load_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AZUREDEVOPS_BASE_URL", "https://ado.internal/tfs/")
    monkeypatch.setenv("BRANCH_CHECK_ATTEMPTS", "0")
    monkeypatch.setenv("BRANCH_CHECK_DELAY", "0.25")
    monkeypatch.setenv("DEBUG", "false")

    settings = load_settings()

    assert settings.base_url == "https://ado.internal/tfs"
    assert settings.branch_check_attempts == 1
    assert settings.branch_check_delay == 0.25
    assert settings.debug is False


def test_merged_keeps_unset_values() -> None:
    settings = PluginSettings(port=9000, no_color=True)

    merged = settings.merged(host="127.0.0.1", debug=False)

    assert merged.host == "127.0.0.1"
    assert merged.port == 9000
    assert merged.debug is False
    assert merged.no_color is True
    assert settings.host == "0.0.0.0"
