from __future__ import annotations

from typing import Any

import pytest
from fastapi import FastAPI
from typer.testing import CliRunner

from azuredevops_plugin import cli

runner = CliRunner()


@pytest.fixture()
def served(monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
    captured: dict[str, Any] = {}

    def fake_run(app: FastAPI, **kwargs: Any) -> None:
        captured["app"] = app
        captured.update(kwargs)

    monkeypatch.setattr(cli.uvicorn, "run", fake_run)
    monkeypatch.setattr(cli, "configure_logging", lambda debug: captured.setdefault("debug", debug))
    for name in ("HOST", "PORT", "DEBUG", "NO_COLOR"):
        monkeypatch.delenv(name, raising=False)
    return captured


def test_serve_defaults(served: dict[str, Any]) -> None:
    result = runner.invoke(cli.app, ["serve"])

    assert result.exit_code == 0, result.output
    assert isinstance(served["app"], FastAPI)
    assert served["host"] == "0.0.0.0"
    assert served["port"] == 8080
    assert served["debug"] is True
    assert served["log_level"] == "debug"
    assert served["use_colors"] is True


def test_serve_flags_override_environment(
    served: dict[str, Any], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("PORT", "9000")

    result = runner.invoke(
        cli.app, ["serve", "--host", "127.0.0.1", "--no-debug", "--no-color"]
    )

    assert result.exit_code == 0, result.output
    assert served["host"] == "127.0.0.1"
    assert served["port"] == 9000
    assert served["debug"] is False
    assert served["log_level"] == "info"
    assert served["use_colors"] is False


def test_no_color_environment(served: dict[str, Any], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")

    result = runner.invoke(cli.app, ["serve"])

    assert result.exit_code == 0, result.output
    assert served["use_colors"] is False
