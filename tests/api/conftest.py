from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from azuredevops_plugin.api.context import AppContext
from azuredevops_plugin.api.main import create_app
from azuredevops_plugin.config import PluginSettings
from tests.fakes import AUTH_HEADER, FakeRemoteClient


@pytest.fixture()
def context(settings: PluginSettings, remote: FakeRemoteClient) -> AppContext:
    return AppContext.from_settings(settings, remote)


@pytest.fixture()
def app(context: AppContext):
    return create_app(context)


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def auth() -> dict[str, str]:
    return {"Authorization": AUTH_HEADER}
