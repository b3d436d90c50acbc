"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from azuredevops_plugin.config import PluginSettings
from azuredevops_plugin.git import PullRequestReconciler, RepositoryProvisioner
from tests.fakes import BASE_URL, FakeRemoteClient


@pytest.fixture()
def remote() -> FakeRemoteClient:
    return FakeRemoteClient()


@pytest.fixture()
def settings() -> PluginSettings:
    return PluginSettings(
        base_url=BASE_URL, status_url=f"{BASE_URL}/health", branch_check_delay=0.0
    )


@pytest.fixture()
def sleeps() -> list[float]:
    return []


@pytest.fixture()
def provisioner(remote: FakeRemoteClient, sleeps: list[float]) -> RepositoryProvisioner:
    return RepositoryProvisioner(
        remote, base_url=BASE_URL, branch_check_delay=1.0, sleep=sleeps.append
    )


@pytest.fixture()
def reconciler(remote: FakeRemoteClient) -> PullRequestReconciler:
    return PullRequestReconciler(remote, base_url=BASE_URL)
