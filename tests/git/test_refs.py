from __future__ import annotations

import pytest

from azuredevops_plugin.git.refs import (
    EMPTY_OBJECT_ID,
    branch_filter,
    full_branch_ref,
    is_branch_ref,
    short_branch_name,
)
from azuredevops_plugin.remote import GitEndpoints


@pytest.mark.parametrize("branch", ["feature/x", "refs/heads/feature/x"])
def test_prefix_normalization_is_stable(branch: str) -> None:
    assert short_branch_name(branch) == "feature/x"
    assert full_branch_ref(branch) == "refs/heads/feature/x"
    assert branch_filter(branch) == "heads/feature/x"


def test_is_branch_ref() -> None:
    assert is_branch_ref("refs/heads/main")
    assert not is_branch_ref("refs/heads/")
    assert not is_branch_ref("refs/tags/v1")
    assert not is_branch_ref("main")


def test_sentinel_is_forty_zeros() -> None:
    assert EMPTY_OBJECT_ID == "0000000000000000000000000000000000000000"


def test_endpoints_thread_api_version() -> None:
    endpoints = GitEndpoints("https://dev.azure.com/", "my org", "proj", "7.1")

    assert endpoints.repository("abc") == (
        "https://dev.azure.com/my%20org/proj/_apis/git/repositories/abc?api-version=7.1"
    )
    assert endpoints.refs("abc", filter_value="heads/feature/x").endswith(
        "/repositories/abc/refs?api-version=7.1&filter=heads/feature/x"
    )
    assert endpoints.repositories().endswith("/_apis/git/repositories?api-version=7.1")
    assert endpoints.pull_requests("abc", {"title": "fix bug"}).endswith(
        "/pullrequests?api-version=7.1&searchCriteria.title=fix+bug"
    )
