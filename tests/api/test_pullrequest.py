from __future__ import annotations

from fastapi.testclient import TestClient

from tests.fakes import API_VERSION, FakeRemoteClient

URL = "/api/org/proj/git/repositories/repo-1/pullrequests"
PR = {"pullRequestId": 7, "title": "X", "status": "active"}


def test_patch_without_changes_returns_current_state(
    client: TestClient, remote: FakeRemoteClient, auth: dict[str, str]
) -> None:
    remote.expect("GET", "/pullrequests/7", 200, PR)

    response = client.patch(
        f"{URL}/7", params={"api-version": API_VERSION}, json={"title": "X"}, headers=auth
    )

    assert response.status_code == 200
    assert response.json() == PR
    assert [method for method, _ in remote.methods()] == ["GET"]


def test_patch_passes_backend_answer_through(
    client: TestClient, remote: FakeRemoteClient, auth: dict[str, str]
) -> None:
    remote.expect("GET", "/pullrequests/7", 200, PR)
    remote.expect("PATCH", "/pullrequests/7", 400, raw=b'{"message":"policy"}')

    response = client.patch(
        f"{URL}/7", params={"api-version": API_VERSION}, json={"title": "Y"}, headers=auth
    )

    assert response.status_code == 400
    assert response.content == b'{"message":"policy"}'
    assert response.headers["content-type"] == "application/json"


def test_patch_requires_auth(client: TestClient, remote: FakeRemoteClient) -> None:
    response = client.patch(f"{URL}/7", params={"api-version": API_VERSION}, json={})

    assert response.status_code == 401
    assert remote.calls == []


def test_fetch_failure_maps_to_server_error(
    client: TestClient, remote: FakeRemoteClient, auth: dict[str, str]
) -> None:
    remote.expect("GET", "/pullrequests/7", 404, {"message": "missing"})

    response = client.patch(
        f"{URL}/7", params={"api-version": API_VERSION}, json={"title": "Y"}, headers=auth
    )

    assert response.status_code == 500
    assert "404" in response.json()["detail"]


def test_search(client: TestClient, remote: FakeRemoteClient, auth: dict[str, str]) -> None:
    remote.expect("GET", "/repositories/repo-1/pullrequests", 200, {"count": 1, "value": [PR]})

    response = client.get(
        URL,
        params={
            "api-version": API_VERSION,
            "sourceRefName": "refs/heads/feature",
            "targetRefName": "refs/heads/main",
            "title": "X",
        },
        headers=auth,
    )

    assert response.status_code == 200
    assert response.json()["value"] == [PR]
    assert remote.calls[0].query["searchCriteria.title"] == "X"


def test_search_without_criteria_is_rejected(
    client: TestClient, remote: FakeRemoteClient, auth: dict[str, str]
) -> None:
    response = client.get(URL, params={"api-version": API_VERSION}, headers=auth)

    assert response.status_code == 400
    assert remote.calls == []
