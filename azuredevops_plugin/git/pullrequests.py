"""Pull request reconciliation and search."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import status

from azuredevops_plugin.errors import RemoteCallError, RequestValidationError, TransportError
from azuredevops_plugin.remote import GitEndpoints, RemoteClient, RemoteResponse
from azuredevops_plugin.remote.responses import checked_call, parse_model

from .diff import pull_request_patch
from .models import GitPullRequest, UpdatePullRequestRequest

logger = logging.getLogger(__name__)

SEARCH_CRITERIA = ("sourceRefName", "targetRefName", "title")


@dataclass(slots=True)
class PassthroughResult:
    """Status and body to hand back to the caller unchanged."""

    status_code: int
    body: bytes


class PullRequestReconciler:
    """Apply only the caller's changed fields to a remote pull request.

    The backend rejects updates that resend a field's current value, so the
    current state is fetched first and diffed against the desired one.
    """

    def __init__(self, client: RemoteClient, *, base_url: str) -> None:
        self.client = client
        self.base_url = base_url

    def update(
        self,
        *,
        organization: str,
        project: str,
        repository_id: str,
        pull_request_id: str,
        desired: UpdatePullRequestRequest,
        api_version: str,
        auth_header: str,
    ) -> PassthroughResult:
        _require(
            organization=organization,
            project=project,
            repositoryId=repository_id,
            pullRequestId=pull_request_id,
            api_version=api_version,
        )
        endpoints = GitEndpoints(self.base_url, organization, project, api_version)
        url = endpoints.pull_request(repository_id, pull_request_id)

        response = checked_call(
            self.client,
            "GET",
            url,
            auth_header,
            expected=status.HTTP_200_OK,
            action="get current pull request state",
        )
        current = parse_model(GitPullRequest, response, action="get current pull request state")

        patch = pull_request_patch(desired, current)
        if not patch:
            logger.info(
                "No changes detected for pull request %s, returning current state",
                pull_request_id,
            )
            return PassthroughResult(status_code=status.HTTP_200_OK, body=response.body)

        logger.info("Patching pull request %s fields: %s", pull_request_id, sorted(patch))
        response = self._passthrough("PATCH", url, auth_header, patch)
        return PassthroughResult(status_code=response.status_code, body=response.body)

    def search(
        self,
        *,
        organization: str,
        project: str,
        repository_id: str,
        criteria: dict[str, str],
        api_version: str,
        auth_header: str,
    ) -> PassthroughResult:
        """List pull requests matching all of :data:`SEARCH_CRITERIA`."""

        _require(
            organization=organization,
            project=project,
            repositoryId=repository_id,
            api_version=api_version,
        )
        for name in SEARCH_CRITERIA:
            if not criteria.get(name):
                raise RequestValidationError(f"query parameter '{name}' is required")
        endpoints = GitEndpoints(self.base_url, organization, project, api_version)
        url = endpoints.pull_requests(
            repository_id, {name: criteria[name] for name in SEARCH_CRITERIA}
        )
        response = self._passthrough("GET", url, auth_header)
        return PassthroughResult(status_code=response.status_code, body=response.body)

    def _passthrough(
        self, method: str, url: str, auth_header: str, payload: dict | None = None
    ) -> RemoteResponse:
        try:
            return self.client.call_json(method, url, auth_header, payload)
        except TransportError as exc:
            raise RemoteCallError(
                f"error making request to azure devops: {exc.message}"
            ) from exc


def _require(**values: str) -> None:
    for name, value in values.items():
        if not value:
            label = "API version" if name == "api_version" else name
            raise RequestValidationError(f"{label} parameter is required")


__all__ = ["PassthroughResult", "PullRequestReconciler", "SEARCH_CRITERIA"]
