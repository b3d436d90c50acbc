"""Repository provisioning against the non-transactional Azure DevOps API.

Creating a repository, seeding it with a commit and choosing its default
branch are separate backend calls. :class:`RepositoryProvisioner` sequences
them, checks ref existence where the backend can lag, and reports either a
fully provisioned repository (201) or a fork whose desired default branch does
not exist yet (202). Nothing that already succeeded is ever rolled back.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any
from urllib import parse

from fastapi import status

from azuredevops_plugin.errors import PreconditionFailedError, RequestValidationError
from azuredevops_plugin.remote import GitEndpoints, RemoteClient
from azuredevops_plugin.remote.responses import checked_call, parse_model

from .models import CreateRepositoryRequest, GitRefList, GitRepository
from .refs import (
    DEFAULT_INITIAL_BRANCH,
    EMPTY_OBJECT_ID,
    branch_filter,
    full_branch_ref,
    is_branch_ref,
)

logger = logging.getLogger(__name__)

INITIAL_COMMIT_PATH = "/README.md"
INITIAL_COMMIT_CONTENT = "# New Repository\n\nThis repository was initialized automatically."


class ProvisioningStage(str, Enum):
    VALIDATING = "validating"
    SOURCE_REF_CHECKED = "source_ref_checked"
    CREATED = "created"
    INITIALIZING = "initializing"
    FORK_BRANCH_CHECKING = "fork_branch_checking"
    DEFAULT_BRANCH_SETTING = "default_branch_setting"
    DONE = "done"
    PENDING_BRANCH = "pending_branch"


@dataclass(slots=True)
class ProvisioningResult:
    repository: GitRepository
    branch_pending: bool = False

    @property
    def status_code(self) -> int:
        if self.branch_pending:
            return status.HTTP_202_ACCEPTED
        return status.HTTP_201_CREATED


@dataclass(slots=True)
class _Run:
    """Working state of one provisioning request."""

    endpoints: GitEndpoints
    auth_header: str
    request: CreateRepositoryRequest
    source_ref: str | None
    initialize: bool = False
    stage: ProvisioningStage = ProvisioningStage.VALIDATING

    def advance(self, stage: ProvisioningStage) -> None:
        self.stage = stage
        logger.debug("Repository '%s' -> %s", self.request.name, stage.value)

    @property
    def default_branch(self) -> str | None:
        if not self.request.default_branch:
            return None
        return full_branch_ref(self.request.default_branch)


class RepositoryProvisioner:
    """Drive a remote repository from absent to its declared state."""

    def __init__(
        self,
        client: RemoteClient,
        *,
        base_url: str,
        branch_check_delay: float = 1.0,
        branch_check_attempts: int = 1,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.client = client
        self.base_url = base_url
        self.branch_check_delay = branch_check_delay
        self.branch_check_attempts = max(1, branch_check_attempts)
        self._sleep = sleep

    def provision(
        self,
        *,
        organization: str,
        project: str,
        request: CreateRepositoryRequest,
        api_version: str,
        auth_header: str,
        source_ref: str | None = None,
    ) -> ProvisioningResult:
        _validate(organization, project, api_version, request)
        run = _Run(
            endpoints=GitEndpoints(self.base_url, organization, project, api_version),
            auth_header=auth_header,
            request=request,
            source_ref=source_ref or None,
        )
        if run.default_branch:
            logger.info("Custom default branch '%s' specified", run.default_branch)
        else:
            logger.info("No default branch specified for repository '%s'", request.name)

        self._check_source_ref(run)
        run.advance(ProvisioningStage.SOURCE_REF_CHECKED)
        run.initialize = _infer_initialize(request)

        repository = self._create(run)
        run.advance(ProvisioningStage.CREATED)

        needs_default_branch = run.default_branch is not None
        if request.is_fork:
            logger.info(
                "Created fork repository '%s' from parent repository '%s'",
                repository.name,
                request.parent_repository.id if request.parent_repository else "",
            )
            if needs_default_branch:
                run.advance(ProvisioningStage.FORK_BRANCH_CHECKING)
                if not self._branch_exists(run, repository.id, run.default_branch or ""):
                    logger.warning(
                        "Branch '%s' does not exist in fork '%s'; default branch update is "
                        "pending until the branch is created",
                        run.default_branch,
                        repository.name,
                    )
                    run.advance(ProvisioningStage.PENDING_BRANCH)
                    return ProvisioningResult(repository=repository, branch_pending=True)
                logger.info("Branch '%s' exists in fork '%s'", run.default_branch, repository.name)
        elif run.initialize:
            run.advance(ProvisioningStage.INITIALIZING)
            self._initialize(run, repository, run.default_branch or DEFAULT_INITIAL_BRANCH)
        elif needs_default_branch:
            raise RequestValidationError(
                f"Cannot set default branch '{run.default_branch}' on uninitialized "
                f"repository '{repository.name}' - no branches exist",
                stage=run.stage.value,
            )

        if needs_default_branch:
            run.advance(ProvisioningStage.DEFAULT_BRANCH_SETTING)
            repository = self._set_default_branch(run, repository)

        run.advance(ProvisioningStage.DONE)
        logger.info(
            "Successfully provisioned repository '%s' in organization '%s', project '%s'",
            repository.name,
            organization,
            project,
        )
        return ProvisioningResult(repository=repository)

    def branch_exists(
        self,
        endpoints: GitEndpoints,
        auth_header: str,
        repository_id: str,
        branch: str,
        *,
        stage: str | None = None,
    ) -> bool:
        """Return whether ``branch`` is listed in ``repository_id``.

        Ref listings lag ref creation, so each read is preceded by a wait that
        doubles across the configured attempts.
        """

        ref = full_branch_ref(branch)
        url = endpoints.refs(repository_id, filter_value=branch_filter(branch))
        delay = self.branch_check_delay
        for attempt in range(1, self.branch_check_attempts + 1):
            logger.debug(
                "Waiting %.1fs before checking branch '%s' (attempt %d)", delay, ref, attempt
            )
            self._sleep(delay)
            response = checked_call(
                self.client,
                "GET",
                url,
                auth_header,
                expected=status.HTTP_200_OK,
                action=f"check if branch '{ref}' exists",
                stage=stage,
            )
            refs = parse_model(GitRefList, response, action="list refs", stage=stage)
            logger.debug("Branch existence check response: %s", response.text)
            # The backend filter is a prefix match.
            if any(item.name == ref for item in refs.value):
                return True
            delay *= 2
        return False

    def _branch_exists(self, run: _Run, repository_id: str, branch: str) -> bool:
        return self.branch_exists(
            run.endpoints, run.auth_header, repository_id, branch, stage=run.stage.value
        )

    def _check_source_ref(self, run: _Run) -> None:
        parent = run.request.parent_repository
        if parent is None or not run.source_ref:
            return
        logger.debug("Raw sourceRef provided: %s", run.source_ref)
        source_ref = parse.unquote(run.source_ref)
        if not is_branch_ref(source_ref):
            raise RequestValidationError(
                "sourceRef must start with 'refs/heads/'", stage=run.stage.value
            )
        run.source_ref = source_ref
        endpoints = run.endpoints
        if parent.project is not None:
            endpoints = replace(endpoints, project=parent.project.id)
        if not self.branch_exists(
            endpoints, run.auth_header, parent.id, source_ref, stage=run.stage.value
        ):
            raise PreconditionFailedError(
                f"SourceRef '{source_ref}' does not exist in parent repository '{parent.id}'",
                stage=run.stage.value,
            )
        logger.info("SourceRef '%s' exists in parent repository '%s'", source_ref, parent.id)

    def _create(self, run: _Run) -> GitRepository:
        payload = run.request.create_payload()
        response = checked_call(
            self.client,
            "POST",
            run.endpoints.repositories(source_ref=run.source_ref),
            run.auth_header,
            payload,
            expected=status.HTTP_201_CREATED,
            action="create repository",
            stage=run.stage.value,
        )
        return parse_model(
            GitRepository, response, action="create repository", stage=run.stage.value
        )

    def _initialize(self, run: _Run, repository: GitRepository, branch: str) -> None:
        ref = full_branch_ref(branch)
        logger.info(
            "Repository '%s' will be initialized with an initial commit on branch '%s'",
            repository.name,
            ref,
        )
        checked_call(
            self.client,
            "POST",
            run.endpoints.pushes(repository.id),
            run.auth_header,
            initial_push_payload(ref),
            expected=status.HTTP_201_CREATED,
            action=f"initialize repository '{repository.name}'",
            stage=run.stage.value,
        )

    def _set_default_branch(self, run: _Run, repository: GitRepository) -> GitRepository:
        logger.info(
            "Updating repository '%s' to set default branch to '%s'",
            repository.name,
            run.default_branch,
        )
        response = checked_call(
            self.client,
            "PATCH",
            run.endpoints.repository(repository.id),
            run.auth_header,
            {"defaultBranch": run.default_branch},
            expected=status.HTTP_200_OK,
            action=f"set default branch '{run.default_branch}'",
            stage=run.stage.value,
        )
        return parse_model(
            GitRepository, response, action="update repository", stage=run.stage.value
        )


def initial_push_payload(ref: str) -> dict[str, Any]:
    """Push body that creates ``ref`` with a single README commit."""

    return {
        "refUpdates": [{"name": full_branch_ref(ref), "oldObjectId": EMPTY_OBJECT_ID}],
        "commits": [
            {
                "comment": "Initial commit",
                "changes": [
                    {
                        "changeType": "add",
                        "item": {"path": INITIAL_COMMIT_PATH},
                        "newContent": {
                            "content": INITIAL_COMMIT_CONTENT,
                            "contentType": "rawtext",
                        },
                    }
                ],
            }
        ],
    }


def _validate(
    organization: str, project: str, api_version: str, request: CreateRepositoryRequest
) -> None:
    stage = ProvisioningStage.VALIDATING.value
    if not organization:
        raise RequestValidationError("Organization parameter is required", stage=stage)
    if not project:
        raise RequestValidationError("Project ID parameter is required", stage=stage)
    if not api_version:
        raise RequestValidationError("API version parameter is required", stage=stage)
    if not request.name:
        raise RequestValidationError("Repository name is required", stage=stage)
    if request.default_branch and not request.is_fork and request.initialize is False:
        raise RequestValidationError(
            f"Default branch '{request.default_branch}' requires initialize for a new "
            "repository; a repository created empty has no branches",
            stage=stage,
        )


def _infer_initialize(request: CreateRepositoryRequest) -> bool:
    if request.is_fork:
        if request.initialize:
            logger.warning(
                "Initialize flag is set for fork repository '%s' - ignoring, forks "
                "inherit branches from the parent",
                request.name,
            )
        return False
    if request.default_branch and request.initialize is None:
        logger.info(
            "Custom default branch '%s' specified without initialization - "
            "auto-enabling initialization",
            request.default_branch,
        )
        return True
    return bool(request.initialize)


__all__ = [
    "INITIAL_COMMIT_CONTENT",
    "ProvisioningResult",
    "ProvisioningStage",
    "RepositoryProvisioner",
    "initial_push_payload",
]
