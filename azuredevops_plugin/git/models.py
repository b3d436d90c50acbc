"""Pydantic schemas for the Azure DevOps Git resources the plugin touches.

Only the fields that drive control flow are typed. Backend payloads keep any
further fields as extras so responses can be echoed without loss.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AzureModel(BaseModel):
    """Base for backend projections: camelCase on the wire, extras preserved."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class RequestModel(BaseModel):
    """Base for caller-supplied bodies: unknown fields are dropped."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


# Repositories ---------------------------------------------------------------
class TeamProjectReferenceMinimal(RequestModel):
    id: str


class TeamProjectReference(AzureModel):
    id: str | None = None
    name: str | None = None


class GitRepositoryRefMinimal(RequestModel):
    id: str
    project: TeamProjectReferenceMinimal | None = None


class GitRepositoryRef(AzureModel):
    id: str | None = None
    name: str | None = None
    is_fork: bool | None = None
    project: TeamProjectReference | None = None


class GitRepository(AzureModel):
    """Backend view of a repository after creation or update."""

    id: str = ""
    name: str = ""
    default_branch: str | None = None
    is_fork: bool | None = None
    parent_repository: GitRepositoryRef | None = None
    project: TeamProjectReference | None = None


class CreateRepositoryRequest(RequestModel):
    """Caller's desired repository.

    ``initialize`` is tri-state: ``None`` means the caller did not say, which
    lets a custom default branch turn initialization on implicitly.
    """

    name: str = ""
    parent_repository: GitRepositoryRefMinimal | None = None
    project: TeamProjectReferenceMinimal | None = None
    default_branch: str | None = None
    initialize: bool | None = None

    @property
    def is_fork(self) -> bool:
        return self.parent_repository is not None

    def create_payload(self) -> dict[str, Any]:
        """Body for the backend create call; ``defaultBranch`` is never sent."""

        return self.model_dump(
            by_alias=True,
            exclude_none=True,
            include={"name", "parent_repository", "project"},
        )


# Refs -----------------------------------------------------------------------
class GitRef(AzureModel):
    name: str = ""
    object_id: str = ""


class GitRefList(AzureModel):
    count: int | None = None
    value: list[GitRef] = Field(default_factory=list)


# Pull requests ----------------------------------------------------------------
class CompletionOptions(RequestModel):
    """Completion options compared field by field, zero values included."""

    auto_complete_ignore_config_ids: list[int] = Field(default_factory=list)
    bypass_policy: bool = False
    bypass_reason: str = ""
    delete_source_branch: bool = False
    merge_commit_message: str = ""
    merge_strategy: str = ""
    squash_merge: bool = False
    transition_work_items: bool = False
    triggered_by_auto_complete: bool = False


class MergeOptions(RequestModel):
    conflict_authorship_commits: bool = False
    detect_rename_false_positives: bool = False
    disable_renames: bool = False


class GitPullRequest(AzureModel):
    """Backend snapshot of a pull request; read-only."""

    pull_request_id: int | None = None
    title: str | None = None
    description: str | None = None
    status: str | None = None
    source_ref_name: str | None = None
    target_ref_name: str | None = None
    completion_options: CompletionOptions | None = None
    merge_options: MergeOptions | None = None


class UpdatePullRequestRequest(RequestModel):
    """Caller's desired pull request fields; ``None`` means not supplied."""

    title: str | None = None
    description: str | None = None
    status: str | None = None
    target_ref_name: str | None = None
    completion_options: CompletionOptions | None = None
    merge_options: MergeOptions | None = None


__all__ = [
    "CompletionOptions",
    "CreateRepositoryRequest",
    "GitPullRequest",
    "GitRef",
    "GitRefList",
    "GitRepository",
    "GitRepositoryRef",
    "GitRepositoryRefMinimal",
    "MergeOptions",
    "TeamProjectReference",
    "TeamProjectReferenceMinimal",
    "UpdatePullRequestRequest",
]
