"""Repository provisioning and pull request reconciliation."""

from .models import (
    CreateRepositoryRequest,
    GitPullRequest,
    GitRepository,
    UpdatePullRequestRequest,
)
from .provisioner import ProvisioningResult, ProvisioningStage, RepositoryProvisioner
from .pullrequests import PassthroughResult, PullRequestReconciler

__all__ = [
    "CreateRepositoryRequest",
    "GitPullRequest",
    "GitRepository",
    "PassthroughResult",
    "ProvisioningResult",
    "ProvisioningStage",
    "PullRequestReconciler",
    "RepositoryProvisioner",
    "UpdatePullRequestRequest",
]
