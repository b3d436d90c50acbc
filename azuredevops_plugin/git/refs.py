"""Branch-ref normalisation helpers."""

from __future__ import annotations

BRANCH_PREFIX = "refs/heads/"
DEFAULT_INITIAL_BRANCH = "refs/heads/main"
# Object id that marks a ref as not existing yet.
EMPTY_OBJECT_ID = "0" * 40


def short_branch_name(branch: str) -> str:
    """Return ``branch`` without the ``refs/heads/`` prefix."""

    return branch.removeprefix(BRANCH_PREFIX)


def full_branch_ref(branch: str) -> str:
    """Return ``branch`` as a fully-qualified ``refs/heads/<name>`` ref."""

    return BRANCH_PREFIX + short_branch_name(branch)


def branch_filter(branch: str) -> str:
    """Filter value accepted by the refs listing endpoint (``heads/<name>``)."""

    return f"heads/{short_branch_name(branch)}"


def is_branch_ref(value: str) -> bool:
    return value.startswith(BRANCH_PREFIX) and len(value) > len(BRANCH_PREFIX)


__all__ = [
    "BRANCH_PREFIX",
    "DEFAULT_INITIAL_BRANCH",
    "EMPTY_OBJECT_ID",
    "branch_filter",
    "full_branch_ref",
    "is_branch_ref",
    "short_branch_name",
]
