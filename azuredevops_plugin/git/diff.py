"""Desired/current state diffing for backends that reject no-op updates."""

from __future__ import annotations

from typing import Any

from pydantic.alias_generators import to_camel

from .models import GitPullRequest, UpdatePullRequestRequest

# Scalar fields where an empty string means "leave alone" rather than "clear".
_REQUIRED_SCALARS = ("title", "status", "target_ref_name")
# An explicit empty description clears it; only an absent one is left alone.
_CLEARABLE_SCALARS = ("description",)
_COMPOSITES = ("completion_options", "merge_options")


def pull_request_patch(
    desired: UpdatePullRequestRequest, current: GitPullRequest
) -> dict[str, Any]:
    """Return the wire payload holding only the fields that actually change."""

    patch: dict[str, Any] = {}
    for field in _REQUIRED_SCALARS:
        value = getattr(desired, field)
        if value and value != getattr(current, field):
            patch[to_camel(field)] = value
    for field in _CLEARABLE_SCALARS:
        value = getattr(desired, field)
        if value is not None and value != (getattr(current, field) or ""):
            patch[to_camel(field)] = value
    for field in _COMPOSITES:
        value = getattr(desired, field)
        if value is None:
            continue
        existing = getattr(current, field)
        if existing is None or value.model_dump() != existing.model_dump():
            patch[to_camel(field)] = value.model_dump(
                by_alias=True, exclude_unset=True
            )
    return patch


__all__ = ["pull_request_patch"]
