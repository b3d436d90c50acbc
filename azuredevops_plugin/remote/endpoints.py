"""URL builders for the Azure DevOps Git REST endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from urllib import parse


def _segment(value: str) -> str:
    return parse.quote(value, safe="")


@dataclass(slots=True, frozen=True)
class GitEndpoints:
    """Versioned URLs scoped to one organization/project pair.

    The caller's ``api-version`` is appended to every URL unchanged.
    """

    base_url: str
    organization: str
    project: str
    api_version: str

    def _url(self, path: str, **params: str) -> str:
        query = [("api-version", self.api_version)]
        query.extend((key, value) for key, value in params.items() if value)
        root = f"{self.base_url.rstrip('/')}/{_segment(self.organization)}/{_segment(self.project)}"
        return f"{root}/_apis/git/{path}?{parse.urlencode(query, safe='/')}"

    def repositories(self, *, source_ref: str | None = None) -> str:
        return self._url("repositories", sourceRef=source_ref or "")

    def repository(self, repository_id: str) -> str:
        return self._url(f"repositories/{_segment(repository_id)}")

    def refs(self, repository_id: str, *, filter_value: str) -> str:
        return self._url(f"repositories/{_segment(repository_id)}/refs", filter=filter_value)

    def pushes(self, repository_id: str) -> str:
        return self._url(f"repositories/{_segment(repository_id)}/pushes")

    def pull_requests(self, repository_id: str, criteria: dict[str, str] | None = None) -> str:
        params = {f"searchCriteria.{key}": value for key, value in (criteria or {}).items()}
        return self._url(f"repositories/{_segment(repository_id)}/pullrequests", **params)

    def pull_request(self, repository_id: str, pull_request_id: str) -> str:
        return self._url(
            f"repositories/{_segment(repository_id)}/pullrequests/{_segment(pull_request_id)}"
        )


__all__ = ["GitEndpoints"]
