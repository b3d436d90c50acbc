# ruff: noqa: B008
"""Pull request update and search endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from azuredevops_plugin.api.auth import ForwardedBasicAuth
from azuredevops_plugin.api.context import AppContext, get_app_context
from azuredevops_plugin.api.schemas import ErrorResponse
from azuredevops_plugin.git import PassthroughResult, UpdatePullRequestRequest

router = APIRouter(
    prefix="/api/{organization}/{project}/git/repositories/{repository_id}/pullrequests",
    tags=["pullrequest"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)


def _passthrough(result: PassthroughResult) -> Response:
    return Response(
        content=result.body, status_code=result.status_code, media_type="application/json"
    )


@router.get("")
def search_pull_requests(
    organization: str,
    project: str,
    repository_id: str,
    source_ref_name: str = Query("", alias="sourceRefName"),
    target_ref_name: str = Query("", alias="targetRefName"),
    title: str = Query("", description="Text contained in the pull request title"),
    api_version: str = Query("", alias="api-version"),
    context: AppContext = Depends(get_app_context),
    auth_header: str = Depends(ForwardedBasicAuth()),
) -> Response:
    result = context.reconciler.search(
        organization=organization,
        project=project,
        repository_id=repository_id,
        criteria={
            "sourceRefName": source_ref_name,
            "targetRefName": target_ref_name,
            "title": title,
        },
        api_version=api_version,
        auth_header=auth_header,
    )
    return _passthrough(result)


@router.patch("/{pull_request_id}")
def update_pull_request(
    organization: str,
    project: str,
    repository_id: str,
    pull_request_id: str,
    payload: UpdatePullRequestRequest,
    api_version: str = Query("", alias="api-version"),
    context: AppContext = Depends(get_app_context),
    auth_header: str = Depends(ForwardedBasicAuth()),
) -> Response:
    result = context.reconciler.update(
        organization=organization,
        project=project,
        repository_id=repository_id,
        pull_request_id=pull_request_id,
        desired=payload,
        api_version=api_version,
        auth_header=auth_header,
    )
    return _passthrough(result)
