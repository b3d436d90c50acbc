# ruff: noqa: B008
"""Git repository provisioning endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from azuredevops_plugin.api.auth import ForwardedBasicAuth
from azuredevops_plugin.api.context import AppContext, get_app_context
from azuredevops_plugin.api.schemas import ErrorResponse
from azuredevops_plugin.git import CreateRepositoryRequest, GitRepository

router = APIRouter(prefix="/api", tags=["gitrepository"])


@router.post(
    "/{organization}/{project_id}/git/repositories",
    status_code=status.HTTP_201_CREATED,
    response_model=GitRepository,
    responses={
        status.HTTP_202_ACCEPTED: {
            "model": GitRepository,
            "description": "Repository created; the requested default branch does not "
            "exist in the fork yet and will be applied on a later reconciliation",
        },
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
def create_repository(
    organization: str,
    project_id: str,
    payload: CreateRepositoryRequest,
    api_version: str = Query("", alias="api-version", description="e.g. 7.2-preview.2"),
    source_ref: str | None = Query(
        None, alias="sourceRef", description="Branch of the parent to fork from"
    ),
    context: AppContext = Depends(get_app_context),
    auth_header: str = Depends(ForwardedBasicAuth()),
) -> JSONResponse:
    result = context.provisioner.provision(
        organization=organization,
        project=project_id,
        request=payload,
        api_version=api_version,
        auth_header=auth_header,
        source_ref=source_ref,
    )
    return JSONResponse(result.repository.to_payload(), status_code=result.status_code)
