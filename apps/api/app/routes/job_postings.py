"""Job posting routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status

from app.routes.dependencies import (
    enforce_rate_limit,
    get_current_principal,
    get_job_posting_service,
    require_roles,
)
from app.schemas.auth import Principal, Role
from app.schemas.error import ErrorResponse, ForbiddenError, NoLeakNotFoundError, RateLimitedError, UnauthorizedError
from app.schemas.job_posting import (
    CreateJobPostingRequest,
    JobPosting,
    JobPostingStatus,
    UpdateJobPostingRequest,
)
from app.services.job_postings import JobPostingService

router = APIRouter(prefix="/jobs", tags=["Job Postings"])

_MUTATION_RESPONSES = {
    401: {"model": UnauthorizedError},
    403: {"model": ForbiddenError},
    404: {"model": NoLeakNotFoundError},
}


@router.post(
    "",
    response_model=JobPosting,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(enforce_rate_limit("api"))],
    responses={400: {"model": ErrorResponse}, 429: {"model": RateLimitedError}, **_MUTATION_RESPONSES},
)
async def create_job_posting(
    payload: CreateJobPostingRequest,
    principal: Annotated[Principal, Depends(require_roles(Role.BUSINESS, Role.ADMIN))],
    service: Annotated[JobPostingService, Depends(get_job_posting_service)],
) -> JobPosting:
    return service.create_job_posting(principal=principal, payload=payload)


@router.get("", response_model=list[JobPosting])
async def list_job_postings(
    service: Annotated[JobPostingService, Depends(get_job_posting_service)],
    business_id: Annotated[str | None, Query(alias="businessId")] = None,
    category: str | None = None,
    posting_status: Annotated[JobPostingStatus | None, Query(alias="status")] = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
) -> list[JobPosting]:
    return service.list_job_postings(
        business_id=business_id,
        category=category,
        status=posting_status,
        limit=limit,
    )


@router.get(
    "/{jobId}",
    response_model=JobPosting,
    responses={404: {"model": NoLeakNotFoundError}},
)
async def get_job_posting(
    posting_id: Annotated[str, Path(alias="jobId")],
    service: Annotated[JobPostingService, Depends(get_job_posting_service)],
) -> JobPosting:
    return service.get_job_posting(posting_id=posting_id)


@router.put(
    "/{jobId}",
    response_model=JobPosting,
    responses={400: {"model": ErrorResponse}, **_MUTATION_RESPONSES},
)
async def update_job_posting(
    posting_id: Annotated[str, Path(alias="jobId")],
    payload: UpdateJobPostingRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[JobPostingService, Depends(get_job_posting_service)],
) -> JobPosting:
    return service.update_job_posting(principal=principal, posting_id=posting_id, payload=payload)


@router.delete(
    "/{jobId}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_MUTATION_RESPONSES,
)
async def delete_job_posting(
    posting_id: Annotated[str, Path(alias="jobId")],
    principal: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[JobPostingService, Depends(get_job_posting_service)],
) -> Response:
    service.delete_job_posting(principal=principal, posting_id=posting_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
