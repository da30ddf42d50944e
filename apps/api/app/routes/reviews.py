"""Review routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status

from app.routes.dependencies import enforce_rate_limit, get_current_principal, get_review_service, require_roles
from app.schemas.auth import Principal, Role
from app.schemas.error import (
    AlreadyExistsError,
    ErrorResponse,
    ForbiddenError,
    NoLeakNotFoundError,
    RateLimitedError,
    UnauthorizedError,
)
from app.schemas.review import (
    CreateReviewRequest,
    RejectReviewRequest,
    Review,
    ReviewReplyRequest,
    ReviewStatus,
    UpdateReviewRequest,
)
from app.services.reviews import ReviewService

router = APIRouter(prefix="/reviews", tags=["Reviews"])

_MUTATION_RESPONSES = {
    401: {"model": UnauthorizedError},
    403: {"model": ForbiddenError},
    404: {"model": NoLeakNotFoundError},
}


@router.post(
    "",
    response_model=Review,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(enforce_rate_limit("api"))],
    responses={
        400: {"model": ErrorResponse},
        409: {"model": AlreadyExistsError},
        429: {"model": RateLimitedError},
        **_MUTATION_RESPONSES,
    },
)
async def create_review(
    payload: CreateReviewRequest,
    principal: Annotated[Principal, Depends(require_roles(Role.BUSINESS))],
    service: Annotated[ReviewService, Depends(get_review_service)],
) -> Review:
    return service.create_review(principal=principal, payload=payload)


@router.get("", response_model=list[Review])
async def list_reviews(
    service: Annotated[ReviewService, Depends(get_review_service)],
    creator_id: Annotated[str | None, Query(alias="creatorId")] = None,
    business_id: Annotated[str | None, Query(alias="businessId")] = None,
    review_status: Annotated[ReviewStatus | None, Query(alias="status")] = None,
) -> list[Review]:
    return service.list_reviews(business_id=business_id, creator_id=creator_id, status=review_status)


@router.put("/{reviewId}", response_model=Review, responses=_MUTATION_RESPONSES)
async def update_review(
    review_id: Annotated[str, Path(alias="reviewId")],
    payload: UpdateReviewRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[ReviewService, Depends(get_review_service)],
) -> Review:
    return service.update_review(principal=principal, review_id=review_id, payload=payload)


@router.delete(
    "/{reviewId}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_MUTATION_RESPONSES,
)
async def delete_review(
    review_id: Annotated[str, Path(alias="reviewId")],
    principal: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[ReviewService, Depends(get_review_service)],
) -> Response:
    service.delete_review(principal=principal, review_id=review_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{reviewId}/approve", response_model=Review, responses=_MUTATION_RESPONSES)
async def approve_review(
    review_id: Annotated[str, Path(alias="reviewId")],
    _: Annotated[Principal, Depends(require_roles(Role.ADMIN))],
    service: Annotated[ReviewService, Depends(get_review_service)],
) -> Review:
    return service.approve_review(review_id=review_id)


@router.post("/{reviewId}/reject", response_model=Review, responses=_MUTATION_RESPONSES)
async def reject_review(
    review_id: Annotated[str, Path(alias="reviewId")],
    _: Annotated[Principal, Depends(require_roles(Role.ADMIN))],
    service: Annotated[ReviewService, Depends(get_review_service)],
    payload: RejectReviewRequest | None = None,
) -> Review:
    return service.reject_review(review_id=review_id, reason=payload.reason if payload is not None else None)


@router.post(
    "/{reviewId}/reply",
    response_model=Review,
    responses={400: {"model": ErrorResponse}, **_MUTATION_RESPONSES},
)
async def set_review_reply(
    review_id: Annotated[str, Path(alias="reviewId")],
    payload: ReviewReplyRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[ReviewService, Depends(get_review_service)],
) -> Review:
    return service.set_reply(principal=principal, review_id=review_id, reply=payload.reply)


@router.delete("/{reviewId}/reply", response_model=Review, responses=_MUTATION_RESPONSES)
async def delete_review_reply(
    review_id: Annotated[str, Path(alias="reviewId")],
    principal: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[ReviewService, Depends(get_review_service)],
) -> Review:
    return service.delete_reply(principal=principal, review_id=review_id)
