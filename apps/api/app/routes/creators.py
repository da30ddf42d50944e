"""Creator profile routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.routes.dependencies import get_creator_service, get_current_principal, get_optional_principal
from app.schemas.auth import Principal
from app.schemas.error import ErrorResponse, ForbiddenError, NoLeakNotFoundError, UnauthorizedError
from app.schemas.creator import Creator, UpdateCreatorRequest
from app.services.creators import CreatorService

router = APIRouter(prefix="/creators", tags=["Creators"])


@router.get("", response_model=list[Creator])
async def list_creators(
    service: Annotated[CreatorService, Depends(get_creator_service)],
) -> list[Creator]:
    return service.list_creators()


@router.get(
    "/{creatorId}",
    response_model=Creator,
    response_model_exclude_none=True,
    responses={404: {"model": NoLeakNotFoundError}},
)
async def get_creator(
    creator_id: Annotated[str, Path(alias="creatorId")],
    viewer: Annotated[Principal | None, Depends(get_optional_principal)],
    service: Annotated[CreatorService, Depends(get_creator_service)],
) -> Creator:
    return service.get_creator(creator_id=creator_id, viewer=viewer)


@router.put(
    "/{creatorId}",
    response_model=Creator,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": UnauthorizedError},
        403: {"model": ForbiddenError},
        404: {"model": NoLeakNotFoundError},
    },
)
async def update_creator(
    creator_id: Annotated[str, Path(alias="creatorId")],
    payload: UpdateCreatorRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[CreatorService, Depends(get_creator_service)],
) -> Creator:
    return service.update_creator(principal=principal, creator_id=creator_id, payload=payload)
