"""Business profile routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.routes.dependencies import get_business_service, get_current_principal
from app.schemas.auth import Principal
from app.schemas.business import Business, UpdateBusinessRequest
from app.schemas.error import ErrorResponse, ForbiddenError, NoLeakNotFoundError, UnauthorizedError
from app.services.businesses import BusinessService

router = APIRouter(prefix="/businesses", tags=["Businesses"])


@router.get(
    "/{businessId}",
    response_model=Business,
    responses={404: {"model": NoLeakNotFoundError}},
)
async def get_business(
    business_id: Annotated[str, Path(alias="businessId")],
    service: Annotated[BusinessService, Depends(get_business_service)],
) -> Business:
    return service.get_business(business_id=business_id)


@router.put(
    "/{businessId}",
    response_model=Business,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": UnauthorizedError},
        403: {"model": ForbiddenError},
        404: {"model": NoLeakNotFoundError},
    },
)
async def update_business(
    business_id: Annotated[str, Path(alias="businessId")],
    payload: UpdateBusinessRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[BusinessService, Depends(get_business_service)],
) -> Business:
    return service.update_business(principal=principal, business_id=business_id, payload=payload)
