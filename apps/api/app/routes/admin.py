"""Admin bootstrap routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.routes.dependencies import (
    enforce_rate_limit,
    get_registration_service,
    get_session_subject,
    require_admin_setup_secret,
)
from app.schemas.auth import SessionSubject
from app.schemas.error import AlreadyExistsError, ForbiddenError, RateLimitedError, UnauthorizedError
from app.schemas.registration import RegistrationResponse
from app.services.registration import RegistrationService

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/setup",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(enforce_rate_limit("auth")), Depends(require_admin_setup_secret)],
    responses={
        401: {"model": UnauthorizedError},
        403: {"model": ForbiddenError},
        409: {"model": AlreadyExistsError},
        429: {"model": RateLimitedError},
    },
)
async def setup_admin(
    subject: Annotated[SessionSubject, Depends(get_session_subject)],
    service: Annotated[RegistrationService, Depends(get_registration_service)],
) -> RegistrationResponse:
    return service.register_admin(subject=subject)
