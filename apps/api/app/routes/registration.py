"""Registration routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.routes.dependencies import enforce_rate_limit, get_registration_service, get_session_subject
from app.schemas.auth import SessionSubject
from app.schemas.error import AlreadyExistsError, ErrorResponse, RateLimitedError, UnauthorizedError
from app.schemas.registration import RegisterBusinessRequest, RegisterCreatorRequest, RegistrationResponse
from app.services.registration import RegistrationService

router = APIRouter(
    prefix="/auth/register",
    tags=["Registration"],
    dependencies=[Depends(enforce_rate_limit("auth"))],
)

_REGISTRATION_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": UnauthorizedError},
    409: {"model": AlreadyExistsError},
    429: {"model": RateLimitedError},
}


@router.post(
    "/creator",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_REGISTRATION_RESPONSES,
)
async def register_creator(
    payload: RegisterCreatorRequest,
    subject: Annotated[SessionSubject, Depends(get_session_subject)],
    service: Annotated[RegistrationService, Depends(get_registration_service)],
) -> RegistrationResponse:
    return service.register_creator(subject=subject, payload=payload)


@router.post(
    "/business",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_REGISTRATION_RESPONSES,
)
async def register_business(
    payload: RegisterBusinessRequest,
    subject: Annotated[SessionSubject, Depends(get_session_subject)],
    service: Annotated[RegistrationService, Depends(get_registration_service)],
) -> RegistrationResponse:
    return service.register_business(subject=subject, payload=payload)
