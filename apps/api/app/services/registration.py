"""Registration service layer."""

import logging

from app.core.logging_safety import safe_log_identifier
from app.errors import already_exists
from app.repositories.memory import InMemoryStore
from app.schemas.auth import Role, SessionSubject
from app.schemas.registration import (
    RegisterBusinessRequest,
    RegisterCreatorRequest,
    RegistrationResponse,
)

logger = logging.getLogger(__name__)


class RegistrationService:
    """Creates the application profile for an already authenticated session subject."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def register_creator(self, *, subject: SessionSubject, payload: RegisterCreatorRequest) -> RegistrationResponse:
        self._ensure_unregistered(subject)
        self._store.create_user(user_id=subject.user_id, email=subject.email, role=Role.CREATOR)
        creator = self._store.create_creator(
            user_id=subject.user_id,
            email=subject.email,
            **payload.model_dump(),
        )
        self._log_registered(subject, Role.CREATOR)
        return RegistrationResponse(user_id=subject.user_id, role=Role.CREATOR.value, creator_id=creator.id)

    def register_business(self, *, subject: SessionSubject, payload: RegisterBusinessRequest) -> RegistrationResponse:
        self._ensure_unregistered(subject)
        self._store.create_user(user_id=subject.user_id, email=subject.email, role=Role.BUSINESS)
        fields = payload.model_dump(exclude={"plan", "company_name", "website"})
        business = self._store.create_business(
            user_id=subject.user_id,
            email=subject.email,
            company_name=payload.company_name,
            plan=payload.plan,
            website=str(payload.website) if payload.website is not None else None,
            **fields,
        )
        self._log_registered(subject, Role.BUSINESS)
        return RegistrationResponse(user_id=subject.user_id, role=Role.BUSINESS.value, business_id=business.id)

    def register_admin(self, *, subject: SessionSubject) -> RegistrationResponse:
        self._ensure_unregistered(subject)
        self._store.create_user(user_id=subject.user_id, email=subject.email, role=Role.ADMIN)
        self._log_registered(subject, Role.ADMIN)
        return RegistrationResponse(user_id=subject.user_id, role=Role.ADMIN.value)

    def _ensure_unregistered(self, subject: SessionSubject) -> None:
        existing = self._store.get_user(subject.user_id)
        if existing is not None:
            raise already_exists(
                "An account profile already exists for this user.",
                details={"role": existing.role.value},
            )

    @staticmethod
    def _log_registered(subject: SessionSubject, role: Role) -> None:
        logger.info(
            "registration.completed principal_id=%s role=%s",
            safe_log_identifier(subject.user_id, prefix="pid"),
            role.value,
        )
