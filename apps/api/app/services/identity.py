"""Identity resolution: session token to typed principal."""

from __future__ import annotations

import logging

from app.adapters.auth import SessionVerificationError, SessionVerifier
from app.core.logging_safety import safe_log_identifier
from app.errors import ApiError, internal_error, profile_missing, unauthenticated
from app.repositories.memory import InMemoryStore
from app.schemas.auth import Principal, Role, SessionSubject

logger = logging.getLogger(__name__)


class IdentityResolver:
    """Answers who is making a request and which profile they own.

    Every call performs fresh lookups; nothing is cached between requests.
    Callers receive either a ``Principal`` or an ``ApiError`` carrying one of
    401 (no session), 404 (session without an application profile) or 500
    (any other fault), never a raw exception.
    """

    def __init__(self, verifier: SessionVerifier, store: InMemoryStore) -> None:
        self._verifier = verifier
        self._store = store

    def resolve_session(self, token: str | None) -> SessionSubject:
        """Return the authenticated subject without requiring an application profile."""
        try:
            return self._verify(token)
        except ApiError:
            raise
        except Exception as exc:
            logger.exception("identity.session_lookup_failed")
            raise internal_error() from exc

    def resolve_identity(self, token: str | None) -> Principal:
        try:
            subject = self._verify(token)
            user = self._store.get_user(subject.user_id)
            if user is None:
                logger.warning(
                    "identity.profile_missing principal_id=%s",
                    safe_log_identifier(subject.user_id, prefix="pid"),
                )
                raise profile_missing()

            creator_id: str | None = None
            business_id: str | None = None
            if user.role is Role.CREATOR:
                creator = self._store.get_creator_by_user(subject.user_id)
                if creator is not None:
                    creator_id = creator.id
            elif user.role is Role.BUSINESS:
                business = self._store.get_business_by_user(subject.user_id)
                if business is not None:
                    business_id = business.id

            return Principal(
                id=subject.user_id,
                email=subject.email,
                role=user.role,
                creator_id=creator_id,
                business_id=business_id,
            )
        except ApiError:
            raise
        except Exception as exc:
            logger.exception("identity.resolve_failed")
            raise internal_error() from exc

    def _verify(self, token: str | None) -> SessionSubject:
        if not token:
            raise unauthenticated()
        try:
            return self._verifier.verify_session(token)
        except SessionVerificationError as exc:
            raise unauthenticated() from exc


__all__ = ["IdentityResolver"]
