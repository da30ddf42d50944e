"""Resource-level authorization checks."""

from __future__ import annotations

from enum import Enum
import logging

from app.core.logging_safety import safe_log_identifier
from app.domain.roles import is_admin
from app.errors import forbidden, not_found
from app.repositories.memory import InMemoryStore
from app.schemas.auth import Principal

logger = logging.getLogger(__name__)


class ResourceKind(str, Enum):
    CREATOR = "creator"
    BUSINESS = "business"
    REVIEW = "review"
    JOB_POSTING = "job_posting"


class Relationship(str, Enum):
    OWNER = "owner"
    OWNER_OR_ADMIN = "owner_or_admin"
    # The creator a review is about.
    SUBJECT_OR_ADMIN = "subject_or_admin"


def holds_relationship(
    principal: Principal,
    *,
    relationship: Relationship,
    owner_business_id: str | None = None,
    owner_creator_id: str | None = None,
) -> bool:
    """Compare the principal's role-specific ids with the resource's owning ids."""
    if relationship is not Relationship.OWNER and is_admin(principal):
        return True
    if owner_business_id is not None and principal.business_id == owner_business_id:
        return True
    if owner_creator_id is not None and principal.creator_id == owner_creator_id:
        return True
    return False


class AuthorizationService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def require(
        self,
        principal: Principal,
        kind: ResourceKind,
        resource_id: str,
        relationship: Relationship,
    ) -> None:
        """Raise 404 for unknown resources and 403 when the relationship does not hold."""
        owner_business_id, owner_creator_id = self._owning_ids(kind, resource_id, relationship)
        allowed = holds_relationship(
            principal,
            relationship=relationship,
            owner_business_id=owner_business_id,
            owner_creator_id=owner_creator_id,
        )
        if not allowed:
            logger.warning(
                "authz.denied principal_id=%s role=%s kind=%s relationship=%s",
                safe_log_identifier(principal.id, prefix="pid"),
                principal.role.value,
                kind.value,
                relationship.value,
            )
            raise forbidden()

    def _owning_ids(
        self,
        kind: ResourceKind,
        resource_id: str,
        relationship: Relationship,
    ) -> tuple[str | None, str | None]:
        if kind is ResourceKind.CREATOR:
            if self._store.get_creator(resource_id) is None:
                raise not_found()
            return None, resource_id

        if kind is ResourceKind.BUSINESS:
            if self._store.get_business(resource_id) is None:
                raise not_found()
            return resource_id, None

        if kind is ResourceKind.REVIEW:
            review = self._store.get_review(resource_id)
            if review is None:
                raise not_found()
            if relationship is Relationship.SUBJECT_OR_ADMIN:
                return None, review.creator_id
            return review.business_id, None

        posting = self._store.get_job_posting(resource_id)
        if posting is None:
            raise not_found()
        return posting.business_id, None


__all__ = ["AuthorizationService", "Relationship", "ResourceKind", "holds_relationship"]
