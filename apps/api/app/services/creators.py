"""Creator profile service layer."""

from app.core.cache import CREATORS_LIST_PREFIX, ResponseCache
from app.domain.roles import is_admin, is_business
from app.errors import forbidden, not_found
from app.repositories.memory import CreatorRecord, InMemoryStore
from app.schemas.auth import Principal
from app.schemas.creator import Creator, CreatorStatus, UpdateCreatorRequest
from app.services.authorization import (
    AuthorizationService,
    Relationship,
    ResourceKind,
    holds_relationship,
)


class CreatorService:
    def __init__(self, store: InMemoryStore, cache: ResponseCache) -> None:
        self._store = store
        self._cache = cache
        self._authz = AuthorizationService(store)

    def list_creators(self) -> list[Creator]:
        cached = self._cache.get(CREATORS_LIST_PREFIX)
        if cached is not None:
            return cached

        creators = [
            self._to_creator(record, include_contact=False)
            for record in self._store.list_creators(status=CreatorStatus.APPROVED)
        ]
        self._cache.set(CREATORS_LIST_PREFIX, creators)
        return creators

    def get_creator(self, *, creator_id: str, viewer: Principal | None) -> Creator:
        record = self._store.get_creator(creator_id)
        if record is None:
            raise not_found()

        include_contact = viewer is not None and (
            is_business(viewer)
            or holds_relationship(viewer, relationship=Relationship.OWNER_OR_ADMIN, owner_creator_id=record.id)
        )
        return self._to_creator(record, include_contact=include_contact)

    def update_creator(
        self,
        *,
        principal: Principal,
        creator_id: str,
        payload: UpdateCreatorRequest,
    ) -> Creator:
        self._authz.require(principal, ResourceKind.CREATOR, creator_id, Relationship.OWNER_OR_ADMIN)

        changes = payload.model_dump(exclude_unset=True)
        if "status" in changes and not is_admin(principal):
            raise forbidden("Only an admin can change a creator's status.")

        record = self._store.get_creator(creator_id)
        if record is None:
            raise not_found()

        updated = self._store.update_creator(record, changes)
        self._cache.clear_prefix(CREATORS_LIST_PREFIX)
        return self._to_creator(updated, include_contact=True)

    @staticmethod
    def _to_creator(record: CreatorRecord, *, include_contact: bool) -> Creator:
        return Creator(
            id=record.id,
            user_id=record.user_id,
            name=record.name,
            bio=record.bio,
            location=record.location,
            price_from=record.price_from,
            photo=record.photo,
            categories=list(record.categories),
            platforms=list(record.platforms),
            languages=list(record.languages),
            instagram=record.instagram,
            tiktok=record.tiktok,
            youtube=record.youtube,
            status=record.status,
            average_rating=record.average_rating,
            total_reviews=record.total_reviews,
            created_at=record.created_at,
            email=record.email if include_contact else None,
            phone=record.phone if include_contact else None,
        )
