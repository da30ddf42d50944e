"""Review service layer."""

from __future__ import annotations

from datetime import UTC, datetime
import logging

from app.core.cache import CREATOR_REVIEWS_PREFIX, CREATORS_LIST_PREFIX, ResponseCache
from app.core.logging_safety import safe_log_identifier
from app.domain.roles import is_admin
from app.errors import already_exists, forbidden, not_found
from app.repositories.memory import InMemoryStore, ReviewRecord
from app.schemas.auth import Principal
from app.schemas.review import CreateReviewRequest, Review, ReviewStatus, UpdateReviewRequest
from app.services.authorization import AuthorizationService, Relationship, ResourceKind

logger = logging.getLogger(__name__)


def _creator_reviews_prefix(creator_id: str) -> str:
    return f"{CREATOR_REVIEWS_PREFIX}{creator_id}:"


class ReviewService:
    def __init__(self, store: InMemoryStore, cache: ResponseCache) -> None:
        self._store = store
        self._cache = cache
        self._authz = AuthorizationService(store)

    def create_review(self, *, principal: Principal, payload: CreateReviewRequest) -> Review:
        # Businesses may only review in their own name.
        self._authz.require(principal, ResourceKind.BUSINESS, payload.business_id, Relationship.OWNER)
        if self._store.get_creator(payload.creator_id) is None:
            raise not_found()

        existing = self._store.find_review(business_id=payload.business_id, creator_id=payload.creator_id)
        if existing is not None:
            raise already_exists(
                "You have already reviewed this creator.",
                details={"existing_review_id": existing.id},
            )

        record = self._store.create_review(
            business_id=payload.business_id,
            creator_id=payload.creator_id,
            rating=payload.rating,
            comment=payload.comment,
        )
        self._invalidate(record.creator_id)
        return self._to_review(record)

    def list_reviews(
        self,
        *,
        business_id: str | None = None,
        creator_id: str | None = None,
        status: ReviewStatus | None = None,
    ) -> list[Review]:
        cache_key: str | None = None
        if creator_id is not None and business_id is None:
            cache_key = f"{_creator_reviews_prefix(creator_id)}{status.value if status else 'all'}"
            cached = self._cache.get(cache_key)
            if cached is not None:
                return cached

        reviews = [
            self._to_review(record)
            for record in self._store.list_reviews(business_id=business_id, creator_id=creator_id, status=status)
        ]
        if cache_key is not None:
            self._cache.set(cache_key, reviews)
        return reviews

    def update_review(self, *, principal: Principal, review_id: str, payload: UpdateReviewRequest) -> Review:
        self._authz.require(principal, ResourceKind.REVIEW, review_id, Relationship.OWNER_OR_ADMIN)

        changes = payload.model_dump(exclude_unset=True)
        if "status" in changes and not is_admin(principal):
            raise forbidden("Only an admin can change a review's status.")

        rejection_reason = changes.pop("rejection_reason", None)
        if changes.get("status") is ReviewStatus.REJECTED:
            changes["rejection_reason"] = rejection_reason
        elif changes.get("status") is ReviewStatus.APPROVED:
            changes["rejection_reason"] = None

        record = self._get_review(review_id)
        updated = self._store.update_review(record, changes)
        self._refresh_creator_rating(updated.creator_id)
        return self._to_review(updated)

    def delete_review(self, *, principal: Principal, review_id: str) -> None:
        self._authz.require(principal, ResourceKind.REVIEW, review_id, Relationship.OWNER_OR_ADMIN)
        record = self._get_review(review_id)
        self._store.delete_review(record.id)
        self._refresh_creator_rating(record.creator_id)

    def approve_review(self, *, review_id: str) -> Review:
        record = self._get_review(review_id)
        updated = self._store.update_review(
            record,
            {"status": ReviewStatus.APPROVED, "rejection_reason": None},
        )
        self._refresh_creator_rating(updated.creator_id)
        return self._to_review(updated)

    def reject_review(self, *, review_id: str, reason: str | None) -> Review:
        record = self._get_review(review_id)
        updated = self._store.update_review(
            record,
            {"status": ReviewStatus.REJECTED, "rejection_reason": reason},
        )
        self._refresh_creator_rating(updated.creator_id)
        return self._to_review(updated)

    def set_reply(self, *, principal: Principal, review_id: str, reply: str) -> Review:
        self._authz.require(principal, ResourceKind.REVIEW, review_id, Relationship.SUBJECT_OR_ADMIN)
        record = self._get_review(review_id)
        updated = self._store.update_review(record, {"reply": reply, "reply_date": datetime.now(UTC)})
        self._invalidate(updated.creator_id)
        return self._to_review(updated)

    def delete_reply(self, *, principal: Principal, review_id: str) -> Review:
        self._authz.require(principal, ResourceKind.REVIEW, review_id, Relationship.SUBJECT_OR_ADMIN)
        record = self._get_review(review_id)
        updated = self._store.update_review(record, {"reply": None, "reply_date": None})
        self._invalidate(updated.creator_id)
        return self._to_review(updated)

    def _get_review(self, review_id: str) -> ReviewRecord:
        record = self._store.get_review(review_id)
        if record is None:
            raise not_found()
        return record

    def _refresh_creator_rating(self, creator_id: str) -> None:
        """Recompute the creator's average rating over approved reviews."""
        self._invalidate(creator_id)
        creator = self._store.get_creator(creator_id)
        if creator is None:
            logger.warning(
                "reviews.rating_refresh_skipped creator_id=%s reason=creator_missing",
                safe_log_identifier(creator_id, prefix="crt"),
            )
            return

        approved = self._store.list_reviews(creator_id=creator_id, status=ReviewStatus.APPROVED)
        if approved:
            average = round(sum(review.rating for review in approved) / len(approved), 1)
        else:
            average = 0.0
        self._store.update_creator(creator, {"average_rating": average, "total_reviews": len(approved)})
        self._cache.clear_prefix(CREATORS_LIST_PREFIX)

    def _invalidate(self, creator_id: str) -> None:
        self._cache.clear_prefix(_creator_reviews_prefix(creator_id))

    @staticmethod
    def _to_review(record: ReviewRecord) -> Review:
        return Review(
            id=record.id,
            business_id=record.business_id,
            creator_id=record.creator_id,
            rating=record.rating,
            comment=record.comment,
            status=record.status,
            rejection_reason=record.rejection_reason,
            reply=record.reply,
            reply_date=record.reply_date,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
