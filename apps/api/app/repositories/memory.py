"""In-memory repositories used by the API and tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

from app.schemas.auth import Role
from app.schemas.business import SubscriptionType
from app.schemas.creator import CreatorStatus
from app.schemas.job_posting import JobPostingStatus
from app.schemas.review import ReviewStatus

_YEARLY_SUBSCRIPTION = timedelta(days=365)
_MONTHLY_SUBSCRIPTION = timedelta(days=30)


@dataclass(slots=True)
class UserRecord:
    id: str
    email: str
    role: Role
    created_at: datetime


@dataclass(slots=True)
class CreatorRecord:
    id: str
    user_id: str
    name: str
    email: str
    bio: str
    location: str
    price_from: float
    status: CreatorStatus
    created_at: datetime
    phone: str | None = None
    photo: str | None = None
    categories: list[str] = field(default_factory=list)
    platforms: list[str] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)
    instagram: str | None = None
    tiktok: str | None = None
    youtube: str | None = None
    average_rating: float = 0.0
    total_reviews: int = 0


@dataclass(slots=True)
class BusinessRecord:
    id: str
    user_id: str
    company_name: str
    email: str
    subscription_type: SubscriptionType
    subscription_status: str
    subscribed_at: datetime
    expires_at: datetime
    created_at: datetime
    phone: str | None = None
    website: str | None = None
    industry: str | None = None
    description: str | None = None
    logo: str | None = None


@dataclass(slots=True)
class ReviewRecord:
    id: str
    business_id: str
    creator_id: str
    rating: int
    comment: str | None
    status: ReviewStatus
    created_at: datetime
    updated_at: datetime
    rejection_reason: str | None = None
    reply: str | None = None
    reply_date: datetime | None = None


@dataclass(slots=True)
class JobPostingRecord:
    id: str
    business_id: str
    title: str
    description: str
    category: str
    status: JobPostingStatus
    created_at: datetime
    updated_at: datetime
    platforms: list[str] = field(default_factory=list)
    budget_type: str = "fixed"
    budget_min: int | None = None
    budget_max: int | None = None
    application_deadline: datetime | None = None


@dataclass(slots=True)
class RateLimitRecord:
    key: str
    created_at: datetime


@dataclass(slots=True)
class InMemoryStore:
    """Simple, deterministic persistence layer standing in for the hosted database."""

    users: dict[str, UserRecord] = field(default_factory=dict)
    creators: dict[str, CreatorRecord] = field(default_factory=dict)
    businesses: dict[str, BusinessRecord] = field(default_factory=dict)
    reviews: dict[str, ReviewRecord] = field(default_factory=dict)
    job_postings: dict[str, JobPostingRecord] = field(default_factory=dict)
    rate_limits: list[RateLimitRecord] = field(default_factory=list)
    profile_write_count: int = 0
    review_write_count: int = 0
    job_posting_write_count: int = 0
    # When set, every rate_limits operation raises, as if the table were missing.
    rate_limit_failure_message: str | None = None

    # users

    def get_user(self, user_id: str) -> UserRecord | None:
        return self.users.get(user_id)

    def create_user(self, *, user_id: str, email: str, role: Role) -> UserRecord:
        user = UserRecord(id=user_id, email=email, role=role, created_at=datetime.now(UTC))
        self.users[user.id] = user
        self.profile_write_count += 1
        return user

    # creators

    def create_creator(self, *, user_id: str, email: str, **fields: Any) -> CreatorRecord:
        creator = CreatorRecord(
            id=str(uuid4()),
            user_id=user_id,
            email=email,
            status=fields.pop("status", CreatorStatus.PENDING),
            created_at=datetime.now(UTC),
            **fields,
        )
        self.creators[creator.id] = creator
        self.profile_write_count += 1
        return creator

    def get_creator(self, creator_id: str) -> CreatorRecord | None:
        return self.creators.get(creator_id)

    def get_creator_by_user(self, user_id: str) -> CreatorRecord | None:
        for creator in self.creators.values():
            if creator.user_id == user_id:
                return creator
        return None

    def list_creators(self, *, status: CreatorStatus | None = None) -> list[CreatorRecord]:
        creators = [
            record for record in reversed(self.creators.values()) if status is None or record.status == status
        ]
        creators.sort(key=lambda record: record.created_at, reverse=True)
        return creators

    def update_creator(self, creator: CreatorRecord, changes: dict[str, Any]) -> CreatorRecord:
        for key, value in changes.items():
            setattr(creator, key, value)
        self.profile_write_count += 1
        return creator

    # businesses

    def create_business(
        self,
        *,
        user_id: str,
        email: str,
        company_name: str,
        plan: SubscriptionType,
        **fields: Any,
    ) -> BusinessRecord:
        now = datetime.now(UTC)
        term = _YEARLY_SUBSCRIPTION if plan is SubscriptionType.YEARLY else _MONTHLY_SUBSCRIPTION
        business = BusinessRecord(
            id=str(uuid4()),
            user_id=user_id,
            company_name=company_name,
            email=email,
            subscription_type=plan,
            subscription_status="active",
            subscribed_at=now,
            expires_at=now + term,
            created_at=now,
            **fields,
        )
        self.businesses[business.id] = business
        self.profile_write_count += 1
        return business

    def get_business(self, business_id: str) -> BusinessRecord | None:
        return self.businesses.get(business_id)

    def get_business_by_user(self, user_id: str) -> BusinessRecord | None:
        for business in self.businesses.values():
            if business.user_id == user_id:
                return business
        return None

    def update_business(self, business: BusinessRecord, changes: dict[str, Any]) -> BusinessRecord:
        for key, value in changes.items():
            setattr(business, key, value)
        self.profile_write_count += 1
        return business

    # reviews

    def create_review(
        self,
        *,
        business_id: str,
        creator_id: str,
        rating: int,
        comment: str | None,
    ) -> ReviewRecord:
        now = datetime.now(UTC)
        review = ReviewRecord(
            id=str(uuid4()),
            business_id=business_id,
            creator_id=creator_id,
            rating=rating,
            comment=comment,
            status=ReviewStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        self.reviews[review.id] = review
        self.review_write_count += 1
        return review

    def get_review(self, review_id: str) -> ReviewRecord | None:
        return self.reviews.get(review_id)

    def find_review(self, *, business_id: str, creator_id: str) -> ReviewRecord | None:
        for review in self.reviews.values():
            if review.business_id == business_id and review.creator_id == creator_id:
                return review
        return None

    def list_reviews(
        self,
        *,
        business_id: str | None = None,
        creator_id: str | None = None,
        status: ReviewStatus | None = None,
    ) -> list[ReviewRecord]:
        reviews = [
            record
            for record in reversed(self.reviews.values())
            if (business_id is None or record.business_id == business_id)
            and (creator_id is None or record.creator_id == creator_id)
            and (status is None or record.status == status)
        ]
        reviews.sort(key=lambda record: record.created_at, reverse=True)
        return reviews

    def update_review(self, review: ReviewRecord, changes: dict[str, Any]) -> ReviewRecord:
        for key, value in changes.items():
            setattr(review, key, value)
        review.updated_at = datetime.now(UTC)
        self.review_write_count += 1
        return review

    def delete_review(self, review_id: str) -> None:
        if self.reviews.pop(review_id, None) is not None:
            self.review_write_count += 1

    # job postings

    def create_job_posting(
        self,
        *,
        business_id: str,
        status: JobPostingStatus,
        **fields: Any,
    ) -> JobPostingRecord:
        now = datetime.now(UTC)
        posting = JobPostingRecord(
            id=str(uuid4()),
            business_id=business_id,
            status=status,
            created_at=now,
            updated_at=now,
            **fields,
        )
        self.job_postings[posting.id] = posting
        self.job_posting_write_count += 1
        return posting

    def get_job_posting(self, posting_id: str) -> JobPostingRecord | None:
        return self.job_postings.get(posting_id)

    def list_job_postings(
        self,
        *,
        business_id: str | None = None,
        status: JobPostingStatus | None = None,
        category: str | None = None,
        limit: int | None = None,
    ) -> list[JobPostingRecord]:
        postings = [
            record
            for record in reversed(self.job_postings.values())
            if (business_id is None or record.business_id == business_id)
            and (status is None or record.status == status)
            and (category is None or record.category == category)
        ]
        postings.sort(key=lambda record: record.created_at, reverse=True)
        return postings[:limit]

    def update_job_posting(self, posting: JobPostingRecord, changes: dict[str, Any]) -> JobPostingRecord:
        for key, value in changes.items():
            setattr(posting, key, value)
        posting.updated_at = datetime.now(UTC)
        self.job_posting_write_count += 1
        return posting

    # rate limits

    def delete_rate_limits_before(self, cutoff: datetime, *, key: str | None = None) -> int:
        self._maybe_raise_rate_limit_failure()
        kept = [
            record
            for record in self.rate_limits
            if record.created_at >= cutoff or (key is not None and record.key != key)
        ]
        removed = len(self.rate_limits) - len(kept)
        self.rate_limits = kept
        return removed

    def count_rate_limits(self, *, key: str, since: datetime) -> int:
        self._maybe_raise_rate_limit_failure()
        return sum(1 for record in self.rate_limits if record.key == key and record.created_at >= since)

    def insert_rate_limit(self, *, key: str, created_at: datetime) -> RateLimitRecord:
        self._maybe_raise_rate_limit_failure()
        record = RateLimitRecord(key=key, created_at=created_at)
        self.rate_limits.append(record)
        return record

    def _maybe_raise_rate_limit_failure(self) -> None:
        if self.rate_limit_failure_message is not None:
            raise RuntimeError(self.rate_limit_failure_message)
