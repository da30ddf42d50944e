"""Job posting service layer."""

from datetime import UTC, datetime

from app.domain.roles import is_admin
from app.errors import ApiError, forbidden, not_found
from app.repositories.memory import InMemoryStore, JobPostingRecord
from app.schemas.auth import Principal
from app.schemas.job_posting import (
    CreateJobPostingRequest,
    JobPosting,
    JobPostingStatus,
    UpdateJobPostingRequest,
)
from app.services.authorization import AuthorizationService, Relationship, ResourceKind


def _ensure_budget_range(budget_min: int | None, budget_max: int | None) -> None:
    if budget_min is not None and budget_max is not None and budget_min > budget_max:
        raise ApiError(
            status_code=400,
            code="VALIDATION_ERROR",
            message="budget_min must not exceed budget_max",
        )


def _is_accepting_applications(record: JobPostingRecord, now: datetime) -> bool:
    deadline = record.application_deadline
    if deadline is None:
        return True
    if deadline.tzinfo is None:
        deadline = deadline.replace(tzinfo=UTC)
    return deadline >= now


class JobPostingService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self._authz = AuthorizationService(store)

    def create_job_posting(self, *, principal: Principal, payload: CreateJobPostingRequest) -> JobPosting:
        if is_admin(principal):
            if self._store.get_business(payload.business_id) is None:
                raise not_found()
            initial_status = JobPostingStatus.OPEN
        else:
            self._authz.require(principal, ResourceKind.BUSINESS, payload.business_id, Relationship.OWNER)
            # Postings by businesses wait for admin approval.
            initial_status = JobPostingStatus.PENDING

        _ensure_budget_range(payload.budget_min, payload.budget_max)
        record = self._store.create_job_posting(
            status=initial_status,
            **payload.model_dump(),
        )
        return self._to_job_posting(record)

    def list_job_postings(
        self,
        *,
        business_id: str | None = None,
        category: str | None = None,
        status: JobPostingStatus | None = None,
        limit: int = 50,
    ) -> list[JobPosting]:
        if business_id is None:
            # Public board: open, unexpired postings only.
            now = datetime.now(UTC)
            records = [
                record
                for record in self._store.list_job_postings(
                    status=JobPostingStatus.OPEN,
                    category=category,
                )
                if _is_accepting_applications(record, now)
            ]
        else:
            records = [
                record
                for record in self._store.list_job_postings(
                    business_id=business_id,
                    status=status,
                    category=category,
                )
                if status is JobPostingStatus.DELETED or record.status is not JobPostingStatus.DELETED
            ]
        return [self._to_job_posting(record) for record in records[:limit]]

    def get_job_posting(self, *, posting_id: str) -> JobPosting:
        return self._to_job_posting(self._get_live_posting(posting_id))

    def update_job_posting(
        self,
        *,
        principal: Principal,
        posting_id: str,
        payload: UpdateJobPostingRequest,
    ) -> JobPosting:
        record = self._get_live_posting(posting_id)
        self._authz.require(principal, ResourceKind.JOB_POSTING, posting_id, Relationship.OWNER_OR_ADMIN)

        changes = payload.model_dump(exclude_unset=True)
        if changes.get("status") == JobPostingStatus.OPEN.value and not is_admin(principal):
            raise forbidden("Only an admin can publish a job posting.")
        if "status" in changes:
            changes["status"] = JobPostingStatus(changes["status"])

        _ensure_budget_range(
            changes.get("budget_min", record.budget_min),
            changes.get("budget_max", record.budget_max),
        )
        return self._to_job_posting(self._store.update_job_posting(record, changes))

    def delete_job_posting(self, *, principal: Principal, posting_id: str) -> None:
        record = self._get_live_posting(posting_id)
        self._authz.require(principal, ResourceKind.JOB_POSTING, posting_id, Relationship.OWNER_OR_ADMIN)
        self._store.update_job_posting(record, {"status": JobPostingStatus.DELETED})

    def _get_live_posting(self, posting_id: str) -> JobPostingRecord:
        record = self._store.get_job_posting(posting_id)
        if record is None or record.status is JobPostingStatus.DELETED:
            raise not_found()
        return record

    @staticmethod
    def _to_job_posting(record: JobPostingRecord) -> JobPosting:
        return JobPosting(
            id=record.id,
            business_id=record.business_id,
            title=record.title,
            description=record.description,
            category=record.category,
            platforms=list(record.platforms),
            budget_type=record.budget_type,
            budget_min=record.budget_min,
            budget_max=record.budget_max,
            application_deadline=record.application_deadline,
            status=record.status,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
