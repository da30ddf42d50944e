"""Job posting API schemas."""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class JobPostingStatus(str, Enum):
    PENDING = "pending"
    OPEN = "open"
    CLOSED = "closed"
    DELETED = "deleted"


class JobPosting(BaseModel):
    id: str
    business_id: str
    title: str
    description: str
    category: str
    platforms: list[str] = Field(default_factory=list)
    budget_type: Literal["fixed", "hourly"] = "fixed"
    budget_min: int | None = None
    budget_max: int | None = None
    application_deadline: datetime | None = None
    status: JobPostingStatus
    created_at: datetime
    updated_at: datetime


class CreateJobPostingRequest(BaseModel):
    business_id: str = Field(min_length=1)
    title: str = Field(min_length=3, max_length=200)
    description: str = Field(min_length=10, max_length=5000)
    category: str = Field(min_length=1, max_length=100)
    platforms: list[str] = Field(default_factory=list)
    budget_type: Literal["fixed", "hourly"] = "fixed"
    budget_min: int | None = Field(default=None, ge=0)
    budget_max: int | None = Field(default=None, ge=0)
    application_deadline: datetime | None = None


class UpdateJobPostingRequest(BaseModel):
    title: str | None = Field(default=None, min_length=3, max_length=200)
    description: str | None = Field(default=None, min_length=10, max_length=5000)
    category: str | None = Field(default=None, min_length=1, max_length=100)
    platforms: list[str] | None = None
    budget_min: int | None = Field(default=None, ge=0)
    budget_max: int | None = Field(default=None, ge=0)
    application_deadline: datetime | None = None
    status: Literal["pending", "open", "closed"] | None = None

    @field_validator("title", "description", "category", "platforms", "status")
    @classmethod
    def _reject_null(cls, value):
        # Only the budget bounds and the deadline may be cleared with null.
        if value is None:
            raise ValueError("Field cannot be null")
        return value
