"""Review API schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class ReviewStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Review(BaseModel):
    id: str
    business_id: str
    creator_id: str
    rating: int
    comment: str | None = None
    status: ReviewStatus
    rejection_reason: str | None = None
    reply: str | None = None
    reply_date: datetime | None = None
    created_at: datetime
    updated_at: datetime


class CreateReviewRequest(BaseModel):
    business_id: str = Field(min_length=1)
    creator_id: str = Field(min_length=1)
    rating: int = Field(ge=1, le=5)
    comment: str | None = Field(default=None, max_length=1000)


class UpdateReviewRequest(BaseModel):
    rating: int | None = Field(default=None, ge=1, le=5)
    comment: str | None = Field(default=None, max_length=1000)
    status: ReviewStatus | None = None
    rejection_reason: str | None = Field(default=None, max_length=1000)

    @field_validator("rating", "status")
    @classmethod
    def _reject_null(cls, value):
        if value is None:
            raise ValueError("Field cannot be null")
        return value


class RejectReviewRequest(BaseModel):
    reason: str | None = Field(default=None, max_length=1000)


class ReviewReplyRequest(BaseModel):
    reply: str = Field(max_length=2000)

    @field_validator("reply")
    @classmethod
    def _reply_not_blank(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("Reply is required")
        return stripped
