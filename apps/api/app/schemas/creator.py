"""Creator profile API schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, EmailStr, Field, field_validator


class CreatorStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DEACTIVATED = "deactivated"


class Creator(BaseModel):
    id: str
    user_id: str
    name: str
    bio: str
    location: str
    price_from: float
    photo: str | None = None
    categories: list[str] = Field(default_factory=list)
    platforms: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    instagram: str | None = None
    tiktok: str | None = None
    youtube: str | None = None
    status: CreatorStatus
    average_rating: float = 0
    total_reviews: int = 0
    created_at: datetime
    # Contact fields are only populated for callers allowed to see them.
    email: str | None = None
    phone: str | None = None


class UpdateCreatorRequest(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=100)
    bio: str | None = Field(default=None, min_length=10, max_length=2000)
    location: str | None = Field(default=None, min_length=2, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=30)
    instagram: str | None = Field(default=None, max_length=100)
    tiktok: str | None = Field(default=None, max_length=100)
    youtube: str | None = Field(default=None, max_length=200)
    price_from: float | None = Field(default=None, ge=0)
    categories: list[str] | None = None
    platforms: list[str] | None = None
    languages: list[str] | None = None
    photo: str | None = Field(default=None, max_length=500000)
    status: CreatorStatus | None = None

    @field_validator("name", "bio", "location", "email", "price_from", "categories", "platforms", "languages", "status")
    @classmethod
    def _reject_null(cls, value):
        # Omit a field to leave it unchanged; these columns cannot be cleared.
        if value is None:
            raise ValueError("Field cannot be null")
        return value
