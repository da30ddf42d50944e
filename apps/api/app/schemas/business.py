"""Business profile API schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, HttpUrl, field_validator


class SubscriptionType(str, Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Business(BaseModel):
    id: str
    user_id: str
    company_name: str
    email: str
    phone: str | None = None
    website: str | None = None
    industry: str | None = None
    description: str | None = None
    logo: str | None = None
    subscription_type: SubscriptionType
    subscription_status: str
    subscribed_at: datetime
    expires_at: datetime
    created_at: datetime


class UpdateBusinessRequest(BaseModel):
    company_name: str | None = Field(default=None, min_length=2, max_length=200)
    phone: str | None = Field(default=None, max_length=30)
    website: HttpUrl | None = None
    industry: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=2000)
    logo: str | None = Field(default=None, max_length=500000)

    @field_validator("company_name")
    @classmethod
    def _company_name_not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("Company name cannot be null")
        return value
