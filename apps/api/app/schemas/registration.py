"""Registration API schemas."""

from pydantic import BaseModel, Field, HttpUrl

from app.schemas.business import SubscriptionType


class RegisterCreatorRequest(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    bio: str = Field(min_length=10, max_length=2000)
    location: str = Field(min_length=2, max_length=100)
    price_from: float = Field(ge=0)
    categories: list[str] = Field(default_factory=list)
    platforms: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    instagram: str | None = Field(default=None, max_length=100)
    tiktok: str | None = Field(default=None, max_length=100)
    youtube: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=30)
    photo: str | None = Field(default=None, max_length=500000)


class RegisterBusinessRequest(BaseModel):
    company_name: str = Field(min_length=2, max_length=200)
    phone: str | None = Field(default=None, max_length=30)
    website: HttpUrl | None = None
    industry: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=2000)
    plan: SubscriptionType = SubscriptionType.MONTHLY


class RegistrationResponse(BaseModel):
    user_id: str
    role: str
    creator_id: str | None = None
    business_id: str | None = None
