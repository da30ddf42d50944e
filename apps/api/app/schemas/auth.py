"""Authentication schemas."""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class Role(str, Enum):
    CREATOR = "creator"
    BUSINESS = "business"
    ADMIN = "admin"


class SessionSubject(BaseModel):
    """Authenticated subject as reported by the session provider."""

    user_id: str = Field(min_length=1)
    email: str = ""


class Principal(BaseModel):
    """Resolved identity used by business services.

    ``creator_id`` is only ever set for creators and ``business_id`` only for
    businesses; either may be absent when the profile row does not exist.
    """

    id: str = Field(min_length=1)
    email: str = ""
    role: Role
    creator_id: str | None = None
    business_id: str | None = None

    @model_validator(mode="after")
    def _role_specific_ids_match_role(self) -> "Principal":
        if self.creator_id is not None and self.role is not Role.CREATOR:
            raise ValueError("creator_id is only valid for creator principals")
        if self.business_id is not None and self.role is not Role.BUSINESS:
            raise ValueError("business_id is only valid for business principals")
        return self
