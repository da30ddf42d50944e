"""API error response schemas."""

from typing import Any
from typing import Literal

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: dict[str, Any] | None = None


class UnauthorizedError(BaseModel):
    code: Literal["UNAUTHORIZED"]
    message: str


class ForbiddenError(BaseModel):
    code: Literal["FORBIDDEN"]
    message: str


class NoLeakNotFoundError(BaseModel):
    code: Literal["RESOURCE_NOT_FOUND"]
    message: str


class AlreadyExistsError(BaseModel):
    code: Literal["ALREADY_EXISTS"]
    message: str
    details: dict[str, Any] | None = None


class RateLimitedErrorDetails(BaseModel):
    retry_after: int


class RateLimitedError(BaseModel):
    code: Literal["RATE_LIMITED"]
    message: str
    details: RateLimitedErrorDetails
