"""Application exception types."""

from app.schemas.error import ErrorResponse


class ApiError(Exception):
    """Structured API error that maps directly to contract error payloads."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.payload = ErrorResponse(code=code, message=message, details=details)
        self.headers = headers
        super().__init__(message)


def unauthenticated(message: str = "Not signed in. Please sign in.") -> ApiError:
    return ApiError(status_code=401, code="UNAUTHORIZED", message=message)


def profile_missing() -> ApiError:
    return ApiError(status_code=404, code="PROFILE_NOT_FOUND", message="User profile not found.")


def forbidden(message: str = "You are not allowed to perform this action.") -> ApiError:
    return ApiError(status_code=403, code="FORBIDDEN", message=message)


def not_found() -> ApiError:
    return ApiError(status_code=404, code="RESOURCE_NOT_FOUND", message="Resource not found")


def already_exists(message: str, details: dict | None = None) -> ApiError:
    return ApiError(status_code=409, code="ALREADY_EXISTS", message=message, details=details)


def rate_limited(retry_after: int) -> ApiError:
    return ApiError(
        status_code=429,
        code="RATE_LIMITED",
        message="Too many requests. Please try again later.",
        details={"retry_after": retry_after},
        headers={"Retry-After": str(retry_after)},
    )


def internal_error(message: str = "Authentication check failed.") -> ApiError:
    return ApiError(status_code=500, code="INTERNAL_ERROR", message=message)


__all__ = [
    "ApiError",
    "already_exists",
    "forbidden",
    "internal_error",
    "not_found",
    "profile_missing",
    "rate_limited",
    "unauthenticated",
]
