"""FastAPI application entrypoint."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.cache import ResponseCache
from app.core.config import get_settings
from app.errors import ApiError
from app.repositories.memory import InMemoryStore
from app.routes import (
    admin_router,
    businesses_router,
    creators_router,
    job_postings_router,
    registration_router,
    reviews_router,
)
from app.schemas.error import ErrorResponse
from app.services.rate_limit import RateLimiter


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request payload"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = str(first.get("msg") or "Invalid value")
    return f"{location}: {message}" if location else message


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="UGC Market API", version="1.0.0")
    app.state.store = InMemoryStore()
    app.state.cache = ResponseCache(default_ttl=settings.response_cache_ttl_seconds)
    app.state.rate_limiter = RateLimiter(app.state.store)

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.payload.model_dump(mode="json", exclude_none=True),
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        payload = ErrorResponse(code="VALIDATION_ERROR", message=_first_validation_message(exc))
        return JSONResponse(status_code=400, content=payload.model_dump(exclude_none=True))

    api_prefix = "/api/v1"
    app.include_router(registration_router, prefix=api_prefix)
    app.include_router(admin_router, prefix=api_prefix)
    app.include_router(creators_router, prefix=api_prefix)
    app.include_router(businesses_router, prefix=api_prefix)
    app.include_router(reviews_router, prefix=api_prefix)
    app.include_router(job_postings_router, prefix=api_prefix)

    return app


app = create_app()
