"""Dependency wiring for routes."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
import logging
from secrets import compare_digest
from typing import Annotated, Literal
from uuid import uuid4

from fastapi import Depends, Request, Security
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer

from app.adapters.auth import FirebaseSessionVerifier, MockSessionVerifier, SessionVerifier
from app.core.cache import ResponseCache
from app.core.config import Settings, get_settings
from app.core.logging_safety import safe_log_identifier
from app.domain.roles import has_any_role
from app.errors import ApiError, forbidden, rate_limited
from app.repositories.memory import InMemoryStore
from app.schemas.auth import Principal, Role, SessionSubject
from app.services.businesses import BusinessService
from app.services.creators import CreatorService
from app.services.identity import IdentityResolver
from app.services.job_postings import JobPostingService
from app.services.rate_limit import RateLimiter, client_ip, get_api_limiter, get_auth_limiter
from app.services.registration import RegistrationService
from app.services.reviews import ReviewService

bearer_scheme = HTTPBearer(auto_error=False, scheme_name="bearerAuth")
admin_setup_secret_scheme = APIKeyHeader(
    name="X-Admin-Setup-Secret",
    auto_error=False,
    scheme_name="adminSetupSecret",
)
logger = logging.getLogger(__name__)


def _request_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get("X-Correlation-Id")
    if correlation_id:
        request.state.correlation_id = correlation_id
        return correlation_id

    generated = f"req-{uuid4()}"
    request.state.correlation_id = generated
    return generated


def _bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        return None
    return credentials.credentials


def get_store(request: Request) -> InMemoryStore:
    return request.app.state.store


def get_response_cache(request: Request) -> ResponseCache:
    return request.app.state.cache


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def get_session_verifier(settings: Annotated[Settings, Depends(get_settings)]) -> SessionVerifier:
    """Resolve provider adapter from configuration."""
    if settings.auth_provider == "firebase":
        return FirebaseSessionVerifier(
            project_id=settings.firebase_project_id,
            audience=settings.firebase_audience,
        )
    return MockSessionVerifier()


def get_identity_resolver(
    verifier: Annotated[SessionVerifier, Depends(get_session_verifier)],
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> IdentityResolver:
    return IdentityResolver(verifier, store)


def _log_rejection(request: Request, exc: ApiError) -> None:
    logger.warning(
        "auth.rejected correlation_id=%s method=%s path=%s status=%s reason=%s",
        safe_log_identifier(_request_correlation_id(request), prefix="cid"),
        request.method,
        request.url.path,
        exc.status_code,
        exc.payload.code,
    )


async def get_current_principal(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
    resolver: Annotated[IdentityResolver, Depends(get_identity_resolver)],
) -> Principal:
    """Resolve the bearer session to a principal and attach it to request context."""
    try:
        principal = resolver.resolve_identity(_bearer_token(credentials))
    except ApiError as exc:
        _log_rejection(request, exc)
        raise

    logger.info(
        "auth.accepted correlation_id=%s method=%s path=%s principal_id=%s role=%s",
        safe_log_identifier(_request_correlation_id(request), prefix="cid"),
        request.method,
        request.url.path,
        safe_log_identifier(principal.id, prefix="pid"),
        principal.role.value,
    )
    request.state.principal = principal
    return principal


async def get_optional_principal(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
    resolver: Annotated[IdentityResolver, Depends(get_identity_resolver)],
) -> Principal | None:
    """Like ``get_current_principal`` but anonymous and unregistered callers yield ``None``."""
    token = _bearer_token(credentials)
    if token is None:
        return None
    try:
        principal = resolver.resolve_identity(token)
    except ApiError as exc:
        if exc.status_code in (401, 404):
            return None
        raise
    request.state.principal = principal
    return principal


async def get_session_subject(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
    resolver: Annotated[IdentityResolver, Depends(get_identity_resolver)],
) -> SessionSubject:
    """Authenticate the session without requiring an application profile."""
    try:
        subject = resolver.resolve_session(_bearer_token(credentials))
    except ApiError as exc:
        _log_rejection(request, exc)
        raise
    request.state.session_subject = subject
    return subject


def require_roles(*roles: Role) -> Callable[..., Awaitable[Principal]]:
    """Build a dependency that admits only principals holding one of ``roles``."""

    async def _require_roles(
        request: Request,
        principal: Annotated[Principal, Depends(get_current_principal)],
    ) -> Principal:
        if not has_any_role(principal, roles):
            logger.warning(
                "auth.forbidden correlation_id=%s path=%s principal_id=%s role=%s",
                safe_log_identifier(_request_correlation_id(request), prefix="cid"),
                request.url.path,
                safe_log_identifier(principal.id, prefix="pid"),
                principal.role.value,
            )
            raise forbidden()
        return principal

    return _require_roles


def enforce_rate_limit(kind: Literal["auth", "api"]) -> Callable[..., Awaitable[None]]:
    """Build a dependency applying the named limiter to the caller's network address."""

    async def _enforce_rate_limit(
        request: Request,
        settings: Annotated[Settings, Depends(get_settings)],
        limiter: Annotated[RateLimiter, Depends(get_rate_limiter)],
    ) -> None:
        if not settings.rate_limit_enabled:
            return
        config = get_auth_limiter(settings) if kind == "auth" else get_api_limiter(settings)
        decision = limiter.check_and_record(config, client_ip(request))
        if not decision.admitted:
            raise rate_limited(decision.retry_after or config.window_seconds)

    return _enforce_rate_limit


async def require_admin_setup_secret(
    request: Request,
    setup_secret: Annotated[str | None, Security(admin_setup_secret_scheme)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> None:
    """Validate the one-off admin bootstrap secret."""
    expected = settings.admin_setup_secret
    if not expected:
        raise forbidden("Admin setup is disabled.")
    if setup_secret is None or not compare_digest(setup_secret, expected):
        logger.warning(
            "admin.setup_rejected correlation_id=%s reason=invalid_setup_secret",
            safe_log_identifier(_request_correlation_id(request), prefix="cid"),
        )
        raise forbidden("Invalid admin setup secret.")


def get_registration_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> RegistrationService:
    return RegistrationService(store)


def get_creator_service(
    store: Annotated[InMemoryStore, Depends(get_store)],
    cache: Annotated[ResponseCache, Depends(get_response_cache)],
) -> CreatorService:
    return CreatorService(store, cache)


def get_business_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> BusinessService:
    return BusinessService(store)


def get_review_service(
    store: Annotated[InMemoryStore, Depends(get_store)],
    cache: Annotated[ResponseCache, Depends(get_response_cache)],
) -> ReviewService:
    return ReviewService(store, cache)


def get_job_posting_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> JobPostingService:
    return JobPostingService(store)
