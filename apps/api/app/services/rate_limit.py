"""Fixed-window rate limiting backed by the shared ``rate_limits`` collection."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
import logging

from fastapi import Request

from app.core.config import Settings
from app.core.logging_safety import safe_rate_limit_key
from app.repositories.memory import InMemoryStore

logger = logging.getLogger(__name__)

FALLBACK_CLIENT_IP = "127.0.0.1"


@dataclass(frozen=True, slots=True)
class RateLimitConfig:
    max_requests: int
    window_seconds: int
    prefix: str


AUTH_LIMIT = RateLimitConfig(max_requests=5, window_seconds=60, prefix="auth")
API_LIMIT = RateLimitConfig(max_requests=30, window_seconds=60, prefix="api")


def get_auth_limiter(settings: Settings | None = None) -> RateLimitConfig:
    if settings is None:
        return AUTH_LIMIT
    return RateLimitConfig(
        max_requests=settings.auth_rate_limit_max_requests,
        window_seconds=settings.auth_rate_limit_window_seconds,
        prefix=AUTH_LIMIT.prefix,
    )


def get_api_limiter(settings: Settings | None = None) -> RateLimitConfig:
    if settings is None:
        return API_LIMIT
    return RateLimitConfig(
        max_requests=settings.api_rate_limit_max_requests,
        window_seconds=settings.api_rate_limit_window_seconds,
        prefix=API_LIMIT.prefix,
    )


@dataclass(frozen=True, slots=True)
class RateLimitDecision:
    admitted: bool
    retry_after: int | None = None


ADMIT = RateLimitDecision(admitted=True)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RateLimiter:
    """Counts one record per admitted request inside a trailing window.

    Count and insert are separate store calls, so concurrent bursts from one
    caller can overshoot ``max_requests`` slightly. Any store failure admits
    the request.
    """

    def __init__(self, store: InMemoryStore, now: Callable[[], datetime] = _utcnow) -> None:
        self._store = store
        self._now = now

    def check_and_record(self, config: RateLimitConfig, identifier: str) -> RateLimitDecision:
        key = f"{config.prefix}:{identifier}"
        now = self._now()
        window_start = now - timedelta(seconds=config.window_seconds)

        try:
            self._store.delete_rate_limits_before(window_start, key=key)
            count = self._store.count_rate_limits(key=key, since=window_start)
            if count >= config.max_requests:
                logger.warning(
                    "ratelimit.rejected key=%s count=%s max_requests=%s window_seconds=%s",
                    safe_rate_limit_key(key),
                    count,
                    config.max_requests,
                    config.window_seconds,
                )
                return RateLimitDecision(admitted=False, retry_after=config.window_seconds)

            self._store.insert_rate_limit(key=key, created_at=now)
        except Exception as exc:
            logger.warning(
                "ratelimit.store_unavailable key=%s error=%s action=admit",
                safe_rate_limit_key(key),
                type(exc).__name__,
            )
            return ADMIT

        return ADMIT


def client_ip(request: Request) -> str:
    """Caller address: first ``X-Forwarded-For`` hop, else ``X-Real-IP``, else loopback."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop

    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()
    return FALLBACK_CLIENT_IP


__all__ = [
    "ADMIT",
    "API_LIMIT",
    "AUTH_LIMIT",
    "FALLBACK_CLIENT_IP",
    "RateLimitConfig",
    "RateLimitDecision",
    "RateLimiter",
    "client_ip",
    "get_api_limiter",
    "get_auth_limiter",
]
