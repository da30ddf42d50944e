"""Process-local expiring cache for public listing responses."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
import time
from typing import Any

CREATORS_LIST_PREFIX = "creators:list"
CREATOR_REVIEWS_PREFIX = "reviews:creator:"


@dataclass(slots=True)
class _CacheEntry:
    value: Any
    expires_at: float


@dataclass(slots=True)
class ResponseCache:
    default_ttl: float = 120.0
    clock: Callable[[], float] = time.monotonic
    _entries: dict[str, _CacheEntry] = field(default_factory=dict)

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self.clock() >= entry.expires_at:
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        lifetime = self.default_ttl if ttl is None else ttl
        self._entries[key] = _CacheEntry(value=value, expires_at=self.clock() + lifetime)

    def clear(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear_prefix(self, prefix: str) -> None:
        for key in [key for key in self._entries if key.startswith(prefix)]:
            del self._entries[key]

    def clear_all(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
