"""TTL key/value store used for the shared weather snapshot."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Generic, Protocol, TypeVar

from django.core.cache import caches
from django.utils import timezone

T = TypeVar("T")


@dataclass(frozen=True)
class CacheRecord(Generic[T]):
    value: T
    expires_at: datetime


@dataclass(frozen=True)
class StoredValue(Generic[T]):
    value: T
    remaining: timedelta


class SnapshotStore(Protocol[T]):
    def get(self, key: str) -> StoredValue[T] | None: ...

    def set(self, key: str, value: T, ttl_seconds: int) -> None: ...

    def delete(self, key: str) -> None: ...


class DjangoCacheStore(Generic[T]):
    """Django cache backed store.

    Each key holds one `CacheRecord`; `set` replaces it whole. The backend
    timeout equals the TTL, and `expires_at` is checked again on read so the
    remaining life is known to callers.
    """

    def __init__(
        self,
        alias: str = "default",
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.alias = alias
        self._clock = clock

    def _now(self) -> datetime:
        if self._clock is not None:
            return self._clock()
        return timezone.now()

    def get(self, key: str) -> StoredValue[T] | None:
        record = caches[self.alias].get(key)
        if not isinstance(record, CacheRecord):
            return None
        remaining = record.expires_at - self._now()
        if remaining <= timedelta(0):
            return None
        return StoredValue(value=record.value, remaining=remaining)

    def set(self, key: str, value: T, ttl_seconds: int) -> None:
        record = CacheRecord(
            value=value,
            expires_at=self._now() + timedelta(seconds=ttl_seconds),
        )
        caches[self.alias].set(key, record, ttl_seconds)

    def delete(self, key: str) -> None:
        caches[self.alias].delete(key)
