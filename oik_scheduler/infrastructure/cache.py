"""Read-through projection cache with TTL and tag-based invalidation"""

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Iterable, Optional, Protocol, Set, Tuple

from oik_scheduler.infrastructure.observability.metrics import cache_lookup_counter


class ProjectionCache(Protocol):
    """Cache contract used by the request boundary; the domain never sees it"""

    def get(self, key: Hashable) -> Optional[Any]: ...

    def put(self, key: Hashable, value: Any, ttl_seconds: float, tags: Iterable[str] = ()) -> None: ...

    def invalidate(self, tags: Iterable[str]) -> int: ...


@dataclass
class _Entry:
    value: Any
    expires_at: float
    tags: Set[str]


class InMemoryProjectionCache:
    """Process-local cache; entries expire after their TTL or when any of their tags is invalidated"""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._store: Dict[Hashable, _Entry] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Optional[Any]:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                cache_lookup_counter.labels(result="miss").inc()
                return None
            if entry.expires_at <= self._clock():
                del self._store[key]
                cache_lookup_counter.labels(result="expired").inc()
                return None
            cache_lookup_counter.labels(result="hit").inc()
            return entry.value

    def put(self, key: Hashable, value: Any, ttl_seconds: float, tags: Iterable[str] = ()) -> None:
        """Store a value, evicting every entry that has already expired"""
        with self._lock:
            now = self._clock()
            expired = [k for k, entry in self._store.items() if entry.expires_at <= now]
            for k in expired:
                del self._store[k]
            self._store[key] = _Entry(value=value, expires_at=now + ttl_seconds, tags=set(tags))

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def invalidate(self, tags: Iterable[str]) -> int:
        """Drop every entry carrying any of the tags; returns how many were dropped"""
        wanted = set(tags)
        with self._lock:
            stale = [key for key, entry in self._store.items() if entry.tags & wanted]
            for key in stale:
                del self._store[key]
        return len(stale)


def get_or_compute(
    cache: ProjectionCache,
    key: Hashable,
    compute: Callable[[], Any],
    ttl_seconds: float,
    tags: Iterable[str] = (),
) -> Tuple[Any, bool]:
    """Return (value, cache_hit), computing and storing the value on a miss"""
    cached = cache.get(key)
    if cached is not None:
        return cached, True

    value = compute()
    cache.put(key, value, ttl_seconds, tags)
    return value, False
