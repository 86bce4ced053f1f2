"""
Server-side session storage.

Sessions are small JSON-serialisable records keyed by an opaque session id.
The store owns expiry: a record past its TTL is never returned. Two backends
are provided:

- ``InMemorySessionStore``: process-local, lock protected, expired entries are
  dropped on read and swept in bulk at most once per prune interval.
- ``RedisSessionStore``: shared between workers and restarts; expiry is
  delegated to Redis (``SETEX``).
"""

from __future__ import annotations

import json
import logging
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class SessionStore(ABC):
    @abstractmethod
    def get(self, sid: str) -> dict[str, Any] | None: ...

    @abstractmethod
    def set(self, sid: str, data: dict[str, Any], ttl_seconds: int) -> None: ...

    @abstractmethod
    def delete(self, sid: str) -> None: ...

    def prune(self) -> int:
        """Drop expired entries; returns how many were removed."""
        return 0


class InMemorySessionStore(SessionStore):
    def __init__(self, prune_interval_seconds: int = 24 * 3600, clock: Callable[[], float] = time.time):
        self._d: dict[str, tuple[float, dict[str, Any]]] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self._prune_interval = prune_interval_seconds
        self._last_prune = clock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._d)

    def get(self, sid: str) -> dict[str, Any] | None:
        self._maybe_prune()
        now = self._clock()
        with self._lock:
            v = self._d.get(sid)
            if not v:
                return None
            exp, payload = v
            if now >= exp:
                self._d.pop(sid, None)
                return None
            return dict(payload)

    def set(self, sid: str, data: dict[str, Any], ttl_seconds: int) -> None:
        exp = self._clock() + ttl_seconds
        with self._lock:
            self._d[sid] = (exp, dict(data))

    def delete(self, sid: str) -> None:
        with self._lock:
            self._d.pop(sid, None)

    def prune(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [k for k, (exp, _) in self._d.items() if now >= exp]
            for k in expired:
                del self._d[k]
            self._last_prune = now
        if expired:
            logger.debug("Pruned %d expired sessions", len(expired))
        return len(expired)

    def _maybe_prune(self) -> None:
        if self._clock() - self._last_prune >= self._prune_interval:
            self.prune()


class RedisSessionStore(SessionStore):
    def __init__(self, url: str | None = None, namespace: str = "vitallog:session", client: Any = None):
        if client is None:
            import redis

            client = redis.Redis.from_url(url, decode_responses=True)
        self._redis = client
        self.ns = namespace

    def _key(self, sid: str) -> str:
        return f"{self.ns}:{sid}"

    def get(self, sid: str) -> dict[str, Any] | None:
        raw = self._redis.get(self._key(sid))
        return json.loads(raw) if raw else None

    def set(self, sid: str, data: dict[str, Any], ttl_seconds: int) -> None:
        self._redis.setex(self._key(sid), ttl_seconds, json.dumps(data))

    def delete(self, sid: str) -> None:
        self._redis.delete(self._key(sid))


def build_session_store(backend: str, redis_url: str, prune_interval_seconds: int) -> SessionStore:
    if backend == "memory":
        return InMemorySessionStore(prune_interval_seconds=prune_interval_seconds)
    if backend == "redis":
        return RedisSessionStore(redis_url)
    raise ValueError(f"Unknown session backend: {backend!r}")
