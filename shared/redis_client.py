"""
redis_client.py – lazy Redis connection + the alert dedup store
===============================================================

• `LazyRedis(url)` connects on first attribute access and retries a few
  times before giving up; one instance is built per scan invocation.
• `DedupStore` keeps, per (strategy, symbol, timeframe), the close time of
  the last candle we already alerted on; `lock(key)` guards read → send → set
  across processes.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Optional

import redis

from .constants import KEY_LAST_SENT
from .logging import get_logger

log = get_logger("shared.redis")


# ───── LAZY CONNECTION ────────────────────────────────────────────────
class LazyRedis:
    """Proxy object that connects on first attribute access (bounded retry)."""

    def __init__(self, url: str, attempts: int = 3, delay: float = 2.0,
                 socket_timeout: float = 5.0) -> None:
        self.url = url
        self.attempts = max(1, attempts)
        self.delay = delay
        self.socket_timeout = socket_timeout
        self._client: Optional[redis.Redis] = None

    def __getattr__(self, name: str) -> Callable[..., Any]:  # noqa: D401
        if self._client is None:
            self._connect()
        return getattr(self._client, name)

    def _connect(self) -> None:
        for attempt in range(1, self.attempts + 1):
            try:
                client = redis.Redis.from_url(
                    self.url,
                    decode_responses=True,
                    socket_timeout=self.socket_timeout,
                )
                client.ping()
                self._client = client
                log.info("Connected to Redis at %s", self.url)
                return
            except redis.RedisError as exc:
                if attempt == self.attempts:
                    raise
                log.warning("Redis unavailable – retrying in %.0f s (%s)", self.delay, exc)
                time.sleep(self.delay)


# ───── DEDUP STORE ────────────────────────────────────────────────────
def dedup_key(strategy: str, symbol: str, timeframe: str) -> str:
    return KEY_LAST_SENT.format(strategy, symbol, timeframe)


class DedupStore:
    """`get(key) -> int | None`, `set(key, int)` on top of a Redis client."""

    def __init__(self, client: Any) -> None:
        self.client = client

    def get(self, key: str) -> Optional[int]:
        raw = self.client.get(key)
        if raw is None:
            return None
        try:
            return int(float(raw))
        except (TypeError, ValueError):
            log.warning("ignoring non-numeric value under %s: %r", key, raw)
            return None

    def set(self, key: str, value: int) -> None:
        self.client.set(key, int(value))

    def lock(self, key: str, timeout: float = 30.0, blocking_timeout: float = 10.0) -> Any:
        """Cross-process lock on `key`; raises `redis.exceptions.LockError` if not acquired."""
        return self.client.lock(f"{key}:lock", timeout=timeout,
                                blocking_timeout=blocking_timeout)
