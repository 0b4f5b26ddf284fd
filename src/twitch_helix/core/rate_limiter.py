"""Rate-limit gates consulted before every outbound call.

The call pipeline only depends on the :class:`RateLimiter` protocol: a single
``acquire(bucket)`` coroutine that returns once the call may proceed, or
raises :class:`~twitch_helix.core.exceptions.RateLimitTimeoutError` when no
permit can be granted in time.

Two implementations ship with the library:

- :class:`UnlimitedRateLimiter` grants every permit immediately and leaves
  enforcement to Twitch's own ``429`` responses.
- :class:`RedisRateLimiter` implements a sliding window on Redis sorted sets
  (ZADD / ZREMRANGEBYSCORE / ZCARD) so that several processes sharing one
  Client ID also share one view of the budget.  Lua scripts make the
  check-and-set atomic.

Typical usage::

    redis_client = get_redis_client("redis://localhost:6379/0")
    limiter = RedisRateLimiter(redis_client)
    api = TwitchAPI(settings, rate_limiter=limiter)
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import redis.asyncio as aioredis
from redis.exceptions import NoScriptError

from twitch_helix.core.exceptions import RateLimitTimeoutError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class RateLimiter(Protocol):
    """Capability consumed by :class:`~twitch_helix.core.http.HttpCallHandler`."""

    async def acquire(self, bucket: str) -> None:
        """Suspend until a permit for *bucket* is granted."""
        ...


class UnlimitedRateLimiter:
    """Grants every permit immediately."""

    async def acquire(self, bucket: str) -> None:  # noqa: ARG002
        return None


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_WINDOW_SECONDS: dict[str, int] = {
    "minute": 60,
    "hour": 3600,
}


@dataclass
class RateLimitConfig:
    """Budget for one rate-limit bucket.

    Attributes:
        requests_per_minute: Maximum requests per 60-second window.
        requests_per_hour: Maximum requests per 3600-second window, or
            ``None`` for no hourly cap.
    """

    requests_per_minute: int = 60
    requests_per_hour: int | None = None


BUCKET_DEFAULTS: dict[str, RateLimitConfig] = {
    # Helix grants 800 points per minute per Client ID; almost every
    # endpoint costs one point.
    "helix": RateLimitConfig(requests_per_minute=800),
    "auth": RateLimitConfig(requests_per_minute=120),
}

_DEFAULT_CONFIG = RateLimitConfig()

# ---------------------------------------------------------------------------
# Lua scripts
# ---------------------------------------------------------------------------

# Atomic sliding-window check-and-acquire.
#
# KEYS[1]  sorted-set key for the window
# ARGV[1]  current timestamp (float string)
# ARGV[2]  window size in seconds
# ARGV[3]  maximum requests allowed in the window
# ARGV[4]  unique member ID for this request
# ARGV[5]  TTL for the key (seconds, slightly > window)
#
# Returns 1 if the slot was acquired, 0 if rate-limited.
_LUA_CHECK_AND_ACQUIRE = """
local key        = KEYS[1]
local now        = tonumber(ARGV[1])
local window     = tonumber(ARGV[2])
local limit      = tonumber(ARGV[3])
local member     = ARGV[4]
local ttl        = tonumber(ARGV[5])
local cutoff     = now - window

redis.call('ZREMRANGEBYSCORE', key, '-inf', cutoff)
local count = redis.call('ZCARD', key)
if count < limit then
    redis.call('ZADD', key, now, member)
    redis.call('EXPIRE', key, ttl)
    return 1
end
return 0
"""

# Score (timestamp) of the oldest entry in the sorted set, or -1 if empty.
_LUA_OLDEST_ENTRY = """
local key = KEYS[1]
local items = redis.call('ZRANGE', key, 0, 0, 'WITHSCORES')
if #items == 0 then
    return '-1'
end
return items[2]
"""


# ---------------------------------------------------------------------------
# RedisRateLimiter
# ---------------------------------------------------------------------------


@dataclass
class RedisRateLimiter:
    """Redis-based sliding window limiter shared by every client process.

    Uses Redis sorted sets keyed as::

        ratelimit:{namespace}:{bucket}:{window}

    where *namespace* is usually the Client ID and *window* is ``minute`` or
    ``hour``.

    Attributes:
        redis_client: An initialised ``redis.asyncio.Redis`` connection.
        namespace: Key discriminator, typically the application Client ID.
        timeout: Maximum seconds :meth:`acquire` waits before giving up.
        configs: Per-bucket overrides; unknown buckets fall back to
            :data:`BUCKET_DEFAULTS` and then to a 60/min default.
    """

    redis_client: aioredis.Redis
    namespace: str = "default"
    timeout: float = 60.0
    configs: dict[str, RateLimitConfig] = field(default_factory=dict)
    _sha_acquire: str = field(default="", init=False, repr=False)
    _sha_oldest: str = field(default="", init=False, repr=False)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _key(self, bucket: str, window: str) -> str:
        return f"ratelimit:{self.namespace}:{bucket}:{window}"

    def _resolve_config(self, bucket: str) -> RateLimitConfig:
        if bucket in self.configs:
            return self.configs[bucket]
        return BUCKET_DEFAULTS.get(bucket, _DEFAULT_CONFIG)

    def _windows(self, bucket: str) -> list[tuple[str, int]]:
        cfg = self._resolve_config(bucket)
        windows = [("minute", cfg.requests_per_minute)]
        if cfg.requests_per_hour is not None:
            windows.append(("hour", cfg.requests_per_hour))
        return windows

    async def _ensure_scripts_loaded(self) -> None:
        """Upload Lua scripts lazily so construction never touches Redis."""
        if self._sha_acquire:
            return
        self._sha_acquire = await self.redis_client.script_load(_LUA_CHECK_AND_ACQUIRE)
        self._sha_oldest = await self.redis_client.script_load(_LUA_OLDEST_ENTRY)

    async def _evalsha(self, script: str, key: str, *args: str) -> Any:
        """Run a cached script, re-uploading both once if Redis lost them.

        Redis drops every cached script on restart or ``SCRIPT FLUSH``; the
        cached SHAs are then stale and must be loaded again.
        """
        try:
            return await self.redis_client.evalsha(self._sha(script), 1, key, *args)  # type: ignore[attr-defined]
        except NoScriptError:
            logger.warning("Rate-limit scripts missing from Redis; reloading")
            self._sha_acquire = ""
            self._sha_oldest = ""
            await self._ensure_scripts_loaded()
        return await self.redis_client.evalsha(self._sha(script), 1, key, *args)  # type: ignore[attr-defined]

    def _sha(self, script: str) -> str:
        return self._sha_acquire if script == "acquire" else self._sha_oldest

    async def _run_acquire(self, key: str, window_name: str, limit: int, member: str) -> bool:
        window_sec = _WINDOW_SECONDS[window_name]
        now = time.time()
        result = await self._evalsha(
            "acquire",
            key,
            str(now),
            str(window_sec),
            str(limit),
            member,
            str(window_sec + 10),
        )
        return bool(result)

    async def _oldest_timestamp(self, key: str) -> float:
        result = await self._evalsha("oldest", key)
        return float(result)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def try_acquire(self, bucket: str) -> bool:
        """Take one slot in every window of *bucket* if all have capacity.

        When a later window is full, slots already taken in earlier windows
        are rolled back so that a refused call consumes nothing.  Redis
        errors fail open: the call is allowed and a warning is logged.

        Returns:
            ``True`` if the call may proceed, ``False`` if rate limited.
        """
        try:
            await self._ensure_scripts_loaded()
        except Exception:
            logger.warning(
                "Redis unavailable; allowing request without rate limiting",
                extra={"bucket": bucket},
            )
            return True

        member = str(uuid.uuid4())
        acquired: list[str] = []
        try:
            for window_name, limit in self._windows(bucket):
                key = self._key(bucket, window_name)
                if not await self._run_acquire(key, window_name, limit, member):
                    for rollback_key in acquired:
                        await self.redis_client.zrem(rollback_key, member)
                    logger.debug(
                        "Rate limited",
                        extra={"bucket": bucket, "window": window_name},
                    )
                    return False
                acquired.append(key)
        except Exception:
            logger.exception(
                "Redis error during rate-limit check; allowing request",
                extra={"bucket": bucket},
            )
            return True
        return True

    async def get_wait_time(self, bucket: str) -> float:
        """Return seconds until the oldest entry of an exhausted window expires.

        Returns ``0.0`` when no window is full, and ``1.0`` on Redis errors.
        """
        max_wait = 0.0
        now = time.time()
        try:
            await self._ensure_scripts_loaded()
            for window_name, limit in self._windows(bucket):
                key = self._key(bucket, window_name)
                if await self.redis_client.zcard(key) < limit:
                    continue
                oldest = await self._oldest_timestamp(key)
                if oldest > 0:
                    expires_at = oldest + _WINDOW_SECONDS[window_name]
                    max_wait = max(max_wait, expires_at - now)
        except Exception:
            logger.exception("Redis error in get_wait_time; returning 1 second")
            return 1.0
        return max(0.0, max_wait)

    async def acquire(self, bucket: str) -> None:
        """Suspend until a slot in *bucket* is granted.

        Sleeps for the computed wait time between attempts (at least 50 ms,
        never past the deadline).

        Raises:
            RateLimitTimeoutError: If no slot frees up within ``self.timeout``.
        """
        deadline = time.monotonic() + self.timeout
        while True:
            if await self.try_acquire(bucket):
                return
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise RateLimitTimeoutError(bucket=bucket, timeout=self.timeout)
            wait = await self.get_wait_time(bucket)
            sleep_for = min(max(wait, 0.05), remaining)
            logger.debug(
                "Rate limited; sleeping %.2f s before retry",
                sleep_for,
                extra={"bucket": bucket},
            )
            await asyncio.sleep(sleep_for)

    async def reset(self, bucket: str) -> None:
        """Delete the counters of every window of *bucket*."""
        keys = [self._key(bucket, window) for window in _WINDOW_SECONDS]
        await self.redis_client.delete(*keys)
        logger.info("Rate limit counters reset", extra={"bucket": bucket})


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def get_redis_client(redis_url: str) -> aioredis.Redis:
    """Create an async Redis client for :class:`RedisRateLimiter`.

    The connection is opened lazily on first use.
    """
    client: aioredis.Redis = aioredis.from_url(
        redis_url,
        encoding="utf-8",
        decode_responses=True,
    )
    return client
