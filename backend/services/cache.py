"""Key-value stores with per-key expiration for the injury payload.

RedisCache is what the service runs against (Upstash over TLS). MemoryCache
keeps the same async contract in-process and is what tests substitute in.

Both treat the store as best-effort: a failed read is a miss and a failed
write is logged and reported, never raised. Callers only ever see a payload,
None, or a boolean.
"""

import json
import logging
import time
from typing import Any, Protocol

import redis.asyncio as redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class CacheStore(Protocol):
    """Async key-value store with per-key expiration."""

    async def get(self, key: str) -> Any | None:
        """Return the value if present and unexpired. Errors count as a miss."""

    async def set(self, key: str, value: Any, ttl_seconds: int) -> bool:
        """Store the value for ttl_seconds. Returns False if the write failed."""

    async def ping(self) -> bool: ...

    async def close(self) -> None: ...


class RedisCache:
    def __init__(self, client: redis.Redis):
        self._client = client

    @classmethod
    def from_url(
        cls,
        url: str,
        token: str | None = None,
        tls: bool = True,
        tls_verify: bool = False,
    ) -> "RedisCache":
        """Build a cache from a redis:// or rediss:// URL. The token is used as the password.

        With tls on (the default, Upstash requires it) a redis:// URL is upgraded
        to rediss://. Turn it off only for a plaintext local Redis.
        """
        if tls and url.startswith("redis://"):
            url = "rediss://" + url[len("redis://"):]
        kwargs: dict = {"decode_responses": True}
        if token:
            kwargs["password"] = token
        if url.startswith("rediss://"):
            kwargs["ssl_cert_reqs"] = "required" if tls_verify else "none"
        return cls(redis.from_url(url, **kwargs))

    async def get(self, key: str) -> Any | None:
        try:
            raw = await self._client.get(key)
        except (RedisError, OSError, UnicodeDecodeError) as e:
            logger.warning("Redis get failed for %s, treating as miss: %s", key, e)
            return None

        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding undecodable cache value for %s", key)
            return None

    async def set(self, key: str, value: Any, ttl_seconds: int) -> bool:
        try:
            await self._client.setex(key, ttl_seconds, json.dumps(value))
        except (RedisError, OSError) as e:
            logger.error("Redis set failed for %s: %s", key, e)
            return False
        return True

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except (RedisError, OSError) as e:
            logger.warning("Redis ping failed: %s", e)
            return False

    async def close(self) -> None:
        await self._client.aclose()


class MemoryCache:
    """In-process TTL cache with the same contract as RedisCache."""

    def __init__(self):
        self._store: dict[str, tuple[float, Any]] = {}

    async def get(self, key: str) -> Any | None:
        if key in self._store:
            expires_at, value = self._store[key]
            if time.time() < expires_at:
                return value
            del self._store[key]
        return None

    async def set(self, key: str, value: Any, ttl_seconds: int) -> bool:
        self._store[key] = (time.time() + ttl_seconds, value)
        return True

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self._store.clear()
