"""API-Football injuries client (via RapidAPI).

Single attempt per call, no retry. A successful fetch is written through to
the cache before it is returned.
"""

import logging
from typing import Any

import httpx

from config import CACHE_KEY
from services.cache import CacheStore

logger = logging.getLogger(__name__)


def _has_response(data: Any) -> bool:
    """True when the body is an object with a truthy "response" field.

    Arrays and objects count even when empty; null, "", 0 and false do not.
    """
    if not isinstance(data, dict):
        return False
    value = data.get("response")
    return isinstance(value, (list, dict)) or bool(value)


class InjuryFetcher:
    def __init__(
        self,
        client: httpx.AsyncClient,
        cache: CacheStore,
        url: str,
        api_key: str | None,
        host: str,
        ttl_seconds: int,
    ):
        self._client = client
        self._cache = cache
        self._url = url
        self._headers = {
            "x-rapidapi-key": api_key or "",
            "x-rapidapi-host": host,
        }
        self._ttl_seconds = ttl_seconds

    async def fetch(self) -> dict[str, Any] | None:
        """Fetch fresh injury data and store it. Returns None on any failure."""
        logger.info("Fetching fresh injury data from %s", self._url)
        try:
            resp = await self._client.get(self._url, headers=self._headers)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            logger.error("Injury fetch failed: %s", e)
            return None
        except ValueError as e:
            logger.error("Injury fetch returned non-JSON body: %s", e)
            return None

        if not _has_response(data):
            logger.error("Invalid API response: missing 'response' field")
            return None

        if await self._cache.set(CACHE_KEY, data, self._ttl_seconds):
            logger.info("Cached injury data for %ds", self._ttl_seconds)
        return data
