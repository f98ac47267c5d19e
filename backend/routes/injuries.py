"""Injury report route — cache-aside over the RapidAPI injuries endpoint."""

import logging

from fastapi import APIRouter, Depends

from config import CACHE_KEY
from dependencies import get_cache, get_fetcher
from errors import UpstreamFetchError
from services.cache import CacheStore
from services.injuries import InjuryFetcher

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/injuries")
async def injuries(
    cache: CacheStore = Depends(get_cache),
    fetcher: InjuryFetcher = Depends(get_fetcher),
) -> dict:
    """Serve the cached injury report, fetching and caching it on a miss."""
    cached = await cache.get(CACHE_KEY)
    if cached:
        logger.info("Serving injuries from cache")
        return cached

    # Return the fetch result directly; the write-through already happened
    data = await fetcher.fetch()
    if data is None:
        raise UpstreamFetchError()
    return data
