"""FastAPI dependencies — handles built once in create_app() and kept on app.state."""

from fastapi import Request

from services.cache import CacheStore
from services.injuries import InjuryFetcher


def get_cache(request: Request) -> CacheStore:
    return request.app.state.cache


def get_fetcher(request: Request) -> InjuryFetcher:
    return request.app.state.fetcher
