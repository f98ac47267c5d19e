"""FastAPI application entry point for the injury cache proxy."""

import logging
import sys
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import Settings, settings as default_settings
from errors import register_error_handlers
from services.cache import CacheStore, RedisCache
from services.injuries import InjuryFetcher
from services.refresher import PeriodicRefresher

# Structured logging: JSON for production, human-readable for local
if default_settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


def _build_cache(settings: Settings) -> RedisCache:
    missing = settings.validate()
    if missing:
        logger.critical("Missing required env vars: %s", ", ".join(missing))
        raise SystemExit(1)
    return RedisCache.from_url(
        settings.redis_url,
        token=settings.redis_token,
        tls=settings.redis_tls,
        tls_verify=settings.redis_tls_verify,
    )


def create_app(
    settings: Settings | None = None,
    cache: CacheStore | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Build the app. Cache and HTTP client default to the real ones from settings."""
    settings = settings or default_settings
    if cache is None:
        cache = _build_cache(settings)
    if http_client is None:
        http_client = httpx.AsyncClient(timeout=None)

    fetcher = InjuryFetcher(
        client=http_client,
        cache=cache,
        url=settings.upstream_url,
        api_key=settings.rapidapi_key,
        host=settings.upstream_host,
        ttl_seconds=settings.cache_ttl_seconds,
    )
    refresher = PeriodicRefresher(fetcher, settings.refresh_interval_seconds)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        missing = settings.missing_optional()
        if missing:
            logger.warning("Missing env vars (upstream fetches will fail): %s", ", ".join(missing))
        if await cache.ping():
            logger.info("Connected to cache")
        else:
            logger.warning("Cache unreachable at startup, serving directly from upstream until it recovers")
        refresher.start()
        yield
        await refresher.stop()
        await http_client.aclose()
        await cache.close()

    app = FastAPI(title="Injury Cache API", version="1.0.0", lifespan=lifespan)

    app.state.settings = settings
    app.state.cache = cache
    app.state.fetcher = fetcher
    app.state.refresher = refresher

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.health import router as health_router
    from routes.injuries import router as injuries_router

    app.include_router(health_router)
    app.include_router(injuries_router)

    return app


def main() -> None:
    uvicorn.run("app:create_app", factory=True, host="0.0.0.0", port=default_settings.port)


if __name__ == "__main__":
    main()
