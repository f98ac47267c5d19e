"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class InjuryCacheError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class UpstreamFetchError(InjuryCacheError):
    """Upstream data could not be obtained. The cause is logged, never exposed."""

    def __init__(self):
        super().__init__("Failed to fetch data", status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(InjuryCacheError)
    async def handle_injury_cache_error(_request: Request, exc: InjuryCacheError):
        return JSONResponse({"message": str(exc)}, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"message": "Internal server error"},
            status_code=500,
        )
