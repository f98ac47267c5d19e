"""Centralized configuration — all env vars in one place."""

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

DEFAULT_UPSTREAM_URL = "https://api-football-v1.p.rapidapi.com/v3/injuries?league=88&season=2024"
DEFAULT_UPSTREAM_HOST = "api-football-v1.p.rapidapi.com"

# Single well-known cache entry
CACHE_KEY = "injuryData"
TWELVE_HOURS = 43200


def load_env_files() -> None:
    """Load .env beside the app, then the nearest one up from the working directory.

    Variables already set in the environment are never overridden.
    """
    load_dotenv(Path(__file__).resolve().parent / ".env")
    load_dotenv(find_dotenv(usecwd=True))


load_env_files()


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.port: int = int(os.getenv("PORT", "5000"))
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")

        # RapidAPI (API-Football)
        self.rapidapi_key: str | None = os.getenv("RAPIDAPI_KEY")
        self.upstream_url: str = os.getenv("UPSTREAM_URL", DEFAULT_UPSTREAM_URL)
        self.upstream_host: str = os.getenv("UPSTREAM_HOST", DEFAULT_UPSTREAM_HOST)

        # Upstash Redis
        self.redis_url: str | None = os.getenv("REDIS_URL")
        self.redis_token: str | None = os.getenv("UPSTASH_REDIS_REST_TOKEN")
        self.redis_tls: bool = os.getenv("REDIS_TLS", "true").lower() in ("1", "true", "yes")
        self.redis_tls_verify: bool = os.getenv("REDIS_TLS_VERIFY", "false").lower() in ("1", "true", "yes")

        self.cache_ttl_seconds: int = int(os.getenv("CACHE_TTL_SECONDS", str(TWELVE_HOURS)))
        self.refresh_interval_seconds: int = int(os.getenv("REFRESH_INTERVAL_SECONDS", str(TWELVE_HOURS)))

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of missing env vars the service cannot start without."""
        required = ["REDIS_URL"]
        return [var for var in required if not getattr(self, _attr_for(var))]

    def missing_optional(self) -> list[str]:
        """Return list of missing env vars that only degrade upstream fetches."""
        optional = ["RAPIDAPI_KEY"]
        return [var for var in optional if not getattr(self, _attr_for(var))]


settings = Settings()


def _attr_for(env_var: str) -> str:
    """Map env var name to Settings attribute name."""
    mapping = {
        "REDIS_URL": "redis_url",
        "RAPIDAPI_KEY": "rapidapi_key",
        "UPSTASH_REDIS_REST_TOKEN": "redis_token",
    }
    return mapping.get(env_var, env_var.lower())
