"""
Settings for the confidence pool API.

Values come from the process environment, then from an env file:
``.env.{ENVIRONMENT}`` when it exists, otherwise ``.env``. The file is
also loaded into ``os.environ`` (python-dotenv) for libraries that read
the environment directly.

Production refuses to start without:
- DATABASE_URL (the bundled SQLite file is for local use only)
- API_KEY (guards the admin routes: recording picks, draft status, mock draft import)
"""
import logging
import os
from pathlib import Path
from typing import List, Literal, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).parent.parent.parent

DEFAULT_DATABASE_URL = "sqlite:///./confidence_pool.db"

DEV_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]

logger = logging.getLogger(__name__)


def env_file_path(environment: Optional[str] = None) -> Path:
    """The env file for an environment: ``.env.{environment}`` if present, else ``.env``."""
    environment = environment or os.getenv("ENVIRONMENT", "development")
    specific = PROJECT_ROOT / f".env.{environment}"
    return specific if specific.exists() else PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=str(env_file_path()),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    APP_NAME: str = "Draft Confidence Pool API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8001

    # Entity store
    DATABASE_URL: str = DEFAULT_DATABASE_URL
    SQL_ECHO: bool = False

    # Admin routes (X-API-Key header); open in development when empty
    API_KEY: str = ""

    # Mock draft import: minimum rapidfuzz WRatio for a fuzzy name match
    NAME_MATCH_THRESHOLD: int = Field(90, ge=0, le=100)

    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE: Literal["memory", "redis"] = "memory"
    REDIS_URL: Optional[str] = None

    # Comma-separated list of allowed origins
    CORS_ORIGINS_STR: str = ""

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """
        Allowed CORS origins.

        Development falls back to the local frontend. Production never
        allows a wildcard and allows nothing unless origins are configured.
        """
        origins = [o.strip() for o in self.CORS_ORIGINS_STR.split(",") if o.strip()]
        if not self.is_production():
            return origins or list(DEV_CORS_ORIGINS)

        if "*" in origins:
            logger.warning("Ignoring wildcard CORS origin in production; set explicit origins in CORS_ORIGINS_STR")
            return [o for o in origins if o != "*"]
        if not origins:
            logger.warning("CORS_ORIGINS_STR is not set in production; cross-origin requests will be refused")
        return origins

    def missing_secrets(self) -> List[str]:
        """Names of settings that must be set for this environment but are not."""
        missing = []
        if self.is_production():
            if self.DATABASE_URL == DEFAULT_DATABASE_URL:
                missing.append("DATABASE_URL")
            if not self.API_KEY:
                missing.append("API_KEY")
        if self.RATE_LIMIT_ENABLED and self.RATE_LIMIT_STORAGE == "redis" and not self.REDIS_URL:
            missing.append("REDIS_URL")
        return missing


load_dotenv(env_file_path())
settings = Settings()

_missing = settings.missing_secrets()
if _missing:
    logger.warning(f"Missing settings for {settings.ENVIRONMENT}: {', '.join(_missing)}")
    if settings.is_production():
        raise ValueError(
            f"Cannot start in production without: {', '.join(_missing)}. "
            f"Set them in the environment or in {env_file_path().name}"
        )
