"""
Product Catalog Backend — Application Configuration
=====================================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory, middleware, and the bundled runner.
When:  Loaded once at module import time.

The core (validator + product store) never reads configuration itself.
The factory passes plain values into it (default page size), and the
exception handlers consult `expose_error_details` when shaping 500 responses.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development, except
    `app_env`, which defaults to production so stack traces stay hidden
    unless explicitly requested.
    """

    # ── Environment ───────────────────────────────────────────────────────
    # What: Deployment mode. Only "development" exposes failure details
    # (stack traces) in 500 responses.
    app_env: str = Field(default="production")

    @field_validator("app_env")
    @classmethod
    def normalize_app_env(cls, v: str) -> str:
        return v.strip().lower() or "production"

    @property
    def expose_error_details(self) -> bool:
        """True when internal failure detail may be returned to clients."""
        return self.app_env == "development"

    # ── Pagination ────────────────────────────────────────────────────────
    # What: Page size used by GET /api/products when `limit` is absent or invalid
    default_page_limit: int = Field(default=10, ge=1)

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Singleton instance — imported throughout the application
settings = Settings()
