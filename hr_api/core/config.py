"""
Centralised application settings loaded from environment / .env file.

Uses pydantic-settings so every value can be overridden via env vars
or the .env file at the project root.  The instance is frozen: it is
loaded once at import time and never mutated afterwards.
"""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings

_INSECURE_DEFAULT_KEY = "CHANGE-ME-TO-A-RANDOM-64-CHAR-HEX-STRING-IN-PRODUCTION"


class Settings(BaseSettings):
    # ── Project ──────────────────────────────────────────────────────
    PROJECT_NAME: str = "HR Application API"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    # ── Database (async PostgreSQL via asyncpg) ─────────────────────
    DATABASE_URL: str = "postgresql+asyncpg://hr:hr@localhost:5432/hr_db"

    # ── JWT ──────────────────────────────────────────────────────────
    JWT_SECRET_KEY: str = _INSECURE_DEFAULT_KEY
    JWT_ISSUER: str = "HRApplication"
    JWT_AUDIENCE: str = "HRApplicationUsers"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 60

    # ── Rate limiting ────────────────────────────────────────────────
    RATE_LIMIT_ENABLED: bool = True
    LOGIN_RATE_LIMIT: str = "5/minute"

    # ── CORS ─────────────────────────────────────────────────────────
    CORS_ORIGINS: list[str] = ["*"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors(cls, v: object) -> list[str]:
        if isinstance(v, str):
            return [o.strip() for o in v.split(",") if o.strip()]
        return v  # type: ignore[return-value]

    # ── Logging ──────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    # ── Default HR account (seeded on first startup) ────────────────
    FIRST_HR_EMAIL: str = "hr@hrapplication.local"
    FIRST_HR_PASSWORD: str = "changeme123"
    FIRST_HR_NAME: str = "HR Administrator"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
        "frozen": True,
    }


settings = Settings()

if settings.JWT_SECRET_KEY == _INSECURE_DEFAULT_KEY:
    import logging

    logging.getLogger("hr_api.core.config").warning(
        "WARNING: You are running with the default INSECURE JWT secret key! "
        "Update JWT_SECRET_KEY in your .env file immediately."
    )
