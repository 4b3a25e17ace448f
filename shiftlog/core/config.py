"""
Centralised application settings loaded from environment / .env file.

Uses pydantic-settings so every value can be overridden via env vars
or the .env file at the project root.
"""

from __future__ import annotations

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings

_DEFAULT_SECRET = "CHANGE-ME-TO-A-RANDOM-64-CHAR-HEX-STRING-IN-PRODUCTION"


class Settings(BaseSettings):
    # ── Project ──────────────────────────────────────────────────────
    PROJECT_NAME: str = "Production Shift Attendance Log"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    HOST: str = "0.0.0.0"
    PORT: int = 5001

    # ── Database (async MySQL via aiomysql) ─────────────────────────
    DATABASE_URL: str = "mysql+aiomysql://root:@localhost:3306/attendance_db"
    DB_POOL_SIZE: int = 10

    # ── Session tokens ───────────────────────────────────────────────
    # "plain" = base64(user_id:timestamp), no signature, no expiry.
    # "jwt"   = HS256 signed token with expiry.
    TOKEN_SCHEME: str = "plain"
    DEV_BYPASS_TOKEN: str = "dummy-token-for-development"
    ALLOW_DEV_TOKEN: bool = True
    SECRET_KEY: str = _DEFAULT_SECRET
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    @field_validator("TOKEN_SCHEME")
    @classmethod
    def _check_scheme(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in {"plain", "jwt"}:
            raise ValueError("TOKEN_SCHEME must be 'plain' or 'jwt'")
        return v

    # ── CORS ─────────────────────────────────────────────────────────
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:3001",
        "http://localhost:5173",
    ]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors(cls, v: object) -> list[str]:
        if isinstance(v, str):
            return [o.strip() for o in v.split(",") if o.strip()]
        return v  # type: ignore[return-value]

    # ── Logging ──────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    # ── Default admin (seeded on first startup) ─────────────────────
    FIRST_ADMIN_USERNAME: str = "admin"
    FIRST_ADMIN_PASSWORD: str = "admin123"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }


settings = Settings()

_log = logging.getLogger("shiftlog.core.config")

if settings.TOKEN_SCHEME == "plain":
    _log.warning(
        "Session tokens use the plain scheme (unsigned, never expire). "
        "Set TOKEN_SCHEME=jwt for anything beyond local development."
    )
elif settings.SECRET_KEY == _DEFAULT_SECRET:
    _log.warning(
        "You are signing tokens with the default INSECURE secret key! "
        "Update SECRET_KEY in your .env file immediately."
    )
