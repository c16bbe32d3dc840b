"""
Application settings.

Values come from environment variables (optionally a ``.env`` file) and are
read once at startup. The resulting ``Settings`` object is passed explicitly
to ``create_app`` so tests can build apps with their own configuration.
"""

import logging
import os
import secrets
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Base directory of the project (parent of 'taskgate')
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Database Directory
DB_DIR = BASE_DIR / "db"

DEFAULT_TOKEN_EXPIRE_MINUTES = 30 * 24 * 60


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_list(name: str, default: str) -> list[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseModel):
    """Process-wide configuration."""

    database_url: str = Field(
        default=f"sqlite+aiosqlite:///{DB_DIR / 'taskgate.db'}",
        description="SQLAlchemy async database URL",
    )
    sql_debug: bool = False

    jwt_secret_key: str = Field(min_length=1, description="HMAC secret for bearer tokens")
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = DEFAULT_TOKEN_EXPIRE_MINUTES
    token_issuer: str = "taskgate-api"
    token_audience: str = "taskgate-client"

    host: str = "0.0.0.0"
    port: int = 3000
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    enable_docs: bool = True
    enable_hsts: bool = False

    log_level: str = "INFO"
    debug: bool = False

    @property
    def access_token_expires(self) -> timedelta:
        return timedelta(minutes=self.access_token_expire_minutes)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment."""
        load_dotenv()

        secret = os.getenv("JWT_SECRET_KEY")
        if not secret:
            # Generate a random key for development (NOT for production!)
            secret = secrets.token_urlsafe(32)
            logger.warning(
                "Using auto-generated JWT_SECRET_KEY. Set JWT_SECRET_KEY env var in production!"
            )

        values = {
            "jwt_secret_key": secret,
            "jwt_algorithm": os.getenv("JWT_ALGORITHM", "HS256"),
            "access_token_expire_minutes": int(
                os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(DEFAULT_TOKEN_EXPIRE_MINUTES))
            ),
            "token_issuer": os.getenv("TOKEN_ISSUER", "taskgate-api"),
            "token_audience": os.getenv("TOKEN_AUDIENCE", "taskgate-client"),
            "host": os.getenv("HOST", "0.0.0.0"),
            "port": int(os.getenv("PORT", "3000")),
            "cors_allow_origins": _env_list("CORS_ALLOW_ORIGINS", "http://localhost:3000"),
            "enable_docs": _env_bool("ENABLE_DOCS", "true"),
            "enable_hsts": _env_bool("ENABLE_HSTS"),
            "sql_debug": _env_bool("SQL_DEBUG"),
            "log_level": os.getenv("LOG_LEVEL", "INFO"),
            "debug": _env_bool("DEBUG"),
        }
        if database_url := os.getenv("DATABASE_URL"):
            values["database_url"] = database_url

        return cls(**values)
