"""
ShipView API — Application Configuration
==========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory, the database layer and the middleware.
When:  Loaded once at module import time.

Environment names match the deployment's existing .env file
(MYSQL_HOST, MYSQL_PORT, MYSQL_DATABASE, MYSQL_USER, MYSQL_PASSWORD, PORT).
DATABASE_URL, when set, replaces the MYSQL_* values entirely.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


DEFAULT_CORS_ORIGINS = ",".join(
    [
        "https://shipview.pages.dev",
        "http://localhost:8080",
        "http://localhost:3000",
    ]
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes are grouped by concern. Every value has a development default;
    production deployments provide the MYSQL_* credentials.
    """

    # ── Database ──────────────────────────────────────────────────────────
    mysql_host: str = Field(default="localhost")
    mysql_port: int = Field(default=3306, ge=1, le=65535)
    mysql_database: str = Field(default="")
    mysql_user: str = Field(default="")
    mysql_password: str = Field(default="")

    # Full async SQLAlchemy URL, e.g. sqlite+aiosqlite:///./orders.db
    database_url: Optional[str] = Field(default=None)

    # Pool sizing: a fixed set of connections, no overflow.
    db_pool_size: int = Field(default=10, ge=1, le=100)

    # Seconds a request waits for a free connection. None waits indefinitely,
    # so an exhausted pool queues callers instead of failing them.
    db_pool_timeout: Optional[float] = Field(default=None, gt=0)

    db_pool_recycle: int = Field(default=3600, ge=-1)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origin prefixes. An Origin header is allowed when it
    # starts with any of them.
    cors_origins: str = Field(default=DEFAULT_CORS_ORIGINS)

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list, dropping blanks."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3001, ge=1, le=65535)

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

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def database_url_resolved(self) -> str:
        """
        The SQLAlchemy URL the engine connects to.

        DATABASE_URL wins when present; otherwise a mysql+aiomysql URL is built
        from the MYSQL_* values. URL.create escapes credentials containing
        reserved characters such as '@' or '/'.
        """
        if self.database_url:
            return self.database_url
        url = URL.create(
            drivername="mysql+aiomysql",
            username=self.mysql_user or None,
            password=self.mysql_password or None,
            host=self.mysql_host,
            port=self.mysql_port,
            database=self.mysql_database or None,
        )
        return url.render_as_string(hide_password=False)


settings = Settings()
