"""
Application configuration loaded from environment variables.

Uses Pydantic Settings to:
1. Read from .env file automatically
2. Validate values and types at startup
3. Provide type-safe access throughout the app

Usage:
    from video_api.config import settings
    print(settings.DATABASE_URL)

Note: We use a validator that prefers .env values over empty shell
environment variables, so an exported-but-blank DATABASE_URL doesn't
shadow the real value in .env.
"""

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Query params understood by other SQLite URL parsers but not by aiosqlite.
_SQLITE_DROPPED_PARAMS = {"mode"}


def to_async_database_url(url: str) -> str:
    """Rewrite a DATABASE_URL into the form SQLAlchemy's async engine expects.

    Examples:
        sqlite:./videos.db?mode=rwc      -> sqlite+aiosqlite:///./videos.db
        sqlite::memory:                  -> sqlite+aiosqlite:///:memory:
        postgres://u:p@host/db           -> postgresql+asyncpg://u:p@host/db
        sqlite+aiosqlite:///./videos.db  -> unchanged
    """
    url = url.strip()
    scheme, sep, rest = url.partition(":")
    if not sep or "+" in scheme:
        return url

    if scheme == "sqlite":
        path, _, query = rest.partition("?")
        if path.startswith("///"):
            path = path[3:]
        elif path.startswith("//"):
            path = path[2:]
        params = [
            (k, v)
            for (k, v) in parse_qsl(query, keep_blank_values=True)
            if k not in _SQLITE_DROPPED_PARAMS
        ]
        async_url = f"sqlite+aiosqlite:///{path}"
        if params:
            async_url = f"{async_url}?{urlencode(params)}"
        return async_url

    if scheme in ("postgres", "postgresql"):
        parts = urlsplit(url)
        params = [
            (k, v)
            for (k, v) in parse_qsl(parts.query, keep_blank_values=True)
            if k != "sslmode"
        ]
        return urlunsplit(
            ("postgresql+asyncpg", parts.netloc, parts.path, urlencode(params), parts.fragment)
        )

    return url


class Settings(BaseSettings):
    """All application configuration in one place."""

    model_config = SettingsConfigDict(
        env_file=".env",        # Load from .env file
        env_file_encoding="utf-8",
        case_sensitive=True,     # ENV_VAR must match exactly
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def prefer_dotenv_over_empty_env(cls, data):
        """If an env var is set but empty and .env has a value, use the .env value."""
        from dotenv import dotenv_values

        for key, dotenv_value in dotenv_values(".env").items():
            if dotenv_value and (key not in data or not data.get(key)):
                data[key] = dotenv_value
        return data

    # --- Database ---
    DATABASE_URL: str = "sqlite:./videos.db?mode=rwc"

    # --- Server ---
    SERVER_HOST: str = "127.0.0.1"
    SERVER_PORT: int = 8080

    # --- Application ---
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "http://localhost:3000"

    @property
    def async_database_url(self) -> str:
        """DATABASE_URL rewritten for the async SQLAlchemy drivers."""
        return to_async_database_url(self.DATABASE_URL)

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Singleton instance — import this everywhere
settings = Settings()
