"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Values are validated at load time.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_EXPORTERS = ("console", "otlp", "none")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults; validate_search_settings rejects values the
    search layer cannot run with (non-SQLite database URL, empty worker pools,
    unknown telemetry exporter).
    """

    # App
    app_name: str = "message-search"
    app_version: str = "1.0.0"
    debug: bool = False

    # Local message store (SQLite with FTS5)
    database_url: str = "sqlite:///./messages.db"
    database_echo: bool = False

    # Search execution
    search_worker_threads: int = 3  # one per data-source branch
    search_dispatch_threads: int = 4
    message_search_limit: int = 500
    snippet_max_tokens: int = 7

    # Granted permissions, comma separated (e.g. "contacts.read,contacts.write")
    contact_permissions: str = "contacts.read"

    # HTTP
    api_default_window: int = 50
    api_max_window: int = 500
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_search_settings(self) -> "Settings":
        """Validate database backend, pool sizes and telemetry exporter."""
        if not self.database_url.startswith("sqlite"):
            raise ValueError(
                f"database_url must be an SQLite URL (sqlite:///path), got: {self.database_url!r}"
            )
        if self.search_worker_threads < 1:
            raise ValueError("search_worker_threads must be at least 1")
        if self.search_dispatch_threads < 1:
            raise ValueError("search_dispatch_threads must be at least 1")
        if self.message_search_limit < 1:
            raise ValueError("message_search_limit must be at least 1")
        if self.api_default_window > self.api_max_window:
            raise ValueError("api_default_window cannot exceed api_max_window")
        if self.telemetry_exporter not in _EXPORTERS:
            raise ValueError(
                f"Invalid telemetry_exporter '{self.telemetry_exporter}'. "
                f"Must be one of: {', '.join(_EXPORTERS)}"
            )
        return self

    @property
    def granted_permissions(self) -> frozenset[str]:
        """Parsed contact_permissions as a set of permission names."""
        return frozenset(
            p.strip() for p in self.contact_permissions.split(",") if p.strip()
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
