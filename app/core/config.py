"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Firestore credentials are optional at load time: the
search endpoints answer 503 until FIREBASE_SERVICE_ACCOUNT_KEY or
FIREBASE_SERVICE_ACCOUNT_PATH is set.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_TELEMETRY_EXPORTERS = ("console", "otlp", "none")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults; cross-field rules are checked in
    validate_search_and_telemetry.
    """

    # App
    app_name: str = "edubridge-search"
    app_version: str = "1.0.0"
    debug: bool = False

    # CORS
    allowed_origins: str = "http://localhost:3000"

    # Firebase / Firestore: use key (env) or path (file). For Vercel, use key.
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None  # Path to JSON file
    firestore_timeout_seconds: float = 30.0

    # Reference-data cache. In-memory unless Redis is enabled.
    redis_enabled: bool = False
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    cache_ttl_subjects: int = 900  # 15 minutes; subjects rarely change

    # Search
    search_default_limit: int = 20
    search_max_limit: int = 100
    suggestion_min_length: int = 2
    suggestion_default_limit: int = 5
    suggestion_pool_size: int = 50
    # Max concurrent per-material comment fetches within one comment search.
    comment_fetch_concurrency: int = 8
    highlight_open_tag: str = "<mark>"
    highlight_close_tag: str = "</mark>"

    # Request / middleware
    request_timeout_seconds: int = 30
    request_id_header: str = "X-Request-ID"

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
    def validate_search_and_telemetry(self) -> "Settings":
        """Validate search limits and telemetry exporter."""
        if self.search_max_limit < 1:
            raise ValueError("SEARCH_MAX_LIMIT must be at least 1")
        if not 0 <= self.search_default_limit <= self.search_max_limit:
            raise ValueError(
                f"SEARCH_DEFAULT_LIMIT must be between 0 and SEARCH_MAX_LIMIT "
                f"({self.search_max_limit}), got: {self.search_default_limit}"
            )
        if self.comment_fetch_concurrency < 1:
            raise ValueError("COMMENT_FETCH_CONCURRENCY must be at least 1")
        if self.telemetry_exporter not in _TELEMETRY_EXPORTERS:
            raise ValueError(
                f"Invalid telemetry_exporter '{self.telemetry_exporter}'. "
                f"Must be one of: {', '.join(_TELEMETRY_EXPORTERS)}"
            )
        if self.telemetry_exporter == "otlp" and not self.telemetry_otlp_endpoint:
            raise ValueError(
                "TELEMETRY_OTLP_ENDPOINT is required when telemetry_exporter is 'otlp'."
            )
        return self

    @property
    def firestore_configured(self) -> bool:
        """Return True if a service account key or path is set."""
        has_key = bool(
            self.firebase_service_account_key
            and self.firebase_service_account_key.get_secret_value()
        )
        return has_key or bool(self.firebase_service_account_path)


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
