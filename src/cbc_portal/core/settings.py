"""Application settings and configuration.

This module defines all configuration options for the CBC portal.
Settings are loaded from environment variables with sensible defaults.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Portal settings loaded from environment variables.

    Every value can be overridden via environment variables or an ``.env``
    file. Leaving either backend value unset switches the whole process to
    the in-memory fixture store.
    """

    # Application metadata
    app_name: str = Field(default="CBC Portal", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")

    # Hosted backend (table API + auth API share one endpoint)
    backend_url: str | None = Field(default=None, alias="SUPABASE_URL")
    backend_anon_key: str | None = Field(default=None, alias="SUPABASE_ANON_KEY")
    backend_http_timeout_seconds: float = Field(
        default=10.0,
        alias="BACKEND_HTTP_TIMEOUT_SECONDS",
    )

    # Bounded waits for auth operations
    session_restore_timeout_seconds: float = Field(
        default=5.0,
        alias="SESSION_RESTORE_TIMEOUT_SECONDS",
    )
    auth_timeout_seconds: float = Field(default=8.0, alias="AUTH_TIMEOUT_SECONDS")
    sign_out_timeout_seconds: float = Field(default=3.0, alias="SIGN_OUT_TIMEOUT_SECONDS")
    oauth_redirect_url: str | None = Field(default=None, alias="OAUTH_REDIRECT_URL")

    # Listing defaults
    default_page_size: int = Field(default=10, alias="DEFAULT_PAGE_SIZE")
    pending_preview_limit: int = Field(default=5, alias="PENDING_PREVIEW_LIMIT")

    # Client-side preferences
    preferences_path: Path = Field(
        default=Path.home() / ".cbc-portal" / "preferences.json",
        alias="PREFERENCES_PATH",
    )
    default_locale: str = Field(default="en", alias="DEFAULT_LOCALE")

    # CORS configuration for the portal shell
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def backend_configured(self) -> bool:
        """Return True when both the endpoint URL and the access key are present."""
        return bool(self.backend_url and self.backend_anon_key)

    @property
    def rest_url(self) -> str | None:
        """Return the table API base URL derived from the backend endpoint."""
        if not self.backend_url:
            return None
        return f"{self.backend_url.rstrip('/')}/rest/v1"

    @property
    def auth_url(self) -> str | None:
        """Return the auth API base URL derived from the backend endpoint."""
        if not self.backend_url:
            return None
        return f"{self.backend_url.rstrip('/')}/auth/v1"


settings = Settings()
