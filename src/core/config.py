"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Suncatalog")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)

    # Logging
    log_level: str = Field(default="INFO")
    log_json: bool = Field(
        default=False,
        description="Render log lines as JSON instead of the console format",
    )

    # Supabase
    supabase_url: str = Field(
        default="",
        description="Supabase project URL (e.g. https://xyzabc.supabase.co)",
    )
    supabase_anon_key: str = Field(
        default="",
        description="Supabase anonymous/public API key",
    )

    # Client-local persisted state
    local_storage_path: str = Field(
        default=".suncatalog/local_storage.json",
        description="JSON file standing in for browser local storage",
    )

    # Timeouts (seconds)
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    profile_fetch_timeout_seconds: float = Field(default=10.0, gt=0)
    sign_in_timeout_seconds: float = Field(default=15.0, gt=0)

    @field_validator("supabase_url", "supabase_anon_key", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_remote_backend(self) -> bool:
        """True only when both the Supabase URL and key are configured."""
        return bool(self.supabase_url and self.supabase_anon_key)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def supabase_rest_url(self) -> str:
        """PostgREST endpoint for table queries."""
        if self.supabase_url:
            return f"{self.supabase_url.rstrip('/')}/rest/v1"
        return ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def supabase_auth_url(self) -> str:
        """GoTrue endpoint for session management."""
        if self.supabase_url:
            return f"{self.supabase_url.rstrip('/')}/auth/v1"
        return ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
