"""Application settings and configuration."""

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "rewards"
    env: str = "development"
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"

    # Supabase
    supabase_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("supabase_url", "vite_supabase_url"),
        description="Project URL of the Supabase instance",
    )
    supabase_anon_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("supabase_anon_key", "vite_supabase_anon_key"),
        description="Anonymous (public) API key",
    )

    # Client identification
    ip_lookup_url: str = "https://api.ipify.org?format=json"
    ip_lookup_timeout: float = 5.0
    user_agent: str = "rewards-backend/0.1.0"

    # Invites
    invite_ttl_days: int = 30


# Global settings instance
settings = Settings()
