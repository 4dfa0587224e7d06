"""Configuration management using Pydantic Settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Inter-service auth (empty = dev mode, auth disabled)
    service_auth_token: str = ""

    # OpenProject
    openproject_url: str = ""  # e.g. "https://mycompany.openproject.com"
    # Generated under My Account -> Access Tokens -> API
    openproject_api_key: str = ""
    # Work package type used when a tool call doesn't specify one.
    # Type 1 is "Task" on a stock install but ids are per-deployment.
    openproject_default_type_id: int = 1
    openproject_timeout: float = 30.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
