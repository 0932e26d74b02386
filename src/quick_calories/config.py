"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_secret: str
    openai_api_key: str | None = None
    upstream_url: str = "https://api.openai.com/v1/chat/completions"
    proxy_url: str = "http://localhost:8000/api/proxy"
    openai_model: str = "gpt-4o-mini"
    openai_temperature: float = 0.3
    openai_max_tokens: int = 200
    request_timeout_seconds: float = 30.0
    upstream_timeout_seconds: float = 60.0
    timezone: str | None = None
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    owner_id: str = "default"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_timezone(raw: str | None) -> str | None:
    """Normalize the configured timezone; blank means device-local."""
    if raw is None:
        return None
    cleaned = raw.strip()
    if cleaned in {"", "local"}:
        return None
    return cleaned
