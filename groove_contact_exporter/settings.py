"""Application settings loaded from environment variables and .env file."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://api.groovehq.com/v2/graphql?_TicketConversationsQuery"
DEFAULT_REFERER = "https://stafftraveler.groovehq.com/"
DEFAULT_USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"


class ConfigurationError(Exception):
    """Missing or invalid configuration (token, search input)."""


class Settings(BaseSettings):
    """Settings for the Groove contact exporter."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    auth_token: str | None = None
    api_url: str = DEFAULT_API_URL
    referer: str = DEFAULT_REFERER
    user_agent: str = DEFAULT_USER_AGENT


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
