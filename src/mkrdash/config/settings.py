"""
Application settings using Pydantic.

Provides environment-based configuration loading with MACKEREL_ prefix.
"""

from pydantic import ValidationError
from pydantic_settings import BaseSettings

from mkrdash.core.errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings."""

    # Mackerel API
    apikey: str | None = None
    apibase: str = "https://api.mackerelio.com"

    # Web UI host used for embed URLs and permalinks
    web_url: str = "https://mackerel.io"

    # HTTP client settings
    http_timeout: float = 30.0
    http_max_retries: int = 3

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "MACKEREL_"


def get_settings(**overrides: object) -> Settings:
    """Build settings, letting explicit (CLI) values win over the environment."""
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
