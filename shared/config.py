"""
Shared configuration management for the calendar feed service.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_UPSTREAM_URL = "http://www.mocky.io/v2/5a88375b3000007e007f9401"


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="FEED_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Upstream data source
    upstream_url: str = Field(default=DEFAULT_UPSTREAM_URL)
    upstream_timeout_seconds: float = Field(default=10.0, gt=0)

    # Feed cache
    cache_ttl_seconds: int = Field(default=300, gt=0)
    token_bytes: int = Field(default=20, ge=1)
    coalesce_refreshes: bool = Field(default=True)
    serve_stale_on_refresh_error: bool = Field(default=False)

    # Routing
    create_path: str = Field(default="/feedURL")
    feed_path_prefix: str = Field(default="/feed/")

    # Calendar document
    calendar_scale: str = Field(default="GREGORIAN")
    calendar_prodid: str = Field(default="-//Calendar Feed Service//Feed 1.0//EN")


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    host: str = "0.0.0.0"
    port: int = 8080


def get_config(service_name: str, **overrides) -> ServiceConfig:
    """Get configuration for a specific service.

    Keyword overrides take precedence over environment variables.
    """
    return ServiceConfig(service_name=service_name, **overrides)
