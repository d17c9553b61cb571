"""
Configuration management for the storefront feed generator.
"""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SITE_URL = "https://latitudes.online"
DEFAULT_API_VERSION = "2024-10"


class ConfigurationError(Exception):
    """Raised when required settings are missing or invalid."""
    pass


class Settings(BaseSettings):
    """Application settings, read from the environment and an optional .env file."""

    shopify_store_domain: Optional[str] = Field(default=None)  # e.g. latitudes-online.myshopify.com
    storefront_access_token: Optional[str] = Field(default=None)
    storefront_api_version: str = Field(default=DEFAULT_API_VERSION)
    site_url: str = Field(default=DEFAULT_SITE_URL)
    metaobject_page_delay: float = Field(default=0.5, ge=0)
    feed_output_dir: str = Field(default=".")
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


def validate_settings(settings: Settings) -> None:
    """
    Check that the values needed to reach the Storefront API are present.

    Args:
        settings: Settings instance to check.

    Raises:
        ConfigurationError: If the store domain or access token is missing.
    """
    missing = []
    if not (settings.shopify_store_domain or "").strip():
        missing.append("SHOPIFY_STORE_DOMAIN")
    if not (settings.storefront_access_token or "").strip():
        missing.append("STOREFRONT_ACCESS_TOKEN")

    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {' and '.join(missing)}"
        )

    if not settings.site_url.startswith(("http://", "https://")):
        raise ConfigurationError("SITE_URL must start with http:// or https://")


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
