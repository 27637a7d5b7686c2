"""
Configuration Management Module

Configures application parameters via environment variables or .env file.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application Configuration Class

    All configuration items can be overridden by environment variables, with names matching fields (uppercase).
    """

    # Application Config
    APP_NAME: str = "Responses Adapter"
    DEBUG: bool = False

    # HTTP Client Config
    # Request timeout (seconds)
    HTTP_TIMEOUT: int = 1800

    # Upstream Provider Config
    # Provider name used in logs and configuration errors
    PROVIDER_NAME: str = "responses"
    # Base URL of the Responses-style backend, "/responses" is appended when missing
    PROVIDER_BASE_URL: Optional[str] = None
    # Bearer token sent to the backend
    PROVIDER_API_KEY: Optional[str] = None

    # Reasoning Config
    # Default reasoning effort when the request does not carry one (e.g. "low", "medium", "high")
    REASONING_EFFORT: Optional[str] = None

    # Log Config
    # Level for the stream translator logger (dropped frames are logged at DEBUG),
    # defaults to the application level
    STREAM_LOG_LEVEL: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get application configuration (Singleton)

    Uses lru_cache to ensure configuration is loaded only once.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()
