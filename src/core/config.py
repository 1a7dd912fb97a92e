"""Application configuration management.

This module provides configuration management using Pydantic settings
with environment variable support.
"""

from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Proxy settings.

    All settings can be overridden using environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = Field(default="MovieArc Proxy", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment (development, staging, production)")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Host to bind to")
    port: int = Field(default=8000, description="Port to bind to")
    workers: int = Field(default=4, description="Number of worker processes")
    reload: bool = Field(default=False, description="Enable auto-reload")

    # TMDB settings
    tmdb_api_key: Optional[SecretStr] = Field(default=None, description="TMDB API key, never sent to callers")
    tmdb_api_url: str = Field(
        default="https://api.themoviedb.org/3",
        description="TMDB API base URL"
    )
    tmdb_timeout: float = Field(default=30.0, description="TMDB request timeout in seconds")

    # Response settings
    cache_max_age: int = Field(default=300, description="Shared cache lifetime for relayed responses")
    cors_allow_origin: str = Field(default="*", description="Access-Control-Allow-Origin value")
    cors_allow_methods: str = Field(default="GET, OPTIONS", description="Access-Control-Allow-Methods value")
    cors_allow_headers: str = Field(default="Content-Type", description="Access-Control-Allow-Headers value")

    # Logging settings
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log format (json or text)")
    log_file: Optional[str] = Field(default=None, description="Log file path")
    log_max_size: str = Field(default="10MB", description="Maximum log file size")
    log_backup_count: int = Field(default=5, description="Number of backup log files")

    # Monitoring settings
    metrics_enabled: bool = Field(default=True, description="Enable Prometheus metrics")

    @field_validator("tmdb_api_url")
    @classmethod
    def strip_api_url(cls, v):
        """Drop trailing slashes from the upstream base URL."""
        return v.rstrip("/")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        allowed = ["development", "staging", "production"]
        if v not in allowed:
            raise ValueError(f"Environment must be one of {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of {allowed}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        """Validate log format."""
        allowed = ["json", "text"]
        if v not in allowed:
            raise ValueError(f"Log format must be one of {allowed}")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    @property
    def upstream_key(self) -> Optional[str]:
        """The TMDB API key, or None when unset or empty."""
        if self.tmdb_api_key is None:
            return None
        return self.tmdb_api_key.get_secret_value() or None

    @property
    def cors_headers(self) -> Dict[str, str]:
        """Cross-origin headers attached to every proxy response."""
        return {
            "Access-Control-Allow-Origin": self.cors_allow_origin,
            "Access-Control-Allow-Methods": self.cors_allow_methods,
            "Access-Control-Allow-Headers": self.cors_allow_headers,
        }

    @property
    def cache_control(self) -> str:
        """Cache-Control value for successful relays."""
        return f"public, max-age={self.cache_max_age}"


class BrowserSettings(BaseSettings):
    """Terminal browsing client settings.

    Read from ``MOVIEARC_``-prefixed environment variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="MOVIEARC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    proxy_base: Optional[str] = Field(default=None, description="Base URL of the proxy deployment")
    storage_path: Path = Field(
        default=Path.home() / ".cache" / "moviearc" / "storage.json",
        description="Client-local key/value storage file"
    )
    timeout: float = Field(default=30.0, description="Proxy request timeout in seconds")


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings: Application settings instance.
    """
    return Settings()


@lru_cache()
def get_browser_settings() -> BrowserSettings:
    """Get cached browsing client settings."""
    return BrowserSettings()
