"""
Environment configuration loader with validation for the country facade.
"""

import os
from typing import Optional, Dict, Any

from pydantic import BaseModel, Field, field_validator
from dotenv import load_dotenv

DEFAULT_UPSTREAM_BASE_URL = "https://restcountries.com/v3.1"
DEFAULT_UPSTREAM_FIELDS = (
    "name,cca2,cca3,capital,region,subregion,population,area,"
    "currencies,languages,timezones,flags,maps"
)


class AppConfig(BaseModel):
    """Configuration model for the country facade with validation."""

    # Upstream provider
    upstream_base_url: str = Field(
        default=DEFAULT_UPSTREAM_BASE_URL, min_length=8, description="REST Countries base URL"
    )
    upstream_timeout_seconds: float = Field(
        default=10.0, gt=0, description="Upstream request timeout in seconds"
    )
    upstream_user_agent: str = Field(
        default="country-facade/0.1.0", min_length=1, description="User-Agent header"
    )
    upstream_fields: str = Field(
        default=DEFAULT_UPSTREAM_FIELDS, description="Fields requested from the provider"
    )

    # Cache
    cache_engine: str = Field(default="memory", description="Cache backend: memory or valkey")
    cache_ttl: int = Field(default=300, ge=1, description="Default cache TTL in seconds")
    cache_ttl_jitter: float = Field(
        default=0.0, ge=0.0, le=1.0, description="TTL jitter as a fraction of the TTL"
    )
    cache_max_entries: int = Field(
        default=1000, ge=1, description="Maximum entries held by the in-memory cache"
    )

    # Valkey
    valkey_host: str = Field(default="localhost", description="Valkey server host")
    valkey_port: int = Field(default=6379, ge=1, le=65535, description="Valkey server port")
    valkey_password: Optional[str] = Field(default=None, description="Valkey server password")
    valkey_database: int = Field(default=0, ge=0, le=15, description="Valkey database number")
    valkey_socket_timeout: float = Field(
        default=5.0, gt=0, description="Valkey socket timeout in seconds"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("cache_engine")
    @classmethod
    def validate_cache_engine(cls, v: str) -> str:
        """Validate the cache engine name."""
        engine = v.lower()
        if engine not in ("memory", "valkey"):
            raise ValueError("Cache engine must be one of: ['memory', 'valkey']")
        return engine


def load_config(env_file: Optional[str] = None) -> AppConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Optional path to .env file. If None, looks for .env in current directory.

    Returns:
        AppConfig: Validated configuration object

    Raises:
        ValueError: If configuration is invalid
    """
    if env_file is None:
        env_file = ".env"

    if os.path.exists(env_file):
        load_dotenv(env_file)

    try:
        config_data: Dict[str, Any] = {
            "upstream_base_url": os.getenv("UPSTREAM_BASE_URL", DEFAULT_UPSTREAM_BASE_URL),
            "upstream_timeout_seconds": float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "10")),
            "upstream_user_agent": os.getenv("UPSTREAM_USER_AGENT", "country-facade/0.1.0"),
            "upstream_fields": os.getenv("UPSTREAM_FIELDS", DEFAULT_UPSTREAM_FIELDS),
            "cache_engine": os.getenv("CACHE_ENGINE", "memory"),
            "cache_ttl": int(os.getenv("CACHE_TTL", "300")),
            "cache_ttl_jitter": float(os.getenv("CACHE_TTL_JITTER", "0.0")),
            "cache_max_entries": int(os.getenv("CACHE_MAX_ENTRIES", "1000")),
            "valkey_host": os.getenv("VALKEY_HOST", "localhost"),
            "valkey_port": int(os.getenv("VALKEY_PORT", "6379")),
            "valkey_password": os.getenv("VALKEY_PASSWORD") or None,
            "valkey_database": int(os.getenv("VALKEY_DATABASE", "0")),
            "valkey_socket_timeout": float(os.getenv("VALKEY_SOCKET_TIMEOUT", "5.0")),
            "log_level": os.getenv("LOG_LEVEL", "INFO"),
        }
        return AppConfig(**config_data)
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}") from e


# Global configuration instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the process-wide configuration, loading it if necessary.

    Returns:
        AppConfig: The loaded configuration object
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the loaded configuration so the next call re-reads the environment."""
    global _config
    _config = None
