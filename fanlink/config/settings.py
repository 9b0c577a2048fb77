"""Configuration management using Pydantic Settings.

This module provides type-safe configuration management with automatic
environment variable loading and validation using Pydantic Settings.

The configuration is organized into logical groups:
- DatabaseConfig: Pre-save record store connection settings
- LoggingConfig: Logging levels, files, and debugging options
- CredentialsConfig: Spotify client-credentials pair
- APIConfig: Outbound provider request settings (timeouts, user agent, limits)
- ClassifierConfig: UPC digit-length bounds per calling flow
- BatchConfig: Auto-resolve batch job pacing
"""

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Flat aliases are read from the process environment, so .env must land there too
load_dotenv()


class DatabaseConfig(BaseModel):
    """Database connection configuration."""

    url: str = "sqlite+aiosqlite:///data/db/fanlink.db"
    echo: bool = False


class LoggingConfig(BaseModel):
    """Logging configuration for console and file output."""

    console_level: str = "INFO"
    file_level: str = "DEBUG"
    log_file: Path = Path("fanlink.log")
    real_time_debug: bool = True


class CredentialsConfig(BaseModel):
    """API credentials and authentication settings."""

    spotify_client_id: str = ""
    spotify_client_secret: str = ""


class APIConfig(BaseModel):
    """External API configuration shared by every provider adapter."""

    request_timeout: float = 10.0
    user_agent: str = "FanlinkResolver/1.0 (contact@fanlink.example)"
    search_limit: int = 5
    spotify_market: str = "US"
    itunes_country: str = "US"
    musicbrainz_min_interval: float = 1.1


class ClassifierConfig(BaseModel):
    """UPC digit-length bounds used by the input classifier."""

    upc_min_digits: int = 12
    upc_max_digits: int = 14
    presave_upc_min_digits: int = 12
    presave_upc_max_digits: int = 14


class BatchConfig(BaseModel):
    """Batch processing configuration."""

    auto_resolve_delay: float = 0.2


class ServerConfig(BaseModel):
    """HTTP server defaults for the `serve` command."""

    host: str = "127.0.0.1"
    port: int = 8000


class Settings(BaseSettings):
    """Main application settings with environment variable support.

    Environment variables can be set using flat naming or nested naming:
    - Flat: SPOTIFY_CLIENT_ID, DATABASE_URL, CONSOLE_LOG_LEVEL
    - Nested: CREDENTIALS__SPOTIFY_CLIENT_ID, API__REQUEST_TIMEOUT

    The .env file is automatically loaded for development convenience.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()
    credentials: CredentialsConfig = CredentialsConfig()
    api: APIConfig = APIConfig()
    classifier: ClassifierConfig = ClassifierConfig()
    batch: BatchConfig = BatchConfig()
    server: ServerConfig = ServerConfig()

    data_dir: Path = Path("data")

    @model_validator(mode="before")
    @classmethod
    def transform_flat_env_vars(cls, data: Any) -> Any:
        """Fold legacy flat environment variables into the nested groups.

        SPOTIFY_CLIENT_ID / SPOTIFY_CLIENT_SECRET are the names the provider
        dashboards hand out, so they are accepted as-is.
        """
        if not isinstance(data, dict):
            return data

        transformed: dict[str, dict[str, Any]] = {}

        mappings = {
            "database": {"database_url": "url", "database_echo": "echo"},
            "logging": {
                "console_log_level": "console_level",
                "file_log_level": "file_level",
                "log_file": "log_file",
                "log_real_time_debug": "real_time_debug",
            },
            "credentials": {
                "spotify_client_id": "spotify_client_id",
                "spotify_client_secret": "spotify_client_secret",
            },
        }
        for group, mapping in mappings.items():
            for env_key, field_key in mapping.items():
                value = data.pop(env_key, None)
                if value is None:
                    value = os.environ.get(env_key.upper())
                if value is not None:
                    transformed.setdefault(group, {})[field_key] = value

        # Nested values win over their flat aliases
        for group, values in transformed.items():
            existing = data.get(group)
            if isinstance(existing, dict):
                data[group] = {**values, **existing}
            elif existing is None:
                data[group] = values

        return data


# Singleton instance for application use
settings = Settings()


# =============================================================================
# BACKWARD COMPATIBILITY FUNCTIONS
# =============================================================================

_LEGACY_KEY_MAP = {
    "DATABASE_URL": lambda: settings.database.url,
    "DATABASE_ECHO": lambda: settings.database.echo,
    "CONSOLE_LOG_LEVEL": lambda: settings.logging.console_level,
    "FILE_LOG_LEVEL": lambda: settings.logging.file_level,
    "LOG_FILE": lambda: settings.logging.log_file,
    "DATA_DIR": lambda: settings.data_dir,
    "SPOTIFY_CLIENT_ID": lambda: settings.credentials.spotify_client_id,
    "SPOTIFY_CLIENT_SECRET": lambda: settings.credentials.spotify_client_secret,
    "API_REQUEST_TIMEOUT": lambda: settings.api.request_timeout,
    "API_USER_AGENT": lambda: settings.api.user_agent,
    "API_SEARCH_LIMIT": lambda: settings.api.search_limit,
    "UPC_MIN_DIGITS": lambda: settings.classifier.upc_min_digits,
    "UPC_MAX_DIGITS": lambda: settings.classifier.upc_max_digits,
    "PRESAVE_UPC_MIN_DIGITS": lambda: settings.classifier.presave_upc_min_digits,
    "PRESAVE_UPC_MAX_DIGITS": lambda: settings.classifier.presave_upc_max_digits,
    "AUTO_RESOLVE_DELAY": lambda: settings.batch.auto_resolve_delay,
}


def get_config(key: str, default=None):
    """Get configuration value by flat key with optional default.

    Example:
        >>> timeout = get_config("API_REQUEST_TIMEOUT", 10.0)
    """
    if key in _LEGACY_KEY_MAP:
        return _LEGACY_KEY_MAP[key]()

    return default
