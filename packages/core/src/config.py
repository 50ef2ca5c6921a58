"""Harmonic MCP Configuration Management."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthScheme(str, Enum):
    """Where the API key travels on outbound requests.

    One scheme is chosen per deployment; the client never mixes them.
    """

    APIKEY_HEADER = "apikey_header"
    BEARER = "bearer"
    APIKEY_QUERY = "apikey_query"


class CompanyLookup(str, Enum):
    """Shape of the company-by-domain lookup request."""

    POST_BODY = "post_body"  # POST /companies {"website_domain": ...}
    GET_PATH = "get_path"  # GET /companies/{domain}


class LogFormat(str, Enum):
    """Log renderer."""

    CONSOLE = "console"
    JSON = "json"


class HarmonicConfig(BaseSettings):
    """Central configuration for the Harmonic MCP server.

    Nothing here is required: the API key itself is supplied at runtime
    through the ``set_api_key`` tool.
    """

    model_config = SettingsConfigDict(
        env_prefix="HARMONIC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Upstream API
    base_url: str = Field(
        default="https://api.harmonic.ai",
        description="Harmonic API base URL",
    )
    auth_scheme: AuthScheme = Field(
        default=AuthScheme.APIKEY_HEADER,
        description="How the API key is attached to requests",
    )
    company_lookup: CompanyLookup = Field(
        default=CompanyLookup.POST_BODY,
        description="Company-by-domain lookup variant",
    )
    timeout_seconds: float = Field(
        default=30.0, gt=0, description="Outbound HTTP timeout in seconds"
    )

    # Pagination
    default_page_size: int = Field(
        default=50, ge=1, le=1000, description="Default page size for list tools"
    )

    # Server identity
    server_name: str = Field(default="harmonic-mcp-server")
    server_version: str = Field(default="1.0.0")

    # Logging
    log_level: str = Field(default="INFO", description="Minimum log level")
    log_format: LogFormat = Field(default=LogFormat.CONSOLE)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Paths are joined with a leading slash."""
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure the level is one the stdlib knows."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {v}")
        return level


@lru_cache
def get_config() -> HarmonicConfig:
    """Get cached configuration instance."""
    return HarmonicConfig()


def clear_config_cache() -> None:
    """Clear the config cache. Use when config needs to be reloaded."""
    get_config.cache_clear()
