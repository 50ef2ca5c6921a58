"""Harmonic MCP Core Package - Config, Errors, and Logging."""

from .config import (
    AuthScheme,
    CompanyLookup,
    HarmonicConfig,
    LogFormat,
    clear_config_cache,
    get_config,
)
from .errors import (
    HarmonicMCPError,
    InternalError,
    PreconditionError,
    RequestFailure,
    ToolExecutionError,
    TransportFailure,
    UnknownToolError,
    ValidationError,
)
from .logging_setup import configure_logging

__all__ = [
    # Config
    "HarmonicConfig",
    "AuthScheme",
    "CompanyLookup",
    "LogFormat",
    "get_config",
    "clear_config_cache",
    # Errors
    "HarmonicMCPError",
    "ValidationError",
    "PreconditionError",
    "UnknownToolError",
    "RequestFailure",
    "TransportFailure",
    "ToolExecutionError",
    "InternalError",
    # Logging
    "configure_logging",
]
