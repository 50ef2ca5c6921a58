"""Harmonic MCP Error Hierarchy.

All custom errors inherit from HarmonicMCPError so the transport can report
every failure with a stable code.
"""

from __future__ import annotations

from typing import Any

# JSON-RPC 2.0 error codes used by the MCP transport
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class HarmonicMCPError(Exception):
    """Base exception for all Harmonic MCP errors."""

    default_code = "HARMONIC_MCP_ERROR"
    jsonrpc_code = INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for host responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Dispatcher Errors
class ValidationError(HarmonicMCPError):
    """Tool arguments are missing or malformed."""

    default_code = "VALIDATION_ERROR"
    jsonrpc_code = INVALID_PARAMS

    def __init__(
        self,
        message: str,
        *,
        tool_name: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(
            message,
            details={"tool_name": tool_name, "validation_errors": errors or []},
        )
        self.tool_name = tool_name
        self.errors = errors or []


class PreconditionError(HarmonicMCPError):
    """Operation attempted before a credential was configured."""

    default_code = "PRECONDITION_FAILED"
    jsonrpc_code = INVALID_REQUEST


class UnknownToolError(HarmonicMCPError):
    """Requested tool is not in the catalog."""

    default_code = "UNKNOWN_TOOL"
    jsonrpc_code = METHOD_NOT_FOUND

    def __init__(self, tool_name: str) -> None:
        super().__init__(
            f"Unknown tool: {tool_name}",
            details={"tool_name": tool_name},
        )
        self.tool_name = tool_name


class ToolExecutionError(HarmonicMCPError):
    """A client-layer failure wrapped for the host."""

    default_code = "TOOL_EXECUTION_ERROR"

    def __init__(self, tool_name: str, cause: HarmonicMCPError) -> None:
        super().__init__(
            f"Tool '{tool_name}' failed: {cause.message}",
            details={"tool_name": tool_name, "cause": cause.to_dict()},
            cause=cause,
        )
        self.tool_name = tool_name


class InternalError(HarmonicMCPError):
    """Catch-all for failures that carry no classification of their own."""

    default_code = "INTERNAL_ERROR"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(f"Tool execution failed: {message}", cause=cause)


# Integration Errors
class RequestFailure(HarmonicMCPError):
    """Harmonic API answered with a non-2xx status (or an unreadable body)."""

    default_code = "REQUEST_FAILED"

    REASONS = {
        401: ("unauthorized", "Unauthorized (401): API key is missing or expired"),
        403: ("forbidden", "Forbidden (403): API key was rejected, check that it is valid"),
        404: ("not_found", "Not found (404): the requested resource does not exist"),
        429: ("rate_limited", "Rate limited (429): too many requests to Harmonic"),
    }

    def __init__(
        self,
        status_code: int,
        body: str,
        *,
        method: str | None = None,
        path: str | None = None,
        reason: str | None = None,
    ) -> None:
        if reason is None:
            reason, summary = self.classify(status_code)
        else:
            summary = f"Harmonic API returned an unreadable response ({status_code})"
        super().__init__(
            f"{summary}. Response: {body}",
            details={
                "status_code": status_code,
                "reason": reason,
                "method": method,
                "path": path,
            },
        )
        self.status_code = status_code
        self.body = body
        self.reason = reason

    @classmethod
    def classify(cls, status_code: int) -> tuple[str, str]:
        """Map an HTTP status to (reason, human readable summary)."""
        if status_code in cls.REASONS:
            return cls.REASONS[status_code]
        if status_code >= 500:
            return "server_error", f"Harmonic API server error ({status_code})"
        return "client_error", f"Harmonic API error ({status_code})"


class TransportFailure(HarmonicMCPError):
    """The Harmonic API could not be reached (DNS, connection, timeout)."""

    default_code = "TRANSPORT_FAILED"

    def __init__(
        self,
        cause: BaseException,
        *,
        method: str | None = None,
        path: str | None = None,
    ) -> None:
        super().__init__(
            f"Failed to reach Harmonic API: {type(cause).__name__}: {cause}",
            details={"method": method, "path": path},
            cause=cause,
        )
