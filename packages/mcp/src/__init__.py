"""MCP (Model Context Protocol) tool layer for Harmonic.

Provides:
- Tool descriptors and the static tool catalog
- The dispatcher that routes tool calls to the Harmonic client
- Dispatch observers for structured per-call events

Example usage:
    from packages.mcp.src import ToolDispatcher, ToolInvocation

    dispatcher = ToolDispatcher.from_config(get_config())
    await dispatcher.dispatch(
        ToolInvocation(name="set_api_key", arguments={"api_key": "..."})
    )
    result = await dispatcher.dispatch(
        ToolInvocation(name="search_people", arguments={"query": "founder"})
    )
    print(result.text)
"""

from packages.mcp.src.catalog import LEGACY_ALIASES, LEGACY_PREFIX, PROBE_REQUESTS, build_catalog
from packages.mcp.src.dispatcher import DispatcherPhase, ToolDispatcher
from packages.mcp.src.observability import (
    DispatchObserver,
    LoggingDispatchObserver,
    RecordingDispatchObserver,
)
from packages.mcp.src.types import (
    DispatchEvent,
    ParameterType,
    ProbeOutcome,
    TextContent,
    ToolDescriptor,
    ToolInvocation,
    ToolParameter,
    ToolResult,
)

__all__ = [
    # Catalog
    "build_catalog",
    "LEGACY_PREFIX",
    "LEGACY_ALIASES",
    "PROBE_REQUESTS",
    # Dispatcher
    "ToolDispatcher",
    "DispatcherPhase",
    # Observability
    "DispatchObserver",
    "LoggingDispatchObserver",
    "RecordingDispatchObserver",
    # Types
    "ToolDescriptor",
    "ToolParameter",
    "ParameterType",
    "ToolInvocation",
    "ToolResult",
    "TextContent",
    "ProbeOutcome",
    "DispatchEvent",
]
