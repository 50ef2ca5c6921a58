"""Harmonic MCP Server - stdio entry point.

Serves the Harmonic tool catalog to an MCP host over standard
input/output. The MCP SDK owns the JSON-RPC framing; this module only
wires its list/call handlers to the ToolDispatcher and converts typed
errors into MCP errors with stable codes.

Run with:
    harmonic-mcp
    python -m services.harmonic_mcp.src
"""

from __future__ import annotations

import asyncio
from typing import Any

import mcp.types as types
import structlog
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from packages.core.src.config import HarmonicConfig, get_config
from packages.core.src.errors import HarmonicMCPError
from packages.core.src.logging_setup import configure_logging
from packages.mcp.src import ToolDispatcher, ToolInvocation

logger = structlog.get_logger()


def to_mcp_error(error: HarmonicMCPError) -> McpError:
    """Convert a typed error into an MCP error carrying its code."""
    return McpError(
        types.ErrorData(
            code=error.jsonrpc_code,
            message=f"{error.code}: {error.message}",
            data=error.to_dict(),
        )
    )


def build_server(dispatcher: ToolDispatcher, config: HarmonicConfig) -> Server:
    """Create the MCP server and register the tool handlers."""
    server: Server = Server(config.server_name, version=config.server_version)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_schema(),
            )
            for tool in dispatcher.list_tools()
        ]

    # Arguments are validated by the dispatcher so failures keep their codes
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        try:
            result = await dispatcher.dispatch(
                ToolInvocation(name=name, arguments=arguments or {})
            )
        except HarmonicMCPError as e:
            raise to_mcp_error(e) from e
        return [types.TextContent(type="text", text=block.text) for block in result.content]

    return server


async def serve(config: HarmonicConfig) -> None:
    """Run the server until the host disconnects."""
    dispatcher = ToolDispatcher.from_config(config)
    server = build_server(dispatcher, config)

    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info(
                "harmonic_mcp_running",
                transport="stdio",
                base_url=config.base_url,
                auth_scheme=config.auth_scheme.value,
                company_lookup=config.company_lookup.value,
            )
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        await dispatcher.close()


def main() -> None:
    """Console entry point. Exits cleanly (status 0) on Ctrl-C."""
    config = get_config()
    configure_logging(config)

    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        logger.info("harmonic_mcp_stopped", reason="interrupt")


if __name__ == "__main__":
    main()
