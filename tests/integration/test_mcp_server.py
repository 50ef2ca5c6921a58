"""Integration tests for the MCP stdio server wiring.

These drive the MCP SDK request handlers directly, without a subprocess,
against the mock Harmonic API.

A live smoke test is marked with @pytest.mark.network and needs
HARMONIC_API_KEY. To run only offline tests: pytest -m "not network"
"""

from __future__ import annotations

import json
import os
from importlib.metadata import version

import mcp.types as types
import pytest

from packages.core.src.config import get_config
from packages.core.src.errors import UnknownToolError
from packages.mcp.src.dispatcher import ToolDispatcher
from packages.mcp.src.types import ToolInvocation
from services.harmonic_mcp.src.main import build_server, to_mcp_error


async def _call(server, name: str, arguments: dict | None = None) -> types.CallToolResult:
    request = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )
    response = await server.request_handlers[types.CallToolRequest](request)
    return response.root


class TestMCPServer:
    """Tests for the MCP server built around the dispatcher."""

    @pytest.fixture
    def server(self, dispatcher, config):
        """MCP server wired to a dispatcher on the mock API."""
        return build_server(dispatcher, config)

    @pytest.mark.asyncio
    async def test_list_tools(self, server):
        """tools/list advertises the full catalog with input schemas."""
        response = await server.request_handlers[types.ListToolsRequest](
            types.ListToolsRequest(method="tools/list")
        )
        tools = {tool.name: tool for tool in response.root.tools}

        assert len(tools) == 8
        assert tools["search_companies"].inputSchema["required"] == ["query"]
        assert tools["set_api_key"].inputSchema["properties"]["api_key"]["type"] == "string"

    @pytest.mark.asyncio
    async def test_set_key_then_search(self, server, mock_api):
        """A successful call returns one text block of pretty-printed JSON."""
        companies = [{"id": 1, "name": "Acme"}]
        mock_api.add("GET", "/companies", json=companies)

        await _call(server, "set_api_key", {"api_key": "k1"})
        result = await _call(server, "search_companies", {"query": "acme", "size": 5})

        assert not result.isError
        assert len(result.content) == 1
        assert json.loads(result.content[0].text) == companies

    @pytest.mark.asyncio
    async def test_precondition_reported_as_error(self, server, mock_api):
        """Calls before set_api_key come back as coded tool errors."""
        result = await _call(server, "search_people", {"query": "cto"})

        assert result.isError
        assert result.content[0].text.startswith("PRECONDITION_FAILED")
        assert mock_api.requests == []

    @pytest.mark.asyncio
    async def test_unknown_tool_reported_as_error(self, server):
        """Unknown tool names come back as coded tool errors."""
        result = await _call(server, "not_a_tool", {})

        assert result.isError
        assert "UNKNOWN_TOOL" in result.content[0].text
        assert "not_a_tool" in result.content[0].text


class TestToMCPError:
    """Tests for error conversion."""

    def test_installed_sdk_is_1x(self):
        """The server is written against the 1.x SDK error API."""
        assert version("mcp").split(".")[0] == "1"

    def test_keeps_code_and_jsonrpc_code(self):
        """The MCP error carries the JSON-RPC code and stable code."""
        error = to_mcp_error(UnknownToolError("nope"))

        assert error.error.code == types.METHOD_NOT_FOUND
        assert error.error.message == "UNKNOWN_TOOL: Unknown tool: nope"
        assert error.error.data["details"]["tool_name"] == "nope"


@pytest.mark.asyncio
@pytest.mark.network
async def test_live_search_companies():
    """Should search the real Harmonic API with HARMONIC_API_KEY."""
    api_key = os.getenv("HARMONIC_API_KEY")
    if not api_key:
        pytest.skip("HARMONIC_API_KEY not set")

    dispatcher = ToolDispatcher.from_config(get_config())
    try:
        await dispatcher.dispatch(ToolInvocation(name="set_api_key", arguments={"api_key": api_key}))
        result = await dispatcher.dispatch(
            ToolInvocation(name="search_companies", arguments={"query": "harmonic", "size": 1})
        )
        assert result.text
    finally:
        await dispatcher.close()
