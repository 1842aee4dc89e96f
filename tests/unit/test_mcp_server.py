"""Tests for the MCP server binding."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from click.testing import CliRunner
from mcp.types import CallToolResult

from burp_mcp.cli.app import cli
from burp_mcp.config.schema import ServerConfig
from burp_mcp.tools.base import ResultEnvelope, TextContent


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


# ── Tool schemas ─────────────────────────────────────────────────


class TestToolSchemas:
    """Verify that tool definitions are correct."""

    def test_get_tools_returns_nine(self) -> None:
        from burp_mcp.mcp.server import _get_tools

        assert len(_get_tools()) == 9

    def test_tool_names_follow_catalog(self) -> None:
        from burp_mcp.mcp.server import _get_tools
        from burp_mcp.tools.catalog import list_operations

        assert [t.name for t in _get_tools()] == [t.name for t in list_operations()]

    def test_scan_url_schema(self) -> None:
        from burp_mcp.mcp.server import _get_tools

        scan = next(t for t in _get_tools() if t.name == "scan_url")
        assert scan.description is not None
        assert "scan" in scan.description.lower()
        assert scan.inputSchema["required"] == ["url"]
        assert scan.inputSchema["properties"]["scan_type"]["default"] == "crawl_and_audit"


# ── Result conversion ────────────────────────────────────────────


class TestToCallToolResult:
    def test_plain_text(self) -> None:
        from burp_mcp.mcp.server import _to_call_tool_result

        result = _to_call_tool_result(ResultEnvelope.of_text("Comparison: Identical"))
        assert isinstance(result, CallToolResult)
        assert result.isError is False
        assert result.content[0].type == "text"
        assert result.content[0].text == "Comparison: Identical"

    def test_error_flag(self) -> None:
        from burp_mcp.mcp.server import _to_call_tool_result

        result = _to_call_tool_result(ResultEnvelope.error("Error: Unknown tool: x"))
        assert result.isError is True

    def test_multiple_blocks(self) -> None:
        from burp_mcp.mcp.server import _to_call_tool_result

        envelope = ResultEnvelope(content=(TextContent(text="a"), TextContent(text="b")))
        result = _to_call_tool_result(envelope)
        assert [c.text for c in result.content] == ["a", "b"]


# ── call_tool routing ────────────────────────────────────────────


class TestCallTool:
    async def test_routes_through_dispatcher(self, make_dispatcher: Any) -> None:
        from burp_mcp.mcp.server import call_tool

        dispatcher, _ = make_dispatcher()
        result = await call_tool(
            dispatcher, "decoder_encode", {"data": "hello", "encoding": "base64"}
        )
        assert result.isError is False
        assert result.content[0].text == "Encoded: aGVsbG8="

    async def test_none_arguments(self, make_dispatcher: Any) -> None:
        from burp_mcp.mcp.server import call_tool

        dispatcher, _ = make_dispatcher()
        result = await call_tool(dispatcher, "scan_url", None)
        assert result.isError is False
        assert "URL is required" in result.content[0].text

    async def test_unknown_tool(self, make_dispatcher: Any) -> None:
        from burp_mcp.mcp.server import call_tool

        dispatcher, _ = make_dispatcher()
        result = await call_tool(dispatcher, "burp_nonexistent", {})
        assert result.isError is True
        assert "burp_nonexistent" in result.content[0].text


# ── Protocol round trip ──────────────────────────────────────────


class TestServerSession:
    """Drive the server through a real MCP client session in memory."""

    async def test_list_and_call(self, make_dispatcher: Any) -> None:
        from mcp.shared.memory import create_connected_server_and_client_session

        from burp_mcp.mcp.server import create_server

        dispatcher, _ = make_dispatcher(
            {"POST /v0.1/scan": httpx.Response(201, headers={"location": "/v0.1/scan/abc123"})}
        )
        server = create_server(dispatcher, ServerConfig())

        async with create_connected_server_and_client_session(server) as client:
            listed = await client.list_tools()
            assert len(listed.tools) == 9

            started = await client.call_tool("scan_url", {"url": "http://example.com"})
            assert started.isError is False
            assert "Task ID: abc123" in started.content[0].text

            # Missing required args reach the dispatcher instead of
            # failing schema validation
            missing = await client.call_tool("scan_url", {})
            assert missing.isError is False
            assert "URL is required" in missing.content[0].text

            unknown = await client.call_tool("nope", {})
            assert unknown.isError is True


# ── CLI command ──────────────────────────────────────────────────


class TestServeCliCommand:
    def test_serve_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["serve", "--help"])
        assert result.exit_code == 0
        assert "MCP server" in result.output

    def test_serve_runs_server(self, runner: CliRunner, monkeypatch: Any) -> None:
        monkeypatch.setenv("BURP_URL", "http://burp.example:1337")
        with (
            patch("burp_mcp.mcp.server.run_server", new_callable=AsyncMock) as mock_run,
            patch("burp_mcp.cli.app.setup_logging"),
        ):
            result = runner.invoke(cli, ["serve"])

        assert result.exit_code == 0
        config = mock_run.call_args.args[0]
        assert config.backend.base_url == "http://burp.example:1337"
