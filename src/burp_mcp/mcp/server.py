"""MCP server exposing the Burp tools over stdio."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool

from burp_mcp.tools.base import Invocation
from burp_mcp.tools.catalog import list_operations
from burp_mcp.tools.dispatcher import Dispatcher

if TYPE_CHECKING:
    from burp_mcp.config.schema import BurpMcpConfig, ServerConfig
    from burp_mcp.tools.base import ResultEnvelope

logger = logging.getLogger(__name__)


def _get_tools() -> list[Tool]:
    """Define the MCP tools from the catalog."""
    return [
        Tool(
            name=definition.name,
            description=definition.description,
            inputSchema=definition.parameters_schema,
        )
        for definition in list_operations()
    ]


def _to_call_tool_result(envelope: ResultEnvelope) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(type="text", text=block.text) for block in envelope.content],
        isError=bool(envelope.is_error),
    )


async def call_tool(
    dispatcher: Dispatcher,
    name: str,
    arguments: dict[str, Any] | None,
) -> CallToolResult:
    """Run one tool call through *dispatcher*."""
    envelope = await dispatcher.handle(Invocation(name=name, arguments=arguments or {}))
    return _to_call_tool_result(envelope)


def create_server(dispatcher: Dispatcher, config: ServerConfig) -> Server:
    """Build an MCP server whose tool calls are handled by *dispatcher*."""
    server: Server = Server(config.name, version=config.version)

    @server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
    async def _list_tools() -> list[Tool]:
        return _get_tools()

    # Arguments are checked by the dispatcher, which answers bad input
    # with guidance text rather than a protocol error.
    @server.call_tool(validate_input=False)  # type: ignore[untyped-decorator]
    async def _call_tool(name: str, arguments: dict) -> CallToolResult:  # type: ignore[type-arg]
        return await call_tool(dispatcher, name, arguments)

    return server


async def run_server(config: BurpMcpConfig) -> None:
    """Start the MCP server on stdio."""
    logger.info("Burp URL: %s", config.backend.base_url)
    logger.info("Running without API authentication")

    async with Dispatcher(config.backend) as dispatcher:
        server = create_server(dispatcher, config.server)
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
