"""Tool catalog: the fixed, ordered set of tools this server exposes."""

from __future__ import annotations

from burp_mcp.core.errors import UnknownOperationError
from burp_mcp.tools.base import ToolDefinition

SCAN_TYPES = ("crawl_and_audit", "crawl_only", "audit_only")
HTTP_METHODS = ("GET", "POST", "PUT", "DELETE")
ENCODING_NAMES = ("base64", "url")

_CATALOG: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name="scan_url",
        description="Start a Burp scan on a target URL.",
        parameters_schema={
            "type": "object",
            "properties": {
                "url": {
                    "type": "string",
                    "description": "Target URL to scan",
                },
                "scan_type": {
                    "type": "string",
                    "enum": list(SCAN_TYPES),
                    "default": "crawl_and_audit",
                    "description": "Kind of scan to run",
                },
            },
            "required": ["url"],
        },
    ),
    ToolDefinition(
        name="get_scan_status",
        description="Get the status and progress of a scan task.",
        parameters_schema={
            "type": "object",
            "properties": {
                "task_id": {
                    "type": "string",
                    "description": "Scan task ID returned by scan_url",
                },
            },
            "required": ["task_id"],
        },
    ),
    ToolDefinition(
        name="get_issues",
        description=(
            "Get security issues found by a scan, or the issue definitions "
            "known to Burp when no task ID is given."
        ),
        parameters_schema={
            "type": "object",
            "properties": {
                "task_id": {
                    "type": "string",
                    "description": "Scan task ID (optional)",
                },
            },
        },
    ),
    ToolDefinition(
        name="send_request",
        description="Send an HTTP request through Burp.",
        parameters_schema={
            "type": "object",
            "properties": {
                "url": {"type": "string", "description": "Target URL"},
                "method": {
                    "type": "string",
                    "enum": list(HTTP_METHODS),
                    "default": "GET",
                    "description": "HTTP method",
                },
                "headers": {
                    "type": "object",
                    "default": {},
                    "description": "HTTP headers",
                },
                "body": {
                    "type": "string",
                    "default": "",
                    "description": "Request body",
                },
            },
            "required": ["url"],
        },
    ),
    ToolDefinition(
        name="test_connection",
        description="Test the connection to the Burp Suite REST API.",
        parameters_schema={"type": "object", "properties": {}},
    ),
    ToolDefinition(
        name="repeater_send",
        description="Send a request via Repeater.",
        parameters_schema={
            "type": "object",
            "properties": {
                "url": {"type": "string", "description": "Target URL"},
                "method": {"type": "string", "default": "GET"},
                "headers": {"type": "object", "default": {}},
                "body": {"type": "string", "default": ""},
            },
            "required": ["url"],
        },
    ),
    ToolDefinition(
        name="decoder_encode",
        description="Encode data (base64 or url).",
        parameters_schema={
            "type": "object",
            "properties": {
                "data": {"type": "string", "description": "Data to encode"},
                "encoding": {
                    "type": "string",
                    "description": "Encoding type: base64 or url",
                },
            },
            "required": ["data", "encoding"],
        },
    ),
    ToolDefinition(
        name="decoder_decode",
        description="Decode data (base64 or url).",
        parameters_schema={
            "type": "object",
            "properties": {
                "data": {"type": "string", "description": "Data to decode"},
                "encoding": {
                    "type": "string",
                    "description": "Encoding type: base64 or url",
                },
            },
            "required": ["data", "encoding"],
        },
    ),
    ToolDefinition(
        name="comparer_compare",
        description="Compare two responses for exact equality.",
        parameters_schema={
            "type": "object",
            "properties": {
                "data1": {"type": "string", "description": "First data"},
                "data2": {"type": "string", "description": "Second data"},
            },
            "required": ["data1", "data2"],
        },
    ),
)

_BY_NAME: dict[str, ToolDefinition] = {tool.name: tool for tool in _CATALOG}


def list_operations() -> tuple[ToolDefinition, ...]:
    """Return every tool definition, always in the same order."""
    return _CATALOG


def operation_names() -> frozenset[str]:
    """Return the set of tool names."""
    return frozenset(_BY_NAME)


def get_operation(name: str) -> ToolDefinition:
    """Look up a tool by name.

    Raises:
        UnknownOperationError: If no tool has that name.
    """
    try:
        return _BY_NAME[name]
    except KeyError:
        raise UnknownOperationError(name) from None
