"""Exception hierarchy for burp-mcp.

Every module imports from here. The hierarchy is:

    BurpMcpError
    ├── ValidationError
    ├── UnknownOperationError(name)
    ├── BackendError(status_code, body)
    ├── TransformError
    └── ConfigError

Only ``UnknownOperationError`` and unexpected exceptions are reported to
the protocol caller as flagged errors; the rest are rendered as plain
text results by the tool handlers.
"""

from __future__ import annotations

from typing import Any


class BurpMcpError(Exception):
    """Base exception for all burp-mcp errors."""


# ─── Invocation Errors ────────────────────────────────────────


class ValidationError(BurpMcpError):
    """A required argument is missing or has the wrong type."""


class UnknownOperationError(BurpMcpError):
    """The invocation names a tool that is not in the catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


# ─── Backend Errors ───────────────────────────────────────────


class BackendError(BurpMcpError):
    """The Burp REST API call failed.

    ``status_code`` is ``None`` when no HTTP response was received
    (connection refused, timeout, DNS failure).
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    @property
    def status_label(self) -> str:
        """HTTP status as text, or ``Network Error`` if there was none."""
        if self.status_code is None:
            return "Network Error"
        return str(self.status_code)


# ─── Local Transform Errors ───────────────────────────────────


class TransformError(BurpMcpError):
    """A local decode of malformed input failed."""


# ─── Configuration Errors ─────────────────────────────────────


class ConfigError(BurpMcpError):
    """Invalid configuration."""
