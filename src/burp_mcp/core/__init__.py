"""Core types, errors, and shared utilities."""

from burp_mcp.core.errors import (
    BackendError,
    BurpMcpError,
    ConfigError,
    TransformError,
    UnknownOperationError,
    ValidationError,
)
from burp_mcp.core.log import setup_logging

__all__ = [
    "BackendError",
    "BurpMcpError",
    "ConfigError",
    "TransformError",
    "UnknownOperationError",
    "ValidationError",
    "setup_logging",
]
