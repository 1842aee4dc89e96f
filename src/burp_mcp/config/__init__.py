"""Configuration loading and validation."""

from burp_mcp.config.loader import load_config
from burp_mcp.config.schema import (
    BackendConfig,
    BurpMcpConfig,
    LoggingConfig,
    ServerConfig,
)

__all__ = [
    "BackendConfig",
    "BurpMcpConfig",
    "LoggingConfig",
    "ServerConfig",
    "load_config",
]
