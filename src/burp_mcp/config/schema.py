"""Pydantic models for burp-mcp configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from burp_mcp import __version__

DEFAULT_BURP_URL = "http://127.0.0.1:1337"


class BackendConfig(BaseModel):
    """Connection settings for the Burp Suite REST API.

    ``timeout`` bounds every backend call except the connection test;
    ``None`` waits indefinitely, which suits long-running scan requests.
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = DEFAULT_BURP_URL
    timeout: float | None = None
    connection_test_timeout: float = 5.0

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            msg = "base_url must not be empty"
            raise ValueError(msg)
        return value


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""


class ServerConfig(BaseModel):
    """Identity the MCP server reports to clients."""

    name: str = "burp-mcp-server"
    version: str = __version__


class BurpMcpConfig(BaseModel):
    """Top-level configuration for burp-mcp."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    backend: BackendConfig = Field(default_factory=BackendConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
