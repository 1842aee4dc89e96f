"""Burp Suite REST API client."""

from burp_mcp.backend.client import BurpClient

__all__ = ["BurpClient"]
