"""burp-mcp - MCP adapter for the Burp Suite REST API."""

__version__ = "0.1.0"
