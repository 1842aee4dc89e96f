"""Tool catalog, data types, and the dispatcher that runs tool calls."""
