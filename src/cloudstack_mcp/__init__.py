"""CloudStack MCP server - CloudStack management operations as MCP tools."""

__version__ = "0.1.0"
