"""Core utilities for the CloudStack MCP server."""
