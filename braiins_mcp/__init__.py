"""Braiins Pool MCP server: cached, read-only access to Braiins Pool mining data."""

__version__ = "0.1.0"
