"""Machina docs MCP server: documentation and template tooling for sports agents."""

__version__ = "1.0.0"
