"""Server module for MCP integration."""

from .mcp import MCPServer, run_mcp_server

__all__ = [
    "MCPServer",
    "run_mcp_server",
]
