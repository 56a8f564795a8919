"""Burger MCP server: menu and order tools over stateless Streamable HTTP."""
