"""Tax Compare MCP server package."""
