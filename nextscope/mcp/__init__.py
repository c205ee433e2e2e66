"""MCP server for Nextscope."""
