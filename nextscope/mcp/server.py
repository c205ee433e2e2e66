"""MCP server for Nextscope.

Exposes every registered analysis plugin as an MCP tool over stdio. One
PluginManager, and therefore one parse cache, is shared by all calls for
the lifetime of the process, so repeated tool calls only re-parse files
whose size or modification time changed.
"""

import asyncio
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from nextscope.logging import get_logger
from nextscope.mcp.tools import ALL_TOOLS, dispatch_tool
from nextscope.plugins import create_default_manager
from nextscope.plugins.manager import PluginManager

SERVER_NAME = "nextscope"

log = get_logger("mcp.server")


def create_server(manager: PluginManager | None = None) -> Server:
    """Build a server whose tools run against ``manager``.

    Args:
        manager: Plugin manager to serve. Defaults to one holding every
            built-in plugin, configured from the environment.

    Returns:
        Server with list_tools and call_tool handlers registered.
    """
    manager = manager if manager is not None else create_default_manager()
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return ALL_TOOLS

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        # Failures are reported as text content
        try:
            text = await dispatch_tool(manager, name, arguments)
        except Exception as e:
            log.warning("Tool %s failed: %s", name, e)
            text = f"Error: {type(e).__name__}: {e}"
        return [TextContent(type="text", text=text)]

    return server


async def run_server_async(manager: PluginManager | None = None) -> None:
    """Serve over stdio until the client disconnects."""
    server = create_server(manager)
    log.info("Serving %d tools over stdio", len(ALL_TOOLS))
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        log.info("MCP server shutdown complete")


def run_server(manager: PluginManager | None = None) -> None:
    """Run the MCP server (blocking)."""
    asyncio.run(run_server_async(manager))
