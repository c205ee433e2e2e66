"""Help, overview and cache management handlers."""

import json
from typing import Any

from nextscope.formatting import check_format, render_sections
from nextscope.mcp.tools.handlers.analysis import render_result, resolve_target
from nextscope.overview import overview_sections, project_overview
from nextscope.plugins.manager import PluginManager


async def handle_help(manager: PluginManager, arguments: dict[str, Any]) -> str:
    """Handle help tool call; lists commands from the registered plugins."""
    fmt = check_format(arguments.get("format") or "json")
    options = {"command": arguments["command"]} if arguments.get("command") else {}
    # help-extractor reads no files, so any path will do
    result = await manager.execute("help-extractor", ".", options)
    return render_result(manager, "help-extractor", result, fmt)


async def handle_project_overview(manager: PluginManager, arguments: dict[str, Any]) -> str:
    """Handle project_overview tool call."""
    fmt = check_format(arguments.get("format") or "json")
    overview = await project_overview(manager, resolve_target(arguments))
    if fmt == "json":
        return overview.model_dump_json(indent=2)
    return render_sections("Project Overview", overview_sections(overview), fmt)


async def handle_manage_cache(manager: PluginManager, arguments: dict[str, Any]) -> str:
    """Handle manage_cache tool call.

    Modes:
    - info: entry count, cumulative hits/misses and cached bytes
    - clear: drop every entry and reset the counters

    Raises:
        ValueError: If mode is missing or unknown.
    """
    mode = arguments.get("mode")
    if not mode:
        raise ValueError("mode is required")

    if mode == "info":
        return json.dumps({"status": "ok", "cache": manager.parse_cache.info()}, indent=2)
    elif mode == "clear":
        removed = manager.parse_cache.clear()
        return json.dumps({
            "status": "cleared",
            "entries_removed": removed,
            "message": f"Removed {removed} cached parse trees",
        }, indent=2)
    else:
        raise ValueError(f"Unknown mode: {mode}")
