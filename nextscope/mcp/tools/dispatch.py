"""Routing of MCP tool calls to their handlers."""

import json
from collections.abc import Awaitable, Callable
from typing import Any

from nextscope.logging import log_operation
from nextscope.mcp.tools.handlers import (
    handle_analyze_components,
    handle_analyze_features,
    handle_analyze_hooks,
    handle_analyze_i18n,
    handle_analyze_pages,
    handle_analyze_patterns,
    handle_help,
    handle_manage_cache,
    handle_project_overview,
)
from nextscope.plugins.manager import PluginManager

Handler = Callable[[PluginManager, dict[str, Any]], Awaitable[str]]

HANDLERS: dict[str, Handler] = {
    "analyze_components": handle_analyze_components,
    "analyze_hooks": handle_analyze_hooks,
    "analyze_pages": handle_analyze_pages,
    "analyze_patterns": handle_analyze_patterns,
    "analyze_features": handle_analyze_features,
    "analyze_i18n": handle_analyze_i18n,
    "help": handle_help,
    "project_overview": handle_project_overview,
    "manage_cache": handle_manage_cache,
}

# Arguments echoed into the start-of-call log line
_LOGGED_ARGUMENTS = ("repo_path", "path", "mode", "format")


async def dispatch_tool(manager: PluginManager, name: str, arguments: dict[str, Any] | None) -> str:
    """Run the handler registered for ``name``.

    JSON object responses gain a ``timing`` field.

    Args:
        manager: Plugin manager the handler executes against.
        name: Tool name.
        arguments: Tool arguments as sent by the client.

    Returns:
        Response text.

    Raises:
        ValueError: If the tool is unknown or its arguments are invalid.
    """
    try:
        handler = HANDLERS[name]
    except KeyError:
        raise ValueError(f"Unknown tool: {name}") from None

    arguments = dict(arguments or {})
    details = {key: arguments[key] for key in _LOGGED_ARGUMENTS if key in arguments}

    with log_operation(f"tool:{name}", details) as timing:
        text = await handler(manager, arguments)

    return inject_timing(text, timing.elapsed_ms)


def inject_timing(text: str, elapsed_ms: float) -> str:
    """Add ``{"timing": {"total_ms": ...}}`` to a JSON object response.

    Text that is not a JSON object (markdown, plain text, arrays) is
    returned unchanged.
    """
    if not text.lstrip().startswith("{"):
        return text
    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        return text

    payload["timing"] = {"total_ms": round(elapsed_ms, 1)}
    return json.dumps(payload, indent=2, ensure_ascii=False)
