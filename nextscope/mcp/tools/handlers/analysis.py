"""Analysis tool handlers.

Each analysis tool maps to one registered plugin. Handlers resolve the
target directory, run the plugin through the manager, and render the
result in the requested format.
"""

import os
from pathlib import Path
from typing import Any

from nextscope.formatting import check_format, to_json
from nextscope.plugins.base import PluginResult
from nextscope.plugins.manager import PluginManager

# Tool arguments forwarded to the i18n extractor as plugin options
I18N_OPTION_KEYS = ("functions", "min_length", "languages", "jsx_text", "string_literals")


def resolve_target(arguments: dict[str, Any]) -> Path:
    """Resolve ``repo_path`` (plus optional ``path``) to an existing directory.

    Falls back to ``NEXTSCOPE_PROJECT_PATH`` when ``repo_path`` is omitted.

    Raises:
        ValueError: If no path is given or it does not exist.
    """
    repo_path = arguments.get("repo_path") or os.getenv("NEXTSCOPE_PROJECT_PATH")
    if not repo_path:
        raise ValueError("repo_path is required (or set NEXTSCOPE_PROJECT_PATH)")

    target = Path(repo_path).expanduser().resolve()
    sub_path = arguments.get("path")
    if sub_path:
        target = (target / sub_path).resolve()
    if not target.exists():
        raise ValueError(f"Path does not exist: {target}")
    return target


def render_result(manager: PluginManager, name: str, result: PluginResult, fmt: str) -> str:
    """Render a plugin result; JSON carries the full result envelope."""
    if fmt == "json":
        return to_json(result.to_dict())

    if not result.success:
        return "\n".join(f"Error: {error}" for error in result.errors) + "\n"

    plugin = manager.get(name)
    rendered = plugin.render(result.data, fmt) if plugin is not None else to_json(result.data)
    if result.warnings:
        lines = [f"- {w}" if fmt == "markdown" else f"  - {w}" for w in result.warnings]
        heading = "## Warnings" if fmt == "markdown" else "Warnings"
        rendered += "\n" + heading + "\n" + "\n".join(lines) + "\n"
    return rendered


async def run_plugin_tool(
    manager: PluginManager,
    plugin_name: str,
    arguments: dict[str, Any],
    options: dict[str, Any] | None = None,
) -> str:
    fmt = check_format(arguments.get("format") or "json")
    target = resolve_target(arguments)
    result = await manager.execute(plugin_name, target, options)
    return render_result(manager, plugin_name, result, fmt)


async def handle_analyze_components(manager: PluginManager, arguments: dict[str, Any]) -> str:
    return await run_plugin_tool(manager, "component-extractor", arguments)


async def handle_analyze_hooks(manager: PluginManager, arguments: dict[str, Any]) -> str:
    return await run_plugin_tool(manager, "hook-extractor", arguments)


async def handle_analyze_pages(manager: PluginManager, arguments: dict[str, Any]) -> str:
    return await run_plugin_tool(manager, "page-extractor", arguments)


async def handle_analyze_patterns(manager: PluginManager, arguments: dict[str, Any]) -> str:
    return await run_plugin_tool(manager, "pattern-extractor", arguments)


async def handle_analyze_features(manager: PluginManager, arguments: dict[str, Any]) -> str:
    return await run_plugin_tool(manager, "feature-extractor", arguments)


async def handle_analyze_i18n(manager: PluginManager, arguments: dict[str, Any]) -> str:
    """Handle analyze_i18n tool call.

    Args:
        manager: Plugin manager to execute with.
        arguments: Tool arguments; ``functions``, ``min_length``,
            ``languages``, ``jsx_text`` and ``string_literals`` are passed
            to the extractor as options.

    Returns:
        Rendered analysis (JSON envelope by default).

    Raises:
        ValueError: If the format or target path is invalid.
    """
    options = {key: arguments[key] for key in I18N_OPTION_KEYS if arguments.get(key) is not None}
    return await run_plugin_tool(manager, "i18n-extractor", arguments, options)
