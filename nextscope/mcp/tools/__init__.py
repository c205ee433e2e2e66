"""MCP tool definitions and dispatch for the Nextscope server."""

from nextscope.mcp.tools.definitions import (
    ALL_TOOLS,
    ANALYZE_COMPONENTS_TOOL,
    ANALYZE_FEATURES_TOOL,
    ANALYZE_HOOKS_TOOL,
    ANALYZE_I18N_TOOL,
    ANALYZE_PAGES_TOOL,
    ANALYZE_PATTERNS_TOOL,
    HELP_TOOL,
    MANAGE_CACHE_TOOL,
    PROJECT_OVERVIEW_TOOL,
)
from nextscope.mcp.tools.dispatch import HANDLERS, dispatch_tool, inject_timing

__all__ = [
    # Dispatch
    "HANDLERS",
    "dispatch_tool",
    "inject_timing",
    # Tool definitions
    "ALL_TOOLS",
    "ANALYZE_COMPONENTS_TOOL",
    "ANALYZE_HOOKS_TOOL",
    "ANALYZE_PAGES_TOOL",
    "ANALYZE_PATTERNS_TOOL",
    "ANALYZE_FEATURES_TOOL",
    "ANALYZE_I18N_TOOL",
    "HELP_TOOL",
    "PROJECT_OVERVIEW_TOOL",
    "MANAGE_CACHE_TOOL",
]
