"""MCP tool handlers.

Each handler takes the plugin manager and the tool arguments and returns
the response text. Handlers are organized by domain:
- analysis: analyze_components, analyze_hooks, analyze_pages,
  analyze_patterns, analyze_features, analyze_i18n
- maintenance: help, project_overview, manage_cache
"""

from nextscope.mcp.tools.handlers.analysis import (
    handle_analyze_components,
    handle_analyze_features,
    handle_analyze_hooks,
    handle_analyze_i18n,
    handle_analyze_pages,
    handle_analyze_patterns,
)
from nextscope.mcp.tools.handlers.maintenance import (
    handle_help,
    handle_manage_cache,
    handle_project_overview,
)

__all__ = [
    # Analysis handlers
    "handle_analyze_components",
    "handle_analyze_hooks",
    "handle_analyze_pages",
    "handle_analyze_patterns",
    "handle_analyze_features",
    "handle_analyze_i18n",
    # Maintenance handlers
    "handle_help",
    "handle_project_overview",
    "handle_manage_cache",
]
