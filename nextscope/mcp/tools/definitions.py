"""MCP Tool schema definitions.

Contains all Tool objects that define the MCP interface for Nextscope.
Each Tool specifies its name, description, and JSON schema for inputs.
"""

from typing import Any

from mcp.types import Tool

from nextscope.formatting import FORMATS

# Properties shared by every analysis tool
_TARGET_PROPERTIES: dict[str, Any] = {
    "repo_path": {
        "type": "string",
        "description": "Absolute path to the project to analyze (defaults to NEXTSCOPE_PROJECT_PATH)",
    },
    "path": {
        "type": "string",
        "description": "Subdirectory of repo_path to restrict the analysis to (e.g. 'src')",
    },
    "format": {
        "type": "string",
        "enum": list(FORMATS),
        "description": "Output format (default: json)",
        "default": "json",
    },
}


def _analysis_tool(name: str, description: str, extra: dict[str, Any] | None = None) -> Tool:
    return Tool(
        name=name,
        description=description,
        inputSchema={
            "type": "object",
            "properties": {**_TARGET_PROPERTIES, **(extra or {})},
        },
    )


# =============================================================================
# ANALYSIS TOOLS
# =============================================================================

ANALYZE_COMPONENTS_TOOL = _analysis_tool(
    "analyze_components",
    "List React function and class components with export status, props, state and hooks used. "
    "Summarizes the most used hooks and the files with the most components.",
)

ANALYZE_HOOKS_TOOL = _analysis_tool(
    "analyze_hooks",
    "Find custom hooks, count builtin and custom hook calls, and report rules-of-hooks violations "
    "(hooks called conditionally or inside nested callbacks).",
)

ANALYZE_PAGES_TOOL = _analysis_tool(
    "analyze_pages",
    "Map Next.js pages/ and app/ files to routes with page type, dynamic segments and "
    "rendering method (ssr, ssg, static).",
)

ANALYZE_PATTERNS_TOOL = _analysis_tool(
    "analyze_patterns",
    "Detect higher-order components, render props, contexts with their providers and consumers, "
    "custom hook categories, and component anti-patterns.",
)

ANALYZE_FEATURES_TOOL = _analysis_tool(
    "analyze_features",
    "Group files by feature directory, classify them as components, hooks, services or utils, "
    "trace data flows, and flag features that should be split.",
)

ANALYZE_I18N_TOOL = _analysis_tool(
    "analyze_i18n",
    "Find hardcoded user-facing strings that should be translated, translation function usage, "
    "and keys missing from locale files. Each string is classified by a prioritized list of validators.",
    {
        "functions": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Translation function names (default: t, translate, $t, i18n.t, i18next.t)",
        },
        "min_length": {
            "type": "integer",
            "description": "Minimum string length to consider (default: 3)",
            "default": 3,
        },
        "languages": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Languages to expect when no locale files are found",
        },
        "jsx_text": {
            "type": "boolean",
            "description": "Analyze JSX text content (default: true)",
            "default": True,
        },
        "string_literals": {
            "type": "boolean",
            "description": "Analyze string literals outside JSX (default: true)",
            "default": True,
        },
    },
)

# =============================================================================
# UTILITY TOOLS
# =============================================================================

HELP_TOOL = Tool(
    name="help",
    description="List available Nextscope analysis commands grouped by category.",
    inputSchema={
        "type": "object",
        "properties": {
            "command": {
                "type": "string",
                "description": "Show only this command (e.g. 'i18n' or 'i18n-extractor')",
            },
            "format": _TARGET_PROPERTIES["format"],
        },
    },
)

PROJECT_OVERVIEW_TOOL = Tool(
    name="project_overview",
    description=(
        "Quick overview of a React/Next.js project: detected framework from package.json, "
        "component, hook and page counts. Start here before running the detailed analyses."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "repo_path": _TARGET_PROPERTIES["repo_path"],
            "path": _TARGET_PROPERTIES["path"],
        },
    },
)

MANAGE_CACHE_TOOL = Tool(
    name="manage_cache",
    description=(
        "Inspect or clear the in-memory parse cache shared by all analyses. "
        "Mode 'info' shows entry count and hit/miss counters; 'clear' drops every entry."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "mode": {
                "type": "string",
                "enum": ["info", "clear"],
                "description": "Cache operation to perform",
            },
        },
        "required": ["mode"],
    },
)

ALL_TOOLS: list[Tool] = [
    ANALYZE_COMPONENTS_TOOL,
    ANALYZE_HOOKS_TOOL,
    ANALYZE_PAGES_TOOL,
    ANALYZE_PATTERNS_TOOL,
    ANALYZE_FEATURES_TOOL,
    ANALYZE_I18N_TOOL,
    HELP_TOOL,
    PROJECT_OVERVIEW_TOOL,
    MANAGE_CACHE_TOOL,
]
