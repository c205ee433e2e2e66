"""React hook extractor plugin (``hook-extractor``).

Reports custom hook definitions, hook call counts, and calls that break the
rules of hooks: calls under a condition or loop, and calls inside nested
callbacks that are neither components nor hooks.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tree_sitter import Node

from nextscope.aggregate import count_by, ranked
from nextscope.formatting import Section
from nextscope.logging import get_logger
from nextscope.parsing.cache import SourceFile
from nextscope.parsing.nodes import (
    FUNCTION_TYPES,
    child_by_field,
    enclosing_function,
    exported_names,
    function_name,
    is_exported,
    is_hook_name,
    is_pascal_case,
    line_of,
    walk,
)
from nextscope.plugins.base import BaseExtractor, CliInfo, PluginMetadata, RunContext
from nextscope.plugins.react import (
    BUILTIN_HOOKS,
    distinct_names,
    function_params,
    hook_calls,
)

logger = get_logger("hooks")

CONDITIONAL_TYPES = frozenset({
    "if_statement",
    "ternary_expression",
    "switch_statement",
    "for_statement",
    "for_in_statement",
    "while_statement",
    "do_statement",
})

CONDITIONAL_VIOLATION = ("Hook called conditionally", "Move hook to top level of component")
NESTED_VIOLATION = ("Hook called in nested function", "Move hook to component level or create custom hook")


@dataclass
class FileHooks:
    file: str
    custom_hooks: list[dict[str, Any]] = field(default_factory=list)
    calls: list[str] = field(default_factory=list)
    violations: list[dict[str, Any]] = field(default_factory=list)


def _is_hook_owner(function: Node) -> bool:
    name = function_name(function)
    return is_pascal_case(name) or is_hook_name(name)


def _is_conditional(node: Node) -> bool:
    if node.type in CONDITIONAL_TYPES:
        return True
    if node.type == "binary_expression":
        operator = child_by_field(node, "operator")
        return operator is not None and operator.type in ("&&", "||", "??")
    return False


def _violation(call: Node) -> tuple[str, str] | None:
    owner = enclosing_function(call)
    if owner is None:
        return None

    if not _is_hook_owner(owner):
        # Only a callback nested inside a component or hook counts
        outer = enclosing_function(owner)
        while outer is not None:
            if _is_hook_owner(outer):
                return NESTED_VIOLATION
            outer = enclosing_function(outer)
        return None

    current = call.parent
    while current is not None and current != owner:
        if _is_conditional(current):
            return CONDITIONAL_VIOLATION
        current = current.parent
    return None


class HookExtractorPlugin(BaseExtractor[FileHooks]):
    """Collects custom hooks, hook usage, and rule-of-hooks violations."""

    metadata = PluginMetadata(
        name="hook-extractor",
        version="1.0.0",
        title="Hook Analysis",
        description="Extracts custom hooks, hook usage counts and rules-of-hooks violations",
        tags=("react", "hooks"),
        cli=CliInfo(
            command="hooks",
            description="Analyze React hooks",
            usage="nextscope analyze hook-extractor PATH [--format FORMAT]",
            examples=("nextscope analyze hook-extractor ./src --format markdown",),
        ),
    )

    def process_file(self, source: SourceFile, rel_path: str, context: RunContext) -> FileHooks:
        root = source.tree.root_node
        exported, _ = exported_names(root)
        result = FileHooks(file=rel_path)

        for node in walk(root):
            if node.type not in FUNCTION_TYPES:
                continue
            name = function_name(node)
            if not is_hook_name(name):
                continue
            body = child_by_field(node, "body")
            result.custom_hooks.append({
                "name": name,
                "file": rel_path,
                "line": line_of(node),
                "is_exported": name in exported or is_exported(node),
                "params": function_params(node),
                "uses_hooks": distinct_names(hook_calls(body)) if body is not None else [],
            })

        for call in hook_calls(root):
            result.calls.append(call.name)
            violation = _violation(call.node)
            if violation is not None:
                message, suggestion = violation
                result.violations.append({
                    "type": message,
                    "hook": call.name,
                    "file": rel_path,
                    "line": call.line,
                    "suggestion": suggestion,
                })
        return result

    async def aggregate(self, results: list[FileHooks], root: Path, context: RunContext) -> dict[str, Any]:
        calls = [(name, r.file) for r in results for name in r.calls]
        counts = count_by(calls, lambda pair: pair[0])
        builtin = {name: n for name, n in counts.items() if name in BUILTIN_HOOKS}
        custom = {name: n for name, n in counts.items() if name not in BUILTIN_HOOKS}
        custom_hooks = [hook for r in results for hook in r.custom_hooks]
        violations = [v for r in results for v in r.violations]

        if violations:
            logger.info("Found %d hook violations", len(violations))

        return {
            "summary": {
                "total_custom_hooks": len(custom_hooks),
                "total_hook_calls": len(calls),
                "most_used_hooks": ranked(counts, 15, "hook"),
                "hooks_by_file": ranked(count_by(calls, lambda pair: pair[1]), 20, "file"),
                "total_violations": len(violations),
            },
            "custom_hooks": custom_hooks,
            "hook_usage": {"builtin": builtin, "custom": custom},
            "violations": violations,
        }

    def report(self, data: dict[str, Any]) -> list[Section]:
        summary = data["summary"]
        return [
            Section("Overview", rows=[
                ("Custom hooks", summary["total_custom_hooks"]),
                ("Hook calls", summary["total_hook_calls"]),
                ("Violations", summary["total_violations"]),
            ]),
            Section("Most Used Hooks", rows=[(e["hook"], e["count"]) for e in summary["most_used_hooks"]]),
            Section("Hooks by File", rows=[(e["file"], e["count"]) for e in summary["hooks_by_file"]]),
            Section("Custom Hooks", items=[
                f'{h["name"]}({", ".join(h["params"])}) {h["file"]}:{h["line"]}' for h in data["custom_hooks"]
            ]),
            Section("Violations", items=[
                f'{v["file"]}:{v["line"]} {v["hook"]}: {v["type"]}. {v["suggestion"]}' for v in data["violations"]
            ], empty="No violations found"),
        ]
