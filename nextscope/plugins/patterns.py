"""React pattern extractor plugin (``pattern-extractor``)."""

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
    callee_tail,
    child_by_field,
    exported_names,
    function_name,
    is_exported,
    is_hook_name,
    is_pascal_case,
    jsx_tag_name,
    line_of,
    node_text,
    walk,
)
from nextscope.plugins.base import BaseExtractor, CliInfo, PluginMetadata, RunContext
from nextscope.plugins.react import function_params, owned_hook_calls

logger = get_logger("patterns")

# Checked in order; the first matching keyword decides the category
HOOK_CATEGORIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("state-management", ("State", "Store")),
    ("data-fetching", ("Fetch", "Api", "Query")),
    ("side-effects", ("Effect", "Event")),
    ("utility", ("Format", "Parse", "Validate")),
)

MAX_STATE_WITH_EFFECT = 4
MAX_EFFECTS = 3

REFACTORS = {
    "too-many-state-variables": "Group related state with useReducer or extract a custom hook",
    "too-many-effects": "Split effects by concern into custom hooks",
}


def hook_category(name: str) -> str:
    for category, keywords in HOOK_CATEGORIES:
        if any(keyword in name for keyword in keywords):
            return category
    return "other"


def hook_complexity(param_count: int) -> str:
    if param_count == 0:
        return "low"
    if param_count <= 2:
        return "medium"
    return "high"


def is_hoc_name(name: str | None) -> bool:
    if not name:
        return False
    return (name.startswith("with") and name[4:5].isupper()) or name.endswith("HOC")


@dataclass
class FilePatterns:
    file: str
    hocs: list[dict[str, Any]] = field(default_factory=list)
    render_props: list[dict[str, Any]] = field(default_factory=list)
    contexts: list[dict[str, Any]] = field(default_factory=list)
    providers: list[str] = field(default_factory=list)
    consumers: list[str] = field(default_factory=list)
    custom_hooks: list[dict[str, Any]] = field(default_factory=list)
    anti_patterns: list[dict[str, Any]] = field(default_factory=list)


def _render_props(root: Node, rel_path: str) -> list[dict[str, Any]]:
    found: list[dict[str, Any]] = []
    for node in walk(root):
        if node.type == "jsx_attribute":
            name = node_text(node.children[0]) if node.children else ""
            if name == "render":
                element = node.parent
                found.append({
                    "kind": "render-attribute",
                    "component": jsx_tag_name(element) if element is not None else None,
                    "file": rel_path,
                    "line": line_of(node),
                })
        elif node.type == "jsx_expression" and node.parent is not None and node.parent.type == "jsx_element":
            if any(child.type in FUNCTION_TYPES for child in node.children):
                found.append({
                    "kind": "function-as-child",
                    "component": jsx_tag_name(node.parent),
                    "file": rel_path,
                    "line": line_of(node),
                })
    return found


def _anti_patterns(function: Node, name: str, rel_path: str) -> list[dict[str, Any]]:
    calls = [c.name for c in owned_hook_calls(function)]
    states = calls.count("useState")
    effects = calls.count("useEffect")
    found: list[dict[str, Any]] = []
    if states > MAX_STATE_WITH_EFFECT and effects:
        found.append({
            "type": "too-many-state-variables",
            "component": name,
            "file": rel_path,
            "line": line_of(function),
            "detail": f"{states} useState calls alongside useEffect",
        })
    if effects > MAX_EFFECTS:
        found.append({
            "type": "too-many-effects",
            "component": name,
            "file": rel_path,
            "line": line_of(function),
            "detail": f"{effects} useEffect calls",
        })
    return found


class PatternExtractorPlugin(BaseExtractor[FilePatterns]):
    """Detects HOCs, render props, contexts, hook categories and anti-patterns."""

    metadata = PluginMetadata(
        name="pattern-extractor",
        version="1.0.0",
        title="Pattern Analysis",
        description="Detects React composition patterns and common anti-patterns",
        tags=("react", "patterns", "architecture"),
        cli=CliInfo(
            command="patterns",
            description="Analyze React patterns and anti-patterns",
            usage="nextscope analyze pattern-extractor PATH [--format FORMAT]",
            examples=("nextscope analyze pattern-extractor ./src",),
        ),
    )

    def process_file(self, source: SourceFile, rel_path: str, context: RunContext) -> FilePatterns:
        root = source.tree.root_node
        exported, _ = exported_names(root)
        result = FilePatterns(file=rel_path, render_props=_render_props(root, rel_path))

        for node in walk(root):
            if node.type in FUNCTION_TYPES and node.type != "method_definition":
                name = function_name(node)
                if is_hoc_name(name) and (name in exported or is_exported(node)):
                    result.hocs.append({"name": name, "file": rel_path, "line": line_of(node)})
                if is_hook_name(name):
                    params = function_params(node)
                    result.custom_hooks.append({
                        "name": name,
                        "file": rel_path,
                        "line": line_of(node),
                        "category": hook_category(name),
                        "complexity": hook_complexity(len(params)),
                    })
                if is_pascal_case(name) or is_hook_name(name):
                    result.anti_patterns.extend(_anti_patterns(node, name, rel_path))

            elif node.type == "call_expression":
                tail = callee_tail(node)
                if tail == "createContext":
                    parent = node.parent
                    if parent is not None and parent.type == "variable_declarator":
                        result.contexts.append({
                            "name": node_text(child_by_field(parent, "name")),
                            "file": rel_path,
                            "line": line_of(node),
                        })
                elif tail == "useContext":
                    args = child_by_field(node, "arguments")
                    named = [c for c in args.children if c.is_named] if args is not None else []
                    if named:
                        result.consumers.append(node_text(named[0]))

            elif node.type in ("jsx_opening_element", "jsx_self_closing_element"):
                tag = node_text(child_by_field(node, "name"))
                if tag.endswith(".Provider"):
                    result.providers.append(tag.removesuffix(".Provider"))
                elif tag.endswith(".Consumer"):
                    result.consumers.append(tag.removesuffix(".Consumer"))

        return result

    async def aggregate(self, results: list[FilePatterns], root: Path, context: RunContext) -> dict[str, Any]:
        hocs = [h for r in results for h in r.hocs]
        render_props = [p for r in results for p in r.render_props]
        custom_hooks = [h for r in results for h in r.custom_hooks]
        anti_patterns = [a for r in results for a in r.anti_patterns]

        contexts = []
        for r in results:
            for ctx in r.contexts:
                name = ctx["name"]
                contexts.append({
                    **ctx,
                    "provider_files": [o.file for o in results if name in o.providers],
                    "consumer_files": [o.file for o in results if name in o.consumers],
                })

        by_category: dict[str, list[str]] = {}
        for hook in custom_hooks:
            by_category.setdefault(hook["category"], []).append(hook["name"])

        refactors = [
            {
                "component": a["component"],
                "file": a["file"],
                "line": a["line"],
                "issue": a["type"],
                "suggestion": REFACTORS[a["type"]],
            }
            for a in anti_patterns
        ]

        return {
            "summary": {
                "pattern_counts": {
                    "hocs": len(hocs),
                    "render_props": len(render_props),
                    "contexts": len(contexts),
                    "custom_hooks": len(custom_hooks),
                },
                "custom_hooks_by_category": by_category,
                "anti_patterns": ranked(count_by(anti_patterns, lambda a: a["type"]), 10, "type"),
                "recommended_refactors": refactors,
            },
            "hocs": hocs,
            "render_props": render_props,
            "contexts": contexts,
            "custom_hooks": custom_hooks,
            "anti_patterns": anti_patterns,
        }

    def report(self, data: dict[str, Any]) -> list[Section]:
        summary = data["summary"]
        return [
            Section("Pattern Counts", rows=list(summary["pattern_counts"].items())),
            Section("Custom Hooks by Category", rows=[
                (category, ", ".join(names)) for category, names in summary["custom_hooks_by_category"].items()
            ]),
            Section("Contexts", items=[
                f'{c["name"]} ({c["file"]}): {len(c["provider_files"])} providers, '
                f'{len(c["consumer_files"])} consumers'
                for c in data["contexts"]
            ]),
            Section("Anti-patterns", rows=[(e["type"], e["count"]) for e in summary["anti_patterns"]],
                    empty="No anti-patterns found"),
            Section("Recommended Refactors", items=[
                f'{r["component"]} ({r["file"]}:{r["line"]}): {r["suggestion"]}'
                for r in summary["recommended_refactors"]
            ]),
        ]
