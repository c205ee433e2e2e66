"""React component extractor plugin (``component-extractor``)."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from nextscope.aggregate import count_by, ranked
from nextscope.formatting import Section
from nextscope.logging import get_logger
from nextscope.parsing.cache import SourceFile
from nextscope.parsing.nodes import (
    child_by_field,
    exported_names,
    is_default_export,
    is_exported,
    line_of,
    node_text,
)
from nextscope.plugins.base import BaseExtractor, CliInfo, PluginMetadata, RunContext
from nextscope.plugins.react import (
    BUILTIN_HOOKS,
    class_components,
    class_has_state,
    distinct_names,
    function_components,
    function_params,
    hook_calls,
)

logger = get_logger("components")


@dataclass
class ComponentInfo:
    name: str
    type: str
    file: str
    line: int
    is_exported: bool = False
    is_default: bool = False
    has_props: bool = False
    has_state: bool = False
    hooks: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "file": self.file,
            "line": self.line,
            "is_exported": self.is_exported,
            "is_default": self.is_default,
            "has_props": self.has_props,
            "has_state": self.has_state,
            "hooks": list(self.hooks),
        }


class ComponentExtractorPlugin(BaseExtractor[list[ComponentInfo]]):
    """Finds function and class components and the hooks they use."""

    metadata = PluginMetadata(
        name="component-extractor",
        version="1.0.0",
        title="Component Analysis",
        description="Extracts React components with their props, state and hook usage",
        tags=("react", "components"),
        cli=CliInfo(
            command="components",
            description="Analyze React components",
            usage="nextscope analyze component-extractor PATH [--format FORMAT]",
            examples=("nextscope analyze component-extractor ./src",),
        ),
    )

    def process_file(self, source: SourceFile, rel_path: str, context: RunContext) -> list[ComponentInfo]:
        root = source.tree.root_node
        exported, default_name = exported_names(root)
        components: list[ComponentInfo] = []

        for name, node in function_components(root):
            hooks = distinct_names(hook_calls(node))
            components.append(ComponentInfo(
                name=name,
                type="functional",
                file=rel_path,
                line=line_of(node),
                is_exported=name in exported or is_exported(node),
                is_default=name == default_name or is_default_export(node),
                has_props=bool(function_params(node)),
                has_state="useState" in hooks or "useReducer" in hooks,
                hooks=hooks,
            ))

        for name, node in class_components(root):
            components.append(ComponentInfo(
                name=name,
                type="class",
                file=rel_path,
                line=line_of(node),
                is_exported=name in exported or is_exported(node),
                is_default=name == default_name or is_default_export(node),
                has_props="this.props" in node_text(child_by_field(node, "body")),
                has_state=class_has_state(node),
            ))

        components.sort(key=lambda c: c.line)
        logger.debug("%s: %d components", rel_path, len(components))
        return components

    async def aggregate(self, results: list[list[ComponentInfo]], root: Path, context: RunContext) -> dict[str, Any]:
        components = [c for file_components in results for c in file_components]
        hook_uses = [hook for c in components for hook in c.hooks]
        custom = [hook for hook in dict.fromkeys(hook_uses) if hook not in BUILTIN_HOOKS]

        summary = {
            "total_components": len(components),
            "functional_components": sum(1 for c in components if c.type == "functional"),
            "class_components": sum(1 for c in components if c.type == "class"),
            "exported_components": sum(1 for c in components if c.is_exported),
            "most_used_hooks": ranked(count_by(hook_uses, lambda h: h), 10, "hook"),
            "components_by_file": ranked(count_by(components, lambda c: c.file), 10, "file"),
            "custom_hooks": custom,
        }
        return {
            "summary": summary,
            "components": [c.to_dict() for c in components],
        }

    def report(self, data: dict[str, Any]) -> list[Section]:
        summary = data["summary"]
        return [
            Section("Overview", rows=[
                ("Total components", summary["total_components"]),
                ("Functional", summary["functional_components"]),
                ("Class", summary["class_components"]),
                ("Exported", summary["exported_components"]),
            ]),
            Section("Most Used Hooks", rows=[(e["hook"], e["count"]) for e in summary["most_used_hooks"]]),
            Section("Components by File", rows=[(e["file"], e["count"]) for e in summary["components_by_file"]]),
            Section("Custom Hooks", items=summary["custom_hooks"]),
            Section("Components", items=[
                f'{c["name"]} ({c["type"]}) {c["file"]}:{c["line"]}' for c in data["components"]
            ]),
        ]
