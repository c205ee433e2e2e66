"""Feature-structure extractor plugin (``feature-extractor``).

Groups files by feature directory (the directory right after ``features/``,
``modules/``, ``pages/`` and similar roots), classifies each file, traces
its data flows, and scores every feature's complexity.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any

from nextscope.formatting import Section
from nextscope.logging import get_logger
from nextscope.parsing.cache import SourceFile
from nextscope.parsing.nodes import call_name, contains_jsx, is_pascal_case, walk
from nextscope.plugins.base import BaseExtractor, CliInfo, PluginMetadata, RunContext
from nextscope.plugins.react import function_components, function_params, imports

logger = get_logger("features")

FEATURE_ROOTS = frozenset({"features", "modules", "domains", "pages", "views", "screens"})

_SERVICE_NAME = re.compile(r"service|api|store|repository", re.IGNORECASE)
_HOOK_FILE = re.compile(r"^use[A-Z0-9]")

API_CALLS = frozenset({"fetch", "axios", "axios.get", "axios.post", "axios.put", "axios.patch", "axios.delete"})

MAX_COMPLEXITY = 50
MAX_FILES = 10


@dataclass
class FeatureFile:
    file: str
    feature: str | None
    kind: str
    component: str | None = None
    flows: list[str] = field(default_factory=list)
    imported: list[str] = field(default_factory=list)


@dataclass
class Feature:
    name: str
    path: str
    components: list[str] = field(default_factory=list)
    hooks: list[str] = field(default_factory=list)
    services: list[str] = field(default_factory=list)
    utils: list[str] = field(default_factory=list)
    flows: list[dict[str, str]] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return len(self.components) + len(self.hooks) + len(self.services) + len(self.utils)

    @property
    def complexity(self) -> int:
        return len(self.components) * 2 + len(self.hooks) + len(self.services) * 3 + len(self.flows)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "components": list(self.components),
            "hooks": list(self.hooks),
            "services": list(self.services),
            "utils": list(self.utils),
            "data_flows": list(self.flows),
            "file_count": self.file_count,
            "complexity": self.complexity,
        }


def feature_of(rel_path: str) -> tuple[str, str] | None:
    """``(feature name, feature path)`` for files inside a feature directory."""
    parts = PurePosixPath(rel_path).parts
    # The feature must be a directory, so at least one part follows it
    for index, part in enumerate(parts[:-2]):
        if part in FEATURE_ROOTS:
            return parts[index + 1], "/".join(parts[:index + 2])
    return None


def classify_file(stem: str, has_jsx: bool) -> str:
    if _HOOK_FILE.match(stem):
        return "hooks"
    if _SERVICE_NAME.search(stem):
        return "services"
    if is_pascal_case(stem) or has_jsx:
        return "components"
    return "utils"


class FeatureExtractorPlugin(BaseExtractor[FeatureFile]):
    """Maps feature directories, their file roles and data flows."""

    metadata = PluginMetadata(
        name="feature-extractor",
        version="1.0.0",
        title="Feature Analysis",
        description="Groups files into features and scores their complexity",
        tags=("architecture", "features"),
        cli=CliInfo(
            command="features",
            description="Analyze feature structure",
            usage="nextscope analyze feature-extractor PATH [--format FORMAT]",
            category="architecture",
            examples=("nextscope analyze feature-extractor ./src --format json",),
        ),
    )

    def process_file(self, source: SourceFile, rel_path: str, context: RunContext) -> FeatureFile:
        root = source.tree.root_node
        stem = PurePosixPath(rel_path).name.split(".")[0]
        located = feature_of(rel_path)
        kind = classify_file(stem, contains_jsx(root))

        flows: list[str] = []
        components = function_components(root)
        if any(function_params(node) for _, node in components):
            flows.append("props")
        calls = {call_name(n) for n in walk(root) if n.type == "call_expression"}
        if "useContext" in calls or "React.useContext" in calls:
            flows.append("context")
        if calls & API_CALLS:
            flows.append("api")

        return FeatureFile(
            file=rel_path,
            feature=located[0] if located else None,
            kind=kind,
            component=stem if kind == "components" else None,
            flows=flows,
            imported=[name for _, names in imports(root) for name in names],
        )

    async def aggregate(self, results: list[FeatureFile], root: Path, context: RunContext) -> dict[str, Any]:
        features: dict[str, Feature] = {}
        for r in results:
            located = feature_of(r.file)
            if located is None:
                continue
            name, path = located
            feature = features.setdefault(name, Feature(name=name, path=path))
            getattr(feature, r.kind).append(r.file)
            feature.flows.extend({"type": flow, "file": r.file} for flow in r.flows)

        component_names = {r.component for r in results if r.component}
        importers: dict[str, list[str]] = {}
        for r in results:
            if r.feature is None:
                continue
            for name in r.imported:
                if name in component_names:
                    owners = importers.setdefault(name, [])
                    if r.feature not in owners:
                        owners.append(r.feature)
        shared = [
            {"component": name, "features": owners}
            for name, owners in importers.items()
            if len(owners) > 1
        ]

        suggestions = []
        for feature in features.values():
            reasons = []
            if feature.complexity > MAX_COMPLEXITY:
                reasons.append(f"complexity {feature.complexity} exceeds {MAX_COMPLEXITY}")
            if feature.file_count > MAX_FILES:
                reasons.append(f"{feature.file_count} files exceeds {MAX_FILES}")
            if reasons:
                suggestions.append({
                    "feature": feature.name,
                    "reason": "; ".join(reasons),
                    "suggestion": "Split this feature into smaller sub-features",
                })

        ordered = sorted(features.values(), key=lambda f: -f.complexity)
        logger.info("Found %d features", len(features))
        return {
            "summary": {
                "total_features": len(features),
                "features_by_complexity": [
                    {"feature": f.name, "complexity": f.complexity, "files": f.file_count}
                    for f in ordered[:10]
                ],
                "shared_components": shared,
                "refactor_suggestions": suggestions,
            },
            "features": [f.to_dict() for f in features.values()],
        }

    def report(self, data: dict[str, Any]) -> list[Section]:
        summary = data["summary"]
        return [
            Section("Overview", rows=[("Total features", summary["total_features"])]),
            Section("Features by Complexity", rows=[
                (e["feature"], f'{e["complexity"]} ({e["files"]} files)') for e in summary["features_by_complexity"]
            ]),
            Section("Shared Components", items=[
                f'{s["component"]}: {", ".join(s["features"])}' for s in summary["shared_components"]
            ]),
            Section("Refactor Suggestions", items=[
                f'{s["feature"]}: {s["suggestion"]} ({s["reason"]})' for s in summary["refactor_suggestions"]
            ]),
        ]
