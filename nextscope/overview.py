"""Project overview: framework detection plus headline counts.

Reads ``package.json`` to tell Next.js projects from plain React ones, then
runs the component, page and hook extractors through the manager and
combines their summaries.
"""

import json
from pathlib import Path
from typing import Any

from nextscope.formatting import Section
from nextscope.logging import get_logger
from nextscope.models import FrameworkInfo, OverviewCounts, ProjectOverview
from nextscope.plugins.manager import PluginManager

logger = get_logger("overview")

OVERVIEW_PLUGINS = ("component-extractor", "page-extractor", "hook-extractor")


def detect_framework(root: Path) -> FrameworkInfo:
    """Inspect ``package.json`` dependencies for ``next`` and ``react``."""
    package_json = root / "package.json"
    if not package_json.exists():
        return FrameworkInfo()

    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Could not read %s: %s", package_json, e)
        return FrameworkInfo(has_package_json=True)

    deps: dict[str, Any] = {}
    for section in ("dependencies", "devDependencies", "peerDependencies"):
        value = data.get(section)
        if isinstance(value, dict):
            deps.update(value)

    next_version = deps.get("next")
    react_version = deps.get("react")
    if next_version:
        framework = "nextjs"
    elif react_version:
        framework = "react"
    else:
        framework = "unknown"
    return FrameworkInfo(
        framework=framework,
        has_package_json=True,
        name=data.get("name"),
        next_version=next_version,
        react_version=react_version,
    )


async def project_overview(manager: PluginManager, root: Path) -> ProjectOverview:
    """Framework plus component, page and hook totals for ``root``.

    Plugins that are not registered or that fail are reported under
    ``errors``; the remaining counts are still returned.
    """
    overview = ProjectOverview(project_path=str(root), framework=detect_framework(root))

    summaries: dict[str, dict[str, Any]] = {}
    for name in OVERVIEW_PLUGINS:
        result = await manager.execute(name, root)
        if not result.success:
            overview.errors.extend(result.errors)
            continue
        summaries[name] = result.data["summary"]
        overview.warnings.extend(w for w in result.warnings if w not in overview.warnings)
        overview.files_processed = max(overview.files_processed, result.metadata.get("files_processed", 0))

    components = summaries.get("component-extractor", {})
    pages = summaries.get("page-extractor", {})
    hooks = summaries.get("hook-extractor", {})
    overview.counts = OverviewCounts(
        components=components.get("total_components", 0),
        functional_components=components.get("functional_components", 0),
        class_components=components.get("class_components", 0),
        pages=pages.get("total_pages", 0),
        dynamic_routes=len(pages.get("dynamic_routes", [])),
        custom_hooks=hooks.get("total_custom_hooks", 0),
        hook_calls=hooks.get("total_hook_calls", 0),
        hook_violations=hooks.get("total_violations", 0),
    )
    overview.pages_by_type = pages.get("pages_by_type", {})
    overview.rendering_methods = pages.get("rendering_methods", {})
    return overview


def overview_sections(overview: ProjectOverview) -> list[Section]:
    framework = overview.framework
    versions = [
        f"{name} {version}"
        for name, version in (("next", framework.next_version), ("react", framework.react_version))
        if version
    ]
    return [
        Section("Project", rows=[
            ("Path", overview.project_path),
            ("Framework", framework.framework),
            ("Versions", ", ".join(versions) or "unknown"),
            ("Files processed", overview.files_processed),
        ]),
        Section("Counts", rows=list(overview.counts.model_dump().items())),
        Section("Rendering Methods", rows=list(overview.rendering_methods.items())),
        Section("Errors", items=overview.errors),
    ]
