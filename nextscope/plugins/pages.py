"""Next.js page extractor plugin (``page-extractor``).

Maps files under ``pages/`` (pages router) and ``app/`` (app router) to
routes, and classifies how each page renders from the data-fetching
functions it exports.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any

from nextscope.aggregate import count_by, ranked
from nextscope.formatting import Section
from nextscope.logging import get_logger
from nextscope.parsing.cache import SourceFile
from nextscope.parsing.nodes import exported_names
from nextscope.plugins.base import BaseExtractor, CliInfo, PluginMetadata, RunContext

logger = get_logger("pages")

ROUTER_DIRECTORIES = ("pages", "app")

SSR_METHODS = ("getServerSideProps", "getInitialProps")
SSG_METHODS = ("getStaticProps", "getStaticPaths", "generateStaticParams")
DATA_FETCHING_METHODS = SSR_METHODS + SSG_METHODS + ("generateMetadata",)

# App router special files and the page type each defines
APP_FILES: dict[str, str] = {
    "page": "page",
    "layout": "layout",
    "template": "layout",
    "loading": "loading",
    "error": "error",
    "global-error": "error",
    "not-found": "not-found",
    "route": "api",
}

# Pages router files with a fixed role
PAGES_SPECIAL: dict[str, str] = {
    "_app": "layout",
    "_document": "layout",
    "_error": "error",
    "404": "not-found",
    "500": "error",
}

_DYNAMIC = re.compile(r"^\[(\.\.\.)?([^\]]+)\]$")
_OPTIONAL_CATCH_ALL = re.compile(r"^\[\[\.\.\.([^\]]+)\]\]$")
_ROUTE_GROUP = re.compile(r"^\(.*\)$")


@dataclass
class PageInfo:
    file: str
    route: str
    router: str
    page_type: str
    rendering: str = "static"
    data_fetching: list[str] = field(default_factory=list)
    dynamic_segments: list[dict[str, Any]] = field(default_factory=list)

    @property
    def complexity(self) -> int:
        segments = [s for s in self.route.split("/") if s]
        return len(segments) + len(self.dynamic_segments)

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "route": self.route,
            "router": self.router,
            "page_type": self.page_type,
            "rendering": self.rendering,
            "data_fetching": list(self.data_fetching),
            "dynamic_segments": list(self.dynamic_segments),
        }


def dynamic_segment(segment: str) -> dict[str, Any] | None:
    """Describe a ``[x]``, ``[...x]`` or ``[[...x]]`` segment."""
    match = _OPTIONAL_CATCH_ALL.match(segment)
    if match:
        return {"name": match.group(1), "type": "catch-all", "optional": True}
    match = _DYNAMIC.match(segment)
    if match:
        kind = "catch-all" if match.group(1) else "dynamic"
        return {"name": match.group(2), "type": kind, "optional": False}
    return None


def route_for(rel_path: str) -> tuple[str, str, str] | None:
    """Derive ``(route, router, page_type)`` from a project-relative path.

    Returns None for files that do not define a route, such as components
    colocated in the app directory.
    """
    parts = PurePosixPath(rel_path).parts
    for index, part in enumerate(parts[:-1]):
        if part in ROUTER_DIRECTORIES:
            router = part
            segments = list(parts[index + 1:])
            break
    else:
        return None

    stem = PurePosixPath(segments[-1]).stem
    segments[-1] = stem

    if router == "app":
        page_type = APP_FILES.get(stem)
        if page_type is None:
            return None
        segments = segments[:-1]
        segments = [s for s in segments if not _ROUTE_GROUP.match(s)]
    else:
        if stem in PAGES_SPECIAL:
            page_type = PAGES_SPECIAL[stem]
        elif segments[0] == "api":
            page_type = "api"
        else:
            page_type = "page"
        if stem == "index":
            segments = segments[:-1]

    route = "/" + "/".join(segments)
    return route, router, page_type


class PageExtractorPlugin(BaseExtractor[list[PageInfo]]):
    """Lists routes with their type, rendering method and dynamic segments."""

    metadata = PluginMetadata(
        name="page-extractor",
        version="1.0.0",
        title="Page Analysis",
        description="Maps Next.js pages and app router files to routes and rendering methods",
        tags=("nextjs", "routing", "pages"),
        cli=CliInfo(
            command="pages",
            description="Analyze Next.js pages and routes",
            usage="nextscope analyze page-extractor PATH [--format FORMAT]",
            examples=("nextscope analyze page-extractor ./my-app",),
        ),
    )

    def should_process(self, path: str) -> bool:
        posix = Path(path).as_posix()
        return any(f"/{d}/" in posix for d in ROUTER_DIRECTORIES)

    def process_file(self, source: SourceFile, rel_path: str, context: RunContext) -> list[PageInfo]:
        derived = route_for(rel_path)
        if derived is None:
            return []
        route, router, page_type = derived

        exported, _ = exported_names(source.tree.root_node)
        text = source.source.decode("utf-8", errors="replace")
        # getInitialProps is assigned as a static property, not exported
        fetching = [
            m for m in DATA_FETCHING_METHODS
            if m in exported or (m == "getInitialProps" and f".{m}" in text)
        ]
        if any(m in fetching for m in SSR_METHODS):
            rendering = "ssr"
        elif any(m in fetching for m in SSG_METHODS):
            rendering = "ssg"
        else:
            rendering = "static"

        segments = [dynamic_segment(s) for s in route.split("/") if s]
        return [PageInfo(
            file=rel_path,
            route=route,
            router=router,
            page_type=page_type,
            rendering=rendering,
            data_fetching=fetching,
            dynamic_segments=[s for s in segments if s is not None],
        )]

    async def aggregate(self, results: list[list[PageInfo]], root: Path, context: RunContext) -> dict[str, Any]:
        pages = [page for file_pages in results for page in file_pages]
        logger.info("Found %d routes", len(pages))

        def top_directory(page: PageInfo) -> str:
            segments = [s for s in page.route.split("/") if s]
            return "/" + segments[0] if segments else "/"

        by_complexity = sorted(pages, key=lambda p: -p.complexity)[:10]
        return {
            "summary": {
                "total_pages": len(pages),
                "pages_by_type": count_by(pages, lambda p: p.page_type),
                "rendering_methods": count_by(pages, lambda p: p.rendering),
                "routes_by_directory": ranked(count_by(pages, top_directory), None, "directory"),
                "dynamic_routes": [p.route for p in pages if p.dynamic_segments],
                "most_complex_routes": [
                    {"route": p.route, "file": p.file, "complexity": p.complexity} for p in by_complexity
                ],
            },
            "pages": [p.to_dict() for p in pages],
        }

    def report(self, data: dict[str, Any]) -> list[Section]:
        summary = data["summary"]
        return [
            Section("Overview", rows=[("Total pages", summary["total_pages"])]),
            Section("Pages by Type", rows=list(summary["pages_by_type"].items())),
            Section("Rendering Methods", rows=list(summary["rendering_methods"].items())),
            Section("Routes by Directory", rows=[
                (e["directory"], e["count"]) for e in summary["routes_by_directory"]
            ]),
            Section("Dynamic Routes", items=summary["dynamic_routes"]),
            Section("Routes", items=[
                f'{p["route"]} [{p["page_type"]}, {p["rendering"]}] {p["file"]}' for p in data["pages"]
            ]),
        ]
