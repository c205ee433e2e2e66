"""Plugin interfaces and the shared file-processing pipeline.

``ExtractorPlugin`` is the interface every plugin implements. Rendering is
part of the interface: the default implementation serializes the data as
JSON, and plugins that define ``report()`` get text and markdown layouts.

``BaseExtractor`` implements the common pipeline for file-based plugins:
discover files, filter them, parse each through the shared parse cache in
bounded batches, run the plugin's per-file walker, then aggregate. Per-file
read and parse failures become warnings and never abort the run.
"""

import asyncio
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Generic, TypeVar

from nextscope.config import DEFAULT_BATCH_SIZE
from nextscope.errors import FileUnreadable, ParseFailure
from nextscope.files import find_files
from nextscope.formatting import Section, check_format, render_sections, to_json
from nextscope.logging import get_logger, progress_bar
from nextscope.parsing.cache import CacheStats, ParseCache, SourceFile

logger = get_logger("plugins")

SOURCE_PATTERN = "**/*.{js,jsx,ts,tsx}"

# Test, story and declaration files describe no runtime behaviour
DEFAULT_EXCLUDES: tuple[str, ...] = (
    "**/*.test.*",
    "**/*.spec.*",
    "**/*.stories.*",
    "**/__tests__/**",
    "**/__mocks__/**",
    "**/*.d.ts",
)

MAX_FILE_SIZE = 1024 * 1024  # 1MB


@dataclass(frozen=True)
class CliOption:
    name: str
    description: str
    type: str = "string"
    default: Any = None


@dataclass(frozen=True)
class CliInfo:
    """How a plugin is exposed as a command."""

    command: str
    description: str
    usage: str
    category: str = "analysis"
    options: tuple[CliOption, ...] = ()
    examples: tuple[str, ...] = ()


@dataclass(frozen=True)
class PluginMetadata:
    name: str
    version: str
    description: str
    title: str = ""
    tags: tuple[str, ...] = ()
    cli: CliInfo | None = None


@dataclass(frozen=True)
class PluginResult:
    """Uniform outcome of a plugin execution.

    Built once per execution and never mutated afterwards; the manager
    derives a new instance when it adds timing and cache metadata.
    """

    success: bool
    data: Any = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def failure(cls, *errors: str, **metadata: Any) -> "PluginResult":
        return cls(success=False, errors=list(errors), metadata=dict(metadata))

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            result["data"] = self.data
        if self.errors:
            result["errors"] = list(self.errors)
        if self.warnings:
            result["warnings"] = list(self.warnings)
        result["metadata"] = dict(self.metadata)
        return result


@dataclass
class RunContext:
    """Per-execution state handed to a plugin by the manager."""

    parse_cache: ParseCache
    stats: CacheStats = field(default_factory=CacheStats)
    options: dict[str, Any] = field(default_factory=dict)
    batch_size: int = DEFAULT_BATCH_SIZE


class ExtractorPlugin(ABC):
    """Interface of every analysis plugin."""

    metadata: PluginMetadata

    @abstractmethod
    async def extract(self, target_path: Path, context: RunContext) -> PluginResult:
        """Analyze ``target_path`` and return a result."""

    def report(self, data: Any) -> list[Section] | None:
        """Describe ``data`` as report sections; None means JSON only."""
        return None

    def render(self, data: Any, fmt: str = "text") -> str:
        """Render result data as text, markdown, or JSON.

        Pure: the same data always renders to the same string.

        Raises:
            ValueError: If ``fmt`` is not a known format.
        """
        check_format(fmt)
        if fmt == "json":
            return to_json(data)
        sections = self.report(data)
        if sections is None:
            return to_json(data)
        title = self.metadata.title or self.metadata.name
        return render_sections(title, sections, fmt)


T = TypeVar("T")


class BaseExtractor(ExtractorPlugin, Generic[T]):
    """File-based plugin pipeline.

    Subclasses implement ``process_file`` (a pure walk over one parsed file)
    and ``aggregate`` (combine per-file facts into the result data).
    """

    file_patterns: tuple[str, ...] = (SOURCE_PATTERN,)
    exclude_patterns: tuple[str, ...] = DEFAULT_EXCLUDES
    max_file_size: int = MAX_FILE_SIZE

    def discover(self, root: Path) -> list[str]:
        """List candidate files under ``root`` in a stable order."""
        if root.is_file():
            return [str(root.resolve())]
        seen: dict[str, None] = {}
        for pattern in self.file_patterns:
            for path in find_files(pattern, root, list(self.exclude_patterns)):
                seen.setdefault(path, None)
        return list(seen)

    def should_process(self, path: str) -> bool:
        """Hook for subclasses to narrow the file set."""
        return True

    def filter_files(self, files: list[str]) -> tuple[list[str], list[str]]:
        """Split files into (kept, skipped) by size and ``should_process``."""
        kept: list[str] = []
        skipped: list[str] = []
        for path in files:
            try:
                too_big = os.path.getsize(path) > self.max_file_size
            except OSError:
                too_big = False  # Surfaces as FileUnreadable during parsing
            if too_big or not self.should_process(path):
                skipped.append(path)
            else:
                kept.append(path)
        return kept, skipped

    @abstractmethod
    def process_file(self, source: SourceFile, rel_path: str, context: RunContext) -> T:
        """Extract facts from one parsed file."""

    @abstractmethod
    async def aggregate(self, results: list[T], root: Path, context: RunContext) -> Any:
        """Combine per-file facts (in discovery order) into result data."""

    async def _process_one(
        self,
        path: str,
        root: Path,
        context: RunContext,
    ) -> tuple[T | None, list[str]]:
        try:
            source = await context.parse_cache.get(path, context.stats)
        except (FileUnreadable, ParseFailure) as e:
            logger.warning("Skipping %s", e)
            return None, [str(e)]

        rel_path = _relative(path, root)
        warnings: list[str] = []
        if source.has_errors:
            warnings.append(f"Syntax errors in {rel_path}; results may be partial")
        return self.process_file(source, rel_path, context), warnings

    async def extract(self, target_path: Path, context: RunContext) -> PluginResult:
        root = Path(target_path)
        if not root.exists():
            return PluginResult.failure(f"Path does not exist: {root}")

        files, skipped = self.filter_files(self.discover(root))
        base = root if root.is_dir() else root.parent
        logger.info("%s: %d files to analyze", self.metadata.name, len(files))

        # Slots indexed by discovery order keep output deterministic
        outcomes: list[T | None] = [None] * len(files)
        warnings: list[str] = []
        batch_size = max(1, context.batch_size)
        starts = range(0, len(files), batch_size)

        for start in progress_bar(starts, desc=self.metadata.name, total=len(starts), unit="batches"):
            batch = files[start:start + batch_size]
            results = await asyncio.gather(*(self._process_one(p, base, context) for p in batch))
            for offset, (facts, file_warnings) in enumerate(results):
                outcomes[start + offset] = facts
                warnings.extend(file_warnings)

        processed = [facts for facts in outcomes if facts is not None]
        data = await self.aggregate(processed, base, context)
        return PluginResult(
            success=True,
            data=data,
            warnings=warnings,
            metadata={
                "files_processed": len(processed),
                "skipped_files": len(skipped),
            },
        )


def _relative(path: str, root: Path) -> str:
    try:
        return Path(path).relative_to(root.resolve()).as_posix()
    except ValueError:
        return Path(path).as_posix()
