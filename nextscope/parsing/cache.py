"""In-memory parse cache shared across plugin executions.

Entries are keyed by resolved path and validated against the file's size and
modification time on every lookup. A per-path lock guarantees that at most
one parse of a given file is in flight; concurrent callers wait for it and
then read the stored entry.
"""

import asyncio
import os
from dataclasses import dataclass, field
from pathlib import Path

from tree_sitter import Tree

from nextscope.errors import FileUnreadable, ParseFailure
from nextscope.logging import get_logger
from nextscope.parsing.languages import get_parser

logger = get_logger("parse_cache")


@dataclass(frozen=True)
class SourceFile:
    """A parsed source file and the metadata it was parsed at."""

    path: str
    size: int
    mtime_ns: int
    source: bytes
    tree: Tree

    @property
    def has_errors(self) -> bool:
        """True when tree-sitter had to recover from syntax errors."""
        return self.tree.root_node.has_error

    def matches(self, stat: os.stat_result) -> bool:
        return stat.st_size == self.size and stat.st_mtime_ns == self.mtime_ns


@dataclass
class CacheStats:
    """Hit/miss counters for one plugin execution."""

    hits: int = 0
    misses: int = 0

    def record(self, hit: bool) -> None:
        if hit:
            self.hits += 1
        else:
            self.misses += 1


@dataclass
class ParseCache:
    """Cache of parsed syntax trees keyed by absolute path."""

    hits: int = 0
    misses: int = 0
    _entries: dict[str, SourceFile] = field(default_factory=dict, repr=False)
    _locks: dict[str, asyncio.Lock] = field(default_factory=dict, repr=False)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, (str, Path)) and _key(path) in self._entries

    def _record(self, hit: bool, stats: CacheStats | None) -> None:
        if hit:
            self.hits += 1
        else:
            self.misses += 1
        if stats is not None:
            stats.record(hit)

    async def get(self, path: str | Path, stats: CacheStats | None = None) -> SourceFile:
        """Return the parsed file, re-parsing if it changed on disk.

        Args:
            path: File to parse.
            stats: Optional per-run counters, updated alongside the
                cumulative ``hits``/``misses``.

        Returns:
            The cached or freshly parsed SourceFile.

        Raises:
            FileUnreadable: If the file cannot be stat'd or read.
            ParseFailure: If no grammar handles the file or parsing raised.
        """
        key = _key(path)
        stat = await _stat(key)

        entry = self._entries.get(key)
        if entry is not None and entry.matches(stat):
            self._record(True, stats)
            return entry

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            # Another task may have parsed the file while we waited
            entry = self._entries.get(key)
            if entry is not None and entry.matches(stat):
                self._record(True, stats)
                return entry

            parser = get_parser(key)
            if parser is None:
                raise ParseFailure(key, f"unsupported file type {Path(key).suffix or '(none)'}")

            try:
                source = await asyncio.to_thread(Path(key).read_bytes)
            except OSError as e:
                raise FileUnreadable(key, e.strerror or str(e)) from e

            try:
                tree = parser.parse(source)
            except Exception as e:
                raise ParseFailure(key, str(e)) from e

            entry = SourceFile(
                path=key,
                size=stat.st_size,
                mtime_ns=stat.st_mtime_ns,
                source=source,
                tree=tree,
            )
            self._entries[key] = entry
            self._record(False, stats)
            logger.debug("Parsed %s (%d bytes)", key, stat.st_size)
            return entry

    def invalidate(self, path: str | Path) -> bool:
        """Drop one entry. Returns True if it was cached."""
        return self._entries.pop(_key(path), None) is not None

    def clear(self) -> int:
        """Drop all entries and reset counters.

        Returns:
            Number of entries removed.
        """
        count = len(self._entries)
        self._entries.clear()
        self._locks.clear()
        self.hits = 0
        self.misses = 0
        return count

    def info(self) -> dict[str, int]:
        """Summary for cache management tools."""
        return {
            "entries": len(self._entries),
            "hits": self.hits,
            "misses": self.misses,
            "bytes": sum(entry.size for entry in self._entries.values()),
        }


def _key(path: str | Path) -> str:
    return str(Path(path).resolve())


async def _stat(key: str) -> os.stat_result:
    try:
        return await asyncio.to_thread(os.stat, key)
    except OSError as e:
        raise FileUnreadable(key, e.strerror or str(e)) from e
