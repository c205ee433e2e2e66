"""Tests for the shared in-memory parse cache."""

import asyncio
import os
from pathlib import Path

import pytest

from nextscope.errors import FileUnreadable, ParseFailure
from nextscope.parsing.cache import CacheStats, ParseCache


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    path = tmp_path / "Button.tsx"
    path.write_text("export const Button = () => <button>Save</button>;\n")
    return path


class TestParseCache:
    """Tests for ParseCache.get and cache management."""

    @pytest.mark.asyncio
    async def test_second_lookup_is_a_hit(self, source_file: Path) -> None:
        cache = ParseCache()
        stats = CacheStats()

        first = await cache.get(source_file, stats)
        second = await cache.get(source_file, stats)

        assert first is second
        assert (stats.hits, stats.misses) == (1, 1)
        assert (cache.hits, cache.misses) == (1, 1)
        assert source_file in cache
        assert not first.has_errors

    @pytest.mark.asyncio
    async def test_modified_file_is_reparsed(self, source_file: Path) -> None:
        """A size change invalidates the entry."""
        cache = ParseCache()
        first = await cache.get(source_file)

        source_file.write_text("export const Button = () => <button>Save changes</button>;\n")
        stat = source_file.stat()
        os.utime(source_file, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000))
        second = await cache.get(source_file)

        assert second is not first
        assert b"Save changes" in second.source
        assert cache.misses == 2

    @pytest.mark.asyncio
    async def test_concurrent_lookups_parse_once(self, source_file: Path) -> None:
        cache = ParseCache()
        stats = CacheStats()

        results = await asyncio.gather(*(cache.get(source_file, stats) for _ in range(5)))

        assert all(r is results[0] for r in results)
        assert stats.misses == 1
        assert stats.hits == 4

    @pytest.mark.asyncio
    async def test_unsupported_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "styles.css"
        path.write_text("body {}")

        with pytest.raises(ParseFailure, match="unsupported file type .css"):
            await ParseCache().get(path)

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileUnreadable):
            await ParseCache().get(tmp_path / "Missing.tsx")

    @pytest.mark.asyncio
    async def test_syntax_errors_are_cached_with_flag(self, tmp_path: Path) -> None:
        path = tmp_path / "Broken.tsx"
        path.write_text("export function Broken( {\n  return <div>\n")

        entry = await ParseCache().get(path)

        assert entry.has_errors

    @pytest.mark.asyncio
    async def test_info_and_clear(self, source_file: Path) -> None:
        cache = ParseCache()
        await cache.get(source_file)

        info = cache.info()
        assert info["entries"] == 1
        assert info["misses"] == 1
        assert info["bytes"] == source_file.stat().st_size

        assert cache.clear() == 1
        assert cache.info() == {"entries": 0, "hits": 0, "misses": 0, "bytes": 0}

    @pytest.mark.asyncio
    async def test_invalidate(self, source_file: Path) -> None:
        cache = ParseCache()
        await cache.get(source_file)

        assert cache.invalidate(source_file)
        assert not cache.invalidate(source_file)
        assert len(cache) == 0
