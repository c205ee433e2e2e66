"""Plugin registration and execution.

The manager is an explicit value: build one (usually through
``create_default_manager``) and pass it to whoever needs to run plugins.
``execute`` never raises for plugin-level problems; every outcome is a
``PluginResult``.
"""

import asyncio
import dataclasses
import time
from pathlib import Path
from typing import Any

from nextscope.config import DEFAULT_BATCH_SIZE
from nextscope.errors import DuplicatePlugin, TimeoutExceeded, UnknownPlugin
from nextscope.logging import get_logger, log_operation
from nextscope.parsing.cache import CacheStats, ParseCache
from nextscope.plugins.base import ExtractorPlugin, PluginResult, RunContext

logger = get_logger("manager")


class PluginManager:
    """Registry and executor for extractor plugins."""

    def __init__(
        self,
        parse_cache: ParseCache | None = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        timeout: float | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            parse_cache: Cache shared by every execution (a fresh one if None).
            batch_size: Files parsed concurrently per batch.
            timeout: Default per-execution time limit in seconds.
        """
        self.parse_cache = parse_cache if parse_cache is not None else ParseCache()
        self.batch_size = batch_size
        self.timeout = timeout
        self._plugins: dict[str, ExtractorPlugin] = {}

    def register(self, name: str, plugin: ExtractorPlugin) -> None:
        """Register a plugin under ``name``.

        Raises:
            DuplicatePlugin: If the name is taken.
        """
        if name in self._plugins:
            raise DuplicatePlugin(name)
        self._plugins[name] = plugin
        logger.debug("Registered plugin %s", name)

    def get(self, name: str) -> ExtractorPlugin | None:
        return self._plugins.get(name)

    def names(self) -> list[str]:
        return list(self._plugins)

    def plugins(self) -> list[tuple[str, ExtractorPlugin]]:
        """Registered ``(name, plugin)`` pairs in registration order."""
        return list(self._plugins.items())

    def __contains__(self, name: object) -> bool:
        return name in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)

    async def execute(
        self,
        name: str,
        target_path: str | Path,
        options: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> PluginResult:
        """Run a plugin against a path.

        Args:
            name: Registered plugin name.
            target_path: Directory (or single file) to analyze.
            options: Plugin-specific options.
            timeout: Time limit in seconds, overriding the manager default.

        Returns:
            The plugin's result with ``processing_time``, ``files_processed``,
            ``cache_hits`` and ``cache_misses`` metadata. Unknown plugins,
            timeouts, and plugin exceptions yield ``success=False``.
        """
        stats = CacheStats()
        plugin = self._plugins.get(name)
        if plugin is None:
            return PluginResult.failure(
                str(UnknownPlugin(name)),
                **self._run_metadata(name, None, 0.0, stats),
            )

        context = RunContext(
            parse_cache=self.parse_cache,
            stats=stats,
            options=dict(options or {}),
            batch_size=self.batch_size,
        )
        limit = timeout if timeout is not None else self.timeout
        deadline = asyncio.timeout(limit or None)
        start = time.perf_counter()

        try:
            with log_operation(f"plugin:{name}", {"path": target_path}):
                async with deadline:
                    result = await plugin.extract(Path(target_path), context)
        except Exception as e:
            # Only an expired deadline is a timeout; a TimeoutError raised by
            # the plugin itself is an ordinary failure
            if isinstance(e, TimeoutError) and deadline.expired():
                message = f"TimeoutExceeded: {TimeoutExceeded(name, limit or 0.0)}"
            else:
                message = f"Plugin {name} failed: {e}"
            return PluginResult.failure(
                message,
                **self._run_metadata(name, plugin, _elapsed_ms(start), stats),
            )

        metadata = {**self._run_metadata(name, plugin, _elapsed_ms(start), stats), **result.metadata}
        if not result.success:
            # A plugin-reported failure carries no data forward
            return PluginResult(
                success=False,
                errors=list(result.errors),
                warnings=list(result.warnings),
                metadata=metadata,
            )
        return dataclasses.replace(result, metadata=metadata)

    @staticmethod
    def _run_metadata(
        name: str,
        plugin: ExtractorPlugin | None,
        elapsed_ms: float,
        stats: CacheStats,
    ) -> dict[str, Any]:
        return {
            "files_processed": 0,
            "plugin_name": name,
            "plugin_version": plugin.metadata.version if plugin else None,
            "processing_time": round(elapsed_ms, 2),
            "cache_hits": stats.hits,
            "cache_misses": stats.misses,
        }


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000
