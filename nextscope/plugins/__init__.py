"""Extractor plugins and the manager that runs them."""

from nextscope.config import Settings
from nextscope.plugins.base import (
    BaseExtractor,
    CliInfo,
    CliOption,
    ExtractorPlugin,
    PluginMetadata,
    PluginResult,
    RunContext,
)
from nextscope.plugins.components import ComponentExtractorPlugin
from nextscope.plugins.features import FeatureExtractorPlugin
from nextscope.plugins.help import HelpExtractorPlugin
from nextscope.plugins.hooks import HookExtractorPlugin
from nextscope.plugins.manager import PluginManager
from nextscope.plugins.pages import PageExtractorPlugin
from nextscope.plugins.patterns import PatternExtractorPlugin


def create_default_manager(settings: Settings | None = None) -> PluginManager:
    """Build a manager with every built-in plugin registered.

    Args:
        settings: Batch size and timeout source; read from the environment
            when omitted.
    """
    # nextscope.i18n builds on this package, so it is imported late
    from nextscope.i18n.plugin import I18nExtractorPlugin

    settings = settings if settings is not None else Settings.from_env()
    manager = PluginManager(batch_size=settings.batch_size, timeout=settings.timeout)
    for plugin in (
        ComponentExtractorPlugin(),
        HookExtractorPlugin(),
        PageExtractorPlugin(),
        PatternExtractorPlugin(),
        FeatureExtractorPlugin(),
        I18nExtractorPlugin(),
        HelpExtractorPlugin(manager),
    ):
        manager.register(plugin.metadata.name, plugin)
    return manager


__all__ = [
    "BaseExtractor",
    "CliInfo",
    "CliOption",
    "ComponentExtractorPlugin",
    "ExtractorPlugin",
    "FeatureExtractorPlugin",
    "HelpExtractorPlugin",
    "HookExtractorPlugin",
    "PageExtractorPlugin",
    "PatternExtractorPlugin",
    "PluginManager",
    "PluginMetadata",
    "PluginResult",
    "RunContext",
    "create_default_manager",
]
