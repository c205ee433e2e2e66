"""Command reference plugin (``help-extractor``)."""

from pathlib import Path
from typing import TYPE_CHECKING, Any

from nextscope.formatting import Section
from nextscope.plugins.base import CliInfo, ExtractorPlugin, PluginMetadata, PluginResult, RunContext

if TYPE_CHECKING:
    from nextscope.plugins.manager import PluginManager


def _command_entry(plugin_name: str, cli: CliInfo) -> dict[str, Any]:
    return {
        "command": cli.command,
        "plugin": plugin_name,
        "description": cli.description,
        "usage": cli.usage,
        "options": [
            {"name": o.name, "description": o.description, "type": o.type, "default": o.default}
            for o in cli.options
        ],
        "examples": list(cli.examples),
    }


class HelpExtractorPlugin(ExtractorPlugin):
    """Builds the command reference from the registered plugins' CLI metadata.

    Reads no files; ``target_path`` is ignored.
    """

    metadata = PluginMetadata(
        name="help-extractor",
        version="1.0.0",
        title="Nextscope Commands",
        description="Lists available analysis commands grouped by category",
        tags=("help",),
        cli=CliInfo(
            command="help",
            description="Show available commands",
            usage="nextscope analyze help-extractor PATH",
            category="utility",
        ),
    )

    def __init__(self, manager: "PluginManager") -> None:
        self.manager = manager

    async def extract(self, target_path: Path, context: RunContext) -> PluginResult:
        wanted = context.options.get("command")
        categories: dict[str, list[dict[str, Any]]] = {}
        for name, plugin in self.manager.plugins():
            cli = plugin.metadata.cli
            if cli is None:
                continue
            if wanted and wanted not in (cli.command, name):
                continue
            categories.setdefault(cli.category, []).append(_command_entry(name, cli))

        if wanted and not categories:
            return PluginResult.failure(f"Unknown command: {wanted}")

        total = sum(len(commands) for commands in categories.values())
        return PluginResult(
            success=True,
            data={"categories": categories, "total_commands": total},
        )

    def report(self, data: dict[str, Any]) -> list[Section]:
        sections = []
        for category, commands in data["categories"].items():
            items = []
            for command in commands:
                items.append(f'{command["command"]}: {command["description"]}')
                items.append(f'  usage: {command["usage"]}')
                items.extend(f'  {o["name"]}: {o["description"]}' for o in command["options"])
            sections.append(Section(category.title(), items=items))
        sections.append(Section("Total", rows=[("Commands", data["total_commands"])]))
        return sections
