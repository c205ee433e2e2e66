"""CLI interface for Nextscope.

Provides commands for running the MCP server and standalone analysis.
"""

import asyncio
import sys
from pathlib import Path
from typing import Any

import click
from dotenv import load_dotenv

# Load .env before importing other nextscope modules
# This ensures env vars are set before module-level code reads them
load_dotenv()

from nextscope import __version__  # noqa: E402
from nextscope.formatting import FORMATS, render_sections, to_json  # noqa: E402


@click.group()
@click.version_option(version=__version__, prog_name="nextscope")
def cli() -> None:
    """Nextscope - static analysis of React/Next.js projects over MCP."""
    pass


@cli.command()
def serve() -> None:
    """Start the MCP server.

    Runs the Nextscope MCP server over stdio, for use with MCP clients
    such as Cursor and Claude Desktop.
    """
    # Import here to avoid slow startup for the other commands
    from nextscope import run_server

    run_server()


@cli.command()
@click.argument("plugin")
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--format",
    "fmt",
    type=click.Choice(FORMATS),
    default="text",
    help="Output format (default: text)",
)
@click.option("--functions", help="Translation function names, comma-separated (i18n-extractor)")
@click.option("--min-length", type=int, help="Minimum string length to consider (i18n-extractor)")
@click.option("--languages", help="Expected languages, comma-separated (i18n-extractor)")
def analyze(
    plugin: str,
    path: str,
    fmt: str,
    functions: str | None,
    min_length: int | None,
    languages: str | None,
) -> None:
    """Run one analysis plugin and print its report.

    PLUGIN: Plugin name (see `nextscope plugins`).
    PATH: Project directory or single file to analyze.
    """
    from nextscope.plugins import create_default_manager

    manager = create_default_manager()
    options: dict[str, Any] = {}
    if functions:
        options["functions"] = functions
    if min_length is not None:
        options["min_length"] = min_length
    if languages:
        options["languages"] = languages

    result = asyncio.run(manager.execute(plugin, path, options))

    if fmt == "json":
        click.echo(to_json(result.to_dict()))
    elif result.success:
        click.echo(manager.get(plugin).render(result.data, fmt), nl=False)
    for warning in result.warnings:
        click.echo(f"Warning: {warning}", err=True)

    if not result.success:
        for error in result.errors:
            click.echo(f"Error: {error}", err=True)
        sys.exit(1)


@cli.command()
def plugins() -> None:
    """List the registered analysis plugins."""
    from nextscope.plugins import create_default_manager

    manager = create_default_manager()
    for name, plugin in manager.plugins():
        meta = plugin.metadata
        click.echo(f"{name} (v{meta.version}): {meta.description}")


@cli.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False, resolve_path=True))
@click.option(
    "--format",
    "fmt",
    type=click.Choice(FORMATS),
    default="text",
    help="Output format (default: text)",
)
def overview(path: str, fmt: str) -> None:
    """Quick overview of a React/Next.js project.

    PATH: Project root (the directory holding package.json).
    """
    from nextscope.overview import overview_sections, project_overview
    from nextscope.plugins import create_default_manager

    try:
        report = asyncio.run(project_overview(create_default_manager(), Path(path)))
    except Exception as e:
        click.echo(f"Overview failed: {e}", err=True)
        sys.exit(1)

    if fmt == "json":
        click.echo(report.model_dump_json(indent=2))
    else:
        click.echo(render_sections("Project Overview", overview_sections(report), fmt), nl=False)


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
