"""Tests for MCP server initialization, tool definitions and dispatch."""

import json
from pathlib import Path

import pytest

from nextscope.mcp.server import SERVER_NAME, create_server
from nextscope.mcp.tools.definitions import (
    ALL_TOOLS,
    ANALYZE_I18N_TOOL,
    MANAGE_CACHE_TOOL,
    PROJECT_OVERVIEW_TOOL,
)
from nextscope.mcp.tools.dispatch import HANDLERS, dispatch_tool, inject_timing
from nextscope.mcp.tools.handlers.analysis import resolve_target
from nextscope.plugins import PluginManager


class TestMCPServer:
    """Tests for MCP server creation and configuration."""

    def test_create_server_returns_server_instance(self, manager: PluginManager) -> None:
        """Server creation returns a valid Server instance."""
        server = create_server(manager)
        assert server is not None
        assert server.name == SERVER_NAME

    def test_server_name_is_nextscope(self) -> None:
        assert SERVER_NAME == "nextscope"


class TestToolDefinitions:
    """Tests for MCP tool definitions."""

    def test_every_tool_is_dispatchable(self) -> None:
        assert [t.name for t in ALL_TOOLS] == [
            "analyze_components",
            "analyze_hooks",
            "analyze_pages",
            "analyze_patterns",
            "analyze_features",
            "analyze_i18n",
            "help",
            "project_overview",
            "manage_cache",
        ]
        assert set(HANDLERS) == {t.name for t in ALL_TOOLS}

    def test_analysis_tools_share_target_properties(self) -> None:
        for tool in ALL_TOOLS[:6]:
            properties = tool.inputSchema["properties"]
            assert {"repo_path", "path", "format"} <= set(properties)
            assert properties["format"]["enum"] == ["text", "markdown", "json"]

    def test_i18n_tool_options(self) -> None:
        properties = ANALYZE_I18N_TOOL.inputSchema["properties"]
        assert {"functions", "min_length", "languages", "jsx_text", "string_literals"} <= set(properties)

    def test_manage_cache_requires_mode(self) -> None:
        assert MANAGE_CACHE_TOOL.inputSchema["required"] == ["mode"]
        assert MANAGE_CACHE_TOOL.inputSchema["properties"]["mode"]["enum"] == ["info", "clear"]

    def test_project_overview_has_no_format(self) -> None:
        assert "format" not in PROJECT_OVERVIEW_TOOL.inputSchema["properties"]


class TestResolveTarget:
    def test_requires_a_path(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NEXTSCOPE_PROJECT_PATH", raising=False)
        with pytest.raises(ValueError, match="repo_path is required"):
            resolve_target({})

    def test_env_fallback_and_sub_path(self, monkeypatch: pytest.MonkeyPatch, sample_project: Path) -> None:
        monkeypatch.setenv("NEXTSCOPE_PROJECT_PATH", str(sample_project))
        assert resolve_target({"path": "pages"}) == (sample_project / "pages").resolve()

    def test_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Path does not exist"):
            resolve_target({"repo_path": str(tmp_path / "missing")})


class TestDispatch:
    """Tests for dispatch_tool."""

    @pytest.mark.asyncio
    async def test_unknown_tool(self, manager: PluginManager) -> None:
        with pytest.raises(ValueError, match="Unknown tool: nope"):
            await dispatch_tool(manager, "nope", {})

    @pytest.mark.asyncio
    async def test_analysis_json_envelope_with_timing(
        self, manager: PluginManager, sample_project: Path
    ) -> None:
        text = await dispatch_tool(manager, "analyze_pages", {"repo_path": str(sample_project)})

        result = json.loads(text)
        assert result["success"]
        assert result["data"]["summary"]["total_pages"] == 4
        assert result["metadata"]["plugin_name"] == "page-extractor"
        assert "total_ms" in result["timing"]

    @pytest.mark.asyncio
    async def test_markdown_format(self, manager: PluginManager, sample_project: Path) -> None:
        text = await dispatch_tool(
            manager, "analyze_hooks", {"repo_path": str(sample_project), "format": "markdown"}
        )

        assert text.startswith("# Hook Analysis\n")
        assert "Hook called conditionally" in text

    @pytest.mark.asyncio
    async def test_i18n_options_are_forwarded(self, manager: PluginManager, sample_project: Path) -> None:
        text = await dispatch_tool(
            manager,
            "analyze_i18n",
            {"repo_path": str(sample_project), "min_length": 20, "jsx_text": False},
        )

        summary = json.loads(text)["data"]["summary"]
        assert summary["total_untranslated_strings"] == 1
        assert summary["untranslated_by_type"] == {"variable-declaration": 1}

    @pytest.mark.asyncio
    async def test_help(self, manager: PluginManager) -> None:
        text = await dispatch_tool(manager, "help", {"format": "text"})

        assert text.startswith("Nextscope Commands\n")
        assert "i18n: Analyze internationalization coverage" in text

    @pytest.mark.asyncio
    async def test_project_overview(self, manager: PluginManager, sample_project: Path) -> None:
        text = await dispatch_tool(manager, "project_overview", {"repo_path": str(sample_project)})

        overview = json.loads(text)
        assert overview["framework"]["framework"] == "nextjs"
        assert overview["counts"]["pages"] == 4
        assert "timing" in overview

    @pytest.mark.asyncio
    async def test_manage_cache(self, manager: PluginManager, sample_project: Path) -> None:
        await dispatch_tool(manager, "analyze_components", {"repo_path": str(sample_project)})

        info = json.loads(await dispatch_tool(manager, "manage_cache", {"mode": "info"}))
        assert info["status"] == "ok"
        assert info["cache"]["entries"] == 8

        cleared = json.loads(await dispatch_tool(manager, "manage_cache", {"mode": "clear"}))
        assert cleared["entries_removed"] == 8
        assert manager.parse_cache.info()["entries"] == 0

    @pytest.mark.asyncio
    async def test_manage_cache_rejects_unknown_mode(self, manager: PluginManager) -> None:
        with pytest.raises(ValueError, match="Unknown mode: purge"):
            await dispatch_tool(manager, "manage_cache", {"mode": "purge"})
        with pytest.raises(ValueError, match="mode is required"):
            await dispatch_tool(manager, "manage_cache", {})


class TestInjectTiming:
    def test_adds_timing_to_objects(self) -> None:
        result = json.loads(inject_timing('{"success": true}', 12.345))
        assert result["timing"] == {"total_ms": 12.3}

    def test_leaves_text_untouched(self) -> None:
        assert inject_timing("# Report\n", 1.0) == "# Report\n"
        assert inject_timing("[1, 2]", 1.0) == "[1, 2]"
