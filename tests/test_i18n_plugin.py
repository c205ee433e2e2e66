"""Tests for the i18n-extractor plugin on a sample Next.js project."""

from pathlib import Path

import pytest

from nextscope.i18n import I18nExtractorPlugin, ValidatorRegistry
from nextscope.i18n.validators import ALERT_MESSAGES, JSX_TEXT_CONTENT
from nextscope.plugins import PluginManager


def strings_by_text(data: dict) -> dict[str, dict]:
    return {s["text"]: s for f in data["files"] for s in f["untranslated_strings"]}


class TestUntranslatedStrings:
    """Tests for string classification across the project."""

    @pytest.mark.asyncio
    async def test_accepted_strings_and_types(self, manager: PluginManager, sample_project: Path) -> None:
        result = await manager.execute("i18n-extractor", sample_project)

        assert result.success
        strings = strings_by_text(result.data)
        assert {text: s["type"] for text, s in strings.items()} == {
            "Counter clicked!": "alert-message",
            "Count": "jsx-text",
            "Site header": "jsx-attribute",
            "Session expired, please sign in again": "variable-declaration",
            "Hello from the API": "object-property",
            "Blog post body": "jsx-text",
            "Dashboard": "jsx-text",
            "Welcome back": "component-prop",
            "Click the button to continue": "jsx-text",
            "Company logo": "jsx-attribute",
        }

    @pytest.mark.asyncio
    async def test_string_entry_fields(self, manager: PluginManager, sample_project: Path) -> None:
        result = await manager.execute("i18n-extractor", sample_project)

        welcome = strings_by_text(result.data)["Welcome back"]
        assert welcome["validator"] == "component-props"
        assert welcome["context"] == "markup-attribute"
        assert welcome["component"] == "Home"
        assert welcome["line"] == 11
        assert welcome["suggested_key"] == "welcome.back"
        assert welcome["reason"] == 'User-facing prop "title" contains translatable text'

    @pytest.mark.asyncio
    async def test_discarded_strings_keep_reasons(self, manager: PluginManager, sample_project: Path) -> None:
        result = await manager.execute("i18n-extractor", sample_project)

        discarded = {d["text"]: d for d in result.data["discarded"]["samples"]}
        assert result.data["discarded"]["count"] == 2
        assert discarded["container"]["reason"] == 'Attribute "className" is not an accessibility label'
        assert discarded["container"]["file"] == "pages/index.tsx"
        assert discarded["auth debug output"]["reason"] == (
            'Developer function "console.log" should not be translated'
        )

    @pytest.mark.asyncio
    async def test_imports_urls_and_translated_keys_are_ignored(
        self, manager: PluginManager, sample_project: Path
    ) -> None:
        result = await manager.execute("i18n-extractor", sample_project)

        strings = strings_by_text(result.data)
        discarded = {d["text"] for d in result.data["discarded"]["samples"]}
        for text in ("react", "react-i18next", "home.title", "/logo.png"):
            assert text not in strings
            assert text not in discarded

    @pytest.mark.asyncio
    async def test_min_length_option(self, manager: PluginManager, sample_project: Path) -> None:
        result = await manager.execute("i18n-extractor", sample_project, {"min_length": 20})

        assert set(strings_by_text(result.data)) == {
            "Session expired, please sign in again",
            "Click the button to continue",
        }


class TestSummary:
    """Tests for the aggregated summary."""

    @pytest.mark.asyncio
    async def test_counts_and_coverage(self, manager: PluginManager, sample_project: Path) -> None:
        result = await manager.execute("i18n-extractor", sample_project)

        summary = result.data["summary"]
        assert summary["total_files"] == 8
        assert summary["total_untranslated_strings"] == 10
        assert summary["total_translation_usage"] == 1
        assert summary["total_issues"] == 11
        assert summary["files_coverage"] == {
            "with_translations": 0,
            "without_translations": 6,
            "partially_translated": 1,
        }
        assert summary["untranslated_by_type"] == {
            "alert-message": 1,
            "jsx-text": 4,
            "jsx-attribute": 2,
            "variable-declaration": 1,
            "object-property": 1,
            "component-prop": 1,
        }

    @pytest.mark.asyncio
    async def test_translation_keys(self, manager: PluginManager, sample_project: Path) -> None:
        result = await manager.execute("i18n-extractor", sample_project)

        summary = result.data["summary"]
        assert summary["translation_keys"] == {
            "total_keys": 1,
            "used_keys": [{"key": "home.title", "count": 1, "files": ["pages/index.tsx"]}],
            "unused_keys": [],
        }
        assert summary["missing_translations"] == {"fr": ["home.subtitle"]}
        assert summary["languages"] == ["en", "fr"]
        assert result.data["translation_files"]["key_consistency"]["inconsistent_keys"] == ["home.subtitle"]

    @pytest.mark.asyncio
    async def test_recommended_actions(self, manager: PluginManager, sample_project: Path) -> None:
        result = await manager.execute("i18n-extractor", sample_project)

        actions = result.data["summary"]["recommended_actions"]
        assert [(a["priority"], a["action"]) for a in actions] == [
            ("high", "Add missing translations"),
            ("medium", "Implement i18n in untranslated files"),
            ("medium", "Fix translation key consistency"),
        ]
        assert actions[0]["description"] == "7 files contain 10 untranslated strings"

    @pytest.mark.asyncio
    async def test_file_issues(self, manager: PluginManager, sample_project: Path) -> None:
        result = await manager.execute("i18n-extractor", sample_project)

        files = {f["file"]: f for f in result.data["files"]}
        assert "components/Conditional.tsx" not in files
        index = files["pages/index.tsx"]
        assert [i["type"] for i in index["issues"]] == ["hardcoded-string", "untranslated-jsx"]
        assert index["translation_usage"] == [
            {"function": "t", "key": "home.title", "line": 12, "column": 11}
        ]

    @pytest.mark.asyncio
    async def test_dynamic_keys(self, manager: PluginManager, make_project) -> None:
        root = make_project({"Status.tsx": '''
export function Status({ kind }) {
  return <p>{t(`status.${kind}`)}</p>;
}
'''})

        result = await manager.execute("i18n-extractor", root)

        [entry] = result.data["files"]
        assert [i["type"] for i in entry["issues"]] == ["dynamic-key"]
        assert result.data["summary"]["recommended_actions"][-1]["priority"] == "low"


class TestRegistryAndRendering:
    @pytest.mark.asyncio
    async def test_custom_registry(self, sample_project: Path) -> None:
        """Only registered validators can accept strings."""
        manager = PluginManager()
        plugin = I18nExtractorPlugin(ValidatorRegistry([JSX_TEXT_CONTENT, ALERT_MESSAGES]))
        manager.register(plugin.metadata.name, plugin)

        result = await manager.execute("i18n-extractor", sample_project)

        types = set(result.data["summary"]["untranslated_by_type"])
        assert types == {"jsx-text", "alert-message"}
        assert [v["name"] for v in result.data["validators"]] == ["jsx-text-content", "alert-messages"]

    @pytest.mark.asyncio
    async def test_render_text_and_markdown(self, manager: PluginManager, sample_project: Path) -> None:
        result = await manager.execute("i18n-extractor", sample_project)
        plugin = manager.get("i18n-extractor")

        text = plugin.render(result.data, "text")
        markdown = plugin.render(result.data, "markdown")

        assert text.startswith("I18n Analysis\n")
        assert "Untranslated strings: 10" in text
        assert "[high] Add missing translations" in text
        assert markdown.startswith("# I18n Analysis\n")
        assert "| fr | 1 |" in markdown
