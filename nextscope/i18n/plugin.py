"""Translatable-string extractor plugin (``i18n-extractor``)."""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from nextscope.aggregate import count_by, ranked, tally_texts
from nextscope.formatting import Section
from nextscope.i18n.candidates import (
    Candidate,
    TranslationUsage,
    collect_candidates,
    collect_translation_usage,
    suggest_key,
)
from nextscope.i18n.config import I18nConfig
from nextscope.i18n.pipeline import classify
from nextscope.i18n.translations import analyze_translation_files, missing_by_language
from nextscope.i18n.validators import ValidatorRegistry
from nextscope.logging import get_logger
from nextscope.parsing.cache import SourceFile
from nextscope.plugins.base import (
    BaseExtractor,
    CliInfo,
    CliOption,
    PluginMetadata,
    RunContext,
)

logger = get_logger("i18n")

# Result type of an untranslated string, by the validator that accepted it
STRING_TYPES: dict[str, str] = {
    "jsx-text-content": "jsx-text",
    "accessibility-attributes": "jsx-attribute",
    "user-message-variables": "variable-declaration",
    "object-properties": "object-property",
    "form-validation": "form-validation",
    "component-props": "component-prop",
    "alert-messages": "alert-message",
}

MAX_DISCARD_SAMPLES = 20
TOP_UNTRANSLATED = 20


@dataclass
class FileStrings:
    """Per-file classification results."""

    file: str
    untranslated: list[dict[str, Any]] = field(default_factory=list)
    usage: list[TranslationUsage] = field(default_factory=list)
    discarded: list[dict[str, Any]] = field(default_factory=list)

    def issues(self) -> list[dict[str, Any]]:
        """File-level findings derived from the classified strings."""
        issues: list[dict[str, Any]] = []
        if self.untranslated:
            issues.append({
                "type": "hardcoded-string",
                "description": f"Found {len(self.untranslated)} hardcoded translatable strings",
                "line": self.untranslated[0]["line"],
                "suggestion": "Consider wrapping these strings with translation functions",
            })
        jsx = [s for s in self.untranslated if s["type"] == "jsx-text"]
        if jsx:
            issues.append({
                "type": "untranslated-jsx",
                "description": f"Found {len(jsx)} untranslated JSX text elements",
                "line": jsx[0]["line"],
                "suggestion": 'Wrap JSX text with translation function: {t("your.key")}',
            })
        dynamic = [u for u in self.usage if u.is_dynamic]
        if dynamic:
            issues.append({
                "type": "dynamic-key",
                "description": f"Found {len(dynamic)} dynamic translation keys",
                "line": dynamic[0].line,
                "suggestion": "Consider using static keys for better translation management",
            })
        return issues


def _string_entry(candidate: Candidate, validator: str, reason: str) -> dict[str, Any]:
    return {
        "text": candidate.text,
        "type": STRING_TYPES.get(validator, validator),
        "context": str(candidate.context_kind),
        "line": candidate.line,
        "column": candidate.column,
        "component": candidate.component,
        "validator": validator,
        "reason": reason,
        "suggested_key": suggest_key(candidate.text),
    }


def _usage_entry(usage: TranslationUsage) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "function": usage.function_name,
        "key": usage.key,
        "line": usage.line,
        "column": usage.column,
    }
    if usage.default_value is not None:
        entry["default_value"] = usage.default_value
    return entry


class I18nExtractorPlugin(BaseExtractor[FileStrings]):
    """Finds hardcoded user-facing strings and translation usage."""

    metadata = PluginMetadata(
        name="i18n-extractor",
        version="1.0.0",
        title="I18n Analysis",
        description="Detects untranslated user-facing strings, translation calls, and locale key gaps",
        tags=("i18n", "translation", "strings"),
        cli=CliInfo(
            command="i18n",
            description="Analyze internationalization coverage",
            usage="nextscope analyze i18n-extractor PATH [--format FORMAT]",
            options=(
                CliOption("--functions", "Translation function names (comma-separated)"),
                CliOption("--min-length", "Minimum string length to consider", "number", 3),
                CliOption("--languages", "Languages to check (comma-separated)"),
            ),
            examples=(
                "nextscope analyze i18n-extractor ./my-app",
                "nextscope analyze i18n-extractor ./my-app --format markdown",
            ),
        ),
    )

    def __init__(self, registry: ValidatorRegistry | None = None) -> None:
        self.registry = registry if registry is not None else ValidatorRegistry.default()

    def _config(self, context: RunContext) -> I18nConfig:
        config = context.options.get("_i18n_config")
        if config is None:
            config = I18nConfig.from_options(context.options)
            context.options["_i18n_config"] = config
        return config

    def process_file(self, source: SourceFile, rel_path: str, context: RunContext) -> FileStrings:
        config = self._config(context)
        root = source.tree.root_node
        result = FileStrings(file=rel_path, usage=collect_translation_usage(root, config))

        for candidate in collect_candidates(root, config):
            decision = classify(candidate, self.registry)
            if decision.accepted:
                result.untranslated.append(
                    _string_entry(candidate, decision.validator or "", decision.reason)
                )
            else:
                result.discarded.append({
                    "text": candidate.text,
                    "line": candidate.line,
                    "reason": decision.reason,
                })
        logger.debug(
            "%s: %d untranslated, %d discarded",
            rel_path,
            len(result.untranslated),
            len(result.discarded),
        )
        return result

    async def aggregate(self, results: list[FileStrings], root: Path, context: RunContext) -> dict[str, Any]:
        config = self._config(context)
        translation_analysis = await asyncio.to_thread(analyze_translation_files, root, config)

        all_strings = [(s, r.file) for r in results for s in r.untranslated]
        all_usage = [(u, r.file) for r in results for u in r.usage]
        files_with_usage = {r.file for r in results if r.usage}
        files_with_strings = {r.file for r in results if r.untranslated}

        coverage = {"with_translations": 0, "without_translations": 0, "partially_translated": 0}
        for r in results:
            has_usage = r.file in files_with_usage
            has_strings = r.file in files_with_strings
            if has_usage and not has_strings:
                coverage["with_translations"] += 1
            elif has_strings and not has_usage:
                coverage["without_translations"] += 1
            elif has_usage and has_strings:
                coverage["partially_translated"] += 1

        key_files: dict[str, list[str]] = {}
        key_counts = count_by(all_usage, lambda pair: pair[0].key)
        for usage, file in all_usage:
            files = key_files.setdefault(usage.key, [])
            if file not in files:
                files.append(file)
        used_keys = [
            {**entry, "files": key_files[entry["key"]]}
            for entry in ranked(key_counts, None, "key")
        ]
        unused_keys = [
            key for key in translation_analysis["key_consistency"]["consistent_keys"]
            if key not in key_counts
        ]

        file_entries = []
        total_issues = 0
        for r in results:
            issues = r.issues()
            total_issues += len(issues)
            if r.untranslated or r.usage or issues:
                file_entries.append({
                    "file": r.file,
                    "untranslated_strings": r.untranslated,
                    "translation_usage": [_usage_entry(u) for u in r.usage],
                    "issues": issues,
                })

        discarded = [dict(d, file=r.file) for r in results for d in r.discarded]

        summary = {
            "total_files": len(results),
            "total_untranslated_strings": len(all_strings),
            "total_translation_usage": len(all_usage),
            "total_issues": total_issues,
            "files_coverage": coverage,
            "untranslated_by_type": count_by(all_strings, lambda pair: pair[0]["type"]),
            "most_common_untranslated": tally_texts(
                ((s["text"], file) for s, file in all_strings), TOP_UNTRANSLATED
            ),
            "translation_keys": {
                "total_keys": len(key_counts),
                "used_keys": used_keys,
                "unused_keys": unused_keys,
            },
            "missing_translations": missing_by_language(translation_analysis),
            "recommended_actions": _recommendations(results, translation_analysis),
            "languages": translation_analysis["languages"],
        }

        return {
            "summary": summary,
            "files": file_entries,
            "translation_files": {
                "files": translation_analysis["translation_files"],
                "key_consistency": translation_analysis["key_consistency"],
                "warnings": translation_analysis["warnings"],
            },
            "discarded": {
                "count": len(discarded),
                "samples": discarded[:MAX_DISCARD_SAMPLES],
            },
            "validators": self.registry.summary(),
        }

    def report(self, data: dict[str, Any]) -> list[Section]:
        summary = data["summary"]
        coverage = summary["files_coverage"]
        sections = [
            Section("Overview", rows=[
                ("Files analyzed", summary["total_files"]),
                ("Untranslated strings", summary["total_untranslated_strings"]),
                ("Translation calls", summary["total_translation_usage"]),
                ("Issues", summary["total_issues"]),
                ("Fully translated files", coverage["with_translations"]),
                ("Files without translations", coverage["without_translations"]),
                ("Partially translated files", coverage["partially_translated"]),
                ("Languages", ", ".join(summary["languages"]) or "none"),
            ]),
            Section("Untranslated Strings by Type", rows=list(summary["untranslated_by_type"].items())),
            Section("Most Common Untranslated Strings", items=[
                f'"{e["text"]}" ({e["count"]}x in {len(e["files"])} files)'
                for e in summary["most_common_untranslated"]
            ]),
            Section("Translation Keys", rows=[
                ("Distinct keys used", summary["translation_keys"]["total_keys"]),
                ("Unused consistent keys", len(summary["translation_keys"]["unused_keys"])),
            ], items=[
                f'{e["key"]} ({e["count"]}x)' for e in summary["translation_keys"]["used_keys"][:10]
            ]),
            Section("Missing Translations", rows=[
                (language, len(keys)) for language, keys in summary["missing_translations"].items()
            ]),
            Section("Recommended Actions", items=[
                f'[{a["priority"]}] {a["action"]}: {a["description"]}'
                for a in summary["recommended_actions"]
            ]),
        ]
        return sections


def _recommendations(
    results: list[FileStrings],
    translation_analysis: dict[str, Any],
) -> list[dict[str, Any]]:
    actions: list[dict[str, Any]] = []
    with_strings = [r for r in results if r.untranslated]
    total_strings = sum(len(r.untranslated) for r in with_strings)
    without_i18n = [r for r in with_strings if not r.usage]
    inconsistent = translation_analysis["key_consistency"]["inconsistent_keys"]
    dynamic_files = [r for r in results if any(u.is_dynamic for u in r.usage)]
    dynamic_keys = sum(1 for r in results for u in r.usage if u.is_dynamic)

    if with_strings:
        actions.append({
            "priority": "high",
            "action": "Add missing translations",
            "description": f"{len(with_strings)} files contain {total_strings} untranslated strings",
            "affected_files": len(with_strings),
        })
    if without_i18n:
        actions.append({
            "priority": "medium",
            "action": "Implement i18n in untranslated files",
            "description": f"{len(without_i18n)} files have no translation implementation",
            "affected_files": len(without_i18n),
        })
    if inconsistent:
        actions.append({
            "priority": "medium",
            "action": "Fix translation key consistency",
            "description": f"{len(inconsistent)} keys are missing in some language files",
            "affected_files": len(translation_analysis["translation_files"]),
        })
    if dynamic_keys:
        actions.append({
            "priority": "low",
            "action": "Review dynamic translation keys",
            "description": f"{dynamic_keys} dynamic keys found which are harder to track",
            "affected_files": len(dynamic_files),
        })
    return actions
