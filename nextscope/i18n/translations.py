"""Locale file discovery and key-consistency analysis."""

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from nextscope.files import find_files
from nextscope.i18n.config import I18nConfig
from nextscope.logging import get_logger

logger = get_logger("i18n.translations")

LOCALE_DIRECTORIES = frozenset({"locales", "i18n", "lang", "translations"})

_LANGUAGE_CODE = re.compile(r"^[a-z]{2}(-[A-Z]{2})?$")
_FILENAME_LANGUAGE = re.compile(r"([a-z]{2}(-[A-Z]{2})?)")


@dataclass
class TranslationFile:
    file: str
    language: str
    keys: list[str] = field(default_factory=list)
    missing_keys: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "language": self.language,
            "key_count": len(self.keys),
            "missing_keys": list(self.missing_keys),
        }


def is_language_code(code: str) -> bool:
    """ISO 639-1 code, optionally with a region (``en``, ``pt-BR``)."""
    return bool(_LANGUAGE_CODE.match(code))


def language_from_path(path: str | Path) -> str:
    """Language of a locale file from its directory or file name.

    ``locales/fr/common.json`` and ``i18n/de.json`` both resolve; an empty
    string means the language could not be determined.
    """
    parts = Path(path).parts
    for index, part in enumerate(parts[:-1]):
        if part in LOCALE_DIRECTORIES and index + 1 < len(parts) - 1:
            candidate = parts[index + 1]
            if is_language_code(candidate):
                return candidate

    stem = Path(path).stem
    if is_language_code(stem):
        return stem
    match = _FILENAME_LANGUAGE.search(stem)
    if match and is_language_code(match.group(1)):
        return match.group(1)
    return ""


def flatten_keys(obj: Any, prefix: str = "") -> list[str]:
    """Flatten nested translation objects into dotted keys."""
    keys: list[str] = []
    if isinstance(obj, dict):
        for key, value in obj.items():
            full = f"{prefix}.{key}" if prefix else str(key)
            if isinstance(value, (dict, list)) and value:
                keys.extend(flatten_keys(value, full))
            else:
                keys.append(full)
    elif isinstance(obj, list):
        for index, value in enumerate(obj):
            full = f"{prefix}.{index}" if prefix else str(index)
            if isinstance(value, (dict, list)) and value:
                keys.extend(flatten_keys(value, full))
            else:
                keys.append(full)
    return keys


def analyze_translation_files(root: Path, config: I18nConfig) -> dict[str, Any]:
    """Find locale JSON files and compare their key sets.

    A key present in every file is consistent; any other key is
    inconsistent and listed under each file that lacks it.

    Returns:
        Dict with ``translation_files``, ``key_consistency``,
        ``languages`` (detected, or the configured fallback), and
        ``warnings`` for unreadable files.
    """
    warnings: list[str] = []
    files: list[TranslationFile] = []
    seen: set[str] = set()

    for pattern in config.translation_file_patterns:
        for path in find_files(pattern, root):
            if path in seen:
                continue
            seen.add(path)
            rel = Path(path).relative_to(root.resolve()).as_posix()
            language = language_from_path(rel)
            if not language:
                logger.debug("Could not extract language from path: %s", rel)
                continue
            try:
                content = json.loads(Path(path).read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
                warnings.append(f"Failed to parse translation file {rel}: {e}")
                continue
            files.append(TranslationFile(file=rel, language=language, keys=flatten_keys(content)))

    all_keys: dict[str, None] = {}
    for tf in files:
        for key in tf.keys:
            all_keys.setdefault(key, None)

    key_sets = {tf.file: set(tf.keys) for tf in files}
    for tf in files:
        tf.missing_keys = [key for key in all_keys if key not in key_sets[tf.file]]

    consistent = [key for key in all_keys if all(key in key_sets[tf.file] for tf in files)]
    consistent_set = set(consistent)
    inconsistent = [key for key in all_keys if key not in consistent_set]

    detected = list(dict.fromkeys(tf.language for tf in files))
    if not files:
        logger.info("No translation files found under %s", root)

    return {
        "translation_files": [tf.to_dict() for tf in files],
        "key_consistency": {
            "consistent_keys": consistent,
            "inconsistent_keys": inconsistent,
        },
        "languages": detected or list(config.languages),
        "languages_detected": bool(detected),
        "warnings": warnings,
    }


def missing_by_language(analysis: dict[str, Any]) -> dict[str, list[str]]:
    """Inconsistent keys grouped by the languages whose files lack them."""
    files = analysis["translation_files"]
    languages = list(dict.fromkeys(tf["language"] for tf in files))
    missing: dict[str, list[str]] = {}
    for key in analysis["key_consistency"]["inconsistent_keys"]:
        having = {tf["language"] for tf in files if key not in tf["missing_keys"]}
        for language in languages:
            if language not in having:
                missing.setdefault(language, []).append(key)
    return missing
