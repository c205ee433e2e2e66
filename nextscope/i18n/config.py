"""Configuration for translatable-string extraction.

The configuration tunes which call targets count as translation sinks,
which strings are worth classifying, and where locale files live. It never
changes the validator heuristics themselves.
"""

import re
from dataclasses import dataclass, field, replace
from typing import Any

DEFAULT_TRANSLATION_FUNCTIONS: tuple[str, ...] = ("t", "translate", "$t", "i18n.t", "i18next.t")
DEFAULT_TRANSLATION_PATTERNS: tuple[str, ...] = ("t(", "{{", "{t(", "translate(")
DEFAULT_TRANSLATION_FILE_PATTERNS: tuple[str, ...] = (
    "**/src/locales/**/*.json",
    "**/public/locales/**/*.json",
    "**/locales/**/*.json",
    "**/i18n/**/*.json",
    "**/lang/**/*.json",
)
DEFAULT_LANGUAGES: tuple[str, ...] = ("en", "es", "fr", "de")
DEFAULT_MIN_STRING_LENGTH = 3

# Named exclusion rules: a string matching any rule is never a candidate
DEFAULT_EXCLUDE_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("url", re.compile(r"^(https?|ftp|wss?)://|^mailto:|^tel:|^//", re.I)),
    ("color", re.compile(r"^#[0-9a-f]{3,8}$|^(rgba?|hsla?)\(", re.I)),
    ("css-unit", re.compile(r"^-?\d*\.?\d+(px|em|rem|vh|vw|%|s|ms|deg)$")),
    ("module-keyword", re.compile(r"^(import|export|from|require)\b")),
    ("browser-api", re.compile(r"^(console|localStorage|sessionStorage|window|document)\.|^(localStorage|sessionStorage)$")),
    ("markup-attribute", re.compile(r"^(data|aria)-[\w-]+$|^(className|id|key|ref|htmlFor)$")),
    ("file-extension", re.compile(r"\.(js|jsx|ts|tsx|mjs|cjs|css|scss|json|html|svg|png|jpe?g|gif|webp)$", re.I)),
    ("env-variable", re.compile(r"^(NODE_ENV|REACT_APP_|NEXT_PUBLIC_|VITE_)")),
    ("constant", re.compile(r"^[A-Z0-9_]+$")),
    ("number", re.compile(r"^\d+$")),
    ("hash", re.compile(r"^[a-f0-9]{6,}$", re.I)),
)


def _as_list(value: Any) -> list[str]:
    """Accept a list or a comma-separated string."""
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return [str(item).strip() for item in value if str(item).strip()]


@dataclass(frozen=True)
class I18nConfig:
    """Caller-supplied classification settings."""

    translation_functions: tuple[str, ...] = DEFAULT_TRANSLATION_FUNCTIONS
    translation_patterns: tuple[str, ...] = DEFAULT_TRANSLATION_PATTERNS
    min_string_length: int = DEFAULT_MIN_STRING_LENGTH
    analyze_jsx_text: bool = True
    analyze_string_literals: bool = True
    translation_file_patterns: tuple[str, ...] = DEFAULT_TRANSLATION_FILE_PATTERNS
    languages: tuple[str, ...] = DEFAULT_LANGUAGES
    exclude_patterns: tuple[str, ...] = ()  # Extra substrings
    exclude_rules: tuple[tuple[str, re.Pattern[str]], ...] = field(
        default=DEFAULT_EXCLUDE_RULES, repr=False
    )

    @classmethod
    def from_options(cls, options: dict[str, Any] | None) -> "I18nConfig":
        """Build a config from tool/CLI options.

        Recognized keys: ``functions`` / ``translation_functions``,
        ``patterns``, ``min_length`` / ``min_string_length``, ``languages``,
        ``jsx_text``, ``string_literals``, ``translation_file_patterns``,
        ``exclude``. Unknown keys are ignored.

        Raises:
            ValueError: If ``min_length`` is not a positive integer.
        """
        config = cls()
        if not options:
            return config

        updates: dict[str, Any] = {}
        functions = options.get("functions", options.get("translation_functions"))
        if functions:
            updates["translation_functions"] = tuple(_as_list(functions))
        if options.get("patterns"):
            updates["translation_patterns"] = tuple(_as_list(options["patterns"]))
        min_length = options.get("min_length", options.get("min_string_length"))
        if min_length is not None:
            if isinstance(min_length, bool) or not isinstance(min_length, int) or min_length < 1:
                raise ValueError(f"min_length must be a positive integer, got {min_length!r}")
            updates["min_string_length"] = min_length
        if options.get("languages"):
            updates["languages"] = tuple(_as_list(options["languages"]))
        if options.get("jsx_text") is not None:
            updates["analyze_jsx_text"] = bool(options["jsx_text"])
        if options.get("string_literals") is not None:
            updates["analyze_string_literals"] = bool(options["string_literals"])
        if options.get("translation_file_patterns"):
            updates["translation_file_patterns"] = tuple(_as_list(options["translation_file_patterns"]))
        if options.get("exclude"):
            updates["exclude_patterns"] = tuple(_as_list(options["exclude"]))
        return replace(config, **updates)

    def excluded_by(self, text: str) -> str | None:
        """Name of the first exclusion rule ``text`` hits, or None."""
        for name, rule in self.exclude_rules:
            if rule.search(text):
                return name
        for pattern in self.exclude_patterns:
            if pattern in text:
                return f"pattern:{pattern}"
        return None

    def is_candidate_text(self, text: str) -> bool:
        """Cheap pre-filter applied before any validator runs."""
        stripped = text.strip()
        if not stripped or len(stripped) < self.min_string_length:
            return False
        return self.excluded_by(stripped) is None
