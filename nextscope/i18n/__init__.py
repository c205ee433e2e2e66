"""Translatable-string analysis: candidate collection, validators, locale files."""

from nextscope.i18n.candidates import (
    Candidate,
    ContextKind,
    TranslationUsage,
    collect_candidates,
    collect_translation_usage,
    suggest_key,
)
from nextscope.i18n.config import I18nConfig
from nextscope.i18n.pipeline import Decision, classify
from nextscope.i18n.plugin import I18nExtractorPlugin
from nextscope.i18n.validators import (
    DEFAULT_VALIDATORS,
    Priority,
    Validator,
    ValidatorRegistry,
    Verdict,
)

__all__ = [
    "Candidate",
    "ContextKind",
    "DEFAULT_VALIDATORS",
    "Decision",
    "I18nConfig",
    "I18nExtractorPlugin",
    "Priority",
    "TranslationUsage",
    "Validator",
    "ValidatorRegistry",
    "Verdict",
    "classify",
    "collect_candidates",
    "collect_translation_usage",
    "suggest_key",
]
