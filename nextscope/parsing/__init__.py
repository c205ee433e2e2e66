"""Source parsing: tree-sitter grammars, tree helpers, and the parse cache."""

from nextscope.parsing.cache import CacheStats, ParseCache, SourceFile
from nextscope.parsing.languages import (
    EXTENSION_TO_LANGUAGE,
    SOURCE_EXTENSIONS,
    get_parser,
    language_for_path,
)

__all__ = [
    "CacheStats",
    "ParseCache",
    "SourceFile",
    "EXTENSION_TO_LANGUAGE",
    "SOURCE_EXTENSIONS",
    "get_parser",
    "language_for_path",
]
