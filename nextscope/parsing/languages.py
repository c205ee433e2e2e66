"""Tree-sitter grammars for JavaScript and TypeScript sources."""

from collections.abc import Callable
from functools import cache
from pathlib import Path

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Parser

# Grammar name -> binding returning the raw language pointer
_GRAMMARS: dict[str, Callable[[], object]] = {
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
    "javascript": tree_sitter_javascript.language,
}

# JSX is part of the javascript grammar; .tsx needs its own
EXTENSION_TO_LANGUAGE: dict[str, str] = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
}

SOURCE_EXTENSIONS = frozenset(EXTENSION_TO_LANGUAGE)


def language_for_path(path: str | Path) -> str | None:
    """Return the grammar name for a file, or None if unsupported."""
    return EXTENSION_TO_LANGUAGE.get(Path(path).suffix.lower())


@cache
def _parser_for(grammar: str) -> Parser:
    return Parser(Language(_GRAMMARS[grammar]()))


def get_parser(path: str | Path) -> Parser | None:
    """Get the shared parser for a file's extension.

    Parsers are built on first use and reused for the life of the process.

    Args:
        path: Source file path; only the suffix is inspected.

    Returns:
        A tree-sitter Parser, or None for unsupported extensions.
    """
    grammar = language_for_path(path)
    if grammar is None:
        return None
    return _parser_for(grammar)
