"""File discovery with glob patterns and ignore rules.

Supports ``**`` (any number of directories), ``*``, ``?`` and ``{a,b}``
brace groups. Ignore entries without glob characters match any single path
component (``node_modules``); entries with glob characters are matched
against the path relative to the base directory. A ``.nextscopeignore``
file in the base directory adds gitignore-style entries.
"""

import os
import re
from functools import lru_cache
from pathlib import Path

from nextscope.logging import logger

# Universal ignore patterns - always excluded
DEFAULT_IGNORES: frozenset[str] = frozenset({
    # Version control
    ".git",
    ".svn",
    ".hg",
    # Dependencies
    "node_modules",
    "bower_components",
    ".pnpm-store",
    # Build outputs
    "dist",
    "build",
    "out",
    ".next",
    ".turbo",
    ".vercel",
    ".cache",
    # Test coverage
    "coverage",
    ".nyc_output",
    # Our own state directory
    ".nextscope",
})

NEXTSCOPEIGNORE_FILENAME = ".nextscopeignore"

_GLOB_CHARS = frozenset("*?[{")


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` groups into separate patterns.

    Example:
        >>> expand_braces("**/*.{js,ts}")
        ['**/*.js', '**/*.ts']
    """
    match = re.search(r"\{([^{}]*)\}", pattern)
    if not match:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end():]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(head + option + tail))
    return expanded


@lru_cache(maxsize=256)
def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile a single (brace-free) glob into an anchored regex."""
    out: list[str] = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            out.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            out.append(".*")
            i += 2
        elif pattern[i] == "*":
            out.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            out.append("[^/]")
            i += 1
        else:
            out.append(re.escape(pattern[i]))
            i += 1
    return re.compile("^" + "".join(out) + "$")


def matches_glob(rel_path: str, pattern: str) -> bool:
    """Check a POSIX-style relative path against a glob with brace groups."""
    return any(glob_to_regex(p).match(rel_path) for p in expand_braces(pattern))


def parse_ignore_file(base_dir: Path) -> set[str]:
    """Read ``.nextscopeignore`` entries, skipping comments and negations."""
    ignore_file = base_dir / NEXTSCOPEIGNORE_FILENAME
    if not ignore_file.is_file():
        return set()

    patterns: set[str] = set()
    try:
        for line in ignore_file.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("!"):
                logger.debug("  Negation patterns not supported: %s", line)
                continue
            patterns.add(line.rstrip("/"))
    except OSError as e:
        logger.warning("  Failed to read %s: %s", ignore_file, e)
    return patterns


def _is_ignored(rel_path: str, names: set[str], globs: list[str]) -> bool:
    if any(part in names for part in rel_path.split("/")):
        return True
    return any(matches_glob(rel_path, g) for g in globs)


def find_files(
    pattern: str,
    base_dir: str | Path,
    ignore: list[str] | tuple[str, ...] | None = None,
) -> list[str]:
    """Find files under ``base_dir`` matching ``pattern``.

    Args:
        pattern: Glob relative to ``base_dir``, e.g. ``**/*.{js,jsx,ts,tsx}``.
        base_dir: Directory to search.
        ignore: Extra ignore entries on top of DEFAULT_IGNORES and the
            base directory's ``.nextscopeignore``.

    Returns:
        Sorted absolute paths. Empty (with a warning logged) when the search
        itself fails.
    """
    root = Path(base_dir)
    try:
        root = root.resolve(strict=True)
        if not root.is_dir():
            raise NotADirectoryError(f"{root} is not a directory")

        entries = set(DEFAULT_IGNORES) | parse_ignore_file(root) | set(ignore or ())
        names = {e for e in entries if not _GLOB_CHARS & set(e) and "/" not in e}
        globs = [e for e in entries if e not in names]
        compiled = [glob_to_regex(p) for p in expand_braces(pattern)]

        found: list[str] = []
        for dirpath, dirnames, filenames in os.walk(root):
            rel_dir = Path(dirpath).relative_to(root).as_posix()
            rel_dir = "" if rel_dir == "." else rel_dir + "/"
            # Prune ignored directories in place so os.walk skips them
            dirnames[:] = sorted(
                d for d in dirnames
                if d not in names and not _is_ignored(rel_dir + d, set(), globs)
            )
            for filename in filenames:
                rel = rel_dir + filename
                if filename in names or _is_ignored(rel, set(), globs):
                    continue
                if any(rx.match(rel) for rx in compiled):
                    found.append(str(root / rel))
        return sorted(found)
    except (OSError, re.error, ValueError) as e:
        logger.warning("File discovery failed for %s in %s: %s", pattern, base_dir, e)
        return []
