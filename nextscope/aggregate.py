"""Result aggregation: tallies and stable top-N rankings.

Rankings use ``Counter.most_common``, whose sort is stable, so entries with
equal counts stay in first-seen order.
"""

from collections import Counter
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

T = TypeVar("T")


def count_by(items: Iterable[T], key: Callable[[T], str | None]) -> dict[str, int]:
    """Count items per category, preserving first-seen category order.

    Items whose key is None are skipped.
    """
    counts = Counter(category for category in map(key, items) if category is not None)
    return dict(counts)


def top_n(counts: dict[str, int], n: int | None = None) -> list[tuple[str, int]]:
    """Rank a tally by count descending; ties keep insertion order."""
    return Counter(counts).most_common(n)


def ranked(
    counts: dict[str, int],
    n: int | None,
    label: str,
    count_label: str = "count",
) -> list[dict[str, Any]]:
    """Top-N as a list of ``{label: name, count_label: count}`` dicts."""
    return [{label: name, count_label: count} for name, count in top_n(counts, n)]


def tally_texts(
    entries: Iterable[tuple[str, str]],
    n: int | None = None,
) -> list[dict[str, Any]]:
    """Deduplicate text values across files.

    Args:
        entries: ``(text, file)`` pairs in discovery order.
        n: Optional cap on the number of returned entries.

    Returns:
        Entries ``{"text", "count", "files"}`` ranked by count, where
        ``files`` lists each distinct file once in first-seen order.
    """
    tally: dict[str, dict[str, Any]] = {}
    for text, file in entries:
        entry = tally.setdefault(text, {"text": text, "count": 0, "files": []})
        entry["count"] += 1
        if file not in entry["files"]:
            entry["files"].append(file)
    ordered = sorted(tally.values(), key=lambda e: -e["count"])
    return ordered if n is None else ordered[:n]
