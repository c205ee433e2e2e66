"""Tests for tallies and rankings."""

from nextscope.aggregate import count_by, ranked, tally_texts, top_n


class TestRankings:
    """Tests for count_by, top_n and ranked."""

    def test_count_by_keeps_first_seen_order_and_skips_none(self) -> None:
        counts = count_by(["b", "a", None, "b"], lambda x: x)
        assert list(counts.items()) == [("b", 2), ("a", 1)]

    def test_top_n_ties_keep_insertion_order(self) -> None:
        counts = {"useEffect": 2, "useState": 3, "useMemo": 2}
        assert top_n(counts) == [("useState", 3), ("useEffect", 2), ("useMemo", 2)]
        assert top_n(counts, 1) == [("useState", 3)]

    def test_ranked_labels(self) -> None:
        assert ranked({"a.tsx": 2}, 10, "file") == [{"file": "a.tsx", "count": 2}]


class TestTallyTexts:
    """Tests for cross-file text deduplication."""

    def test_counts_occurrences_and_distinct_files(self) -> None:
        entries = [
            ("Save", "a.tsx"),
            ("Cancel", "a.tsx"),
            ("Save", "a.tsx"),
            ("Save", "b.tsx"),
        ]

        tally = tally_texts(entries)

        assert tally[0] == {"text": "Save", "count": 3, "files": ["a.tsx", "b.tsx"]}
        assert tally[1] == {"text": "Cancel", "count": 1, "files": ["a.tsx"]}

    def test_limit(self) -> None:
        entries = [(f"text {i}", "a.tsx") for i in range(30)]
        assert len(tally_texts(entries, 20)) == 20
