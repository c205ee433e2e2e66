"""Tests for glob matching and file discovery."""

from pathlib import Path

from nextscope.files import (
    NEXTSCOPEIGNORE_FILENAME,
    expand_braces,
    find_files,
    matches_glob,
    parse_ignore_file,
)


class TestGlobMatching:
    """Tests for brace expansion and glob-to-regex translation."""

    def test_expand_braces_produces_one_pattern_per_option(self) -> None:
        assert expand_braces("**/*.{js,ts}") == ["**/*.js", "**/*.ts"]

    def test_expand_braces_without_group_is_identity(self) -> None:
        assert expand_braces("src/*.tsx") == ["src/*.tsx"]

    def test_double_star_matches_any_depth(self) -> None:
        assert matches_glob("a.tsx", "**/*.tsx")
        assert matches_glob("src/components/a.tsx", "**/*.tsx")

    def test_single_star_stays_within_one_directory(self) -> None:
        assert matches_glob("src/a.ts", "src/*.ts")
        assert not matches_glob("src/nested/a.ts", "src/*.ts")

    def test_test_file_exclusion(self) -> None:
        assert matches_glob("components/Header.test.tsx", "**/*.test.*")
        assert not matches_glob("components/Header.tsx", "**/*.test.*")


class TestFindFiles:
    """Tests for find_files."""

    def test_finds_sources_sorted_and_skips_node_modules(self, make_project) -> None:
        """Default ignores drop dependency and build directories."""
        root = make_project({
            "src/b.tsx": "",
            "src/a.ts": "",
            "node_modules/pkg/index.js": "",
            ".next/server/page.js": "",
            "README.md": "",
        })

        found = find_files("**/*.{js,jsx,ts,tsx}", root)

        rel = [Path(p).relative_to(root.resolve()).as_posix() for p in found]
        assert rel == ["src/a.ts", "src/b.tsx"]

    def test_extra_ignore_globs(self, make_project) -> None:
        root = make_project({"src/a.ts": "", "src/a.test.ts": "", "src/__tests__/b.ts": ""})

        found = find_files("**/*.ts", root, ["**/*.test.*", "**/__tests__/**"])

        assert [Path(p).name for p in found] == ["a.ts"]

    def test_ignore_file_entries_are_applied(self, make_project) -> None:
        root = make_project({
            NEXTSCOPEIGNORE_FILENAME: "# generated code\ngenerated/\n!keep.ts\n",
            "generated/api.ts": "",
            "src/app.ts": "",
        })

        assert parse_ignore_file(root) == {"generated"}
        found = find_files("**/*.ts", root)
        assert [Path(p).name for p in found] == ["app.ts"]

    def test_missing_directory_returns_empty(self, tmp_path: Path) -> None:
        """Discovery failures are logged, not raised."""
        assert find_files("**/*.ts", tmp_path / "nope") == []
