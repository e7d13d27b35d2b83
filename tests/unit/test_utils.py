"""Unit tests for path and pattern helpers."""

from pathlib import Path

from duly_noted.core import (
    document_link_prefix,
    get_link_prefix,
    is_source_file,
    matches_pattern,
    output_path,
    record_path,
    relative_name,
)


class TestGetLinkPrefix:
    """Tests for relative link prefixes."""

    def test_three_segments_climb_once(self):
        assert get_link_prefix("a/b/c.ts") == "../"

    def test_single_segment_has_no_prefix(self):
        assert get_link_prefix("a.ts") == ""

    def test_two_segments_have_no_prefix(self):
        assert get_link_prefix("a/b.ts") == ""

    def test_deep_paths(self):
        assert get_link_prefix("a/b/c/d/e.ts") == "../../../"

    def test_document_prefix_counts_output_root(self):
        assert document_link_prefix("main.ts") == ""
        assert document_link_prefix("src/main.ts") == "../"
        assert document_link_prefix("src/app/main.ts") == "../../"


class TestOutputLocations:
    def test_output_path(self):
        assert output_path(Path("docs"), "src/a.ts", ".md") == Path("docs/src/a.ts.md")

    def test_record_path(self):
        assert record_path(Path("docs/.duly-noted"), "src/a.ts") == Path("docs/.duly-noted/src/a.ts.json")

    def test_relative_name_uses_forward_slashes(self, tmp_path):
        assert relative_name(tmp_path / "src" / "a.ts", tmp_path) == "src/a.ts"


class TestMatchesPattern:
    """Tests for glob matching."""

    def test_double_star_prefix_matches_any_depth(self):
        assert matches_pattern("a.py", ["**/*.py"])
        assert matches_pattern("src/pkg/a.py", ["**/*.py"])
        assert not matches_pattern("src/a.ts", ["**/*.py"])

    def test_directory_suffix(self):
        assert matches_pattern("build/out/a.js", ["build/**"])
        assert not matches_pattern("src/build.js", ["build/**"])

    def test_double_star_in_middle(self):
        assert matches_pattern("src/a.ts", ["src/**/*.ts"])
        assert matches_pattern("src/deep/er/a.ts", ["src/**/*.ts"])
        assert not matches_pattern("lib/a.ts", ["src/**/*.ts"])

    def test_component_match(self):
        assert matches_pattern("pkg/node_modules/x/index.js", ["**/node_modules/**"])

    def test_windows_separators(self):
        assert matches_pattern("src\\a.py", ["src/*.py"])

    def test_is_source_file(self):
        assert is_source_file("src/a.ts", ["**/*.ts"], ["**/*.d.ts"])
        assert not is_source_file("src/a.d.ts", ["**/*.ts"], ["**/*.d.ts"])
        assert not is_source_file("README.md", ["**/*.ts"], [])
