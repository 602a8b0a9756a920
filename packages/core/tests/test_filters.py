"""Tests for exclude-pattern parsing and file filtering."""

import pytest

from diffreview_core.diff import DiffFile
from diffreview_core.filters import filter_excluded, is_excluded, parse_exclude_patterns


def make_file(target, source=None):
    return DiffFile(source_path=source or target, target_path=target)


class TestParseExcludePatterns:
    def test_comma_separated_string_is_split_and_trimmed(self):
        assert parse_exclude_patterns(" *.lock , dist/** ,**/*.min.js") == ["*.lock", "dist/**", "**/*.min.js"]

    def test_blank_entries_dropped(self):
        assert parse_exclude_patterns("*.lock,, ,") == ["*.lock"]

    def test_list_from_yaml_accepted(self):
        assert parse_exclude_patterns(["docs/**", " *.svg "]) == ["docs/**", "*.svg"]

    @pytest.mark.parametrize("value", [None, "", []])
    def test_empty_values(self, value):
        assert parse_exclude_patterns(value) == []


class TestIsExcluded:
    def test_basename_glob_matches_at_any_depth(self):
        assert is_excluded("frontend/yarn.lock", ["*.lock"])

    def test_anchored_directory_glob(self):
        assert is_excluded("dist/app/bundle.js", ["dist/**"])
        assert not is_excluded("src/dist.py", ["dist/**"])

    def test_double_star_prefix(self):
        assert is_excluded("a/b/c/vendor.min.js", ["**/*.min.js"])
        assert is_excluded("vendor.min.js", ["**/*.min.js"])

    def test_single_star_does_not_cross_directories(self):
        assert is_excluded("src/gen.py", ["src/*.py"])
        assert not is_excluded("src/pkg/gen.py", ["src/*.py"])

    def test_question_mark_and_character_class(self):
        assert is_excluded("v1.txt", ["v?.txt"])
        assert is_excluded("file_b.py", ["file_[abc].py"])
        assert not is_excluded("file_d.py", ["file_[abc].py"])

    def test_no_patterns_never_excludes(self):
        assert not is_excluded("anything.py", [])


class TestFilterExcluded:
    def test_empty_pattern_list_is_identity(self):
        files = [make_file("a.py"), make_file("b.lock")]
        assert filter_excluded(files, []) is files

    def test_keeps_only_files_matching_no_pattern(self):
        files = [make_file("src/a.py"), make_file("yarn.lock"), make_file("dist/x.js"), make_file("src/b.py")]
        result = filter_excluded(files, ["*.lock", "dist/**"])
        assert [f.target_path for f in result] == ["src/a.py", "src/b.py"]

    def test_any_pattern_is_enough_to_exclude(self):
        files = [make_file("docs/readme.md")]
        assert filter_excluded(files, ["*.py", "docs/**"]) == []

    def test_file_without_target_path_matched_as_empty_string(self):
        deleted = DiffFile(source_path="gone.py", target_path=None)
        assert filter_excluded([deleted], ["*.py"]) == [deleted]

    def test_later_pattern_cannot_reinclude(self):
        files = [make_file("src/keep.py"), make_file("README.md")]
        result = filter_excluded(files, ["src/**", "!src/keep.py"])
        assert [f.target_path for f in result] == ["README.md"]


class TestPatternsAreIndependent:
    def test_negated_pattern_does_not_override_earlier_match(self):
        assert is_excluded("src/keep.py", ["src/**", "!src/keep.py"])

    def test_leading_hash_is_a_literal_not_a_comment(self):
        assert is_excluded("#notes.md", ["#notes.md"])
        assert not is_excluded("notes.md", ["#notes.md"])

    def test_leading_bang_is_a_literal(self):
        assert is_excluded("!important.txt", ["!important.txt"])
        assert not is_excluded("other.txt", ["!important.txt"])
