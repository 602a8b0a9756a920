"""Tests for prompt construction."""

from diffreview_core.diff import Change, DiffFile, Hunk
from diffreview_core.models import PRDetails
from diffreview_core.prompts import build_prompt, render_hunk

HUNK = Hunk(
    header="@@ -10,3 +10,3 @@",
    changes=(
        Change(type="normal", content=" a = 1", old_line=10, new_line=10),
        Change(type="del", content="-b = 2", old_line=11),
        Change(type="add", content="+b = 3", new_line=11),
        Change(type="normal", content=" c = 4", old_line=12, new_line=12),
    ),
)
FILE = DiffFile(source_path="src/foo.py", target_path="src/foo.py", hunks=(HUNK,))
PR = PRDetails(owner="octo", repo="app", pull_number=7, title="Fix totals", description="Rounds the totals.")


class TestRenderHunk:
    def test_header_comes_first(self):
        assert render_hunk(HUNK).splitlines()[0] == "@@ -10,3 +10,3 @@"

    def test_each_change_prefixed_with_its_line_number(self):
        lines = render_hunk(HUNK).splitlines()[1:]
        assert lines == ["10  a = 1", "11 -b = 2", "11 +b = 3", "12  c = 4"]


class TestBuildPrompt:
    def test_contains_file_path(self):
        assert '"src/foo.py"' in build_prompt(FILE, HUNK, PR)

    def test_contains_title_and_description(self):
        prompt = build_prompt(FILE, HUNK, PR)
        assert "Pull request title: Fix totals" in prompt
        assert "Rounds the totals." in prompt

    def test_contains_numbered_diff_in_fence(self):
        prompt = build_prompt(FILE, HUNK, PR)
        assert "```diff\n@@ -10,3 +10,3 @@\n10  a = 1" in prompt

    def test_requests_json_reviews_shape(self):
        prompt = build_prompt(FILE, HUNK, PR)
        assert '{"reviews": [{"lineNumber": <line_number>, "reviewComment": "<review comment>"}]}' in prompt

    def test_forbids_suggesting_code_comments(self):
        assert "NEVER suggest adding comments to the code" in build_prompt(FILE, HUNK, PR)

    def test_empty_description_still_renders(self):
        pr = PRDetails(owner="o", repo="r", pull_number=1)
        prompt = build_prompt(FILE, HUNK, pr)
        assert "---\n\n---" in prompt
