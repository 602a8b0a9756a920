"""Unified diff parsing.

Parsing itself is done by ``unidiff``; this module only converts its PatchSet
into small immutable records the rest of the pipeline works with, so prompts,
filters and comment mapping never touch unidiff objects directly.

The GitHub REST API returns one patch per changed file rather than a single
diff, so ``build_unified_diff`` stitches those patches back into unified diff
text with the usual ``---``/``+++`` headers.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass

from unidiff import LINE_TYPE_ADDED, LINE_TYPE_CONTEXT, LINE_TYPE_REMOVED, PatchSet

logger = logging.getLogger(__name__)

DEV_NULL = "/dev/null"


@dataclass(frozen=True)
class Change:
    type: str  # "add" | "del" | "normal"
    content: str  # includes the leading "+", "-" or " "
    old_line: int | None = None
    new_line: int | None = None

    @property
    def line_number(self) -> int | None:
        """New-file line number when there is one, otherwise the old-file one."""
        return self.new_line if self.new_line is not None else self.old_line


@dataclass(frozen=True)
class Hunk:
    header: str  # "@@ -a,b +c,d @@ optional section"
    changes: tuple[Change, ...] = ()


@dataclass(frozen=True)
class DiffFile:
    source_path: str | None
    target_path: str | None  # None when the file is deleted
    hunks: tuple[Hunk, ...] = ()

    @property
    def is_deleted(self) -> bool:
        return self.target_path is None


def _strip_prefix(name: str | None) -> str | None:
    if not name or name == DEV_NULL:
        return None
    if name.startswith(("a/", "b/")):
        return name[2:]
    return name


def _hunk_header(hunk) -> str:
    header = f"@@ -{hunk.source_start},{hunk.source_length} +{hunk.target_start},{hunk.target_length} @@"
    if hunk.section_header:
        header += f" {hunk.section_header}"
    return header


def _to_change(line) -> Change | None:
    if line.line_type == LINE_TYPE_ADDED:
        change_type = "add"
    elif line.line_type == LINE_TYPE_REMOVED:
        change_type = "del"
    elif line.line_type == LINE_TYPE_CONTEXT:
        change_type = "normal"
    else:
        return None  # "\ No newline at end of file" markers
    return Change(
        type=change_type,
        content=line.line_type + line.value.rstrip("\r\n"),
        old_line=line.source_line_no,
        new_line=line.target_line_no,
    )


def parse_diff(diff_text: str) -> list[DiffFile]:
    """Parse unified diff text into DiffFile records, in diff order."""
    if not diff_text or not diff_text.strip():
        return []

    files: list[DiffFile] = []
    for patched_file in PatchSet(io.StringIO(diff_text)):
        hunks = []
        for hunk in patched_file:
            changes = tuple(c for c in (_to_change(line) for line in hunk) if c is not None)
            hunks.append(Hunk(header=_hunk_header(hunk), changes=changes))
        files.append(
            DiffFile(
                source_path=_strip_prefix(patched_file.source_file),
                target_path=_strip_prefix(patched_file.target_file),
                hunks=tuple(hunks),
            )
        )
    return files


def build_unified_diff(files) -> str:
    """Rebuild unified diff text from PyGithub File objects.

    Files without a patch (binary files, or patches GitHub omitted because
    they were too large) are left out.
    """
    parts: list[str] = []
    for f in files:
        patch = f.patch
        if not patch:
            logger.debug("No patch for %s (status=%s); skipping.", f.filename, f.status)
            continue
        old_name = getattr(f, "previous_filename", None) or f.filename
        source = DEV_NULL if f.status == "added" else f"a/{old_name}"
        target = DEV_NULL if f.status == "removed" else f"b/{f.filename}"
        parts.append(f"diff --git a/{old_name} b/{f.filename}")
        parts.append(f"--- {source}")
        parts.append(f"+++ {target}")
        parts.append(patch.rstrip("\n"))
    if not parts:
        return ""
    return "\n".join(parts) + "\n"
