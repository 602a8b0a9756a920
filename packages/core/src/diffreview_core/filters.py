from __future__ import annotations

from typing import TYPE_CHECKING

import pathspec

if TYPE_CHECKING:
    from diffreview_core.diff import DiffFile


def parse_exclude_patterns(value) -> list[str]:
    """Normalise the ``exclude`` setting into a list of glob patterns.

    Accepts the comma-separated string used by the action input
    ("**/*.lock, dist/**") or a list from the YAML config.
    """
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(pattern).strip() for pattern in value if str(pattern).strip()]


def _compile(pattern: str) -> pathspec.PathSpec:
    # Each pattern is a plain glob: a leading "!" or "#" is literal, not gitignore negation or comment.
    if pattern.startswith(("!", "#")):
        pattern = "\\" + pattern
    return pathspec.PathSpec.from_lines("gitwildmatch", [pattern])


def _matches_any(specs: list[pathspec.PathSpec], path: str) -> bool:
    return any(spec.match_file(path) for spec in specs)


def is_excluded(path: str, patterns: list[str]) -> bool:
    """Return True if path matches any exclude pattern.

    Every pattern is tested on its own, so a later pattern never re-includes
    a path an earlier one matched. Globs follow gitignore syntax:
    - "*.min.js" matches the basename at any depth
    - "src/generated/*.py" is anchored to the given directory
    - "**/fixtures/**", "?" and "[abc]" character classes are supported
    """
    if not patterns:
        return False
    return _matches_any([_compile(p) for p in patterns], path or "")


def filter_excluded(files: list[DiffFile], patterns: list[str]) -> list[DiffFile]:
    """Drop every file whose new path matches an exclude pattern.

    Files without a new path are matched as "". With no patterns the input
    list is returned unchanged.
    """
    if not patterns:
        return files
    specs = [_compile(p) for p in patterns]
    return [f for f in files if not _matches_any(specs, f.target_path or "")]
