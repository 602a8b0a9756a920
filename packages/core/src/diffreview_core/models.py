"""Value records passed between pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass, field

from diffreview_core.errors import MalformedReviewError


@dataclass(frozen=True)
class PRDetails:
    owner: str
    repo: str
    pull_number: int
    title: str = ""
    description: str = ""


@dataclass(frozen=True)
class AIReview:
    line_number: int
    review_comment: str

    @classmethod
    def from_dict(cls, item) -> AIReview:
        """Build an AIReview from one ``{"lineNumber", "reviewComment"}`` item.

        The model may send the line number as an int or a numeric string.
        Anything else raises MalformedReviewError instead of producing a
        comment on a nonsense line.
        """
        if not isinstance(item, dict):
            raise MalformedReviewError(f"review item is not an object: {item!r}")

        raw_line = item.get("lineNumber")
        if isinstance(raw_line, bool) or raw_line is None:
            raise MalformedReviewError(f"invalid lineNumber: {raw_line!r}")
        if isinstance(raw_line, float) and raw_line.is_integer():
            raw_line = int(raw_line)
        try:
            line_number = int(str(raw_line).strip())
        except ValueError:
            raise MalformedReviewError(f"invalid lineNumber: {raw_line!r}")
        if line_number < 1:
            raise MalformedReviewError(f"lineNumber must be positive, got {line_number}")

        comment = item.get("reviewComment")
        if not isinstance(comment, str) or not comment.strip():
            raise MalformedReviewError(f"missing reviewComment for line {line_number}")

        return cls(line_number=line_number, review_comment=comment)


@dataclass(frozen=True)
class Comment:
    body: str
    path: str
    line: int

    def to_api(self) -> dict:
        """Shape expected by PullRequest.create_review(comments=...)."""
        return {"body": self.body, "path": self.path, "line": self.line}


@dataclass
class ReviewSummary:
    """Result returned by run_review, enough for the CLI to report what happened."""

    repo: str
    pr_number: int
    action: str
    reviewed_files: list[str] = field(default_factory=list)
    excluded_files: list[str] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    posted: bool = False
