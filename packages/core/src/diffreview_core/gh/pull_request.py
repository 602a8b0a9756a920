from __future__ import annotations

from typing import TYPE_CHECKING

from github import Auth, Github

from diffreview_core.diff import build_unified_diff
from diffreview_core.models import PRDetails

if TYPE_CHECKING:
    from diffreview_core.models import Comment

REVIEW_EVENT_COMMENT = "COMMENT"


def get_github(token: str) -> Github:
    return Github(auth=Auth.Token(token))


def get_repo(github: Github, repo_name: str):
    return github.get_repo(repo_name)


def get_pull(repo, pr_number: int):
    return repo.get_pull(pr_number)


def get_pr_details(pr, owner: str, repo_name: str, pull_number: int) -> PRDetails:
    return PRDetails(
        owner=owner,
        repo=repo_name,
        pull_number=pull_number,
        title=pr.title or "",
        description=pr.body or "",
    )


def get_diff(pr) -> str:
    """Return the full unified diff of a pull request."""
    return build_unified_diff(pr.get_files())


def get_compare_diff(repo, base_sha: str, head_sha: str) -> str:
    """Return the unified diff between two commits using GitHub's compare API."""
    comparison = repo.compare(base_sha, head_sha)
    return build_unified_diff(comparison.files)


def create_review(pr, comments: list[Comment]) -> None:
    """Submit all comments as a single COMMENT review."""
    pr.create_review(event=REVIEW_EVENT_COMMENT, comments=[c.to_api() for c in comments])
