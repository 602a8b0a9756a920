"""Core PR review orchestration."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from rich.console import Console

from diffreview_core.config import DEFAULT_CONFIG, validate_config
from diffreview_core.diff import parse_diff
from diffreview_core.errors import DiffReviewError
from diffreview_core.events import ACTION_OPENED, load_event
from diffreview_core.filters import filter_excluded
from diffreview_core.gh.pull_request import (
    create_review,
    get_compare_diff,
    get_diff,
    get_github,
    get_pr_details,
    get_pull,
    get_repo,
)
from diffreview_core.models import Comment, ReviewSummary
from diffreview_core.prompts import build_prompt
from diffreview_core.providers.openai import OpenAIReviewer
from diffreview_core.tracing import build_tracer

if TYPE_CHECKING:
    from diffreview_core.diff import DiffFile, Hunk
    from diffreview_core.events import PullRequestEvent
    from diffreview_core.models import AIReview, PRDetails
    from diffreview_core.providers.base import BaseReviewer
    from diffreview_core.tracing import BaseTracer

console = Console()
logger = logging.getLogger(__name__)


def create_comments(file: DiffFile, reviews: list[AIReview]) -> list[Comment]:
    """Map AI reviews onto review comments anchored to the file's new path."""
    if not file.target_path:
        return []
    return [Comment(body=r.review_comment, path=file.target_path, line=r.line_number) for r in reviews]


async def _analyze_hunk(
    file: DiffFile,
    hunk: Hunk,
    pr_details: PRDetails,
    reviewer: BaseReviewer,
    tracer: BaseTracer,
    semaphore: asyncio.Semaphore,
) -> list[Comment]:
    prompt = build_prompt(file, hunk, pr_details)
    async with semaphore:
        reviews = await reviewer.review(prompt, tracer)
    if not reviews:
        return []
    return create_comments(file, reviews)


async def _analyze_file(file, pr_details, reviewer, tracer, semaphore) -> list[Comment]:
    results = await asyncio.gather(
        *(_analyze_hunk(file, hunk, pr_details, reviewer, tracer, semaphore) for hunk in file.hunks)
    )
    return [comment for hunk_comments in results for comment in hunk_comments]


async def analyze_code(
    files: list[DiffFile],
    pr_details: PRDetails,
    reviewer: BaseReviewer,
    tracer: BaseTracer,
    max_concurrency: int = DEFAULT_CONFIG["max_concurrency"],
) -> list[Comment]:
    """Review every hunk of every file concurrently and collect the comments.

    At most max_concurrency model calls are in flight at once. The result is
    ordered by file, then by hunk, regardless of completion order.
    """
    semaphore = asyncio.Semaphore(max_concurrency)
    per_file = await asyncio.gather(
        *(_analyze_file(f, pr_details, reviewer, tracer, semaphore) for f in files if not f.is_deleted)
    )
    return [comment for file_comments in per_file for comment in file_comments]


def print_shadow_comments(comments: list[Comment]) -> None:
    """Print review comments to the terminal without posting to GitHub."""
    if not comments:
        console.print("[yellow]Shadow mode: no comments generated.[/yellow]")
        return
    console.print(f"\n[bold]Shadow review — {len(comments)} comment(s) (not posted)[/bold]\n")
    for c in comments:
        console.print(f"[bold cyan]{c.path}[/bold cyan]  line [bold]{c.line}[/bold]")
        console.print(f"  {c.body}")
        console.print()


async def _fetch_diff(event: PullRequestEvent, repo, pr) -> str:
    if event.action == ACTION_OPENED:
        fetch, args = get_diff, (pr,)
    else:
        if not event.before or not event.after:
            raise DiffReviewError("Both 'before' and 'after' SHAs are required for synchronize action.")
        fetch, args = get_compare_diff, (repo, event.before, event.after)

    try:
        return await asyncio.to_thread(fetch, *args)
    except Exception as e:
        raise DiffReviewError(f"Failed to get PR diff: {e}") from e


async def run_review(
    event: PullRequestEvent,
    config: dict,
    github,
    reviewer: BaseReviewer,
    tracer: BaseTracer,
    shadow: bool = False,
) -> ReviewSummary | None:
    """Run the review pipeline for one pull_request event.

    Returns None when the event action is not reviewed. Benign early exits
    (empty diff, everything excluded, no comments) return a ReviewSummary
    with posted=False. Fatal problems raise DiffReviewError.
    """
    if not event.is_supported:
        console.print(f"[yellow]Unsupported event action: {event.action}[/yellow]")
        return None

    try:
        repo = await asyncio.to_thread(get_repo, github, event.full_name)
        pr = await asyncio.to_thread(get_pull, repo, event.number)
        pr_details = get_pr_details(pr, event.owner, event.repo, event.number)
    except Exception as e:
        raise DiffReviewError(f"Failed to get PR details: {e}") from e

    tracer.start_trace(pr_details)
    summary = ReviewSummary(repo=event.full_name, pr_number=event.number, action=event.action)

    diff_text = await _fetch_diff(event, repo, pr)
    if not diff_text:
        console.print("[yellow]No diff found.[/yellow]")
        return summary

    parsed = [f for f in parse_diff(diff_text) if not f.is_deleted]
    files = filter_excluded(parsed, config.get("exclude", []))
    summary.excluded_files = [f.target_path for f in parsed if f not in files]
    if not files:
        console.print("[yellow]No files to analyze after applying exclude patterns.[/yellow]")
        return summary

    console.print(
        f"Reviewing {sum(len(f.hunks) for f in files)} hunk(s) across {len(files)} file(s) "
        f"in {event.full_name}#{event.number}"
    )
    comments = await analyze_code(
        files,
        pr_details,
        reviewer,
        tracer,
        max_concurrency=config.get("max_concurrency", DEFAULT_CONFIG["max_concurrency"]),
    )
    summary.reviewed_files = [f.target_path for f in files]
    summary.comments = comments

    if not comments:
        console.print("No comments to post.")
        return summary

    if shadow:
        print_shadow_comments(comments)
        return summary

    try:
        await asyncio.to_thread(create_review, pr, comments)
    except Exception as e:
        raise DiffReviewError(f"Failed to create review comments: {e}") from e
    summary.posted = True
    console.print(f"[green]Created {len(comments)} review comment(s).[/green]")
    return summary


async def _run_and_close(event, config, github, reviewer, tracer, shadow) -> ReviewSummary | None:
    # The HTTP client must be closed while its event loop is still running.
    try:
        return await run_review(event, config, github, reviewer, tracer, shadow=shadow)
    finally:
        await reviewer.close()


def review_pull_request(event_path: str | None, config: dict, shadow: bool = False) -> ReviewSummary | None:
    """Build the clients from config and run the review for the event at event_path.

    The tracer is always shut down, whether the run succeeds or fails.
    """
    validate_config(config)
    tracer = build_tracer(config)
    try:
        event = load_event(event_path)
        github = get_github(config["github_token"])
        reviewer = OpenAIReviewer(api_key=config["openai_api_key"], model=config["model"])
        return asyncio.run(_run_and_close(event, config, github, reviewer, tracer, shadow))
    finally:
        if tracer.enabled:
            tracer.shutdown()
