"""review command: review the pull request that triggered the workflow."""

from __future__ import annotations

import logging

import click
from rich.console import Console

from diffreview_core.config import load_config
from diffreview_core.reviewer import review_pull_request
from diffreview_cli.auth import resolve_github_token

console = Console()
logger = logging.getLogger(__name__)


def _escape_data(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def set_failed(message: str) -> None:
    """Report a failure through the GitHub Actions ``::error::`` workflow command."""
    click.echo(f"::error::{_escape_data(message)}")


@click.command("review")
@click.option(
    "--event-path",
    "event_path",
    envvar="GITHUB_EVENT_PATH",
    default=None,
    help="Path to the pull_request event payload. Defaults to $GITHUB_EVENT_PATH.",
)
@click.option(
    "--config",
    "config_path",
    default=".diffreview.yml",
    show_default=True,
    help="Path to the configuration file.",
)
@click.option("--model", default=None, help="OpenAI model. Overrides OPENAI_API_MODEL and the config file.")
@click.option("--exclude", default=None, help="Comma-separated glob patterns of files to skip.")
@click.option(
    "--max-concurrency",
    "max_concurrency",
    type=int,
    default=None,
    help="Maximum number of hunks reviewed at the same time.",
)
@click.option(
    "--shadow",
    "-s",
    is_flag=True,
    help="Dry-run mode: print review comments without posting to GitHub.",
)
@click.pass_context
def review_cmd(
    ctx: click.Context,
    event_path: str | None,
    config_path: str,
    model: str | None,
    exclude: str | None,
    max_concurrency: int | None,
    shadow: bool,
):
    """Review a pull request with OpenAI and post inline comments.

    \b
    Inputs (INPUT_<NAME> or the bare environment variable):
      GITHUB_TOKEN          GitHub token (falls back to `gh auth token`)
      OPENAI_API_KEY        OpenAI API key
      OPENAI_API_MODEL      OpenAI model (default gpt-4o)
      exclude               Comma-separated glob patterns to skip
      LANGFUSE_SECRET_KEY   Enables Langfuse tracing together with
      LANGFUSE_PUBLIC_KEY   the public key
      LANGFUSE_HOST         Langfuse host (optional)
    """
    try:
        config = load_config(
            config_path,
            cli_overrides={"model": model, "exclude": exclude, "max_concurrency": max_concurrency},
        )
        if not config.get("github_token"):
            config["github_token"] = resolve_github_token()

        summary = review_pull_request(event_path, config, shadow=shadow)
    except Exception as e:
        logger.error("Error in main execution: %s", e)
        set_failed(str(e))
        ctx.exit(1)

    if summary is not None:
        console.print(
            f"[dim]{len(summary.reviewed_files)} file(s) reviewed, "
            f"{len(summary.excluded_files)} excluded, {len(summary.comments)} comment(s).[/dim]"
        )
