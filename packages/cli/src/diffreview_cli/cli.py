"""CLI entry point for diffreview.

Commands:
  review   Review the pull request described by a GitHub Actions event payload
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.logging import RichHandler

from diffreview_cli.commands.review import review_cmd


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, markup=False)],
        force=True,
    )
    # Keep HTTP client chatter out of the action log unless debugging.
    if not verbose:
        for name in ("httpx", "urllib3", "github"):
            logging.getLogger(name).setLevel(logging.WARNING)


@click.group()
@click.version_option(
    version=importlib.metadata.version("diffreview"),
    prog_name="diffreview",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """AI pull request reviewer for GitHub Actions."""
    _configure_logging(verbose)


main.add_command(review_cmd)
