"""GitHub token lookup for the review command.

Inside a workflow the token comes from the GITHUB_TOKEN input only. When the
command is run on a workstation, an authenticated GitHub CLI session
(`gh auth login`) is used as a fallback.
"""

from __future__ import annotations

import logging
import os
import subprocess

from diffreview_core.config import get_input

logger = logging.getLogger(__name__)


def _gh_cli_token() -> str | None:
    try:
        result = subprocess.run(["gh", "auth", "token"], capture_output=True, text=True, timeout=5, check=True)
    except (OSError, subprocess.SubprocessError):
        return None
    return result.stdout.strip() or None


def resolve_github_token() -> str | None:
    """Return a GitHub token, or None and let validate_config report the missing input."""
    token = get_input("GITHUB_TOKEN")
    if token or os.environ.get("GITHUB_ACTIONS") == "true":
        return token or None

    token = _gh_cli_token()
    if token:
        logger.debug("Using GitHub token from the gh CLI session.")
    return token
