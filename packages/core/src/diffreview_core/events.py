"""Loading the pull_request event payload GitHub Actions writes to disk."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from diffreview_core.errors import EventError

ACTION_OPENED = "opened"
ACTION_SYNCHRONIZE = "synchronize"
SUPPORTED_ACTIONS = (ACTION_OPENED, ACTION_SYNCHRONIZE)


@dataclass(frozen=True)
class PullRequestEvent:
    action: str
    number: int
    owner: str
    repo: str
    before: str | None = None
    after: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def is_supported(self) -> bool:
        return self.action in SUPPORTED_ACTIONS

    @classmethod
    def from_payload(cls, payload: dict) -> PullRequestEvent:
        if not isinstance(payload, dict) or not payload.get("action"):
            raise EventError("Event action is not defined.")

        repository = payload.get("repository") or {}
        owner = (repository.get("owner") or {}).get("login", "")
        # "number" is top-level on pull_request events; fall back to the PR object.
        number = payload.get("number") or (payload.get("pull_request") or {}).get("number") or 0
        try:
            number = int(number)
        except (TypeError, ValueError):
            raise EventError(f"Event number is not an integer: {number!r}")
        return cls(
            action=payload["action"],
            number=number,
            owner=owner,
            repo=repository.get("name", ""),
            before=payload.get("before") or None,
            after=payload.get("after") or None,
        )


def load_event(event_path: str | None) -> PullRequestEvent:
    """Read and parse the event payload at event_path (normally $GITHUB_EVENT_PATH)."""
    if not event_path:
        raise EventError("GITHUB_EVENT_PATH is not defined.")

    try:
        raw = Path(event_path).read_text(encoding="utf-8")
    except OSError as e:
        raise EventError(f"Could not read event payload {event_path}: {e}")

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise EventError(f"Event payload is not valid JSON: {e}")

    return PullRequestEvent.from_payload(payload)
