"""Tests for loading the pull_request event payload."""

import json

import pytest

from diffreview_core.errors import EventError
from diffreview_core.events import PullRequestEvent, load_event

PAYLOAD = {
    "action": "synchronize",
    "number": 42,
    "repository": {"owner": {"login": "octo"}, "name": "app"},
    "before": "a" * 40,
    "after": "b" * 40,
}


def _write(tmp_path, payload):
    path = tmp_path / "event.json"
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload))
    return str(path)


def test_loads_all_fields(tmp_path):
    event = load_event(_write(tmp_path, PAYLOAD))
    assert event == PullRequestEvent(
        action="synchronize", number=42, owner="octo", repo="app", before="a" * 40, after="b" * 40
    )
    assert event.full_name == "octo/app"
    assert event.is_supported


def test_before_and_after_optional(tmp_path):
    payload = {k: v for k, v in PAYLOAD.items() if k not in ("before", "after")}
    payload["action"] = "opened"
    event = load_event(_write(tmp_path, payload))
    assert event.before is None
    assert event.after is None


def test_unsupported_action_still_loads(tmp_path):
    event = load_event(_write(tmp_path, {**PAYLOAD, "action": "closed"}))
    assert not event.is_supported


def test_missing_path_raises():
    with pytest.raises(EventError, match="GITHUB_EVENT_PATH"):
        load_event(None)


def test_unreadable_file_raises(tmp_path):
    with pytest.raises(EventError, match="Could not read"):
        load_event(str(tmp_path / "missing.json"))


def test_invalid_json_raises(tmp_path):
    with pytest.raises(EventError, match="not valid JSON"):
        load_event(_write(tmp_path, "{not json"))


def test_missing_action_raises(tmp_path):
    payload = {k: v for k, v in PAYLOAD.items() if k != "action"}
    with pytest.raises(EventError, match="action is not defined"):
        load_event(_write(tmp_path, payload))


def test_number_falls_back_to_pull_request_object():
    payload = {k: v for k, v in PAYLOAD.items() if k != "number"}
    payload["pull_request"] = {"number": 9}
    assert PullRequestEvent.from_payload(payload).number == 9


def test_non_numeric_number_raises(tmp_path):
    with pytest.raises(EventError, match="not an integer"):
        load_event(_write(tmp_path, {**PAYLOAD, "number": "forty-two"}))
