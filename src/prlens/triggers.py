"""Decide which bot actions a GitHub event triggers."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from prlens.errors import EventLoadError

logger = logging.getLogger(__name__)

_COMMAND = re.compile(r"/(review|summary)")


class Action(str, Enum):
    SUMMARY = "summary"
    REVIEW = "review"


def determine_actions(event_name: str | None, event: Mapping[str, Any]) -> list[Action]:
    """Return the actions to run for an event, in first-seen order without duplicates.

    - Events sent by bots never trigger anything.
    - A newly opened pull request triggers a summary and a review.
    - A new comment on an open pull request triggers every ``/review`` or
      ``/summary`` command it contains.
    """

    action = event.get("action")
    sender = event.get("sender") or {}
    if sender.get("type") == "Bot":
        logger.info("sender is a bot; no actions")
        return []

    actions: list[Action] = []
    if event_name == "pull_request":
        if action == "opened":
            actions = [Action.SUMMARY, Action.REVIEW]
    elif event_name == "issue_comment" and action == "created":
        issue = event.get("issue") or {}
        if issue.get("pull_request") and issue.get("state") == "open":
            body = (event.get("comment") or {}).get("body") or ""
            for match in _COMMAND.finditer(body):
                found = Action(match.group(1))
                if found not in actions:
                    actions.append(found)

    if not actions:
        logger.info("event %s/%s did not trigger any recognized action", event_name, action)
    return actions


def load_event(path: Path | str) -> dict[str, Any]:
    """Read the JSON event payload written by the Actions runner."""

    event_path = Path(path)
    try:
        data = json.loads(event_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise EventLoadError(f"event file not found: {event_path}") from exc
    except json.JSONDecodeError as exc:
        raise EventLoadError(f"event file is not valid JSON: {event_path}") from exc
    if not isinstance(data, dict):
        raise EventLoadError(f"event payload must be a JSON object: {event_path}")
    return data


__all__ = ["Action", "determine_actions", "load_event"]
