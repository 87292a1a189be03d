"""Agent instructions and user-prompt assembly."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from prlens.diff.filters import filter_diff
from prlens.diff.truncate import truncate_diff_safely

logger = logging.getLogger(__name__)

DEFAULT_JIRA_KEY_PATTERN = r"[A-Z][A-Z0-9]+-\d+"

SUMMARY_INSTRUCTIONS = """\
You analyse Git pull request diffs and produce a concise, informative summary that follows the provided JSON schema.

Analysis guidelines:
* The Git Diff is the only source of truth. Summarise the added and modified lines (`+` lines) it contains and nothing else.
* Use the Jira Context and Commit Messages only to understand why the visible changes were made and to choose `pr_type`.
* The `description` points describe the impact and purpose of the most significant changes.
* If the diff has no meaningful code changes (only whitespace, comments, or it is empty), say so and keep the summary minimal.
* Group related changes and pick the single `pr_type` that best describes the overall goal.

Constraints:
* Never mention a file or change that is not present in the diff, whatever the context says.
* Do not list every modified file; focus on the impactful ones.
* Do not repeat commit messages verbatim.
* Skip trivial formatting and comment edits unless they change meaning.
* Omit a `changes` category entirely instead of returning an empty list.
"""

REVIEW_INSTRUCTIONS = """\
You review Git pull request diffs as a senior engineer and answer with the provided JSON schema.

Review guidelines:
* Review only the code visible in the Git Diff; use Jira Context and Commit Messages to understand intent.
* Report concrete bugs, logic errors, missing error handling, performance problems, and maintainability issues.
* Each feedback point names the file path, a line reference when possible, a severity, and a specific description.
* Offer `suggested_code_change` only when a small replacement makes the fix clear.
* List security concerns separately; return an empty list when there are none.
* Rate `review_effort` from 1 (trivial) to 5 (very hard) and justify it briefly.
* Comment on whether tests cover the change in `test_coverage_assessment`.

Constraints:
* Do not praise or restate the change; every feedback point must be actionable.
* Do not flag style preferences that a formatter would handle.
* If the diff notes that it was truncated, do not speculate about the missing part.
"""


@dataclass(frozen=True, slots=True)
class PreparedDiff:
    """Diff ready to hand to an agent."""

    text: str
    was_truncated: bool
    ignored_files: list[str] = field(default_factory=list)


def prepare_diff(diff: str, *, max_chars: int, ignore_patterns: Iterable[str] = ()) -> PreparedDiff:
    """Drop ignored files, then truncate at a safe boundary."""

    filtered, ignored = filter_diff(diff, ignore_patterns)
    if ignored:
        logger.info("ignored %d file(s) matching ignore patterns: %s", len(ignored), ", ".join(ignored))

    text, was_truncated = truncate_diff_safely(filtered, max_chars)
    if was_truncated:
        logger.warning("diff truncated from %d to %d characters (limit %d)", len(filtered), len(text), max_chars)
    else:
        logger.debug("diff within limit (%d/%d characters)", len(filtered), max_chars)
    return PreparedDiff(text=text, was_truncated=was_truncated, ignored_files=ignored)


def extract_jira_key(branch: str | None, pattern: str | None = None) -> str | None:
    """Return the first Jira issue key found in ``branch``, or None."""

    if not branch:
        return None
    try:
        regex = re.compile(pattern or DEFAULT_JIRA_KEY_PATTERN)
    except re.error as exc:
        logger.warning("invalid Jira branch regex %r: %s", pattern, exc)
        return None
    match = regex.search(branch)
    if not match:
        return None
    return match.group(1) if regex.groups else match.group(0)


def build_user_prompt(
    diff: str,
    *,
    commit_messages: Sequence[str] = (),
    jira_context: str | None = None,
) -> str:
    sections = [f"## Git Diff\n\n```diff\n{diff}\n```"]

    messages = [message.strip() for message in commit_messages if message.strip()]
    if messages:
        sections.append("## Commit Messages\n\n" + "\n".join(f"- {message}" for message in messages))

    if jira_context and jira_context.strip():
        sections.append(f"## Jira Context\n\n{jira_context.strip()}")

    return "\n\n".join(sections) + "\n"


__all__ = [
    "DEFAULT_JIRA_KEY_PATTERN",
    "SUMMARY_INSTRUCTIONS",
    "REVIEW_INSTRUCTIONS",
    "PreparedDiff",
    "prepare_diff",
    "extract_jira_key",
    "build_user_prompt",
]
