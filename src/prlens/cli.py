"""Console entrypoint for prlens.

Subcommands are small steps a PR-bot workflow chains together: decide which
actions an event triggers, validate the model provider, prepare the diff,
build prompts, and render agent JSON to Markdown.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from prlens import __version__
from prlens.config import LogLevel, Settings, load_settings
from prlens.errors import InputReadError, PrLensError, ProviderConfigError
from prlens.formatting import format_review_to_markdown, format_summary_to_markdown, format_truncation_warning
from prlens.logging import configure_logging
from prlens.models import PrReview, PrSummary, json_schema_for
from prlens.prompts import (
    REVIEW_INSTRUCTIONS,
    SUMMARY_INSTRUCTIONS,
    build_user_prompt,
    extract_jira_key,
    prepare_diff,
)
from prlens.providers import model_name, validate_provider
from prlens.triggers import determine_actions, load_event


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prlens",
        description="Prepare PR diffs for LLM agents and render their answers as Markdown",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show version and exit.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging on stderr.")
    parser.add_argument(
        "--log-level",
        choices=[e.value for e in LogLevel],
        dest="log_level",
        help="Log level override",
    )
    parser.add_argument("--config-path", dest="config_path", help="Path to an optional prlens TOML file")
    parser.add_argument("--max-chars", dest="max_diff_chars", type=int, help="Override MAX_DIFF_CHARS")

    subparsers = parser.add_subparsers(dest="command", required=True)

    truncate_parser = subparsers.add_parser("truncate", help="Filter and truncate a diff")
    truncate_parser.add_argument("file", nargs="?", help="Diff file (stdin when omitted)")

    actions_parser = subparsers.add_parser("actions", help="Print the actions a GitHub event triggers")
    actions_parser.add_argument("--event-name", dest="event_name", help="Defaults to GITHUB_EVENT_NAME")
    actions_parser.add_argument("--event-path", dest="event_path", help="Defaults to GITHUB_EVENT_PATH")
    actions_parser.add_argument(
        "--check-config",
        dest="check_config",
        action="store_true",
        help="Print [] and fail when actions were triggered but the provider config is invalid",
    )

    subparsers.add_parser("check-config", help="Validate the model provider configuration")

    render_parser = subparsers.add_parser("render", help="Render agent JSON output as Markdown")
    render_parser.add_argument("kind", choices=["summary", "review"])
    render_parser.add_argument("file", nargs="?", help="JSON file (stdin when omitted)")
    render_parser.add_argument(
        "--truncated", action="store_true", help="Append a footer noting the diff was truncated"
    )

    prompt_parser = subparsers.add_parser("prompt", help="Print agent instructions and user prompt")
    prompt_parser.add_argument("kind", choices=["summary", "review"])
    prompt_parser.add_argument("--diff", dest="diff_file", help="Diff file (stdin when omitted)")
    prompt_parser.add_argument("--commits", dest="commits_file", help="File with one commit message per line")
    prompt_parser.add_argument("--jira", dest="jira_context", help="Jira ticket context text")
    prompt_parser.add_argument("--branch", help="Branch name, searched for a Jira key")
    prompt_parser.add_argument("--schema", action="store_true", help="Append the JSON schema of the answer")

    config_parser = subparsers.add_parser("config", help="Config helpers")
    config_sub = config_parser.add_subparsers(dest="config_cmd", required=True)
    config_sub.add_parser("print", help="Print resolved settings with secrets masked")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(cli_overrides=_collect_overrides(args), config_path=args.config_path)
        configure_logging(settings.log_level, debug=args.debug)

        if args.command == "truncate":
            return _run_truncate(settings, args)
        if args.command == "actions":
            return _run_actions(settings, args)
        if args.command == "check-config":
            return _run_check_config(settings)
        if args.command == "render":
            return _run_render(settings, args)
        if args.command == "prompt":
            return _run_prompt(settings, args)
        if args.command == "config":
            return _run_config(settings, args)
    except PrLensError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    parser.error(f"unknown command {args.command}")
    return 1


def _run_truncate(settings: Settings, args: argparse.Namespace) -> int:
    prepared = prepare_diff(
        _read_input(args.file),
        max_chars=settings.max_diff_chars,
        ignore_patterns=settings.ignore_patterns,
    )
    sys.stdout.write(prepared.text)
    return 0


def _run_actions(settings: Settings, args: argparse.Namespace) -> int:
    event_name = args.event_name or os.environ.get("GITHUB_EVENT_NAME")
    event_path = args.event_path or os.environ.get("GITHUB_EVENT_PATH")
    if not event_path:
        print("error: no event path given and GITHUB_EVENT_PATH not set", file=sys.stderr)
        return 1

    actions = determine_actions(event_name, load_event(event_path))
    if actions and args.check_config:
        try:
            validate_provider(settings)
        except ProviderConfigError:
            # no actions may run against a misconfigured provider
            print(json.dumps([]))
            raise
    print(json.dumps([action.value for action in actions]))
    return 0


def _run_check_config(settings: Settings) -> int:
    provider = validate_provider(settings)
    print(f"provider={provider.value} model={model_name(settings)}")
    return 0


def _run_render(settings: Settings, args: argparse.Namespace) -> int:
    raw = _read_input(args.file)
    try:
        if args.kind == "summary":
            markdown = format_summary_to_markdown(PrSummary.model_validate_json(raw))
        else:
            markdown = format_review_to_markdown(PrReview.model_validate_json(raw))
    except ValidationError as exc:
        print(f"error: invalid {args.kind} output: {exc}", file=sys.stderr)
        return 1
    footer = format_truncation_warning(args.truncated, settings.max_diff_chars)
    if footer:
        markdown = f"{markdown}\n\n{footer}"
    print(markdown)
    return 0


def _run_prompt(settings: Settings, args: argparse.Namespace) -> int:
    prepared = prepare_diff(
        _read_input(args.diff_file),
        max_chars=settings.max_diff_chars,
        ignore_patterns=settings.ignore_patterns,
    )

    commit_messages: list[str] = []
    if args.commits_file:
        commit_messages = _read_input(args.commits_file).splitlines()

    jira_context = args.jira_context
    jira_key = extract_jira_key(args.branch, settings.jira_branch_regex)
    if jira_key and not jira_context:
        jira_context = f"Jira issue: {jira_key}"

    instructions = SUMMARY_INSTRUCTIONS if args.kind == "summary" else REVIEW_INSTRUCTIONS
    user_prompt = build_user_prompt(prepared.text, commit_messages=commit_messages, jira_context=jira_context)
    print(instructions)
    print(user_prompt)
    if args.schema:
        model = PrSummary if args.kind == "summary" else PrReview
        print(json.dumps(json_schema_for(model), indent=2))
    return 0


def _run_config(settings: Settings, args: argparse.Namespace) -> int:
    if args.config_cmd == "print":
        print(json.dumps(settings.masked_dump(), indent=2))
        return 0
    return 1


def _collect_overrides(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "log_level": args.log_level,
        "max_diff_chars": args.max_diff_chars,
    }


def _read_input(path: str | None) -> str:
    if path is None or path == "-":
        return sys.stdin.read()
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise InputReadError(f"cannot read {path}: {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise InputReadError(f"{path} is not UTF-8 text") from exc


if __name__ == "__main__":
    sys.exit(main())
