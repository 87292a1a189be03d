"""Markdown rendering for agent outputs posted as PR comments."""

from __future__ import annotations

from prlens.models import FileChange, PrReview, PrSummary, Severity

_CODE_INDENT = "    "


def format_review_to_markdown(review: PrReview) -> str:
    """Render a review as a Markdown comment."""

    parts: list[str] = ["## PR Review 🧐\n\n"]
    parts.append(f"**Overall Assessment:** {review.overall_assessment}\n\n")
    parts.append(f"**Review Effort:** {review.review_effort}\n\n")

    if review.review_effort_reasoning:
        parts.append(f"*Justification:* {review.review_effort_reasoning}\n\n")

    if review.feedback_points:
        parts.append("**Potential Issues & Suggestions:**\n\n")
        for point in review.feedback_points:
            severity = (point.severity or Severity.INFO).value
            around = f", _Around:_ {point.line_reference}" if point.line_reference else ""
            parts.append(f"- **[{severity}]** {point.description} ")
            parts.append(f"(_File:_ `{point.file_path}`{around})\n")

            if point.suggested_code_change:
                # nested under the list item, so every line shares the indent
                lang = point.file_path.rsplit(".", 1)[-1].lower()
                suggestion = "\n".join(
                    f"{_CODE_INDENT}{line}" if line else "" for line in point.suggested_code_change.split("\n")
                )
                parts.append(f"{_CODE_INDENT}```{lang}\n{suggestion}\n{_CODE_INDENT}```\n")
            parts.append("\n")
    else:
        parts.append("**Potential Issues & Suggestions:** None found.\n\n")

    parts.append("**Security Concerns:**\n\n")
    if review.security_concerns:
        parts.extend(f"- {concern}\n" for concern in review.security_concerns)
    else:
        parts.append("- No major security concerns identified.\n")
    parts.append("\n")

    if review.test_coverage_assessment:
        parts.append(f"**Test Coverage Assessment:** {review.test_coverage_assessment}\n")

    return "".join(parts).strip()


def format_summary_to_markdown(summary: PrSummary) -> str:
    """Render a summary for the PR description."""

    parts: list[str] = [f"**Type:** {summary.pr_type.value}\n\n", "**Key Changes:**\n"]
    parts.extend(f"- {point}\n" for point in summary.description)
    parts.append("\n")

    categories: list[tuple[str, list[FileChange] | None]] = [
        ("Enhancements", summary.changes.enhancements),
        ("Bug Fixes", summary.changes.bugfixes),
        ("Tests", summary.changes.tests),
        ("Configuration", summary.changes.config),
    ]
    sections = [_format_category(title, items) for title, items in categories if items]
    if sections:
        parts.append("---\n\n")
        parts.extend(sections)

    return "".join(parts).strip()


def format_truncation_warning(was_truncated: bool, max_chars: int) -> str:
    """Footer for comments built from a truncated diff; empty when nothing was cut."""

    if not was_truncated:
        return ""
    return f"> ⚠️ The diff exceeded {max_chars:,} characters and was truncated; later files were not analysed."


def _format_category(title: str, items: list[FileChange]) -> str:
    lines = [f"**{title}:**\n"]
    lines.extend(f"- `{item.file_name}`: {item.summary}\n" for item in items)
    lines.append("\n")
    return "".join(lines)


__all__ = ["format_review_to_markdown", "format_summary_to_markdown", "format_truncation_warning"]
