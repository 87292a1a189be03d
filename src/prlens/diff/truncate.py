"""Boundary-safe diff truncation."""

from __future__ import annotations

TRUNCATION_NOTICE = "\n\n[Diff truncated due to length limit]"

HUNK_BOUNDARY = "\n@@ "
FILE_BOUNDARY = "\ndiff --git"


def truncate_diff_safely(diff: str, max_length: int) -> tuple[str, bool]:
    """Bound ``diff`` to ``max_length`` characters, returning (result, was_truncated).

    - Cuts at the latest file (``diff --git``) or hunk (``@@ ``) boundary inside
      the window, whichever is closer to the limit.
    - Without a boundary, drops the partial trailing line; without any newline,
      keeps the hard cut.
    - Appends ``TRUNCATION_NOTICE`` when truncation occurs. The notice is not
      counted against ``max_length``.
    """

    if len(diff) <= max_length:
        return diff, False

    candidate = diff[: max(max_length, 0)]

    last_hunk = candidate.rfind(HUNK_BOUNDARY)
    last_file = candidate.rfind(FILE_BOUNDARY)
    boundary = max(last_hunk, last_file)

    if boundary != -1:
        # boundary < len(candidate), so slicing the original is equivalent.
        content = diff[:boundary]
    else:
        last_newline = candidate.rfind("\n")
        content = candidate[:last_newline] if last_newline != -1 else candidate

    return content + TRUNCATION_NOTICE, True


__all__ = ["TRUNCATION_NOTICE", "HUNK_BOUNDARY", "FILE_BOUNDARY", "truncate_diff_safely"]
