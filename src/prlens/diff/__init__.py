"""Diff preparation helpers.

``filters`` drops ignored file sections; ``truncate`` bounds the result at a
structural boundary so agents never see a half-cut hunk header.
"""

from __future__ import annotations

from prlens.diff.filters import FileSection, filter_diff, parse_ignore_patterns, split_file_sections
from prlens.diff.truncate import TRUNCATION_NOTICE, truncate_diff_safely

__all__ = [
    "FileSection",
    "TRUNCATION_NOTICE",
    "filter_diff",
    "parse_ignore_patterns",
    "split_file_sections",
    "truncate_diff_safely",
]
