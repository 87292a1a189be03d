"""Split unified diffs per file and drop sections matching ignore globs."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import PurePosixPath

_FILE_HEADER = re.compile(r"^diff --git a/(?P<old>.+?) b/(?P<new>.+)$")
# git quotes paths holding spaces, quotes, or non-ASCII bytes: "b/dir/na\303\257ve file"
_QUOTED_NEW_PATH = re.compile(r'"b/(?P<path>(?:[^"\\]|\\.)*)"$')
_C_ESCAPES = {"a": 7, "b": 8, "t": 9, "n": 10, "v": 11, "f": 12, "r": 13, "\"": 34, "\\": 92}


@dataclass(frozen=True, slots=True)
class FileSection:
    """Contiguous slice of a diff belonging to one file (``path`` is None for the preamble)."""

    path: str | None
    text: str


def split_file_sections(diff: str) -> list[FileSection]:
    """Split ``diff`` on ``diff --git`` header lines.

    Joining the ``text`` of every returned section reproduces ``diff`` exactly.
    """

    sections: list[FileSection] = []
    current_path: str | None = None
    current_lines: list[str] = []

    for line in diff.splitlines(keepends=True):
        if line.startswith("diff --git"):
            if current_lines:
                sections.append(FileSection(path=current_path, text="".join(current_lines)))
            current_path = _header_path(line)
            current_lines = [line]
        else:
            current_lines.append(line)

    if current_lines:
        sections.append(FileSection(path=current_path, text="".join(current_lines)))
    return sections


def filter_diff(diff: str, ignore_patterns: Iterable[str]) -> tuple[str, list[str]]:
    """Drop file sections whose path matches any glob, returning (diff, ignored_paths)."""

    patterns = [pattern for pattern in ignore_patterns if pattern]
    if not patterns or not diff:
        return diff, []

    kept: list[str] = []
    ignored: list[str] = []
    for section in split_file_sections(diff):
        if section.path is not None and _matches(section.path, patterns):
            ignored.append(section.path)
            continue
        kept.append(section.text)
    return "".join(kept), ignored


def parse_ignore_patterns(raw: str | Iterable[str] | None) -> tuple[str, ...]:
    """Normalize a comma/newline separated string (or iterable) of globs."""

    if raw is None:
        return ()
    if isinstance(raw, str):
        parts: Iterable[str] = re.split(r"[,\n]", raw)
    else:
        parts = raw
    return tuple(part.strip() for part in parts if part and part.strip())


def _header_path(line: str) -> str | None:
    header = line.rstrip("\r\n")
    quoted = _QUOTED_NEW_PATH.search(header)
    if quoted:
        return _unquote_c_style(quoted.group("path"))
    match = _FILE_HEADER.match(header)
    if not match:
        return None
    return match.group("new").strip().strip('"')


def _unquote_c_style(value: str) -> str:
    """Decode git's C-style path quoting (backslash escapes and octal UTF-8 bytes)."""

    out = bytearray()
    idx = 0
    while idx < len(value):
        char = value[idx]
        if char != "\\" or idx + 1 == len(value):
            out += char.encode("utf-8")
            idx += 1
            continue
        nxt = value[idx + 1]
        octal = value[idx + 1 : idx + 4]
        if len(octal) == 3 and all(c in "01234567" for c in octal):
            out.append(int(octal, 8) & 0xFF)
            idx += 4
        elif nxt in _C_ESCAPES:
            out.append(_C_ESCAPES[nxt])
            idx += 2
        else:
            out += nxt.encode("utf-8")
            idx += 2
    return out.decode("utf-8", errors="replace")


def _matches(path: str, patterns: list[str]) -> bool:
    candidate = PurePosixPath(path)
    return any(candidate.match(pattern) for pattern in patterns)


__all__ = ["FileSection", "split_file_sections", "filter_diff", "parse_ignore_patterns"]
