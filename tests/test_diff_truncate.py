import random

import pytest

from prlens.diff.truncate import FILE_BOUNDARY, HUNK_BOUNDARY, TRUNCATION_NOTICE, truncate_diff_safely


def _content(result: str) -> str:
    assert result.endswith(TRUNCATION_NOTICE)
    return result[: -len(TRUNCATION_NOTICE)]


def test_empty_input_passes_through() -> None:
    assert truncate_diff_safely("", 100) == ("", False)


def test_exact_fit_is_not_truncated() -> None:
    text = "a" * 10
    assert truncate_diff_safely(text, 10) == (text, False)


def test_whitespace_only_diff_passes_through() -> None:
    text = "  \n\t\n"
    assert truncate_diff_safely(text, 100) == (text, False)


def test_file_boundary_closer_than_hunk_wins() -> None:
    text = "x" * 50 + "\n@@ -1 +1 @@"
    text += "y" * (80 - len(text))
    text += "\ndiff --git a/f b/f" + "z" * 60
    assert text.index(HUNK_BOUNDARY) == 50
    assert text.index(FILE_BOUNDARY) == 80

    result, truncated = truncate_diff_safely(text, 100)

    assert truncated is True
    assert _content(result) == text[:80]


def test_hunk_boundary_closer_than_file_wins() -> None:
    text = "x" * 50 + "\ndiff --git a/f b/f"
    text += "y" * (80 - len(text))
    text += "\n@@ -1,2 +1,2 @@" + "z" * 60
    assert text.index(FILE_BOUNDARY) == 50
    assert text.index(HUNK_BOUNDARY) == 80

    result, truncated = truncate_diff_safely(text, 100)

    assert truncated is True
    assert _content(result) == text[:80]


def test_cut_excludes_the_boundary_line() -> None:
    diff = "diff --git a/a b/a\n@@ -1 +1 @@\n-a\n+b\n@@ -9 +9 @@\n-c\n+d\n"
    result, truncated = truncate_diff_safely(diff, len(diff) - 3)

    assert truncated is True
    assert _content(result) == "diff --git a/a b/a\n@@ -1 +1 @@\n-a\n+b"


def test_falls_back_to_last_newline_without_boundary() -> None:
    text = "abcdefg\nhijklmnop"
    assert text.index("\n") == 7

    result, truncated = truncate_diff_safely(text, 10)

    assert truncated is True
    assert result == "abcdefg" + TRUNCATION_NOTICE


def test_hard_cut_when_no_newline() -> None:
    text = "a" * 50
    result, truncated = truncate_diff_safely(text, 10)

    assert truncated is True
    assert result == "a" * 10 + TRUNCATION_NOTICE


def test_marker_straddling_the_limit_is_not_a_boundary() -> None:
    text = "first line\nsecond line\ndiff --git a/x b/x\n"
    limit = text.index(FILE_BOUNDARY) + 5

    result, _ = truncate_diff_safely(text, limit)

    # the partial marker is dropped via the newline fallback
    assert _content(result) == "first line\nsecond line"


def test_mid_line_at_sign_is_not_a_hunk_boundary() -> None:
    text = "context with @@ inside\nmore text here and more"
    result, _ = truncate_diff_safely(text, 30)

    assert _content(result) == "context with @@ inside"


@pytest.mark.parametrize("max_length", [0, -1, -50])
def test_non_positive_limits_yield_notice_only(max_length: int) -> None:
    result, truncated = truncate_diff_safely("diff --git a/x b/x\n+1\n", max_length)

    assert truncated is True
    assert result == TRUNCATION_NOTICE


def test_negative_limit_with_empty_input_does_not_raise() -> None:
    assert truncate_diff_safely("", -1) == (TRUNCATION_NOTICE, True)


def test_zero_limit_with_empty_input_fits() -> None:
    assert truncate_diff_safely("", 0) == ("", False)


def _generated_diff(seed: int) -> str:
    rng = random.Random(seed)
    lines: list[str] = []
    for file_idx in range(rng.randint(1, 4)):
        name = f"pkg/mod_{seed}_{file_idx}.py"
        lines += [f"diff --git a/{name} b/{name}", f"--- a/{name}", f"+++ b/{name}"]
        for hunk_idx in range(rng.randint(1, 3)):
            start = hunk_idx * 20 + 1
            lines.append(f"@@ -{start},4 +{start},5 @@ def func_{hunk_idx}():")
            for _ in range(rng.randint(1, 6)):
                prefix = rng.choice([" ", "+", "-"])
                body = rng.choice(["x = 1", "return x @@ y", "call(a, b)", "", "# diff --git note"])
                lines.append(prefix + body)
    return "\n".join(lines) + "\n"


_CORPUS = [(seed, limit) for seed in range(40) for limit in (0, 7, 25, 60, 120, 250, 400)]


@pytest.mark.parametrize(("seed", "max_length"), _CORPUS)
def test_generated_diffs_hold_truncation_properties(seed: int, max_length: int) -> None:
    diff = _generated_diff(seed)
    result, truncated = truncate_diff_safely(diff, max_length)

    if len(diff) <= max_length:
        assert (result, truncated) == (diff, False)
        return

    assert truncated is True
    content = _content(result)
    assert len(content) <= max_length
    assert diff.startswith(content)

    rest = diff[len(content) :]
    window = diff[:max_length]
    if any(marker in window for marker in (HUNK_BOUNDARY, FILE_BOUNDARY)):
        assert rest.startswith((HUNK_BOUNDARY, FILE_BOUNDARY))
        # no complete marker between the cut and the limit
        tail = window[len(content) + 1 :]
        assert HUNK_BOUNDARY not in tail
        assert FILE_BOUNDARY not in tail
    elif "\n" in window:
        assert rest.startswith("\n")
        assert "\n" not in window[len(content) + 1 :]
    else:
        assert content == window


_TRUNCATING_CORPUS = [(seed, limit) for seed, limit in _CORPUS if len(_generated_diff(seed)) > limit]


@pytest.mark.parametrize(("seed", "max_length"), _TRUNCATING_CORPUS)
def test_text_beyond_the_limit_does_not_affect_the_cut(seed: int, max_length: int) -> None:
    diff = _generated_diff(seed)
    window = diff[: max(max_length, 0)]
    altered = window + "Q" * (len(diff) - len(window))

    assert truncate_diff_safely(diff, max_length) == truncate_diff_safely(altered, max_length)


def test_is_deterministic() -> None:
    diff = _generated_diff(7)
    assert truncate_diff_safely(diff, 90) == truncate_diff_safely(diff, 90)
