"""Unit tests for text normalization and tokenization."""

from __future__ import annotations

import pytest

from taskprogress.scoring import normalize, tokenize, word_count


def test_normalize_lowercases_and_replaces_punctuation() -> None:
    """Listed punctuation becomes whitespace and is then collapsed."""

    assert normalize('Hello, World! "Quoted" (text); it\'s: done?') == "hello world quoted text it s done"


def test_normalize_collapses_newlines_and_trims() -> None:
    """Line breaks and runs of whitespace end up as single spaces."""

    assert normalize("  First line\r\nSecond\tline  \n\n third ") == "first line second line third"


@pytest.mark.parametrize("value", [None, "", "   ", "\n\r", ".,!?;:'\"()"])
def test_normalize_returns_empty_string_for_blank_input(value: str | None) -> None:
    """Missing, blank or punctuation-only input normalizes to an empty string."""

    assert normalize(value) == ""


def test_normalize_keeps_other_symbols() -> None:
    """Characters outside the punctuation set are left in place."""

    assert normalize("Error-handling & C++ - 100%") == "error-handling & c++ - 100%"


@pytest.mark.parametrize(
    "value",
    [
        "The Quick, Brown fox!",
        "  Mixed\tCASE\n\nlines (with) 'quotes' ",
        "already normalized text",
        "",
        "Ünïcödé TEXT; ÀÉÎ",
    ],
)
def test_normalize_is_idempotent(value: str) -> None:
    """Normalizing a normalized string returns it unchanged."""

    once = normalize(value)
    assert normalize(once) == once


def test_tokenize_splits_normalized_text() -> None:
    """Tokens are the whitespace-separated words of the normalized text."""

    assert tokenize("Write clean, maintainable code.") == ["write", "clean", "maintainable", "code"]


def test_tokenize_empty_text_has_no_tokens() -> None:
    """Empty input gives an empty list rather than a single empty token."""

    assert tokenize("") == []
    assert tokenize(None) == []
    assert word_count("  ...  ") == 0


def test_word_count_counts_tokens() -> None:
    """Word count matches the number of tokens."""

    assert word_count("the quick brown fox jumps over the lazy dog") == 9
