"""Tests for ticker extraction from node labels."""
from __future__ import annotations

import pytest

from src.graph import extract_ticker


@pytest.mark.parametrize(
    "label, expected",
    [
        ("VST (Vistra)", "VST"),
        ("Vistra (VST)", "VST"),
        ("Buy VST on dips", "VST"),
        ("vistra", None),
    ],
)
def test_extract_ticker_common_label_formats(label: str, expected: str | None) -> None:
    assert extract_ticker(label) == expected


def test_leading_run_ignores_leading_whitespace() -> None:
    assert extract_ticker("   CEG nuclear") == "CEG"


def test_single_leading_letter_kept_before_non_lowercase() -> None:
    """A one-letter run counts when followed by space, punctuation, digit or nothing."""
    assert extract_ticker("F motor") == "F"
    assert extract_ticker("T-Mobile") == "T"
    assert extract_ticker("X") == "X"
    assert extract_ticker("C3 AI") == "C"


def test_leading_run_longer_than_five_falls_through() -> None:
    """Six capitals at the start are a word, not a ticker; later strategies still apply."""
    assert extract_ticker("NVIDIA (NVDA)") == "NVDA"
    assert extract_ticker("NUCLEAR power") is None


def test_parenthesized_wins_over_standalone() -> None:
    assert extract_ticker("Constellation and GE (CEG)") == "CEG"


def test_standalone_first_match_left_to_right() -> None:
    assert extract_ticker("Long OKLO and SMR") == "OKLO"


def test_standalone_needs_word_boundaries() -> None:
    assert extract_ticker("node_ABC") is None
    assert extract_ticker("Item ABC123") is None


def test_empty_and_lowercase_labels() -> None:
    assert extract_ticker("") is None
    assert extract_ticker("   ") is None
    assert extract_ticker("no capitals here") is None


def test_leading_word_with_lowercase_tail_after_multi_letter_run() -> None:
    """Runs of two or more letters are accepted even when a lowercase letter follows."""
    assert extract_ticker("ABc") == "AB"
