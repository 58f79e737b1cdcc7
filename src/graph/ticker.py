"""
Pick a market ticker symbol out of a free-text node label.
"""
from __future__ import annotations

import re

# Leading run must not continue into a sixth uppercase letter.
_LEADING_RUN = re.compile(r"([A-Z]{1,5})(?![A-Z])")
_PARENTHESIZED = re.compile(r"\(([A-Z]{1,5})\)")
_STANDALONE = re.compile(r"\b([A-Z]{1,5})\b", re.ASCII)


def _is_ascii_lower(ch: str) -> bool:
    return "a" <= ch <= "z"


def extract_ticker(label: str) -> str | None:
    """
    Return a 1-5 letter uppercase ticker found in label, or None.

    Tried in order: a run at the very start ("VST (Vistra)"), a parenthesized
    group ("Vistra (VST)"), then any standalone run ("Buy VST on dips").
    A single leading capital followed by a lowercase letter is a word, not a ticker.
    """
    trimmed = label.lstrip()
    m = _LEADING_RUN.match(trimmed)
    if m:
        candidate = m.group(1)
        next_char = trimmed[len(candidate):len(candidate) + 1]
        if not (len(candidate) == 1 and next_char and _is_ascii_lower(next_char)):
            return candidate

    m = _PARENTHESIZED.search(label)
    if m:
        return m.group(1)

    m = _STANDALONE.search(label)
    if m:
        return m.group(1)
    return None
