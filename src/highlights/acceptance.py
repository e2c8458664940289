"""Decide whether a highlight is usable as a quote."""

from typing import Any

from common.constants import MIN_QUOTE_LENGTH


def normalize_candidate(candidate: str) -> str:
    """Collapse newlines to spaces and trim surrounding whitespace."""
    return candidate.replace("\r\n", " ").replace("\r", " ").replace("\n", " ").strip()


def accept(candidate: Any) -> bool:
    """
    Check a candidate snippet against the quote rules.

    Rejects missing input, anything shorter than MIN_QUOTE_LENGTH characters
    once newlines are collapsed and the ends trimmed, and anything containing a
    path separator (file paths picked up by the raw-text scan).

    Args:
        candidate: Highlight text, note, or quoted substring

    Returns:
        True if the snippet qualifies as a quote
    """
    if not isinstance(candidate, str):
        return False

    text = normalize_candidate(candidate)

    if len(text) < MIN_QUOTE_LENGTH:
        return False

    if "/" in text or "\\" in text:
        return False

    return bool(text.strip())
