"""Comparison keys for duplicate detection of guesses."""

from __future__ import annotations

from typing import Iterable


def normalize(text: str) -> str:
    """Return the case-insensitive comparison key for a guess.

    The key is only used for equality tests and is never displayed.
    """
    return text.strip().lower()


def is_blank(text: str) -> bool:
    return not text or not text.strip()


def contains_key(items: Iterable[str], text: str) -> bool:
    key = normalize(text)
    return any(normalize(item) == key for item in items)
