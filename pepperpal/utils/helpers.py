"""Text helpers shared by the cache, the guards and the pipeline."""

from __future__ import annotations

import re

_WS = re.compile(r"\s+")
_NON_WORD = re.compile(r"[^\w\s]")
_TRAILING_TERMINATORS = re.compile(r"[\s?!.]+$")


def collapse_whitespace(text: str) -> str:
    """Lowercase, trim and squeeze internal whitespace to single spaces."""
    return _WS.sub(" ", (text or "").lower().strip())


def normalize_query(text: str) -> str:
    """Cache-key form of a query: lowercase, no punctuation, single spaces.

    Idempotent: ``normalize_query(normalize_query(x)) == normalize_query(x)``.
    """
    stripped = _NON_WORD.sub("", (text or "").lower())
    return _WS.sub(" ", stripped).strip()


def normalize_for_hash(text: str) -> str:
    """Duplicate-guard form of a message.

    Case, surrounding/inner whitespace and trailing sentence punctuation are
    ignored, so "What is PEPPER?" and "what is pepper" compare equal.
    """
    return _TRAILING_TERMINATORS.sub("", collapse_whitespace(text))


def rolling_hash(text: str) -> str:
    """Cheap 32-bit polynomial hash (h * 31 + c) rendered as hex."""
    h = 0
    for ch in text:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    return format(h, "08x")


def preview(text: str, limit: int = 50) -> str:
    """Shorten user text for log lines."""
    text = (text or "").replace("\n", " ")
    return text if len(text) <= limit else text[:limit] + "…"
