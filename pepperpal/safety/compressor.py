"""Shrink over-long model output while keeping the facts that matter."""

from __future__ import annotations

import re

from loguru import logger

_EXTRA_NEWLINES = re.compile(r"\n{2,}")
_FIRST_SENTENCE = re.compile(r"^[^.!?]+[.!?]")
_CONTRACT = re.compile(r"0x[a-fA-F0-9]{40}")

MORE_SIGNAL = "Say MORE for full details."
SHORT_MORE_SIGNAL = "Say MORE."


def compress(text: str, target_length: int) -> str:
    """
    Compress *text* to at most *target_length* characters.

    Tries, in order: collapsing paragraph breaks; first sentence plus key
    facts (contract address, chain id); hard truncation at a boundary.
    """
    if len(text) <= target_length:
        return text

    logger.debug(f"Compressing response: {len(text)} -> {target_length} chars")

    collapsed = _EXTRA_NEWLINES.sub("\n", text)
    if len(collapsed) <= target_length:
        return collapsed

    compressed = _first_sentence(text)
    for fact in _key_facts(text):
        if len(compressed) + 1 + len(fact) < target_length - 30:
            compressed += "\n" + fact

    if len(text) > target_length * 1.5:
        compressed += "\n\n" + MORE_SIGNAL

    if len(compressed) > target_length:
        compressed = hard_truncate(compressed, target_length)

    logger.debug(f"Compression complete: {len(text)} -> {len(compressed)} chars")
    return compressed


def hard_truncate(text: str, limit: int) -> str:
    """Cut at the last sentence end, else newline, else anywhere; fits *limit*."""
    if len(text) <= limit:
        return text

    truncated = text[: max(0, limit - 20)]

    last_sentence = truncated.rfind(". ")
    if last_sentence > limit * 0.5:
        return truncated[: last_sentence + 1] + "\n\n" + SHORT_MORE_SIGNAL

    last_newline = truncated.rfind("\n")
    if last_newline > limit * 0.6:
        return truncated[:last_newline] + "\n\n" + SHORT_MORE_SIGNAL

    last_space = truncated.rfind(" ")
    if last_space > limit * 0.6:
        truncated = truncated[:last_space]
    return truncated + "..."


def _first_sentence(text: str) -> str:
    match = _FIRST_SENTENCE.match(text)
    if match:
        return match.group(0).strip()
    return text[:100].strip()


def _key_facts(text: str) -> list[str]:
    # URLs are deliberately not kept; only verified links are appended later.
    facts = []
    contract = _CONTRACT.search(text)
    if contract:
        facts.append(f"Contract: {contract.group(0)}")
    if "88888" in text:
        facts.append("Chain ID: 88888")
    return facts
