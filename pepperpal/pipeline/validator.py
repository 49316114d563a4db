"""Post-generation checks.

Order matters: length is corrected before the forbidden-output scan so the
scan sees what would actually be delivered.
"""

from __future__ import annotations

import re

from loguru import logger

from pepperpal.constants import HARD_CHAR_LIMIT, MIN_RESPONSE_LENGTH, SOFT_CHAR_LIMIT, TRUNCATION_NOTICE
from pepperpal.pipeline.types import GeneratedResponse, ValidatedResponse
from pepperpal.safety.compressor import compress, hard_truncate

# ── forbidden output ─────────────────────────────────────────────────
FORBIDDEN_OUTPUT_FAMILIES: tuple[tuple[str, tuple[re.Pattern[str], ...]], ...] = (
    (
        "ai_self_reference",
        (
            re.compile(r"\bas\s+an?\s+(ai|artificial\s+intelligence|language\s+model|llm)\b", re.I),
            re.compile(r"\bi'?m\s+(just\s+)?(a|an)\s+(bot|ai|language\s+model)\b", re.I),
            re.compile(r"\bi\s+am\s+(just\s+)?(a|an)\s+(ai|bot|language\s+model)\b", re.I),
        ),
    ),
    (
        "system_leakage",
        (
            re.compile(r"\b(system\s+prompt|openrouter|api\s+key)", re.I),
            re.compile(r"\b(knowledge\s+file|peppercoin\.md)", re.I),
        ),
    ),
    (
        "trading_advice",
        (
            re.compile(r"\b(buy|sell)\s+(now|immediately|today|soon)\b", re.I),
            re.compile(r"\bguaranteed\s+(return|profit)", re.I),
            re.compile(r"\bprice\s+(will|should|going\s+to)\s+(go|rise|fall|moon)", re.I),
        ),
    ),
)


def find_forbidden_output(text: str) -> str | None:
    """Name of the first forbidden output family found in *text*, or None."""
    for family, patterns in FORBIDDEN_OUTPUT_FAMILIES:
        for pattern in patterns:
            match = pattern.search(text)
            if match:
                logger.warning(f"Forbidden output ({family}): {match.group(0)!r}")
                return family
    return None


# ── truncation heuristic ─────────────────────────────────────────────
# Tunable: each entry is (reason, pattern matched against the tail of the text).
TRUNCATION_TRIGGERS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("dangling_punctuation", re.compile(r"[-–—:,]\s*$")),
    ("unclosed_bracket", re.compile(r"[(\[][^)\]]*$")),
    (
        "dangling_word",
        re.compile(r"\b(like|such as|including|and|or|but|the|a|an|to|for|with|on|at|of|in|from|by)\s*$", re.I),
    ),
    ("dangling_list_numeral", re.compile(r"(^|\s)\d+\.\s*$")),
)
TRUNCATION_MIN_LENGTH = 50
_TAIL = 20
_COMPLETE_ENDING = re.compile(r"([.!?]|[\U0001F300-\U0001FAFF\u2600-\u27BF]\uFE0F?)$")

_FRAGMENT_REPAIRS = (
    re.compile(r"\n\d+\.\s*$"),
    re.compile(r"\s*[(\[][^)\]]*$"),
    re.compile(r"\s*[-–—:,]\s*$"),
    re.compile(r"\s+(like|such as|including|and|or|but|the|a|an|to|for|with|on|at|of|in|from|by)\s*$", re.I),
)


def detect_truncation(text: str) -> str | None:
    """Reason the text looks cut off, or None if it looks complete."""
    trimmed = text.strip()
    if len(trimmed) < TRUNCATION_MIN_LENGTH or _COMPLETE_ENDING.search(trimmed):
        return None
    tail = trimmed[-_TAIL:]
    for reason, pattern in TRUNCATION_TRIGGERS:
        if pattern.search(tail):
            return reason
    return None


def repair_truncation(text: str) -> str:
    fixed = text.strip()
    for _ in range(3):
        before = fixed
        for pattern in _FRAGMENT_REPAIRS:
            fixed = pattern.sub("", fixed).rstrip()
        if fixed == before:
            break
    if not fixed.endswith((".", "!", "?")):
        fixed += "..."
    return f"{fixed}\n\n{TRUNCATION_NOTICE}"


# ── whitespace ───────────────────────────────────────────────────────
_WHITESPACE_RULES = (
    (re.compile(r"\r\n?"), "\n"),
    (re.compile(r"\n{3,}"), "\n\n"),
    (re.compile(r"[ \t]{2,}"), " "),
)


def normalize_whitespace(text: str) -> str:
    for pattern, replacement in _WHITESPACE_RULES:
        text = pattern.sub(replacement, text)
    return text.strip()


def validate(generated: GeneratedResponse, char_budget: int) -> ValidatedResponse:
    """
    Check and repair one generated response.

    Args:
        generated: Output of the generator.
        char_budget: Target budget from the plan; only logged, the hard
            ceiling is what gets enforced.

    Returns:
        ValidatedResponse; ``error`` is ``too_short``, ``forbidden:<family>``
        or ``empty`` when invalid.
    """
    original = generated.text or ""
    if len(original.strip()) < MIN_RESPONSE_LENGTH:
        logger.warning(f"Response too short ({len(original.strip())} chars)")
        return ValidatedResponse(valid=False, text="", error="too_short")

    text = original
    was_compressed = False
    if len(text) > HARD_CHAR_LIMIT:
        logger.info(f"Response over hard limit ({len(text)} > {HARD_CHAR_LIMIT}, budget {char_budget}), compressing")
        text = compress(text, SOFT_CHAR_LIMIT)
        if len(text) > HARD_CHAR_LIMIT:
            text = hard_truncate(text, HARD_CHAR_LIMIT)
        was_compressed = True

    # Compression may drop a forbidden phrase; the original is still rejected.
    family = find_forbidden_output(text)
    if family is None and was_compressed:
        family = find_forbidden_output(original)
    if family is not None:
        return ValidatedResponse(valid=False, text="", was_compressed=was_compressed, error=f"forbidden:{family}")

    text = normalize_whitespace(text)

    reason = detect_truncation(text)
    if reason:
        logger.warning(f"Response looks truncated ({reason}): {text[-50:]!r}")
        text = repair_truncation(text)

    if not text:
        return ValidatedResponse(valid=False, text="", was_compressed=was_compressed, error="empty")

    return ValidatedResponse(valid=True, text=text, was_compressed=was_compressed)
