"""Rule-based query classifier. Pure, deterministic, never raises."""

from __future__ import annotations

import re
from typing import Mapping

from loguru import logger

from pepperpal.constants import (
    CHAR_BUDGETS,
    COMPLEXITY_MAX,
    LENGTH_MEDIUM,
    LENGTH_MICRO,
    LENGTH_SHORT,
    TELEGRAM_MAX_MESSAGE_LENGTH,
)
from pepperpal.pipeline.types import (
    RESPONSE_CLASS_BY_INTENT,
    Classification,
    Intent,
    LengthBucket,
)
from pepperpal.safety.intent_detector import FORBIDDEN_FAMILIES
from pepperpal.utils.helpers import preview

GREETING_KEYWORDS = ("hi", "hello", "hey", "gm", "good morning", "good evening", "sup", "yo")
CLOSING_KEYWORDS = ("thanks", "thank you", "thx", "ok", "okay", "got it", "cool", "bye", "goodbye")
PROCEDURAL_KEYWORDS = ("how to", "how do i", "step by step", "guide", "tutorial", "set up", "setup")

# Short-message cutoffs for greeting / closing detection.
GREETING_MAX_LENGTH = 30
CLOSING_MAX_LENGTH = 40

_COMPLEXITY_SIGNALS = re.compile(
    r"\b(explain|detail|details|everything|all|complete|step by step|guide|tutorial|compare|difference)\b"
)
_LENGTH_STEPS = (50, 100, 200)

STOPWORDS = frozenset({
    "what", "is", "the", "a", "an", "how", "do", "i", "to", "can", "you",
    "tell", "me", "about", "please", "where", "when", "why", "which",
    "are", "there", "this", "that", "for", "of", "on", "in", "and", "or",
})

_NON_WORD = re.compile(r"[^\w\s]")

_FORBIDDEN_TOPICS = tuple(f for f in FORBIDDEN_FAMILIES if f.intent != "ADVERSARIAL")
_ADVERSARIAL = tuple(f for f in FORBIDDEN_FAMILIES if f.intent == "ADVERSARIAL")


def _length_bucket(length: int) -> LengthBucket:
    if length < LENGTH_MICRO:
        return LengthBucket.MICRO
    if length < LENGTH_SHORT:
        return LengthBucket.SHORT
    if length < LENGTH_MEDIUM:
        return LengthBucket.MEDIUM
    return LengthBucket.LONG


def _matches_short_phrase(query: str, keywords: tuple[str, ...]) -> bool:
    return any(
        query == k or query.startswith(k + " ") or query.startswith(k + "!") or query.endswith(" " + k)
        for k in keywords
    )


def detect_intent(query: str) -> Intent:
    """Ordered first-match intent detection on a lowercased, trimmed query."""
    if len(query) < GREETING_MAX_LENGTH and _matches_short_phrase(query, GREETING_KEYWORDS):
        return Intent.GREETING
    if len(query) < CLOSING_MAX_LENGTH and _matches_short_phrase(query, CLOSING_KEYWORDS):
        return Intent.CLOSING
    if any(f.matches(query) for f in _FORBIDDEN_TOPICS):
        return Intent.FORBIDDEN
    if any(f.matches(query) for f in _ADVERSARIAL):
        return Intent.ADVERSARIAL
    if any(k in query for k in PROCEDURAL_KEYWORDS):
        return Intent.PROCEDURAL
    return Intent.FACTUAL


def score_complexity(query: str, intent: Intent) -> int:
    if intent in (Intent.GREETING, Intent.CLOSING):
        return 0
    score = sum(1 for step in _LENGTH_STEPS if len(query) > step)
    score += min(query.count("?"), 2)
    if _COMPLEXITY_SIGNALS.search(query):
        score += 2
    if intent is Intent.PROCEDURAL:
        score += 2
    return max(0, min(score, COMPLEXITY_MAX))


def extract_keywords(query: str) -> tuple[str, ...]:
    words = _NON_WORD.sub("", query).split()
    return tuple(dict.fromkeys(w for w in words if len(w) > 2 and w not in STOPWORDS))


def classify(raw_text: str | None, char_budgets: Mapping[str, int] = CHAR_BUDGETS) -> Classification:
    """
    Classify a user query.

    Args:
        raw_text: The user's text; None is treated as empty.
        char_budgets: Character budget per response class name.

    Returns:
        A Classification. Empty input classifies as a simple factual query.
    """
    query = (raw_text or "").lower().strip()

    intent = detect_intent(query)
    response_class = RESPONSE_CLASS_BY_INTENT[intent]
    budget = char_budgets.get(response_class.value, CHAR_BUDGETS["FACTUAL"])

    result = Classification(
        intent=intent,
        complexity=score_complexity(query, intent),
        length_bucket=_length_bucket(len(query)),
        response_class=response_class,
        char_budget=max(1, min(budget, TELEGRAM_MAX_MESSAGE_LENGTH)),
        keywords=extract_keywords(query),
    )
    logger.debug(
        f"Classified {preview(query)!r}: intent={intent.value} complexity={result.complexity} "
        f"class={response_class.value}"
    )
    return result
