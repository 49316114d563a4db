"""Pre-generation filter for forbidden intents.

Runs before classification so that investment advice, price talk, market
sentiment and prompt-injection attempts never reach the model. Families are
evaluated in order and the first match wins.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from loguru import logger

from pepperpal.templates import Selector, default_selector, refusal_pool
from pepperpal.utils.helpers import preview


@dataclass(frozen=True, slots=True)
class PatternFamily:
    intent: str
    redirect: str
    patterns: tuple[re.Pattern[str], ...]

    def matches(self, text: str) -> bool:
        return any(p.search(text) for p in self.patterns)


@dataclass(frozen=True, slots=True)
class ForbiddenCheck:
    is_forbidden: bool
    intent: str | None = None
    suggested_redirect: str | None = None


def _compile(*sources: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(s, re.IGNORECASE) for s in sources)


_MONTH = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*"

_SENTIMENT_WORDS = (
    "bullish", "bearish", "pump", "dump", "moon", "lambo", "mooning", "pumping", "dumping",
)

FORBIDDEN_FAMILIES: tuple[PatternFamily, ...] = (
    PatternFamily(
        intent="INVESTMENT_ADVICE",
        redirect="how PEPPER works",
        patterns=_compile(
            r"should\s+i\s+(buy|sell|invest|hold)",
            r"is\s+it\s+(worth|good)\s+(buying|to\s+buy|investing)",
            r"good\s+investment",
            r"\bbuy\s+(now|today|soon)\b",
            r"\bsell\s+(now|today|soon)\b",
            r"invest\s+in\s+pepper",
            r"worth\s+(buying|investing)",
        ),
    ),
    PatternFamily(
        intent="PRICE_SPECULATION",
        redirect="PEPPER utility",
        patterns=_compile(
            r"price\s+(prediction|target|forecast)",
            r"will\s+(the\s+)?price",
            r"when\s+(will\s+)?(moon|lambo)",
            r"wen\s+(moon|lambo)",
            r"price\s+go\s+(up|down)",
            r"how\s+high\s+(can|will)",
            r"reach\s+\$?\d",
            rf"\$?\d+(\.\d+)?\s*[km]?\s+(by|before|in)\s+(20\d\d|q[1-4]|eoy|end\s+of|next\s+\w+|{_MONTH})",
        ),
    ),
    PatternFamily(
        intent="MARKET_SENTIMENT",
        redirect="what makes PEPPER unique",
        patterns=_compile(rf"\b({'|'.join(_SENTIMENT_WORDS)})\b"),
    ),
    PatternFamily(
        intent="ADVERSARIAL",
        redirect="Peppercoin basics",
        patterns=_compile(
            r"ignore\s+(previous|all|your|above)\s+(instructions?|rules?|prompts?)",
            r"disregard\s+(your|the)\s+(rules?|instructions?|guidelines?)",
            r"forget\s+(your|the|all)\s+(rules?|instructions?)",
            r"pretend\s+(you('re|\s+are)|to\s+be)",
            r"act\s+as\s+(if|a|an|though)\b",
            r"you\s+are\s+now",
            r"bypass\s+(your|the|any)",
            r"jailbreak",
            r"\bdan\s+mode",
            r"developer\s+mode",
            r"evil\s+mode",
            r"no\s+restrictions",
        ),
    ),
)

_CLEAN = ForbiddenCheck(is_forbidden=False)


def check_forbidden(raw_text: str | None) -> ForbiddenCheck:
    """Classify *raw_text* against the forbidden families (pure)."""
    normalized = (raw_text or "").lower().strip()
    if not normalized:
        return _CLEAN
    for family in FORBIDDEN_FAMILIES:
        if family.matches(normalized):
            logger.info(f"Forbidden intent detected: {family.intent} ({preview(normalized)!r})")
            return ForbiddenCheck(
                is_forbidden=True,
                intent=family.intent,
                suggested_redirect=family.redirect,
            )
    return _CLEAN


def get_refusal(intent: str | None, selector: Selector = default_selector) -> str:
    """Pick a redirect for a detected forbidden intent."""
    return selector(refusal_pool(intent))
