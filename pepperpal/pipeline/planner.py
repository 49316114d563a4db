"""Turns a Classification into a ResponsePlan."""

from __future__ import annotations

from loguru import logger

from pepperpal.constants import COMPLEXITY_MEDIUM, COMPLEXITY_SIMPLE, SPLIT_THRESHOLD
from pepperpal.pipeline.types import Classification, ModelTier, ResponseClass, ResponsePlan, Strategy

MAX_SECTIONS = 3
DEFAULT_SECTIONS = ("what-is-peppercoin", "quick-reference")

SECTION_MAP: dict[str, tuple[str, ...]] = {
    # token basics
    "pepper": ("what-is-peppercoin", "quick-reference"),
    "peppercoin": ("what-is-peppercoin", "quick-reference"),
    "token": ("what-is-peppercoin", "tokenomics"),
    # buying
    "buy": ("how-to-get-started", "buying-and-trading"),
    "purchase": ("how-to-get-started", "buying-and-trading"),
    "exchange": ("buying-and-trading", "official-resources"),
    "dex": ("buying-and-trading",),
    "cex": ("buying-and-trading",),
    "fanx": ("buying-and-trading",),
    "mexc": ("buying-and-trading",),
    # technical
    "contract": ("quick-reference", "buying-and-trading"),
    "address": ("quick-reference", "buying-and-trading"),
    "wallet": ("how-to-get-started", "technical"),
    "metamask": ("how-to-get-started", "technical"),
    "chiliz": ("what-is-peppercoin", "technical"),
    "chain": ("technical", "what-is-peppercoin"),
    # governance
    "governance": ("pepper-inc-governance", "governance-and-staking"),
    "vote": ("pepper-inc-governance", "governance-and-staking"),
    "voting": ("pepper-inc-governance", "governance-and-staking"),
    "staking": ("governance-and-staking",),
    "stake": ("governance-and-staking",),
    "treasury": ("pepper-inc-governance",),
    "inc": ("pepper-inc-governance",),
    # tokenomics
    "supply": ("tokenomics",),
    "burn": ("tokenomics",),
    "tokenomics": ("tokenomics",),
    # safety
    "scam": ("safety-and-security",),
    "safe": ("safety-and-security",),
    "security": ("safety-and-security",),
    "audit": ("safety-and-security", "quick-reference"),
    # community
    "telegram": ("official-resources", "community-guidelines"),
    "twitter": ("official-resources",),
    "community": ("community-guidelines", "community-programs"),
    "raid2earn": ("community-programs",),
}

_TEMPLATE_CLASSES = frozenset({ResponseClass.GREETING, ResponseClass.CLOSING, ResponseClass.REFUSAL})


def select_strategy(response_class: ResponseClass, complexity: int) -> Strategy:
    if response_class in _TEMPLATE_CLASSES:
        return Strategy.TEMPLATE
    if response_class is ResponseClass.FACTUAL and complexity <= COMPLEXITY_SIMPLE:
        # a hint: the generator falls through to generation on a miss
        return Strategy.CACHE
    return Strategy.GENERATE


def select_sections(keywords: tuple[str, ...]) -> tuple[str, ...]:
    sections: dict[str, None] = {}
    for keyword in keywords:
        for section in SECTION_MAP.get(keyword, ()):
            sections.setdefault(section)
    return tuple(sections)[:MAX_SECTIONS] or DEFAULT_SECTIONS


def select_model(complexity: int) -> ModelTier:
    return ModelTier.FAST if complexity < COMPLEXITY_MEDIUM else ModelTier.QUALITY


def plan(classification: Classification) -> ResponsePlan:
    """Choose strategy, split hint, knowledge sections and model tier."""
    result = ResponsePlan(
        strategy=select_strategy(classification.response_class, classification.complexity),
        char_budget=classification.char_budget,
        response_class=classification.response_class,
        should_split=(
            classification.char_budget > SPLIT_THRESHOLD or classification.complexity >= COMPLEXITY_MEDIUM
        ),
        knowledge_sections=select_sections(classification.keywords),
        model_tier=select_model(classification.complexity),
    )
    logger.debug(
        f"Planned: strategy={result.strategy.value} tier={result.model_tier.value} "
        f"split={result.should_split} sections={list(result.knowledge_sections)}"
    )
    return result
