"""Redirects for forbidden intents, keyed by the detector's intent name."""

from __future__ import annotations

REFUSAL_TEMPLATES: dict[str, tuple[str, ...]] = {
    "INVESTMENT_ADVICE": (
        "I focus on official info rather than investment advice. Want to understand how PEPPER works first?",
        "I can't advise on buying decisions, but I can explain what PEPPER is and how it works. Interested?",
        "Investment decisions are personal. I can share facts about PEPPER's utility and governance instead.",
    ),
    "PRICE_SPECULATION": (
        "I can't predict prices. Want to know about PEPPER's utility and governance instead?",
        "Price predictions aren't my thing. I can explain what makes PEPPER unique though.",
        "I stick to facts, not price speculation. Curious about PEPPER's tokenomics or governance?",
    ),
    "MARKET_SENTIMENT": (
        "I focus on official information rather than market sentiment. Want factual info about PEPPER?",
        "I can't comment on market trends. I can share what PEPPER is and how it works though.",
        "Market sentiment isn't my area. Ask me about PEPPER basics, buying, or governance instead.",
    ),
    "ADVERSARIAL": (
        "I'm Pepper Pal, focused on helping with Peppercoin questions. What would you like to know?",
        "I'm here to help with PEPPER info. Ask me about tokenomics, buying, or governance.",
    ),
    "GENERIC": (
        "I focus on official Peppercoin information. Want to learn about PEPPER basics or governance?",
        "I can help with factual PEPPER questions. What would you like to know?",
    ),
}


def refusal_pool(intent: str | None) -> tuple[str, ...]:
    """Pool for *intent*; unknown or missing intents get the generic pool."""
    return REFUSAL_TEMPLATES.get(intent or "", REFUSAL_TEMPLATES["GENERIC"])
