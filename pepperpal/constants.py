"""Static tunables shared across the pipeline.

Deployment configuration (tokens, limits, TTL overrides) lives in
``pepperpal.settings``; everything here is part of the response policy.
"""

from __future__ import annotations

# ── Character budgets by response class ─────────────────────────────
CHAR_BUDGETS: dict[str, int] = {
    "GREETING": 200,
    "FACTUAL": 1000,
    "PROCEDURAL": 1200,
    "REFUSAL": 200,
    "CLOSING": 150,
}

# ── Length limits (Telegram's ceiling is 4096) ──────────────────────
TELEGRAM_MAX_MESSAGE_LENGTH = 4096
HARD_CHAR_LIMIT = 3500
SOFT_CHAR_LIMIT = 3000
MIN_RESPONSE_LENGTH = 10
MIN_QUERY_LENGTH = 2
MAX_QUERY_LENGTH = 1000
SPLIT_THRESHOLD = TELEGRAM_MAX_MESSAGE_LENGTH

# ── Complexity thresholds ───────────────────────────────────────────
# 0-3 simple (cache/template first), 4-5 generate on the fast tier,
# 6-10 generate on the quality tier and may split.
COMPLEXITY_SIMPLE = 3
COMPLEXITY_MEDIUM = 6
COMPLEXITY_MAX = 10

# ── Query length buckets (characters) ───────────────────────────────
LENGTH_MICRO = 10
LENGTH_SHORT = 50
LENGTH_MEDIUM = 200

# ── Completion token budget ─────────────────────────────────────────
MIN_COMPLETION_TOKENS = 400
MAX_COMPLETION_TOKENS = 1500


class CacheTTL:
    """Default cache lifetimes in seconds, per content class."""

    FACTS = 3600
    STATS = 300


# ── Verified facts (templates only, never model output) ─────────────
VERIFIED_FACTS: dict[str, str] = {
    "CONTRACT": "0x60F397acBCfB8f4e3234C659A3E10867e6fA6b67",
    "CHAIN_ID": "88888",
    "CHAIN_NAME": "Chiliz Chain",
    "WEBSITE": "https://www.peppercoin.com",
    "TELEGRAM": "https://t.me/officialpeppercoin",
    "TWITTER": "https://x.com/PepperChain",
    "DEX": "https://app.fanx.xyz",
    "COINGECKO": "https://www.coingecko.com/en/coins/pepper",
    "EXPLORER": "https://chiliscan.com",
    "TOTAL_SUPPLY": "8,888,888,888,000,000",
    "BURNED": "128 trillion",
    "AUDITOR": "Halborn",
}

# ── Fixed user-facing texts ─────────────────────────────────────────
VALIDATION_FALLBACK = (
    "I apologize, but I had trouble with that response. Could you rephrase your question?"
)
PIPELINE_FALLBACK = "Sorry, I encountered an issue. Please try again or type /start to restart."
GENERATION_FAILED = "I encountered an issue generating a response. Please try again."
KNOWLEDGE_UNAVAILABLE = (
    "I am temporarily unable to access my knowledge base. Please try again later."
)
EMPTY_QUESTION_PROMPT = "Hey! What would you like to know about Peppercoin? 🌶️"
TRUNCATION_NOTICE = "(Response was truncated. Ask a more specific question for details.)"
ADMIN_ONLY = "This command is restricted to administrators."
