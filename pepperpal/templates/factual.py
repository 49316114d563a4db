"""Static answers for common single-fact questions.

Built only from ``VERIFIED_FACTS`` so the answer never varies and never
touches the model.
"""

from __future__ import annotations

import re

from pepperpal.constants import VERIFIED_FACTS as F
from pepperpal.utils.helpers import normalize_query

_CONTRACT = (
    f"The official PEPPER contract on Chiliz Chain is:\n{F['CONTRACT']}\n\n"
    "Always verify this before any transaction."
)
_CHAIN_ID = f"Chiliz Chain ID is {F['CHAIN_ID']}. Use this when adding the network to your wallet."
_SUPPLY = f"PEPPER total supply is {F['TOTAL_SUPPLY']} (8.88 quadrillion)."
_BURNED = f"Over {F['BURNED']} PEPPER has been permanently burned from the total supply."
_AUDIT = f"Yes, the PEPPER contract is certified by {F['AUDITOR']}, a reputable blockchain security firm."
_WHERE_TO_BUY = (
    "Buy PEPPER on:\n"
    f"- DEX: FanX ({F['DEX']}), Kewl, Diviswap - PEPPER/WCHZ pair\n"
    "- CEX: MEXC, CoinEx, Bitrue, Cube, Paribu\n\n"
    f"Always verify the contract: {F['CONTRACT']}"
)
_LINKS = (
    "Official Peppercoin Links:\n\n"
    f"🌐 Website: {F['WEBSITE']}\n"
    f"🐦 Twitter: {F['TWITTER']}\n"
    f"💬 Telegram: {F['TELEGRAM']}\n"
    f"📊 CoinGecko: {F['COINGECKO']}\n"
    f"🏛️ Governance: {F['WEBSITE']}/pepper-inc\n"
    f"💱 FanX DEX: {F['DEX']}\n"
    f"🔍 Explorer: {F['EXPLORER']}\n\n"
    f"📝 Contract: {F['CONTRACT']}"
)
_SOCIALS = (
    "Peppercoin Socials:\n\n"
    f"🐦 Twitter: {F['TWITTER']}\n"
    f"💬 Telegram: {F['TELEGRAM']}\n"
    f"🌐 Website: {F['WEBSITE']}"
)

# Keys are in normalize_query() form.
FACTUAL_TEMPLATES: dict[str, str] = {
    "contract": _CONTRACT,
    "contract address": _CONTRACT,
    "what is the contract": _CONTRACT,
    "chain id": _CHAIN_ID,
    "what is the chain id": _CHAIN_ID,
    "website": f"Official website: {F['WEBSITE']}",
    "telegram": f"Official Telegram: {F['TELEGRAM']}",
    "twitter": f"Official Twitter: {F['TWITTER']}",
    "total supply": _SUPPLY,
    "what is the total supply": _SUPPLY,
    "burned": _BURNED,
    "how much has been burned": _BURNED,
    "audited": _AUDIT,
    "is the contract audited": _AUDIT,
    "is it audited": _AUDIT,
    "exchanges": (
        "PEPPER is available on:\n"
        f"- DEX: FanX Protocol ({F['DEX']}), Kewl, Diviswap\n"
        "- CEX: MEXC, CoinEx, Bitrue, Cube, Paribu\n\n"
        f"Contract: {F['CONTRACT']}"
    ),
    "where to buy": _WHERE_TO_BUY,
    "where can i buy": _WHERE_TO_BUY,
    "links": _LINKS,
    "all links": _LINKS,
    "all the links": _LINKS,
    "official links": _LINKS,
    "socials": _SOCIALS,
    "social links": _SOCIALS,
}

# Bare "contract" only matches exactly, so "contract creation" is not answered
# with the address.
_EXACT_ONLY = frozenset({"contract"})


def _phrase_pattern(key: str) -> re.Pattern[str]:
    words = key.replace(" ", r"\s+")
    return re.compile(rf"\b{words}\b")


_PARTIAL_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (_phrase_pattern(key), response)
    for key, response in FACTUAL_TEMPLATES.items()
    if key not in _EXACT_ONLY
)


def match_factual_template(query: str) -> str | None:
    """Return the static answer for *query*, or None."""
    normalized = normalize_query(query)
    if not normalized:
        return None
    exact = FACTUAL_TEMPLATES.get(normalized)
    if exact:
        return exact
    for pattern, response in _PARTIAL_PATTERNS:
        if pattern.search(normalized):
            return response
    return None
