"""Registry of official links.

Model output never carries URLs to the user; the formatter strips them all
and appends entries from this registry when the question calls for them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from pepperpal.constants import VERIFIED_FACTS

_LINK_LIST_TRIGGERS = ("all links", "all the links", "links")


@dataclass(frozen=True, slots=True)
class VerifiedLink:
    key: str
    label: str
    url: str
    triggers: tuple[str, ...] = field(default=(), compare=False)

    def render(self) -> str:
        return f"{self.label}: {self.url}"


DEFAULT_LINKS: tuple[VerifiedLink, ...] = (
    VerifiedLink(
        "website", "Official Website", VERIFIED_FACTS["WEBSITE"],
        ("website", "site", "homepage", "main page", "official site", "home", *_LINK_LIST_TRIGGERS),
    ),
    VerifiedLink(
        "twitter", "Twitter/X", VERIFIED_FACTS["TWITTER"],
        ("twitter", "x.com", "tweet", "x account", "social", "socials", *_LINK_LIST_TRIGGERS),
    ),
    VerifiedLink(
        "telegram", "Telegram", VERIFIED_FACTS["TELEGRAM"],
        ("telegram", "tg", "chat", "group", "community chat", *_LINK_LIST_TRIGGERS),
    ),
    VerifiedLink(
        "coingecko", "CoinGecko", VERIFIED_FACTS["COINGECKO"],
        ("coingecko", "cg", "coin gecko", "price", "chart", "market cap", *_LINK_LIST_TRIGGERS),
    ),
    VerifiedLink(
        "governance", "Pepper Inc (Governance)", f"{VERIFIED_FACTS['WEBSITE']}/pepper-inc",
        ("governance", "pepper inc", "pepperinc", "vote", "voting", "stake", "staking", "dao",
         *_LINK_LIST_TRIGGERS),
    ),
    VerifiedLink(
        "fanx", "FanX DEX", VERIFIED_FACTS["DEX"],
        ("fanx", "dex", "swap", "trade", "buy", "exchange", "buy pepper", *_LINK_LIST_TRIGGERS),
    ),
    VerifiedLink(
        "explorer", "Chiliscan Explorer", VERIFIED_FACTS["EXPLORER"],
        ("explorer", "chiliscan", "scan", "contract", "verify", "block", *_LINK_LIST_TRIGGERS),
    ),
    VerifiedLink(
        "chiliz", "Chiliz Chain", "https://www.chiliz.com",
        ("chiliz chain", "chiliz", "chz", "network"),
    ),
)


def _trigger_pattern(triggers: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(t).replace(r"\ ", r"\s+") for t in triggers)
    return re.compile(rf"(?<![\w.])(?:{alternatives})(?![\w])", re.IGNORECASE)


class VerifiedLinkRegistry:
    """Ordered set of official links with the phrases that ask for them."""

    def __init__(self, links: tuple[VerifiedLink, ...] = DEFAULT_LINKS):
        self._links = links
        self._patterns = [(link, _trigger_pattern(link.triggers)) for link in links if link.triggers]

    @property
    def links(self) -> tuple[VerifiedLink, ...]:
        return self._links

    def detect_relevant_links(self, query: str) -> list[VerifiedLink]:
        """Links whose trigger phrases appear in *query*, one per URL, registry order."""
        if not query:
            return []
        seen: set[str] = set()
        relevant: list[VerifiedLink] = []
        for link, pattern in self._patterns:
            if link.url in seen or not pattern.search(query):
                continue
            seen.add(link.url)
            relevant.append(link)
        return relevant

    def rendered_lines(self) -> frozenset[str]:
        """Every ``Label: URL`` line this registry can produce."""
        return frozenset(link.render() for link in self._links)


DEFAULT_REGISTRY = VerifiedLinkRegistry()
