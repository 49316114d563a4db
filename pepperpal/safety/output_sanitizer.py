"""Plain-text formatter for model output.

Model-written URLs cannot be trusted, so every URL, bare domain and e-mail
address is removed and only links from the verified registry are appended.
Markdown is flattened because replies are sent without a parse mode.
"""

from __future__ import annotations

import re

from loguru import logger

from pepperpal.knowledge.verified_links import DEFAULT_REGISTRY, VerifiedLinkRegistry

_TLDS = "com|org|net|io|xyz|me|co|chain|tv|gg|app"

# ── markdown ─────────────────────────────────────────────────────────
_MARKDOWN_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"!\[[^\]]*\]\([^)]*\)"), ""),
    (re.compile(r"```[\w-]*\n?(.*?)```", re.S), r"\1"),
    (re.compile(r"`([^`\n]+)`"), r"\1"),
    (re.compile(r"\*\*([^*\n]+)\*\*"), r"\1"),
    (re.compile(r"__([^_\n]+)__"), r"\1"),
    (re.compile(r"(?<![\w*])\*(?![\s*])([^*\n]+?)\*(?![\w*])"), r"\1"),
    (re.compile(r"(?<!\w)_(?![\s_])([^_\n]+?)_(?!\w)"), r"\1"),
    (re.compile(r"~~([^~\n]+)~~"), r"\1"),
    (re.compile(r"^[ \t]*#{1,6}[ \t]+", re.M), ""),
    (re.compile(r"^[ \t]*>[ \t]?", re.M), ""),
    (re.compile(r"^[ \t]*([-*_])(?:[ \t]*\1){2,}[ \t]*$", re.M), ""),
    (re.compile(r"^[ \t]*[-*+][ \t]+", re.M), "• "),
    (re.compile(r"\[([^\]\n]+)\]\([^)\n]*\)"), r"\1"),
    (re.compile(r"\[([^\]\n]+)\]"), r"\1"),
)

# ── links and addresses ──────────────────────────────────────────────
_URL_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"https?://[^\s<>]+", re.I), ""),
    (re.compile(r"\bwww\.[a-z0-9][^\s<>]*", re.I), ""),
    (re.compile(r"[\w.%+-]+@[\w-]+(?:\.[\w-]+)*\.[a-z]{2,}", re.I), ""),
    (re.compile(rf"(?<![\w@.-])[\w-]+(?:\.[\w-]+)*\.(?:{_TLDS})\b[^\s]*", re.I), ""),
)

# ── leftovers ────────────────────────────────────────────────────────
_ARTIFACT_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\(\s*\)"), ""),
    (re.compile(r"\[\s*\]"), ""),
    (re.compile(r"[ \t]*:[ \t]*$", re.M), ""),
    (re.compile(r"^[ \t]*\d+\.[ \t]*$", re.M), ""),
    (re.compile(r"^[ \t]*•[ \t]*$", re.M), ""),
    (re.compile(r"\r\n?"), "\n"),
    (re.compile(r"[ \t]{2,}"), " "),
    (re.compile(r"[ \t]+$", re.M), ""),
    (re.compile(r"\n{3,}"), "\n\n"),
)


def _apply(rules: tuple[tuple[re.Pattern[str], str], ...], text: str) -> str:
    for pattern, replacement in rules:
        text = pattern.sub(replacement, text)
    return text


def strip_markdown(text: str) -> str:
    return _apply(_MARKDOWN_RULES, text)


def strip_urls(text: str) -> str:
    """Remove URLs, bare domains and e-mail addresses."""
    return _apply(_URL_RULES, text)


def _clean_once(text: str) -> str:
    text = strip_markdown(text)
    text = strip_urls(text)
    return _apply(_ARTIFACT_RULES, text).strip()


def _clean(text: str) -> str:
    """Repeat until stable; nested markup ("[[x]]", "***x***") peels one layer per pass.

    No rule lengthens the text and the length-preserving ones never re-match
    their own output, so the loop terminates.
    """
    while True:
        cleaned = _clean_once(text)
        if cleaned == text:
            return text
        text = cleaned


def _drop_injected_links(text: str, registry: VerifiedLinkRegistry) -> str:
    rendered = registry.rendered_lines()
    return "\n".join(line for line in text.split("\n") if line.strip() not in rendered)


def format_response(
    text: str | None,
    original_query: str = "",
    registry: VerifiedLinkRegistry = DEFAULT_REGISTRY,
) -> str:
    """
    Make *text* safe to send as plain text.

    Args:
        text: Model or cached output.
        original_query: The user's question; decides which verified links
            get appended.
        registry: Source of the only links that may appear in the result.

    Returns:
        Cleaned text followed by ``Label: URL`` lines for relevant links.
        Applying it twice gives the same result as applying it once.
    """
    body = _clean(_drop_injected_links(text or "", registry))

    links = registry.detect_relevant_links(original_query)
    if not links:
        return body

    logger.debug(f"Appending {len(links)} verified link(s)")
    link_block = "\n".join(link.render() for link in links)
    return f"{body}\n\n{link_block}" if body else link_block
