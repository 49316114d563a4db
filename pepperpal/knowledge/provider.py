"""Knowledge sources for grounded generation.

The bot is fail-closed: when knowledge cannot be loaded, nothing is sent to
the model and users get a fixed notice instead.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from loguru import logger

_HEADING = re.compile(r"^##\s+(.+?)\s*$", re.M)
_NON_SLUG = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Turn a heading into its slug: "Pepper Inc" -> "pepper-inc"."""
    return _NON_SLUG.sub("-", title.lower()).strip("-")


@runtime_checkable
class KnowledgeProvider(Protocol):
    def is_available(self) -> bool: ...

    def get_content(self) -> str | None: ...

    def get_sections(self, slugs: Sequence[str]) -> str | None: ...


def parse_sections(markdown: str) -> dict[str, str]:
    """Split a document into ``{slug: section text}`` on ``##`` headings."""
    headings = list(_HEADING.finditer(markdown))
    sections: dict[str, str] = {}
    for i, match in enumerate(headings):
        end = headings[i + 1].start() if i + 1 < len(headings) else len(markdown)
        body = markdown[match.start():end].strip()
        sections[slugify(match.group(1))] = body
    return sections


class StaticKnowledgeProvider:
    """Knowledge held in memory; also the base for file loading."""

    def __init__(self, content: str | None = None):
        self._content: str | None = None
        self._sections: dict[str, str] = {}
        if content is not None:
            self._set(content)

    def _set(self, content: str) -> bool:
        content = content.strip()
        sections = parse_sections(content)
        if not content or not sections:
            self._content, self._sections = None, {}
            return False
        self._content, self._sections = content, sections
        return True

    def is_available(self) -> bool:
        return self._content is not None

    def get_content(self) -> str | None:
        return self._content

    def get_sections(self, slugs: Sequence[str]) -> str | None:
        """
        Text of the requested sections, in request order.

        Unknown slugs are skipped; if none match, the whole document is
        returned so generation still has context.
        """
        if self._content is None:
            return None
        parts = [self._sections[s] for s in dict.fromkeys(slugs) if s in self._sections]
        return "\n\n".join(parts) if parts else self._content

    @property
    def section_slugs(self) -> list[str]:
        return list(self._sections)


class FileKnowledgeProvider(StaticKnowledgeProvider):
    """Loads a markdown file; missing, empty or heading-less files leave it unavailable."""

    def __init__(self, path: Path | str):
        super().__init__()
        self._path = Path(path)
        self.reload()

    def reload(self) -> bool:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error(f"Knowledge load failed ({self._path}): {e}")
            self._content, self._sections = None, {}
            return False

        if not self._set(raw):
            logger.error(f"Knowledge file has no usable sections: {self._path}")
            return False

        logger.info(f"Knowledge loaded: {len(self._sections)} sections from {self._path.name}")
        return True
