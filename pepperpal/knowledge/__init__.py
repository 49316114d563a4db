"""Knowledge sources and the verified link registry."""

from pepperpal.knowledge.provider import (
    FileKnowledgeProvider,
    KnowledgeProvider,
    StaticKnowledgeProvider,
    parse_sections,
)
from pepperpal.knowledge.verified_links import (
    DEFAULT_REGISTRY,
    VerifiedLink,
    VerifiedLinkRegistry,
)

__all__ = [
    "DEFAULT_REGISTRY",
    "FileKnowledgeProvider",
    "KnowledgeProvider",
    "StaticKnowledgeProvider",
    "VerifiedLink",
    "VerifiedLinkRegistry",
    "parse_sections",
]
