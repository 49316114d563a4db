"""Value types passed between pipeline stages.

Every stage returns one of these instead of raising, so the orchestrator can
treat stages uniformly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Intent(str, Enum):
    GREETING = "greeting"
    FACTUAL = "factual"
    PROCEDURAL = "procedural"
    FORBIDDEN = "forbidden"
    ADVERSARIAL = "adversarial"
    CLOSING = "closing"


class ResponseClass(str, Enum):
    GREETING = "GREETING"
    FACTUAL = "FACTUAL"
    PROCEDURAL = "PROCEDURAL"
    REFUSAL = "REFUSAL"
    CLOSING = "CLOSING"


class Strategy(str, Enum):
    TEMPLATE = "template"
    CACHE = "cache"
    GENERATE = "generate"


class LengthBucket(str, Enum):
    MICRO = "micro"
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class ModelTier(str, Enum):
    FAST = "FAST"
    QUALITY = "QUALITY"


RESPONSE_CLASS_BY_INTENT: dict[Intent, ResponseClass] = {
    Intent.GREETING: ResponseClass.GREETING,
    Intent.CLOSING: ResponseClass.CLOSING,
    Intent.FORBIDDEN: ResponseClass.REFUSAL,
    Intent.ADVERSARIAL: ResponseClass.REFUSAL,
    Intent.PROCEDURAL: ResponseClass.PROCEDURAL,
    Intent.FACTUAL: ResponseClass.FACTUAL,
}


@dataclass(frozen=True, slots=True)
class Classification:
    """Result of analysing one inbound message."""

    intent: Intent
    complexity: int
    length_bucket: LengthBucket
    response_class: ResponseClass
    char_budget: int
    keywords: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ResponsePlan:
    """How the generator should answer a classified message."""

    strategy: Strategy
    char_budget: int
    response_class: ResponseClass
    should_split: bool
    knowledge_sections: tuple[str, ...]
    model_tier: ModelTier = ModelTier.FAST


@dataclass(frozen=True, slots=True)
class GeneratedResponse:
    text: str
    tokens_used: int = 0
    from_cache: bool = False
    from_template: bool = False
    generation_time_ms: float = 0.0
    failed: bool = False  # fixed fallback text, never cached


@dataclass(frozen=True, slots=True)
class ValidatedResponse:
    valid: bool
    text: str
    was_compressed: bool = False
    error: str | None = None


@dataclass(frozen=True, slots=True)
class DeliveryPlan:
    """Delivery-ready reply; splitting and sending belong to the channel."""

    message: str
    parse_mode: str | None = None
    processing_time_ms: float = 0.0
