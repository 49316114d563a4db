"""Zero-cost response pools.

Pools are plain tuples; choosing from them goes through a ``Selector`` so
tests can swap ``random.choice`` for something deterministic.
"""

from __future__ import annotations

import random
from typing import Callable, Sequence

from pepperpal.templates.closings import CLOSING_TEMPLATES
from pepperpal.templates.factual import FACTUAL_TEMPLATES, match_factual_template
from pepperpal.templates.greetings import GREETING_TEMPLATES
from pepperpal.templates.quick import QUICK_COMMANDS, quick_reply
from pepperpal.templates.refusals import REFUSAL_TEMPLATES, refusal_pool

Selector = Callable[[Sequence[str]], str]

default_selector: Selector = random.choice


def first_selector(pool: Sequence[str]) -> str:
    """Deterministic selector, handy for tests and previews."""
    return pool[0]


__all__ = [
    "CLOSING_TEMPLATES",
    "FACTUAL_TEMPLATES",
    "GREETING_TEMPLATES",
    "QUICK_COMMANDS",
    "REFUSAL_TEMPLATES",
    "Selector",
    "default_selector",
    "first_selector",
    "match_factual_template",
    "quick_reply",
    "refusal_pool",
]
