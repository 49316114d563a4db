"""Response generation: templates, cache, or one remote model call."""

from __future__ import annotations

import asyncio
import math
import re
import time

from loguru import logger

from pepperpal.cache.response_cache import ResponseCache
from pepperpal.constants import (
    GENERATION_FAILED,
    KNOWLEDGE_UNAVAILABLE,
    MAX_COMPLETION_TOKENS,
    MIN_COMPLETION_TOKENS,
    CacheTTL,
)
from pepperpal.knowledge.provider import KnowledgeProvider
from pepperpal.pipeline.types import (
    Classification,
    GeneratedResponse,
    ModelTier,
    ResponseClass,
    ResponsePlan,
    Strategy,
)
from pepperpal.pipeline.validator import find_forbidden_output
from pepperpal.providers.base import ModelClient
from pepperpal.safety.intent_detector import check_forbidden
from pepperpal.templates import (
    CLOSING_TEMPLATES,
    GREETING_TEMPLATES,
    Selector,
    default_selector,
    match_factual_template,
    refusal_pool,
)

# Questions about live market data expire on the short TTL.
_VOLATILE_QUERY = re.compile(r"\b(price|market\s*cap|volume|holders|stats|chart|liquidity)\b", re.I)

_CLASS_GUIDANCE: dict[ResponseClass, str] = {
    ResponseClass.FACTUAL: (
        "This is a factual question. Provide accurate, complete information.\n"
        "Include the contract address if relevant."
    ),
    ResponseClass.PROCEDURAL: (
        "This is a how-to question. Provide clear, complete, numbered steps.\n"
        "Include all information needed to finish the task."
    ),
}


def max_tokens_for(char_budget: int) -> int:
    """Roughly four characters per token, clamped to a safe range."""
    return max(MIN_COMPLETION_TOKENS, min(math.ceil(char_budget / 4), MAX_COMPLETION_TOKENS))


def cache_ttl_for(query: str, *, facts: float = CacheTTL.FACTS, stats: float = CacheTTL.STATS) -> float:
    return stats if _VOLATILE_QUERY.search(query or "") else facts


def build_system_prompt(plan: ResponsePlan) -> str:
    prompt = (
        "You are Pepper Pal, a friendly community assistant for Peppercoin ($PEPPER) on Chiliz Chain.\n\n"
        "GUIDELINES:\n"
        f"- Aim for about {plan.char_budget} characters, but finish your last sentence\n"
        "- Use plain text: NO markdown, NO asterisks, NO headings\n"
        "- Be direct, helpful and informative\n"
        "- DO NOT include any URLs or links; verified links are added automatically\n"
        "- DO NOT invent website addresses\n"
        "- Use only the KNOWLEDGE provided; if it does not cover the question, say so\n"
        "- Never give investment advice or price predictions\n\n"
        f"RESPONSE CLASS: {plan.response_class.value}\n"
    )
    guidance = _CLASS_GUIDANCE.get(plan.response_class)
    if guidance:
        prompt += f"\n{guidance}\n"
    return prompt


class Generator:
    """
    Executes a ResponsePlan.

    ``generate`` never raises: any failure in the remote branch becomes the
    fixed apology text with ``failed=True``.
    """

    def __init__(
        self,
        client: ModelClient,
        knowledge: KnowledgeProvider,
        cache: ResponseCache,
        *,
        models: dict[ModelTier, str],
        timeout: float = 15.0,
        temperature: float | None = None,
        selector: Selector = default_selector,
        stats_ttl: float = CacheTTL.STATS,
        facts_ttl: float = CacheTTL.FACTS,
    ):
        self.client = client
        self.knowledge = knowledge
        self.cache = cache
        self.models = models
        self.timeout = timeout
        self.temperature = temperature
        self.selector = selector
        self.stats_ttl = stats_ttl
        self.facts_ttl = facts_ttl

    async def generate(
        self, plan: ResponsePlan, raw_query: str, classification: Classification
    ) -> GeneratedResponse:
        start = time.perf_counter()

        def elapsed() -> float:
            return (time.perf_counter() - start) * 1000

        if plan.strategy is Strategy.TEMPLATE:
            text = self._from_template(plan.response_class, raw_query)
            return GeneratedResponse(text=text, from_template=True, generation_time_ms=elapsed())

        if plan.strategy is Strategy.CACHE:
            static = match_factual_template(raw_query)
            if static:
                logger.debug("Static factual template matched")
                return GeneratedResponse(text=static, from_template=True, generation_time_ms=elapsed())
            cached = self.cache.get(raw_query)
            if cached.hit and cached.response:
                return GeneratedResponse(text=cached.response, from_cache=True, generation_time_ms=elapsed())
            logger.debug("Cache miss, generating")

        response = await self._from_model(plan, raw_query, classification)
        if not response.failed and response.text and find_forbidden_output(response.text) is None:
            ttl = cache_ttl_for(raw_query, facts=self.facts_ttl, stats=self.stats_ttl)
            self.cache.set(raw_query, response.text, ttl=ttl)

        return GeneratedResponse(
            text=response.text,
            tokens_used=response.tokens_used,
            failed=response.failed,
            generation_time_ms=elapsed(),
        )

    def _from_template(self, response_class: ResponseClass, raw_query: str) -> str:
        if response_class is ResponseClass.GREETING:
            return self.selector(GREETING_TEMPLATES)
        if response_class is ResponseClass.CLOSING:
            return self.selector(CLOSING_TEMPLATES)
        if response_class is ResponseClass.REFUSAL:
            # the classifier may flag what the detector lets through: generic pool
            return self.selector(refusal_pool(check_forbidden(raw_query).intent))
        return self.selector(GREETING_TEMPLATES)

    async def _from_model(
        self, plan: ResponsePlan, raw_query: str, classification: Classification
    ) -> GeneratedResponse:
        if not self.knowledge.is_available():
            logger.warning("Knowledge unavailable for generation")
            return GeneratedResponse(text=KNOWLEDGE_UNAVAILABLE, failed=True)

        knowledge = self.knowledge.get_sections(plan.knowledge_sections) or self.knowledge.get_content() or ""
        messages = [
            {"role": "system", "content": build_system_prompt(plan)},
            {"role": "system", "content": f"KNOWLEDGE:\n{knowledge}"},
            {"role": "user", "content": raw_query},
        ]
        model = self.models[plan.model_tier]
        max_tokens = max_tokens_for(plan.char_budget)

        logger.debug(
            f"Calling model {model} (tier={plan.model_tier.value}, max_tokens={max_tokens}, "
            f"complexity={classification.complexity})"
        )
        try:
            result = await asyncio.wait_for(
                self.client.complete(
                    messages, model=model, max_tokens=max_tokens, temperature=self.temperature
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"Model call timed out after {self.timeout}s ({model})")
            return GeneratedResponse(text=GENERATION_FAILED, failed=True)
        except Exception as e:
            logger.error(f"Model call failed ({model}): {e}")
            return GeneratedResponse(text=GENERATION_FAILED, failed=True)

        if not result.success or not (result.content or "").strip():
            logger.error(f"Model generation failed ({model}): {result.error or 'empty'}")
            return GeneratedResponse(text=GENERATION_FAILED, failed=True)

        return GeneratedResponse(text=result.content.strip(), tokens_used=result.total_tokens)
