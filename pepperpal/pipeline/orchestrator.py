"""Runs one message through every pipeline stage.

Stages: forbidden check -> classify -> plan -> generate -> validate -> format.
Stages report problems through their return values; the try/except here is
only for faults nobody anticipated.
"""

from __future__ import annotations

import time
import uuid

from loguru import logger

from pepperpal.bus.events import InboundMessage
from pepperpal.constants import PIPELINE_FALLBACK, VALIDATION_FALLBACK
from pepperpal.knowledge.verified_links import DEFAULT_REGISTRY, VerifiedLinkRegistry
from pepperpal.pipeline.classifier import classify
from pepperpal.pipeline.generator import Generator
from pepperpal.pipeline.planner import plan
from pepperpal.pipeline.types import DeliveryPlan
from pepperpal.pipeline.validator import validate
from pepperpal.safety.intent_detector import check_forbidden, get_refusal
from pepperpal.safety.output_sanitizer import format_response
from pepperpal.templates import Selector, default_selector


def _new_pipeline_id() -> str:
    return f"p_{int(time.time() * 1000)}_{uuid.uuid4().hex[:6]}"


class Pipeline:
    """Stateless apart from what the generator holds (cache, client)."""

    def __init__(
        self,
        generator: Generator,
        *,
        registry: VerifiedLinkRegistry = DEFAULT_REGISTRY,
        selector: Selector = default_selector,
    ):
        self.generator = generator
        self.registry = registry
        self.selector = selector

    async def process(self, message: InboundMessage) -> DeliveryPlan:
        pipeline_id = _new_pipeline_id()
        start = time.perf_counter()
        text = message.content or ""

        def done(reply: str) -> DeliveryPlan:
            return DeliveryPlan(message=reply, processing_time_ms=(time.perf_counter() - start) * 1000)

        logger.info(
            f"Pipeline started ({pipeline_id}): chat_type={message.chat_type} length={len(text)}"
        )

        try:
            forbidden = check_forbidden(text)
            if forbidden.is_forbidden:
                logger.info(f"Forbidden intent blocked ({pipeline_id}): {forbidden.intent}")
                return done(get_refusal(forbidden.intent, self.selector))

            classification = classify(text)
            response_plan = plan(classification)
            generated = await self.generator.generate(response_plan, text, classification)
            logger.debug(
                f"Generated ({pipeline_id}): template={generated.from_template} cache={generated.from_cache} "
                f"failed={generated.failed} length={len(generated.text)} in {generated.generation_time_ms:.0f}ms"
            )

            validated = validate(generated, response_plan.char_budget)
            if not validated.valid:
                logger.warning(f"Validation failed ({pipeline_id}): {validated.error}")
                return done(VALIDATION_FALLBACK)

            # Templates carry verified URLs already.
            if generated.from_template:
                reply = validated.text
            else:
                reply = format_response(validated.text, text, self.registry)

            result = done(reply)
            logger.info(
                f"Pipeline complete ({pipeline_id}) in {result.processing_time_ms:.0f}ms: "
                f"class={classification.response_class.value} strategy={response_plan.strategy.value}"
            )
            return result
        except Exception:
            logger.exception(f"Pipeline failed ({pipeline_id})")
            return done(PIPELINE_FALLBACK)
