"""Entry gate in front of the pipeline.

Decides whether a message is answered at all (rate limit, duplicates,
knowledge availability) before handing it to ``Pipeline.process``. Channels
talk only to this class.
"""

from __future__ import annotations

import re

from loguru import logger

from pepperpal.bus.events import InboundMessage, OutboundMessage
from pepperpal.cache.response_cache import ResponseCache
from pepperpal.constants import (
    EMPTY_QUESTION_PROMPT,
    KNOWLEDGE_UNAVAILABLE,
    MAX_QUERY_LENGTH,
    MIN_QUERY_LENGTH,
)
from pepperpal.knowledge.provider import FileKnowledgeProvider, KnowledgeProvider
from pepperpal.pipeline.generator import Generator
from pepperpal.pipeline.orchestrator import Pipeline
from pepperpal.pipeline.types import ModelTier
from pepperpal.providers.base import ModelClient
from pepperpal.providers.litellm_provider import LiteLLMClient
from pepperpal.runtime.maintenance import MaintenanceScheduler
from pepperpal.safety.duplicate_guard import DuplicateGuard
from pepperpal.safety.rate_limiter import RateLimitAction, RateLimiter, cooldown_message
from pepperpal.settings import PepperPalSettings
from pepperpal.utils.helpers import preview

ASK_USAGE = "Please provide a question after /ask.\n\nExample: /ask What is Peppercoin?"


class ChatService:
    def __init__(
        self,
        pipeline: Pipeline,
        knowledge: KnowledgeProvider,
        *,
        rate_limiter: RateLimiter | None = None,
        duplicate_guard: DuplicateGuard | None = None,
        bot_username: str = "",
        maintenance: MaintenanceScheduler | None = None,
        admin_ids: frozenset[int] = frozenset(),
    ):
        self.pipeline = pipeline
        self.knowledge = knowledge
        self.rate_limiter = rate_limiter or RateLimiter()
        self.duplicate_guard = duplicate_guard or DuplicateGuard()
        self.bot_username = bot_username.lstrip("@")
        self.maintenance = maintenance or MaintenanceScheduler()
        self.admin_ids = admin_ids
        self._mention = (
            re.compile(rf"@{re.escape(self.bot_username)}\b", re.IGNORECASE) if self.bot_username else None
        )

    @classmethod
    def from_settings(
        cls,
        settings: PepperPalSettings,
        *,
        client: ModelClient | None = None,
        knowledge: KnowledgeProvider | None = None,
    ) -> ChatService:
        """Wire every component from configuration."""
        if client is None:
            client = LiteLLMClient(
                api_key=settings.openrouter_api_key,
                api_base=settings.openrouter_api_base,
                temperature=settings.temperature,
                timeout=settings.request_timeout_seconds,
            )
        if knowledge is None:
            knowledge = FileKnowledgeProvider(settings.knowledge_path)

        cache = ResponseCache(max_entries=settings.cache_max_entries, default_ttl=settings.cache_ttl_facts)
        generator = Generator(
            client,
            knowledge,
            cache,
            models={ModelTier.FAST: settings.model_fast, ModelTier.QUALITY: settings.model_quality},
            timeout=settings.request_timeout_seconds,
            temperature=settings.temperature,
            facts_ttl=settings.cache_ttl_facts,
            stats_ttl=settings.cache_ttl_stats,
        )
        rate_limiter = RateLimiter(settings.rate_limit_max, settings.rate_limit_window_seconds)
        duplicate_guard = DuplicateGuard(settings.duplicate_window_seconds, settings.duplicate_max_entries)

        maintenance = MaintenanceScheduler()
        maintenance.register("rate_limiter", rate_limiter.sweep, settings.rate_limit_sweep_seconds)
        maintenance.register("duplicate_guard", duplicate_guard.sweep, settings.duplicate_sweep_seconds)

        return cls(
            Pipeline(generator),
            knowledge,
            rate_limiter=rate_limiter,
            duplicate_guard=duplicate_guard,
            bot_username=settings.bot_username,
            maintenance=maintenance,
            admin_ids=settings.admin_user_ids,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        self.maintenance.start()

    async def stop(self) -> None:
        await self.maintenance.stop()

    # ------------------------------------------------------------------
    # Handling
    # ------------------------------------------------------------------

    def extract_question(self, text: str) -> str:
        """Drop the bot mention, trim and clip to the maximum query length."""
        question = text or ""
        if self._mention:
            question = self._mention.sub("", question)
        return question.strip()[:MAX_QUERY_LENGTH]

    def _reply(self, message: InboundMessage, content: str) -> OutboundMessage:
        return OutboundMessage(
            channel=message.channel,
            chat_id=message.chat_id,
            content=content,
            reply_to=message.message_id or None,
        )

    async def handle(self, message: InboundMessage) -> OutboundMessage | None:
        """
        Answer one inbound message.

        Returns:
            The reply, or None when the message must get no reply at all
            (rate-limit overage after the warning, duplicate question).
        """
        decision = self.rate_limiter.check(message.sender_id)
        if decision.action is RateLimitAction.WARN:
            return self._reply(message, cooldown_message(decision.retry_after))
        if decision.action is RateLimitAction.SUPPRESS:
            return None

        question = self.extract_question(message.content)
        if len(question) < MIN_QUERY_LENGTH:
            return self._reply(message, EMPTY_QUESTION_PROMPT)

        if self.duplicate_guard.is_duplicate(message.sender_id, message.chat_id, question):
            logger.debug(f"Duplicate suppressed for {message.session_key}")
            return None

        if not self.knowledge.is_available():
            logger.warning(f"Message from {message.session_key} but knowledge unavailable")
            return self._reply(message, KNOWLEDGE_UNAVAILABLE)

        logger.info(f"Processing message from {message.session_key}: {preview(question)!r}")
        plan = await self.pipeline.process(
            InboundMessage(
                channel=message.channel,
                sender_id=message.sender_id,
                chat_id=message.chat_id,
                content=question,
                timestamp=message.timestamp,
                metadata=message.metadata,
                chat_type=message.chat_type,
                message_id=message.message_id,
            )
        )
        reply = self._reply(message, plan.message)
        reply.parse_mode = plan.parse_mode
        reply.metadata["processing_time_ms"] = plan.processing_time_ms
        return reply

    async def ask(self, message: InboundMessage) -> OutboundMessage | None:
        """``/ask <question>``: same path as a plain message."""
        if not message.content.strip():
            return self._reply(message, ASK_USAGE)
        return await self.handle(message)

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    @property
    def cache(self) -> ResponseCache:
        return self.pipeline.generator.cache

    def is_admin(self, user_id: str | int | None) -> bool:
        """Only ids from the configured allowlist; unknown senders fail closed."""
        if user_id is None:
            return False
        try:
            return int(user_id) in self.admin_ids
        except (TypeError, ValueError):
            return False

    def stats_report(self) -> str:
        stats = self.cache.get_stats()
        lines = [
            "📈 Pepper Pal Stats",
            "",
            f"Cache entries: {stats.size}",
            f"Rate limiter users: {self.rate_limiter.size}",
            f"Duplicate guard entries: {self.duplicate_guard.size}",
        ]
        if stats.entries:
            lines += ["", "Top cached queries:"]
            lines += [f"- {e.key} ({e.hits} hits, {int(e.age_seconds)}s old)" for e in stats.entries]
        return "\n".join(lines)

    def health_report(self) -> str:
        def mark(ok: bool) -> str:
            return "✅" if ok else "❌"

        models = self.pipeline.generator.models
        lines = [
            "🏥 Pepper Pal Health",
            "",
            "Status: ✅ Online",
            f"Knowledge available: {mark(self.knowledge.is_available())}",
            f"Maintenance running: {mark(self.maintenance.running)}",
            f"Fast model: {models.get(ModelTier.FAST, 'N/A')}",
            f"Quality model: {models.get(ModelTier.QUALITY, 'N/A')}",
        ]
        return "\n".join(lines)
