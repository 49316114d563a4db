import asyncio

from pepperpal.bus.events import InboundMessage
from pepperpal.cache.response_cache import ResponseCache
from pepperpal.constants import EMPTY_QUESTION_PROMPT, KNOWLEDGE_UNAVAILABLE, MAX_QUERY_LENGTH, VERIFIED_FACTS
from pepperpal.knowledge.provider import StaticKnowledgeProvider
from pepperpal.pipeline.generator import Generator
from pepperpal.pipeline.orchestrator import Pipeline
from pepperpal.pipeline.types import ModelTier
from pepperpal.providers.base import CompletionResult
from pepperpal.safety.duplicate_guard import DuplicateGuard
from pepperpal.safety.rate_limiter import RateLimiter
from pepperpal.service import ASK_USAGE, ChatService
from pepperpal.settings import PepperPalSettings
from pepperpal.templates import first_selector

_DOC = "## What is Peppercoin\nA memecoin on Chiliz Chain."


class _FakeClient:
    def __init__(self):
        self.queries: list[str] = []

    async def complete(self, messages, *, model, max_tokens, temperature=None):
        self.queries.append(messages[-1]["content"])
        return CompletionResult(success=True, content="PEPPER is a community memecoin.")


def _service(knowledge=None, max_messages: int = 5) -> tuple[ChatService, _FakeClient]:
    client = _FakeClient()
    knowledge = knowledge if knowledge is not None else StaticKnowledgeProvider(_DOC)
    generator = Generator(
        client,
        knowledge,
        ResponseCache(),
        models={ModelTier.FAST: "fast", ModelTier.QUALITY: "quality"},
        selector=first_selector,
    )
    service = ChatService(
        Pipeline(generator, selector=first_selector),
        knowledge,
        rate_limiter=RateLimiter(max_messages, 60, clock=lambda: 1000.0),
        duplicate_guard=DuplicateGuard(),
        bot_username="@PepperPal",
    )
    return service, client


def _message(content: str, sender: str = "u1", message_id: str = "42") -> InboundMessage:
    return InboundMessage(channel="telegram", sender_id=sender, chat_id="c1", content=content, message_id=message_id)


def test_question_is_answered_as_a_reply() -> None:
    service, client = _service()

    reply = asyncio.run(service.handle(_message("@PepperPal what makes pepper special?")))

    assert reply is not None
    assert reply.content == "PEPPER is a community memecoin."
    assert reply.reply_to == "42"
    assert reply.chat_id == "c1"
    assert "processing_time_ms" in reply.metadata
    assert client.queries == ["what makes pepper special?"]


def test_rate_limit_warns_once_then_goes_quiet() -> None:
    service, _ = _service(max_messages=2)

    replies = [asyncio.run(service.handle(_message(f"question number {i} about pepper"))) for i in range(4)]

    assert replies[0] is not None and replies[1] is not None
    assert replies[2].content == "Please slow down a bit. You can message me again in 60 seconds."
    assert replies[3] is None


def test_empty_question_gets_prompt() -> None:
    service, client = _service()

    reply = asyncio.run(service.handle(_message("@PepperPal  ")))

    assert reply.content == EMPTY_QUESTION_PROMPT
    assert client.queries == []


def test_duplicate_question_is_ignored() -> None:
    service, client = _service()

    first = asyncio.run(service.handle(_message("What makes PEPPER special?")))
    second = asyncio.run(service.handle(_message("what makes pepper special")))

    assert first is not None
    assert second is None
    assert len(client.queries) == 1


def test_unavailable_knowledge_gets_notice() -> None:
    service, client = _service(knowledge=StaticKnowledgeProvider())

    reply = asyncio.run(service.handle(_message("What makes PEPPER special?")))

    assert reply.content == KNOWLEDGE_UNAVAILABLE
    assert client.queries == []


def test_ask_without_question_shows_usage() -> None:
    service, _ = _service()

    assert asyncio.run(service.ask(_message("  "))).content == ASK_USAGE
    assert asyncio.run(service.ask(_message("hi"))) is not None


def test_extract_question_strips_mention_and_clips() -> None:
    service, _ = _service()

    assert service.extract_question("@pepperpal  what is pepper? ") == "what is pepper?"
    assert len(service.extract_question("x" * 5000)) == MAX_QUERY_LENGTH
    assert service.extract_question(None) == ""


def test_from_settings_wires_sweeps() -> None:
    settings = PepperPalSettings(_env_file=None, bot_username="@PepperPal", rate_limit_max=3)

    service = ChatService.from_settings(settings, client=_FakeClient(), knowledge=StaticKnowledgeProvider(_DOC))

    assert service.bot_username == "PepperPal"
    assert [job.name for job in service.maintenance.jobs] == ["rate_limiter", "duplicate_guard"]
    assert service.knowledge.is_available()


def test_repeated_contract_question_is_answered_once() -> None:
    service, client = _service()

    first = asyncio.run(service.handle(_message("what is the contract address")))
    second = asyncio.run(service.handle(_message("what is the contract address")))

    assert VERIFIED_FACTS["CONTRACT"] in first.content
    assert second is None
    assert client.queries == []


def test_admin_reports_cover_cache_and_stores() -> None:
    service, _ = _service()
    service.admin_ids = frozenset({99})
    asyncio.run(service.handle(_message("what is the contract address")))

    stats = service.stats_report()
    health = service.health_report()

    assert service.is_admin("99") and not service.is_admin(5) and not service.is_admin(None)
    assert f"Cache entries: {service.cache.size}" in stats
    assert "Rate limiter users: 1" in stats
    assert "Duplicate guard entries: 1" in stats
    assert "Knowledge available: ✅" in health
    assert "Fast model: fast" in health


def test_from_settings_passes_admins_and_stops_cleanly() -> None:
    settings = PepperPalSettings(_env_file=None, admin_ids="11,22")
    service = ChatService.from_settings(settings, client=_FakeClient(), knowledge=StaticKnowledgeProvider(_DOC))

    async def scenario() -> None:
        service.start()
        assert service.maintenance.running
        await service.stop()

    asyncio.run(scenario())

    assert service.is_admin(22)
    assert not service.maintenance.running
