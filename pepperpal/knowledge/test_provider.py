from pathlib import Path

from pepperpal.knowledge.provider import (
    FileKnowledgeProvider,
    KnowledgeProvider,
    StaticKnowledgeProvider,
    parse_sections,
    slugify,
)

_DOC = """# Peppercoin

## What is Peppercoin
A memecoin on Chiliz Chain.

## Pepper Inc Governance
Holders vote on proposals.

## Safety & Security
Never share your seed phrase.
"""


def test_slugify() -> None:
    assert slugify("Pepper Inc Governance") == "pepper-inc-governance"
    assert slugify("Safety & Security") == "safety-security"
    assert slugify("  Buying and Trading!  ") == "buying-and-trading"


def test_parse_sections_splits_on_level_two_headings() -> None:
    sections = parse_sections(_DOC)

    assert list(sections) == ["what-is-peppercoin", "pepper-inc-governance", "safety-security"]
    assert sections["what-is-peppercoin"].startswith("## What is Peppercoin")
    assert "Holders vote" not in sections["what-is-peppercoin"]


def test_get_sections_in_request_order() -> None:
    provider = StaticKnowledgeProvider(_DOC)

    text = provider.get_sections(["safety-security", "what-is-peppercoin", "safety-security"])

    assert text is not None
    assert text.index("seed phrase") < text.index("memecoin")
    assert text.count("seed phrase") == 1


def test_unknown_sections_fall_back_to_whole_document() -> None:
    provider = StaticKnowledgeProvider(_DOC)

    assert provider.get_sections(["nope"]) == provider.get_content()


def test_empty_or_headingless_content_is_unavailable() -> None:
    assert not StaticKnowledgeProvider().is_available()
    assert not StaticKnowledgeProvider("   ").is_available()
    assert not StaticKnowledgeProvider("just some text").is_available()
    assert StaticKnowledgeProvider("").get_sections(["x"]) is None


def test_providers_satisfy_protocol() -> None:
    assert isinstance(StaticKnowledgeProvider(_DOC), KnowledgeProvider)


def test_file_provider_loads_and_reloads(tmp_path: Path) -> None:
    path = tmp_path / "kb.md"
    path.write_text(_DOC, encoding="utf-8")

    provider = FileKnowledgeProvider(path)
    assert provider.is_available()
    assert provider.section_slugs == ["what-is-peppercoin", "pepper-inc-governance", "safety-security"]

    path.write_text("", encoding="utf-8")
    assert provider.reload() is False
    assert not provider.is_available()


def test_file_provider_missing_file_fails_closed(tmp_path: Path) -> None:
    provider = FileKnowledgeProvider(tmp_path / "missing.md")

    assert not provider.is_available()
    assert provider.get_content() is None


def test_bundled_knowledge_has_planner_sections() -> None:
    provider = FileKnowledgeProvider(Path(__file__).parent / "peppercoin.md")

    assert provider.is_available()
    for slug in ("what-is-peppercoin", "quick-reference", "tokenomics", "buying-and-trading",
                 "pepper-inc-governance", "safety-and-security", "official-resources"):
        assert slug in provider.section_slugs
