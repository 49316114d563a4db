from pepperpal.constants import VERIFIED_FACTS
from pepperpal.templates import CLOSING_TEMPLATES, GREETING_TEMPLATES, match_factual_template
from pepperpal.templates.factual import _phrase_pattern


def test_exact_question_returns_contract() -> None:
    answer = match_factual_template("What is the contract?")

    assert answer is not None
    assert VERIFIED_FACTS["CONTRACT"] in answer


def test_partial_match_inside_longer_question() -> None:
    answer = match_factual_template("hey, where can I buy PEPPER these days")

    assert answer is not None
    assert answer.startswith("Buy PEPPER on:")


def test_bare_contract_only_matches_exactly() -> None:
    assert match_factual_template("contract") is not None
    assert match_factual_template("how does contract creation work") is None


def test_unknown_or_empty_question() -> None:
    assert match_factual_template("tell me a story") is None
    assert match_factual_template("?!") is None


def test_pools_are_not_empty() -> None:
    assert GREETING_TEMPLATES
    assert CLOSING_TEMPLATES
    assert all("pepper" in t.lower() for t in GREETING_TEMPLATES)


def test_phrase_patterns_match_multi_word_keys() -> None:
    pattern = _phrase_pattern("chain id")

    assert pattern.pattern == r"\bchain\s+id\b"
    assert pattern.search("what is the chain   id")
    assert not pattern.search("blockchain identity")
