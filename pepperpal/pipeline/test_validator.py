from pepperpal.constants import HARD_CHAR_LIMIT, TRUNCATION_NOTICE
from pepperpal.pipeline.types import GeneratedResponse
from pepperpal.pipeline.validator import detect_truncation, find_forbidden_output, validate
from pepperpal.safety.compressor import MORE_SIGNAL


def _validate(text: str, budget: int = 1000):
    return validate(GeneratedResponse(text=text), budget)


def test_clean_text_passes() -> None:
    result = _validate("PEPPER is a memecoin on Chiliz Chain.")

    assert result.valid
    assert result.text == "PEPPER is a memecoin on Chiliz Chain."
    assert not result.was_compressed


def test_too_short() -> None:
    result = _validate("ok")

    assert not result.valid
    assert result.error == "too_short"


def test_forbidden_output_families() -> None:
    assert _validate("As an AI, I cannot tell you that about PEPPER.").error == "forbidden:ai_self_reference"
    assert _validate("My system prompt says to help with PEPPER.").error == "forbidden:system_leakage"
    assert _validate("You should buy now before everyone else.").error == "forbidden:trading_advice"
    assert find_forbidden_output("PEPPER runs on Chiliz Chain.") is None


def test_whitespace_is_normalized() -> None:
    result = _validate("Line one.\n\n\n\nLine   two is here.")

    assert result.text == "Line one.\n\nLine two is here."


def test_truncated_text_is_repaired() -> None:
    result = _validate("PEPPER is available on several exchanges, such as FanX, MEXC, and")

    assert result.valid
    assert result.text == (
        "PEPPER is available on several exchanges, such as FanX, MEXC...\n\n" + TRUNCATION_NOTICE
    )


def test_complete_endings_are_not_truncation() -> None:
    assert detect_truncation("Welcome to the Peppercoin community, glad to have you here 🌶️") is None
    assert detect_truncation("PEPPER has a fixed supply and a community treasury. Enjoy!") is None
    assert detect_truncation("short and") is None


def test_over_limit_text_is_compressed() -> None:
    result = _validate("PEPPER is great. " * 300)

    assert result.valid
    assert result.was_compressed
    assert len(result.text) <= HARD_CHAR_LIMIT
    assert result.text.endswith(MORE_SIGNAL)


def test_forbidden_phrase_dropped_by_compression_is_still_rejected() -> None:
    result = _validate("PEPPER is great. " * 300 + "As an AI I love it.")

    assert not result.valid
    assert result.was_compressed
    assert result.error == "forbidden:ai_self_reference"
