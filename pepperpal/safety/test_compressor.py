from pepperpal.safety.compressor import MORE_SIGNAL, SHORT_MORE_SIGNAL, compress, hard_truncate

CONTRACT = "0x60F397acBCfB8f4e3234C659A3E10867e6fA6b67"


def test_short_text_is_unchanged() -> None:
    assert compress("PEPPER is a memecoin.", 100) == "PEPPER is a memecoin."


def test_collapsing_blank_lines_can_be_enough() -> None:
    text = "Line one.\n\n\n\nLine two."

    assert compress(text, 20) == "Line one.\nLine two."


def test_keeps_first_sentence_and_key_facts() -> None:
    text = (
        "Peppercoin is a memecoin on Chiliz Chain. "
        + "It has a lot of community history and context worth reading. " * 8
        + f"The contract is {CONTRACT} on chain 88888."
    )

    result = compress(text, 200)

    assert len(result) <= 200
    assert result.startswith("Peppercoin is a memecoin on Chiliz Chain.")
    assert f"Contract: {CONTRACT}" in result
    assert "Chain ID: 88888" in result
    assert result.endswith(MORE_SIGNAL)


def test_hard_truncate_prefers_sentence_boundary() -> None:
    text = "First sentence is here. Second sentence is also here. " * 4

    result = hard_truncate(text, 100)

    assert len(result) <= 100
    assert result.endswith("." + "\n\n" + SHORT_MORE_SIGNAL)


def test_hard_truncate_falls_back_to_word_boundary() -> None:
    text = "word " * 60

    result = hard_truncate(text, 100)

    assert len(result) <= 100
    assert result.endswith("word...")


def test_hard_truncate_leaves_short_text() -> None:
    assert hard_truncate("short", 100) == "short"
