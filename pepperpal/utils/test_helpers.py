from pepperpal.utils.helpers import normalize_for_hash, normalize_query, preview, rolling_hash


def test_normalize_query_is_idempotent() -> None:
    for raw in ("What is PEPPER?", "  how   do I buy, pepper!! ", "", "0x60F3…"):
        once = normalize_query(raw)
        assert normalize_query(once) == once


def test_normalize_for_hash_is_idempotent_and_ignores_case() -> None:
    assert normalize_for_hash("What is PEPPER?") == normalize_for_hash("what is pepper")
    once = normalize_for_hash("  Hello   THERE?!. ")
    assert normalize_for_hash(once) == once == "hello there"

    for raw in ("x . ?", "what is pepper ? !", "?! .", "wait... what?"):
        once = normalize_for_hash(raw)
        assert normalize_for_hash(once) == once
    assert normalize_for_hash("what is pepper ? !") == normalize_for_hash("What is PEPPER?")


def test_rolling_hash_is_stable_32_bit_hex() -> None:
    value = rolling_hash("what is pepper")

    assert value == rolling_hash("what is pepper")
    assert len(value) == 8
    assert int(value, 16) < 2**32
    assert rolling_hash("") == "00000000"


def test_preview_shortens_and_flattens() -> None:
    assert preview("line one\nline two") == "line one line two"
    assert preview("x" * 60) == "x" * 50 + "…"
