from pepperpal.knowledge.verified_links import VerifiedLink, VerifiedLinkRegistry
from pepperpal.safety.output_sanitizer import format_response, strip_markdown, strip_urls


def test_model_urls_are_replaced_by_verified_links() -> None:
    result = format_response("Visit https://evil.example/x for info", "what is the website")

    assert result == "Visit for info\n\nOfficial Website: https://www.peppercoin.com"


def test_format_is_idempotent() -> None:
    once = format_response("Visit https://evil.example/x for info", "what is the website")

    assert format_response(once, "what is the website") == once


def test_deeply_nested_markup_is_removed_in_one_call() -> None:
    once = format_response("Check [[[[[[deep]]]]]] here and ****bold**** too.", "website")

    assert once == "Check deep here and bold too.\n\nOfficial Website: https://www.peppercoin.com"
    assert format_response(once, "website") == once


def test_no_links_when_query_does_not_ask_for_them() -> None:
    assert format_response("PEPPER is a memecoin.", "what is pepper") == "PEPPER is a memecoin."


def test_markdown_is_flattened() -> None:
    text = "## Overview\n**PEPPER** is a `memecoin` on *Chiliz*.\n- one\n- two\n> quoted"

    assert strip_markdown(text) == "Overview\nPEPPER is a memecoin on Chiliz.\n• one\n• two\nquoted"


def test_markdown_links_keep_their_text() -> None:
    assert format_response("See [the docs](https://docs.example.com) today.") == "See the docs today."


def test_emails_www_and_bare_domains_are_removed() -> None:
    text = "Mail team@peppercoin.com or open www.peppercoin.com or fake-pepper.xyz/claim now"

    assert "@" not in strip_urls(text)
    assert format_response(text) == "Mail or open or now"


def test_empty_text_still_gets_links() -> None:
    registry = VerifiedLinkRegistry(
        (VerifiedLink("docs", "Docs", "https://docs.pepper.test", ("docs",)),)
    )

    assert format_response("", "where are the docs", registry) == "Docs: https://docs.pepper.test"
    assert format_response(None) == ""


def test_dangling_labels_are_cleaned_up() -> None:
    text = "Official resources:\n\nWebsite: https://scam.example.com\n\n\n\nStay safe."

    result = format_response(text)

    assert "https" not in result
    assert "\n\n\n" not in result
    assert result.endswith("Stay safe.")
