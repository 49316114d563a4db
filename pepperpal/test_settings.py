import pytest

from pepperpal.settings import PepperPalSettings


def test_defaults_match_response_policy(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("OPENROUTER_API_KEY", "PEPPERPAL_OPENROUTER_API_KEY"):
        monkeypatch.delenv(name, raising=False)

    settings = PepperPalSettings(_env_file=None)

    assert settings.rate_limit_max == 5
    assert settings.rate_limit_window_seconds == 60
    assert settings.duplicate_window_seconds == 30
    assert settings.cache_max_entries == 500
    assert settings.knowledge_path.name == "peppercoin.md"
    assert not settings.ai_configured


def test_prefixed_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PEPPERPAL_RATE_LIMIT_MAX", "9")
    monkeypatch.setenv("PEPPERPAL_MODEL_FAST", "some/model:free")

    settings = PepperPalSettings(_env_file=None)

    assert settings.rate_limit_max == 9
    assert settings.model_fast == "some/model:free"


def test_unprefixed_credentials_are_accepted(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PEPPERPAL_BOT_TOKEN", raising=False)
    monkeypatch.delenv("PEPPERPAL_OPENROUTER_API_KEY", raising=False)
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123:abc")
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or-test")

    settings = PepperPalSettings(_env_file=None)

    assert settings.bot_token == "123:abc"
    assert settings.ai_configured


def test_invalid_limits_are_rejected() -> None:
    with pytest.raises(ValueError):
        PepperPalSettings(_env_file=None, rate_limit_max=0)


def test_admin_ids_parse_from_comma_list(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PEPPERPAL_ADMIN_IDS", raising=False)
    monkeypatch.setenv("ADMIN_USER_IDS", "123, 456,,oops")

    settings = PepperPalSettings(_env_file=None)

    assert settings.admin_user_ids == frozenset({123, 456})
    assert PepperPalSettings(_env_file=None, admin_ids="").admin_user_ids == frozenset()
