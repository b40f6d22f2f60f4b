import pytest

import app_settings
from app_settings import DEFAULT_CHAT_BASE_URL, DEFAULT_CHAT_TIMEOUT, load_settings

ENV_KEYS = (
    "BRIEF_CHAT_BASE_URL",
    "BRIEF_CHAT_WEBHOOK_ID",
    "BRIEF_CHAT_TIMEOUT",
    "BRIEF_AUDIO_UPLOAD_URL",
    "BRIEF_AUDIO_UPLOAD_KEY",
    "BRIEF_DEFAULT_LOCALE",
    "BRIEF_MARKERS",
    "BRIEF_ENABLE_AUDIO",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    monkeypatch.setattr(app_settings, "_safe_secret", lambda key: None)
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_configuration():
    settings = load_settings()
    assert settings.chat_base_url == DEFAULT_CHAT_BASE_URL
    assert settings.chat_timeout == DEFAULT_CHAT_TIMEOUT
    assert settings.default_locale == "fr"
    assert settings.enable_audio is True
    assert settings.audio_upload_url is None
    assert "## Contexte" in settings.markers.markers()


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("BRIEF_CHAT_BASE_URL", "https://n8n.example/")
    monkeypatch.setenv("BRIEF_CHAT_WEBHOOK_ID", "/hook-id/")
    monkeypatch.setenv("BRIEF_CHAT_TIMEOUT", "45")
    monkeypatch.setenv("BRIEF_DEFAULT_LOCALE", "en-GB")
    monkeypatch.setenv("BRIEF_ENABLE_AUDIO", "off")

    settings = load_settings()

    assert settings.chat_base_url == "https://n8n.example"
    assert settings.chat_webhook_id == "hook-id"
    assert settings.chat_timeout == 45
    assert settings.default_locale == "en"
    assert settings.enable_audio is False


def test_invalid_values_fall_back(monkeypatch):
    monkeypatch.setenv("BRIEF_CHAT_TIMEOUT", "soon")
    monkeypatch.setenv("BRIEF_DEFAULT_LOCALE", "de")
    monkeypatch.setenv("BRIEF_ENABLE_AUDIO", "maybe")

    settings = load_settings()

    assert settings.chat_timeout == DEFAULT_CHAT_TIMEOUT
    assert settings.default_locale == "fr"
    assert settings.enable_audio is True


def test_marker_overrides_from_json(monkeypatch):
    monkeypatch.setenv("BRIEF_MARKERS", '{"de": ["Kontext"]}')
    settings = load_settings()
    assert "## Kontext" in settings.markers.markers()
    assert "## Contexte" in settings.markers.markers()


def test_secrets_take_precedence(monkeypatch):
    monkeypatch.setenv("BRIEF_CHAT_WEBHOOK_ID", "from-env")
    monkeypatch.setattr(
        app_settings,
        "_safe_secret",
        lambda key: "from-secrets" if key == "BRIEF_CHAT_WEBHOOK_ID" else None,
    )
    assert load_settings().chat_webhook_id == "from-secrets"
