from locale_text import LANGUAGE_INSTRUCTIONS, TEXT, help_prompts, normalize_locale, strip_language_instruction, t


def test_every_locale_defines_the_same_keys():
    assert set(TEXT["en"]) == set(TEXT["fr"])


def test_lookup_falls_back_to_french_then_key():
    assert normalize_locale("EN-us") == "en"
    assert normalize_locale(None) == "fr"
    assert t("send", "de") == TEXT["fr"]["send"]
    assert t("missing.key", "en") == "missing.key"
    assert "Basic" in t("lets_start", "en", template="Basic storytelling")


def test_strip_language_instruction():
    text = f"Commençons {LANGUAGE_INSTRUCTIONS['fr']}"
    assert strip_language_instruction(text) == "Commençons"
    assert strip_language_instruction("plain") == "plain"


def test_help_prompts_are_localized():
    assert help_prompts("en") == ["Give me examples", "Skip this question"]
