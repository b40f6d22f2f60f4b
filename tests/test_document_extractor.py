import json

from document_extractor import detect, extract_brief_field, separated_block, unescape_brief
from marker_tables import MarkerTable

FRAMED_REPLY = (
    "Voici votre brief :\n\n"
    "---\n\n"
    "## Contexte\nLancement du produit.\n\n"
    "## Objectifs\n- Gagner 10 clients\n\n"
    "---\n\n"
    "Est-ce que tout est correct ?"
)


def test_inline_brief_is_sliced_between_rules() -> None:
    detection = detect(FRAMED_REPLY)
    assert detection.present
    assert detection.normalized_text == (
        "## Contexte\nLancement du produit.\n\n## Objectifs\n- Gagner 10 clients"
    )


def test_inline_brief_without_rules_keeps_full_text() -> None:
    reply = "### Risks\nThe vendor may be late."
    detection = detect(reply)
    assert detection.present
    assert detection.normalized_text == reply


def test_reply_without_markers_is_not_a_brief() -> None:
    detection = detect("What is the budget of your project?")
    assert not detection.present
    assert detection.normalized_text is None


def test_marker_matching_is_case_sensitive() -> None:
    assert not detect("## contexte\nsomething").present


def test_json_brief_field_is_unescaped() -> None:
    reply = "Here it is " + json.dumps({"brief": "## Context\\nWe launch in May.\\n### Risks\\nDelays"})
    detection = detect(reply)
    assert detection.present
    assert detection.normalized_text == "## Context\nWe launch in May.\n### Risks\nDelays"


def test_fenced_brief_text_alias() -> None:
    reply = "```json\n" + json.dumps({"brief_text": "## Budget\\n50k"}) + "\n```"
    detection = detect(reply)
    assert detection.present
    assert detection.normalized_text == "## Budget\n50k"


def test_brief_field_without_markers_is_not_a_brief() -> None:
    reply = json.dumps({"brief": "Just some notes"})
    assert extract_brief_field(reply) == "Just some notes"
    assert not detect(reply).present


def test_custom_marker_table() -> None:
    table = MarkerTable(titles={"de": ("Kontext",)})
    assert detect("#### Kontext\nText", markers=table).present
    assert not detect("## Context\nText", markers=table).present


def test_helpers() -> None:
    assert unescape_brief("  a\\nb\\tc  ") == "a\nb\tc"
    assert separated_block("no rules here") is None
