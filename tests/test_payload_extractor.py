import pytest

from payload_extractor import extract, normalize_suggestion


@pytest.mark.parametrize(
    "reply",
    [
        "Plain answer without any payload.",
        "Braces {like this} are not JSON.",
        "",
    ],
)
def test_reply_without_payload_is_unchanged(reply: str) -> None:
    result = extract(reply)
    assert result.clean_content == reply
    assert result.suggestions == ()


def test_fenced_payload_is_removed() -> None:
    reply = 'Hello ```json\n{"suggestions":["A","B"]}\n``` bye'
    result = extract(reply)
    assert result.suggestions == ("A", "B")
    assert result.clean_content.startswith("Hello")
    assert result.clean_content.endswith("bye")
    assert "```" not in result.clean_content
    assert "suggestions" not in result.clean_content


def test_extract_is_idempotent_on_clean_content() -> None:
    reply = 'Pick one:\n```json\n{"suggestions": ["Yes", "No"]}\n```'
    first = extract(reply)
    second = extract(first.clean_content)
    assert second.clean_content == first.clean_content
    assert second.suggestions == ()


def test_unfenced_payload_is_removed() -> None:
    reply = 'Pick one {"suggestions": ["Yes", "No"]} thanks'
    result = extract(reply)
    assert result.suggestions == ("Yes", "No")
    assert '{"suggestions": ["Yes", "No"]}' not in result.clean_content
    assert result.clean_content == "Pick one  thanks"


def test_object_entries_are_rendered() -> None:
    reply = '{"suggestions":[{"indicator":"Risk","goal":"reduce churn"}]}'
    assert extract(reply).suggestions == ("Risk: reduce churn",)


def test_legacy_quick_answers_key() -> None:
    reply = 'Question?\n```json\n{"quick_answers": ["Go"]}\n```'
    result = extract(reply)
    assert result.suggestions == ("Go",)
    assert result.clean_content == "Question?"


def test_non_list_payload_is_ignored() -> None:
    reply = 'Text {"suggestions": "A"}'
    result = extract(reply)
    assert result.clean_content == reply
    assert result.suggestions == ()


def test_malformed_payload_degrades_to_no_suggestions() -> None:
    reply = 'Text ```json\n{"suggestions": ["A",]\n``` end'
    result = extract(reply)
    assert result.clean_content == reply
    assert result.suggestions == ()


@pytest.mark.parametrize(
    ("item", "expected"),
    [
        ("Keep it", "Keep it"),
        ({"indicator": "Risk", "goal": "reduce churn"}, "Risk: reduce churn"),
        ({"indicator": "Risk"}, "Risk"),
        ({"goal": "reduce churn"}, "reduce churn"),
        ({"indicator": "", "goal": "reduce churn"}, "reduce churn"),
        ({"label": "x", "n": 1}, '{"label":"x","n":1}'),
        (3, "3"),
        (2.0, "2"),
        (True, "true"),
        (None, "null"),
    ],
)
def test_normalize_suggestion(item, expected) -> None:
    assert normalize_suggestion(item) == expected


def test_repeated_payload_block_is_removed_everywhere() -> None:
    reply = 'A {"suggestions":["x"]} B {"suggestions":["x"]}'
    result = extract(reply)
    assert result.suggestions == ("x",)
    assert result.clean_content == "A  B"
    assert extract(result.clean_content).suggestions == ()


def test_stray_fence_before_payload_leaves_no_empty_shell() -> None:
    reply = 'Wrap code in ``` marks.\n```json\n{"suggestions": ["A"]}\n```'
    result = extract(reply)
    assert result.suggestions == ("A",)
    assert result.clean_content == "Wrap code in ``` marks."
