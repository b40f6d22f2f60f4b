"""Suggestion payload extraction for assistant replies."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Mapping, Sequence

from embedded_json import find_embedded_json
from models import ExtractionResult

logger = logging.getLogger(__name__)

# ``quick_answers`` is what earlier revisions of the chat workflow emitted.
DEFAULT_PAYLOAD_KEYS: tuple[str, ...] = ("suggestions", "quick_answers")


def _js_string(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else _js_string(item) for item in value)
    return str(value)


def _non_empty_str(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def normalize_suggestion(item: Any) -> str:
    """Render one payload entry as the text shown on its button."""

    if isinstance(item, str):
        return item
    if isinstance(item, Mapping):
        indicator = _non_empty_str(item.get("indicator"))
        goal = _non_empty_str(item.get("goal"))
        if indicator and goal:
            return f"{indicator}: {goal}"
        if indicator:
            return indicator
        if goal:
            return goal
        return json.dumps(item, separators=(",", ":"), ensure_ascii=False)
    return _js_string(item)


def normalize_suggestions(items: Iterable[Any]) -> tuple[str, ...]:
    return tuple(normalize_suggestion(item) for item in items)


def _is_list(value: Any) -> bool:
    return isinstance(value, list)


def extract(raw_text: str | None, *, keys: Sequence[str] = DEFAULT_PAYLOAD_KEYS) -> ExtractionResult:
    """Split a reply into display text and its suggested replies.

    Never raises: anything that does not yield a suggestion list leaves the
    reply untouched.
    """

    text = "" if raw_text is None else str(raw_text)
    for key in keys:
        try:
            found = find_embedded_json(text, key, accept=_is_list)
        except Exception:
            logger.exception("Suggestion payload scan failed for key %r", key)
            continue
        if found is None:
            continue
        suggestions = normalize_suggestions(found.payload[key])
        logger.debug("Extracted %d suggestions under %r", len(suggestions), key)
        return ExtractionResult(clean_content=found.remove_from(text), suggestions=suggestions)
    return ExtractionResult(clean_content=text, suggestions=())


__all__ = ["DEFAULT_PAYLOAD_KEYS", "extract", "normalize_suggestion", "normalize_suggestions"]
