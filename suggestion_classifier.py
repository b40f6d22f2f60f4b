"""Behavioral classification of suggested replies."""

from __future__ import annotations

from typing import Sequence

from marker_tables import DEFAULT_PHRASES, PhraseTable
from models import ActionKind, Category, ClassifiedSuggestions, Origin, Suggestion

DEFAULT_LOCALE = "fr"


def categorize(text: str, index: int = 0, *, phrases: PhraseTable = DEFAULT_PHRASES) -> Suggestion:
    """Assign the category of a single suggestion text."""

    if text in phrases.export_document:
        return Suggestion(text, Category.ACTION, index=index, action=ActionKind.EXPORT_DOCUMENT)
    if text in phrases.start_over:
        return Suggestion(text, Category.ACTION, index=index, action=ActionKind.START_OVER)
    lowered = text.lower()
    if lowered in phrases.confirmation:
        return Suggestion(text, Category.CONFIRMATORY, index=index, is_affirmative=True)
    if any(phrase in lowered for phrase in phrases.wants_changes):
        return Suggestion(text, Category.CONFIRMATORY, index=index, is_affirmative=False)
    return Suggestion(text, Category.PLAIN, index=index)


def _synthesized(kind: ActionKind, label: str, index: int) -> Suggestion:
    return Suggestion(
        label,
        Category.ACTION,
        origin=Origin.SYNTHESIZED,
        index=index,
        action=kind,
    )


def classify(
    suggestions: Sequence[str],
    document_detected: bool,
    *,
    phrases: PhraseTable = DEFAULT_PHRASES,
    locale: str = DEFAULT_LOCALE,
) -> ClassifiedSuggestions:
    """Partition suggestions into plain, confirmatory and action buckets.

    Order inside each bucket follows the input. When a brief was detected the
    export and start-over actions are always offered, synthesized from the
    locale labels if the model did not suggest them.
    """

    plain: list[Suggestion] = []
    confirmatory: list[Suggestion] = []
    action: list[Suggestion] = []
    for index, text in enumerate(suggestions):
        suggestion = categorize(text, index, phrases=phrases)
        if suggestion.category is Category.ACTION:
            action.append(suggestion)
        elif suggestion.category is Category.CONFIRMATORY:
            confirmatory.append(suggestion)
        else:
            plain.append(suggestion)

    if document_detected:
        kinds = {suggestion.action for suggestion in action}
        if ActionKind.EXPORT_DOCUMENT not in kinds:
            label = phrases.label_for(phrases.export_label, locale)
            action.append(_synthesized(ActionKind.EXPORT_DOCUMENT, label, 0))
        if ActionKind.START_OVER not in kinds:
            label = phrases.label_for(phrases.start_over_label, locale)
            action.append(_synthesized(ActionKind.START_OVER, label, 1))

    return ClassifiedSuggestions(
        plain=tuple(plain),
        confirmatory=tuple(confirmatory),
        action=tuple(action),
    )


__all__ = ["DEFAULT_LOCALE", "categorize", "classify"]
