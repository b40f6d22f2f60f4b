"""Locale tables driving brief detection and suggestion classification.

Both tables are plain data so a new locale or heading can be added through
configuration (see ``app_settings.load_settings``) without touching the
matching code.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping

HEADING_LEVELS: tuple[int, ...] = (2, 3, 4)

DEFAULT_SECTION_TITLES: dict[str, tuple[str, ...]] = {
    "en": (
        "Project Brief",
        "Project brief",
        "Context",
        "Objectives",
        "Risks",
        "Budget",
        "Target Audience",
        "Target audience",
    ),
    "fr": (
        "Brief projet",
        "Brief de projet",
        "Contexte",
        "Objectifs",
        "Risques",
        "Budget",
        "Public cible",
        "Cible",
    ),
}


@dataclass(frozen=True)
class MarkerTable:
    """Section titles per locale, matched as markdown headings."""

    titles: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_SECTION_TITLES)
    )
    levels: tuple[int, ...] = HEADING_LEVELS

    def markers(self) -> tuple[str, ...]:
        seen: dict[str, None] = {}
        for locale_titles in self.titles.values():
            for title in locale_titles:
                for level in self.levels:
                    seen.setdefault(f"{'#' * level} {title}", None)
        return tuple(seen)

    def first_marker_in(self, text: str | None) -> str | None:
        if not text:
            return None
        for marker in self.markers():
            if marker in text:
                return marker
        return None

    def merged(self, overrides: Mapping[str, Iterable[str]] | None) -> "MarkerTable":
        if not overrides:
            return self
        titles = {locale: tuple(values) for locale, values in self.titles.items()}
        for locale, extra in overrides.items():
            current = list(titles.get(str(locale), ()))
            for title in extra:
                cleaned = str(title).strip()
                if cleaned and cleaned not in current:
                    current.append(cleaned)
            titles[str(locale)] = tuple(current)
        return MarkerTable(titles=titles, levels=self.levels)


@dataclass(frozen=True)
class PhraseTable:
    """Suggestion texts with a fixed behavior, in every supported locale."""

    export_document: frozenset[str]
    start_over: frozenset[str]
    confirmation: frozenset[str]
    wants_changes: tuple[str, ...]
    export_label: Mapping[str, str]
    start_over_label: Mapping[str, str]

    def label_for(self, labels: Mapping[str, str], locale: str) -> str:
        if locale in labels:
            return labels[locale]
        return next(iter(labels.values()))


DEFAULT_PHRASES = PhraseTable(
    export_document=frozenset(
        {
            "Download as PDF",
            "Download the brief as PDF",
            "Télécharger en PDF",
            "Télécharger en tant que PDF",
            "Télécharger au format PDF",
            "Télécharger comme PDF",
        }
    ),
    start_over=frozenset(
        {
            "Start a new brief",
            "Create a new brief",
            "Start over",
            "Commencer un nouveau brief",
            "Créer un nouveau brief",
            "Recommencer",
        }
    ),
    confirmation=frozenset({"everything is correct", "tout est correct"}),
    wants_changes=(
        "i want to make changes",
        "make changes",
        "make some changes",
        "je veux apporter des modifications",
        "apporter des modifications",
        "faire des modifications",
    ),
    export_label={"fr": "Télécharger en PDF", "en": "Download as PDF"},
    start_over_label={"fr": "Commencer un nouveau brief", "en": "Start a new brief"},
)

DEFAULT_MARKERS = MarkerTable()


def load_marker_overrides(raw: str | Mapping[str, Any] | None) -> dict[str, tuple[str, ...]]:
    """Parse ``{"locale": ["Title", ...]}`` from a mapping, JSON text or a JSON file path."""

    if not raw:
        return {}
    if isinstance(raw, Mapping):
        source: Any = raw
    else:
        text = str(raw).strip()
        if not text.startswith("{"):
            path = Path(text)
            try:
                text = path.read_text(encoding="utf-8")
            except OSError:
                return {}
        try:
            source = json.loads(text)
        except (TypeError, json.JSONDecodeError):
            return {}
    if not isinstance(source, Mapping):
        return {}
    overrides: dict[str, tuple[str, ...]] = {}
    for locale, titles in source.items():
        if isinstance(titles, str):
            titles = [titles]
        if not isinstance(titles, (list, tuple)):
            continue
        cleaned = tuple(str(title).strip() for title in titles if str(title).strip())
        if cleaned:
            overrides[str(locale)] = cleaned
    return overrides


__all__ = [
    "DEFAULT_MARKERS",
    "DEFAULT_PHRASES",
    "DEFAULT_SECTION_TITLES",
    "HEADING_LEVELS",
    "MarkerTable",
    "PhraseTable",
    "load_marker_overrides",
]
