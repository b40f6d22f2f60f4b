from datetime import date

import pytest

import services.pdf_export as pdf_export
from document_paginator import paginate
from services.pdf_export import (
    ExportError,
    export_brief,
    generated_label,
    pdf_safe,
    render_pdf,
    reportlab_measure,
)

BRIEF = """## Contexte
Un café de quartier qui veut attirer les étudiants.

### Objectifs
- Augmenter la fréquentation l’après-midi
- Lancer une carte fidélité

**Budget**
1. **Phase 1** : 5 000 €
"""


def test_export_produces_pdf_bytes():
    payload = export_brief(BRIEF, locale="fr")
    assert payload.startswith(b"%PDF")


def test_long_brief_exports():
    payload = export_brief("\n".join(f"- point {idx}" for idx in range(300)), locale="en")
    assert payload.startswith(b"%PDF")


def test_empty_brief_is_rejected():
    with pytest.raises(ExportError):
        export_brief("   ")


def test_bad_geometry_raises_export_error():
    with pytest.raises(ExportError):
        export_brief(BRIEF, page_width=30, margin=20)


def test_render_pdf_from_layout():
    assert render_pdf(paginate(BRIEF), title="Brief").startswith(b"%PDF")


def test_pdf_safe_replaces_unsupported_glyphs():
    assert pdf_safe("• “Quote” – l’été…") == "• “Quote” – l’été…"
    assert pdf_safe("emoji 🚀") == "emoji ?"
    assert pdf_safe("a\u202fb → c") == "a b -> c"


def test_reportlab_measure_grows_with_bold_and_size():
    assert reportlab_measure("Brief", 12, True) > reportlab_measure("Brief", 12, False)
    assert reportlab_measure("Brief", 20, False) > reportlab_measure("Brief", 10, False)


def test_first_page_starts_with_title_and_date(monkeypatch):
    captured = {}

    def fake_render(layout, *, title=None):
        captured["layout"] = layout
        return b"%PDF-fake"

    monkeypatch.setattr(pdf_export, "render_pdf", fake_render)
    assert export_brief(BRIEF, locale="en", generated_on=date(2026, 1, 2)) == b"%PDF-fake"

    first, second, third = captured["layout"].pages[0].lines[:3]
    assert first.text == "Project brief"
    assert first.bold
    assert second.text == "Generated on 01/02/2026"
    assert third.text == "Contexte"


def test_generated_label_follows_locale():
    assert generated_label(date(2026, 1, 2), "fr") == "Généré le 02/01/2026"
