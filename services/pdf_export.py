"""Serialize a paginated brief to PDF bytes with ReportLab."""

from __future__ import annotations

import io
import logging
from datetime import date

from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from document_paginator import A4_HEIGHT_MM, A4_WIDTH_MM, DEFAULT_MARGIN_MM, Measure, paginate
from locale_text import t
from models import PageLayout, StyledLine

logger = logging.getLogger(__name__)

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
EXPORT_FILENAME = "project-brief.pdf"

# Standard Type 1 fonts only carry the WinAnsi (cp1252) glyph set.
_PDF_ENCODING = "cp1252"
_GLYPH_FALLBACKS = str.maketrans({"\u202f": " ", "\u2009": " ", "→": "->"})


class ExportError(RuntimeError):
    """Raised when the PDF for a brief cannot be produced."""


def pdf_safe(text: str) -> str:
    return text.translate(_GLYPH_FALLBACKS).encode(_PDF_ENCODING, "replace").decode(_PDF_ENCODING)


def _font(bold: bool) -> str:
    return FONT_BOLD if bold else FONT_REGULAR


def reportlab_measure(text: str, font_size_pt: float, bold: bool) -> float:
    """Rendered width in millimetres, from the real Helvetica metrics."""

    return stringWidth(pdf_safe(text), _font(bold), font_size_pt) / mm


def _draw(pdf: canvas.Canvas, line: StyledLine, page_height: float) -> None:
    pdf.setFont(_font(line.bold), line.font_size_pt)
    pdf.drawString(line.x_position * mm, (page_height - line.y_position) * mm, pdf_safe(line.text))


def render_pdf(layout: PageLayout, *, title: str | None = None) -> bytes:
    """Draw every page of ``layout`` and return the document bytes."""

    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=(layout.page_width * mm, layout.page_height * mm))
    if title:
        pdf.setTitle(title)
    for page in layout.pages:
        for line in page.lines:
            _draw(pdf, line, layout.page_height)
        for line in page.footer:
            _draw(pdf, line, layout.page_height)
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def generated_label(day: date, locale: str | None = None) -> str:
    return t("pdf.generated_on", locale, date=day.strftime(t("pdf.date_format", locale)))


def export_brief(
    normalized_text: str,
    *,
    locale: str | None = None,
    page_width: float = A4_WIDTH_MM,
    page_height: float = A4_HEIGHT_MM,
    margin: float = DEFAULT_MARGIN_MM,
    measure: Measure = reportlab_measure,
    generated_on: date | None = None,
) -> bytes:
    """Paginate ``normalized_text`` under a title and date line and render it.

    Failures raise :class:`ExportError`.
    """

    if not (normalized_text or "").strip():
        raise ExportError(t("pdf.no_content", locale))
    try:
        layout = paginate(
            normalized_text,
            page_width,
            page_height,
            margin,
            footer_label=t("pdf.footer", locale),
            page_label=t("pdf.page", locale),
            measure=measure,
            title=t("pdf.title", locale),
            subtitle=generated_label(generated_on or date.today(), locale),
        )
        payload = render_pdf(layout, title=t("pdf.title", locale))
    except (UnicodeError, ValueError, KeyError) as exc:
        logger.exception("PDF rendering failed")
        raise ExportError(str(exc)) from exc
    logger.info("Exported brief: %d pages, %d bytes", layout.page_count, len(payload))
    return payload


__all__ = [
    "EXPORT_FILENAME",
    "ExportError",
    "export_brief",
    "generated_label",
    "pdf_safe",
    "render_pdf",
    "reportlab_measure",
]
