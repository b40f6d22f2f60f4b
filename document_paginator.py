"""Lay out a markdown-ish brief as fixed-size pages of styled lines.

Layout runs in two passes. The first classifies and word-wraps every line
and places it on a page; the second stamps each page footer, which needs
the final page count.

All distances are millimetres measured from the top-left corner of the
page, font sizes are points. ``y_position`` is the baseline of a line.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Mapping

from models import Page, PageLayout, StyledLine

PT_TO_MM = 25.4 / 72
LINE_SPACING = 1.4
AVERAGE_GLYPH_EM = 0.5
BOLD_GLYPH_EM = 0.55

A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0
DEFAULT_MARGIN_MM = 20.0

HEADING_SIZES: dict[int, float] = {1: 18.0, 2: 16.0, 3: 14.0, 4: 12.0, 5: 11.0, 6: 10.0}
BODY_SIZE = 9.0
FOOTER_SIZE = 8.0
LIST_INDENT_MM = 6.0
BULLET = "•"

DEFAULT_FOOTER_LABEL = "Brief Assistant"
DEFAULT_PAGE_LABEL = "Page {current} of {total}"

Measure = Callable[[str, float, bool], float]

_HEADING_RE = re.compile(r"^(#{1,6})(?!#)\s*(.*)$")
_BOLD_LINE_RE = re.compile(r"^\*\*(.+)\*\*$")
_BULLET_RE = re.compile(r"^[-*]\s+(.*)$")
_NUMBERED_RE = re.compile(r"^\d+\.\s")
_RULE_RE = re.compile(r"^(?:-{3,}|\*{3,}|_{3,})$")

_LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]*\)")
_CODE_RE = re.compile(r"`([^`]*)`")
_BOLD_RE = re.compile(r"\*\*(.+?)\*\*|__(.+?)__")
_ITALIC_RE = re.compile(r"(?<!\*)\*(?![\s*])(.+?)(?<![\s*])\*(?!\*)|(?<!\w)_(?![\s_])(.+?)(?<![\s_])_(?!\w)")


def approximate_width(text: str, font_size_pt: float, bold: bool = False) -> float:
    """Estimate rendered width from an average Helvetica glyph width."""

    em = BOLD_GLYPH_EM if bold else AVERAGE_GLYPH_EM
    return len(text) * font_size_pt * PT_TO_MM * em


def line_height(font_size_pt: float) -> float:
    return font_size_pt * PT_TO_MM * LINE_SPACING


def _group(match: re.Match[str]) -> str:
    return next(group for group in match.groups() if group is not None)


def strip_bold(text: str) -> str:
    return _BOLD_RE.sub(_group, text).replace("**", "")


def strip_inline(text: str) -> str:
    """Drop bold/italic markers, code ticks and link targets."""

    text = _LINK_RE.sub(r"\1", text)
    text = _CODE_RE.sub(r"\1", text)
    text = strip_bold(text)
    return _ITALIC_RE.sub(_group, text)


@dataclass(frozen=True)
class LineStyle:
    text: str
    font_size_pt: float
    bold: bool = False
    indent: float = 0.0
    heading: bool = False


def classify_line(
    line: str,
    *,
    heading_sizes: Mapping[int, float] = HEADING_SIZES,
    body_size: float = BODY_SIZE,
) -> LineStyle:
    """Style one stripped, non-empty source line."""

    heading = _HEADING_RE.match(line)
    if heading:
        level = len(heading.group(1))
        return LineStyle(strip_bold(heading.group(2)).strip(), heading_sizes[level], bold=True, heading=True)
    bold_line = _BOLD_LINE_RE.match(line)
    if bold_line and "**" not in bold_line.group(1):
        return LineStyle(bold_line.group(1).strip(), heading_sizes[3], bold=True, heading=True)
    bullet = _BULLET_RE.match(line)
    if bullet:
        return LineStyle(f"{BULLET} {strip_inline(bullet.group(1)).strip()}", body_size, indent=LIST_INDENT_MM)
    if _NUMBERED_RE.match(line):
        return LineStyle(strip_bold(line), body_size, indent=LIST_INDENT_MM)
    return LineStyle(strip_inline(line), body_size)


def _fit_prefix(word: str, max_width: float, size: float, bold: bool, measure: Measure) -> int:
    cut = len(word)
    while cut > 1 and measure(word[:cut], size, bold) > max_width:
        cut -= 1
    return cut


def wrap_text(
    text: str,
    max_width: float,
    font_size_pt: float,
    bold: bool = False,
    measure: Measure = approximate_width,
) -> list[str]:
    """Greedy word wrap; words wider than a full line are split."""

    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if measure(candidate, font_size_pt, bold) <= max_width:
            current = candidate
            continue
        if current:
            lines.append(current)
        while len(word) > 1 and measure(word, font_size_pt, bold) > max_width:
            cut = _fit_prefix(word, max_width, font_size_pt, bold, measure)
            lines.append(word[:cut])
            word = word[cut:]
        current = word
    if current:
        lines.append(current)
    return lines


def paginate(
    normalized_text: str,
    page_width: float = A4_WIDTH_MM,
    page_height: float = A4_HEIGHT_MM,
    margin: float = DEFAULT_MARGIN_MM,
    *,
    footer_label: str = DEFAULT_FOOTER_LABEL,
    page_label: str = DEFAULT_PAGE_LABEL,
    measure: Measure = approximate_width,
    heading_sizes: Mapping[int, float] = HEADING_SIZES,
    body_size: float = BODY_SIZE,
    title: str | None = None,
    subtitle: str | None = None,
) -> PageLayout:
    """Split ``normalized_text`` into pages of positioned, styled lines.

    A new page is started before any line whose baseline would fall below
    ``page_height - margin``; the bottom margin holds the two-line footer.
    ``title`` and ``subtitle`` open the first page, followed by one blank
    body line.
    """

    if page_width <= 2 * margin or page_height <= 2 * margin:
        raise ValueError(
            f"Page {page_width}x{page_height} leaves no printable area with a {margin} margin"
        )

    top = margin
    bottom = page_height - margin
    printable_width = page_width - 2 * margin
    blank_advance = line_height(body_size) / 2

    pages: list[Page] = [Page()]
    cursor = top

    def place(style: LineStyle) -> None:
        nonlocal cursor
        step = line_height(style.font_size_pt)
        for segment in wrap_text(style.text, printable_width - style.indent, style.font_size_pt, style.bold, measure):
            if cursor > bottom:
                if pages[-1].lines:
                    pages.append(Page())
                cursor = top
            pages[-1].lines.append(
                StyledLine(
                    text=segment,
                    font_size_pt=style.font_size_pt,
                    bold=style.bold,
                    y_position=cursor,
                    x_position=margin + style.indent,
                )
            )
            cursor += step
        if style.heading:
            cursor += step / 4

    if title:
        place(LineStyle(title, heading_sizes[1], bold=True))
    if subtitle:
        place(LineStyle(subtitle, body_size))
    if pages[-1].lines:
        cursor += 2 * blank_advance

    for raw_line in (normalized_text or "").splitlines():
        stripped = raw_line.strip()
        if not stripped or _RULE_RE.match(stripped):
            if pages[-1].lines:
                cursor += blank_advance
            continue
        style = classify_line(stripped, heading_sizes=heading_sizes, body_size=body_size)
        if style.text:
            place(style)

    total = len(pages)
    footer_step = line_height(FOOTER_SIZE)
    label_y = page_height - margin / 2
    for number, page in enumerate(pages, start=1):
        page.footer = [
            StyledLine(footer_label, FOOTER_SIZE, False, label_y, margin),
            StyledLine(
                page_label.format(current=number, total=total),
                FOOTER_SIZE,
                False,
                label_y + footer_step,
                margin,
            ),
        ]

    return PageLayout(pages=pages, page_width=page_width, page_height=page_height, margin=margin)


__all__ = [
    "A4_HEIGHT_MM",
    "A4_WIDTH_MM",
    "BODY_SIZE",
    "DEFAULT_MARGIN_MM",
    "HEADING_SIZES",
    "LineStyle",
    "approximate_width",
    "classify_line",
    "line_height",
    "paginate",
    "strip_inline",
    "wrap_text",
]
