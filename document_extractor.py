"""Brief detection for assistant replies.

The check is a heuristic over known section headings, not a markdown parse:
a reply counts as a brief when it holds one of the heading markers, either
inline or inside a JSON ``brief`` field.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Sequence

from embedded_json import find_embedded_json
from marker_tables import DEFAULT_MARKERS, MarkerTable
from models import DocumentDetection

logger = logging.getLogger(__name__)

# ``brief_text`` is what earlier revisions of the chat workflow emitted.
DEFAULT_BRIEF_KEYS: tuple[str, ...] = ("brief", "brief_text")

_SEPARATED_BLOCK_RE = re.compile(r"---\s*\n\s*\n([\s\S]*?)\n\s*\n---")
_ESCAPES = (("\\r\\n", "\n"), ("\\n", "\n"), ("\\t", "\t"))


def unescape_brief(value: str) -> str:
    """Turn literal ``\\n`` sequences left by the model into real line breaks."""

    for literal, replacement in _ESCAPES:
        value = value.replace(literal, replacement)
    return value.strip()


def separated_block(text: str) -> str | None:
    """Return the block framed by ``---`` rules and blank lines, if any."""

    match = _SEPARATED_BLOCK_RE.search(text)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return None


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def extract_brief_field(raw_text: str | None, *, keys: Sequence[str] = DEFAULT_BRIEF_KEYS) -> str | None:
    """Return the unescaped value of an embedded JSON brief field."""

    for key in keys:
        try:
            found = find_embedded_json(raw_text, key, accept=_is_text)
        except Exception:
            logger.exception("Brief field scan failed for key %r", key)
            continue
        if found is not None:
            return unescape_brief(found.payload[key])
    return None


def detect(
    raw_text: str | None,
    *,
    markers: MarkerTable = DEFAULT_MARKERS,
    keys: Sequence[str] = DEFAULT_BRIEF_KEYS,
) -> DocumentDetection:
    text = "" if raw_text is None else str(raw_text)
    if not text:
        return DocumentDetection.absent()

    brief = extract_brief_field(text, keys=keys)
    if brief and markers.first_marker_in(brief):
        return DocumentDetection(present=True, normalized_text=brief)
    if brief:
        logger.debug("Brief field found without any known section heading")

    marker = markers.first_marker_in(text)
    if marker is None:
        return DocumentDetection.absent()
    logger.debug("Inline brief detected via marker %r", marker)
    return DocumentDetection(present=True, normalized_text=separated_block(text) or text)


__all__ = [
    "DEFAULT_BRIEF_KEYS",
    "detect",
    "extract_brief_field",
    "separated_block",
    "unescape_brief",
]
