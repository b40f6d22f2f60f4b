"""Locate a JSON object embedded in free-form model output.

Replies mix prose with a JSON fragment, sometimes fenced in a ```json block,
sometimes inline. ``find_embedded_json`` returns the first object that parses
and carries the requested key, together with the span of text it came from
so callers can cut it out of the reply.

Fences labelled ``json`` are paired first, so a stray ``` earlier in the
reply does not shift the pairing of the payload fence. Unlabelled fences
are still paired left to right.

Known limitation: the backward search for the enclosing brace is not
string-aware, and the last-resort pattern stops at the first ``}`` after the
key. A payload whose values contain braces can therefore be missed or
truncated. Tightening this would change which replies are treated as
carrying a payload, so it is left as is.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping

logger = logging.getLogger(__name__)

_LABELLED_FENCE_RE = re.compile(r"```[ \t]*(?:json|JSON)\b(.*?)```", re.DOTALL)
_FENCE_RE = re.compile(r"```[ \t]*(?:json|JSON)?[ \t]*(.*?)```", re.DOTALL)

Acceptor = Callable[[Any], bool]


@dataclass(frozen=True)
class EmbeddedJson:
    """Parsed object plus the ``[start, end)`` span of the block it came from."""

    payload: Mapping[str, Any]
    start: int
    end: int
    fenced: bool = False

    def remove_from(self, text: str) -> str:
        """Cut the block out of ``text``, repeated copies of it included."""

        block = text[self.start : self.end]
        return (text[: self.start] + text[self.end :].replace(block, "")).strip()


def _quoted(key: str) -> str:
    return json.dumps(key)


def _legacy_pattern(key: str) -> re.Pattern[str]:
    return re.compile(r"\{[\s\S]*" + re.escape(_quoted(key)) + r"[\s\S]*?\}")


def _enclosing_brace(text: str, pos: int) -> int:
    depth = 0
    for idx in range(pos - 1, -1, -1):
        char = text[idx]
        if char == "}":
            depth += 1
        elif char == "{":
            if depth == 0:
                return idx
            depth -= 1
    return -1


def _balanced_end(text: str, start: int) -> int:
    depth = 0
    in_string = False
    escaped = False
    for idx in range(start, len(text)):
        char = text[idx]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return idx + 1
    return -1


def _load(candidate: str, key: str, accept: Acceptor | None) -> Mapping[str, Any] | None:
    try:
        payload = json.loads(candidate)
    except ValueError as exc:
        logger.debug("Embedded JSON candidate for %r did not parse: %s", key, exc)
        return None
    if not isinstance(payload, dict) or key not in payload:
        return None
    if accept is not None and not accept(payload[key]):
        logger.debug("Embedded JSON field %r rejected: %r", key, type(payload[key]).__name__)
        return None
    return payload


def _locate(text: str, key: str, accept: Acceptor | None) -> tuple[Mapping[str, Any], int, int] | None:
    quoted = _quoted(key)
    tried: set[int] = set()
    pos = text.find(quoted)
    while pos != -1:
        start = _enclosing_brace(text, pos)
        if start != -1 and start not in tried:
            tried.add(start)
            end = _balanced_end(text, start)
            if end != -1:
                payload = _load(text[start:end], key, accept)
                if payload is not None:
                    return payload, start, end
        pos = text.find(quoted, pos + len(quoted))

    match = _legacy_pattern(key).search(text)
    if match:
        payload = _load(match.group(0), key, accept)
        if payload is not None:
            return payload, match.start(), match.end()
    return None


def find_embedded_json(
    text: str | None,
    key: str,
    *,
    accept: Acceptor | None = None,
) -> EmbeddedJson | None:
    """Return the first embedded object holding ``key``, fenced blocks first.

    ``accept`` can veto a candidate based on the value stored under ``key``;
    a vetoed candidate falls through to the next one.
    """

    if not text or _quoted(key) not in text:
        return None

    for pattern in (_LABELLED_FENCE_RE, _FENCE_RE):
        for fence in pattern.finditer(text):
            body = fence.group(1)
            if _quoted(key) not in body:
                continue
            located = _locate(body, key, accept)
            if located is not None:
                return EmbeddedJson(payload=located[0], start=fence.start(), end=fence.end(), fenced=True)

    located = _locate(text, key, accept)
    if located is not None:
        payload, start, end = located
        return EmbeddedJson(payload=payload, start=start, end=end)
    return None


__all__ = ["EmbeddedJson", "find_embedded_json"]
