"""Shared dataclasses for the chat surface and the reply pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

USER_ROLE = "user"
ASSISTANT_ROLE = "assistant"


class AudioStatus(str, Enum):
    UPLOADING = "uploading"
    UPLOADED = "uploaded"
    ERROR = "error"


class Category(str, Enum):
    PLAIN = "plain"
    CONFIRMATORY = "confirmatory"
    ACTION = "action"


class ActionKind(str, Enum):
    EXPORT_DOCUMENT = "export_document"
    START_OVER = "start_over"


class Origin(str, Enum):
    NATURAL = "natural"
    SYNTHESIZED = "synthesized"


@dataclass(frozen=True)
class AudioRef:
    """Voice message attached to a user turn."""

    filename: str
    status: AudioStatus = AudioStatus.UPLOADING
    url: str | None = None
    data: bytes | None = field(default=None, repr=False)


@dataclass(frozen=True)
class Message:
    """One entry of the conversation log."""

    role: str
    raw_content: str
    audio: AudioRef | None = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Message":
        role = str(payload.get("role") or USER_ROLE)
        content = payload.get("content")
        if content is None:
            content = payload.get("raw_content")
        return cls(role=role, raw_content="" if content is None else str(content))

    @property
    def is_assistant(self) -> bool:
        return self.role == ASSISTANT_ROLE

    def asdict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"role": self.role, "content": self.raw_content}
        if self.audio is not None:
            payload["audio"] = {
                "filename": self.audio.filename,
                "status": self.audio.status.value,
                "url": self.audio.url,
            }
        return payload


@dataclass(frozen=True)
class ExtractionResult:
    """Reply text with the embedded suggestion payload removed."""

    clean_content: str
    suggestions: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DocumentDetection:
    """Whether a reply carries a brief, and its normalized text."""

    present: bool
    normalized_text: str | None = None

    @classmethod
    def absent(cls) -> "DocumentDetection":
        return cls(present=False)


@dataclass(frozen=True, eq=False)
class Suggestion:
    """A reply option rendered beneath an assistant message.

    Identity is the suggestion text; ``key`` is the stable widget identifier
    and keeps synthesized entries apart from the ones the model produced.
    """

    text: str
    category: Category = Category.PLAIN
    origin: Origin = Origin.NATURAL
    index: int = 0
    is_affirmative: bool | None = None
    action: ActionKind | None = None

    @property
    def key(self) -> str:
        return f"{self.origin.value}:{self.index}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Suggestion):
            return NotImplemented
        return self.text == other.text

    def __hash__(self) -> int:
        return hash(self.text)


@dataclass(frozen=True)
class ClassifiedSuggestions:
    """Suggestions partitioned into disjoint behavioral buckets."""

    plain: tuple[Suggestion, ...] = field(default_factory=tuple)
    confirmatory: tuple[Suggestion, ...] = field(default_factory=tuple)
    action: tuple[Suggestion, ...] = field(default_factory=tuple)

    def all(self) -> tuple[Suggestion, ...]:
        return self.plain + self.confirmatory + self.action

    def __bool__(self) -> bool:
        return bool(self.plain or self.confirmatory or self.action)


@dataclass(frozen=True)
class StyledLine:
    text: str
    font_size_pt: float
    bold: bool
    y_position: float
    x_position: float = 0.0


@dataclass
class Page:
    lines: list[StyledLine] = field(default_factory=list)
    footer: list[StyledLine] = field(default_factory=list)


@dataclass
class PageLayout:
    """Pages of positioned lines, in millimetres from the top-left corner."""

    pages: list[Page] = field(default_factory=list)
    page_width: float = 0.0
    page_height: float = 0.0
    margin: float = 0.0

    @property
    def page_count(self) -> int:
        return len(self.pages)


@dataclass(frozen=True)
class ProcessedReply:
    """Everything the renderer needs for one assistant message."""

    extraction: ExtractionResult
    document: DocumentDetection
    suggestions: ClassifiedSuggestions


__all__ = [
    "ASSISTANT_ROLE",
    "USER_ROLE",
    "ActionKind",
    "AudioRef",
    "AudioStatus",
    "Category",
    "ClassifiedSuggestions",
    "DocumentDetection",
    "ExtractionResult",
    "Message",
    "Origin",
    "Page",
    "PageLayout",
    "ProcessedReply",
    "StyledLine",
    "Suggestion",
]
