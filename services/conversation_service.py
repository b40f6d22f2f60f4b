"""Conversation session: the message log, the reply pipeline and click handling."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, MutableMapping

import requests

import document_extractor
import payload_extractor
import suggestion_classifier
from backend_client import ChatBackendClient
from locale_text import LANGUAGE_INSTRUCTIONS, normalize_locale, t
from marker_tables import DEFAULT_MARKERS, DEFAULT_PHRASES, MarkerTable, PhraseTable
from models import (
    ASSISTANT_ROLE,
    USER_ROLE,
    ActionKind,
    AudioRef,
    AudioStatus,
    Category,
    ClassifiedSuggestions,
    DocumentDetection,
    Message,
    ProcessedReply,
    Suggestion,
)
from selection_tracker import SelectionTracker, eligible_assistant_turn
from services.pdf_export import ExportError, export_brief

logger = logging.getLogger(__name__)

_SESSION_KEY = "__conversation_session__"


def process_reply(
    raw_text: str,
    *,
    markers: MarkerTable = DEFAULT_MARKERS,
    phrases: PhraseTable = DEFAULT_PHRASES,
    locale: str = suggestion_classifier.DEFAULT_LOCALE,
) -> ProcessedReply:
    """Run one assistant reply through extraction, detection and classification."""

    extraction = payload_extractor.extract(raw_text)
    document = document_extractor.detect(raw_text, markers=markers)
    suggestions = suggestion_classifier.classify(
        extraction.suggestions,
        document.present,
        phrases=phrases,
        locale=locale,
    )
    return ProcessedReply(extraction=extraction, document=document, suggestions=suggestions)


class ClickEffect(str, Enum):
    IGNORED = "ignored"
    APPEND_TO_INPUT = "append_to_input"
    SEND = "send"
    EXPORT_DOCUMENT = "export_document"
    START_OVER = "start_over"


@dataclass
class ConversationSession:
    """Everything a browser session keeps about one conversation."""

    locale: str = suggestion_classifier.DEFAULT_LOCALE
    markers: MarkerTable = DEFAULT_MARKERS
    phrases: PhraseTable = DEFAULT_PHRASES
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    messages: list[Message] = field(default_factory=list)
    tracker: SelectionTracker = field(default_factory=SelectionTracker)
    pending_input: str = ""
    selected_template: str | None = None
    export_pdf: bytes | None = field(default=None, repr=False)

    # Log -----------------------------------------------------------------
    def append(self, role: str, content: str, *, audio: AudioRef | None = None) -> Message:
        message = Message(role=role, raw_content=content, audio=audio)
        self.messages.append(message)
        if role == ASSISTANT_ROLE:
            self.export_pdf = None
        return message

    def _replace_last(self, message: Message) -> None:
        self.messages[-1] = message

    def reset(self) -> None:
        """Start a fresh conversation; the locale is kept."""

        logger.info("Starting a new conversation (previous session %s)", self.session_id)
        self.session_id = str(uuid.uuid4())
        self.messages = []
        self.tracker = SelectionTracker()
        self.pending_input = ""
        self.selected_template = None
        self.export_pdf = None

    @property
    def has_user_messages(self) -> bool:
        return any(message.role == USER_ROLE for message in self.messages)

    # Reply pipeline ------------------------------------------------------
    def process(self, message: Message) -> ProcessedReply:
        return process_reply(
            message.raw_content,
            markers=self.markers,
            phrases=self.phrases,
            locale=self.locale,
        )

    def latest_reply(self) -> tuple[int, ProcessedReply] | None:
        """The eligible assistant turn and its processed reply, if any."""

        index = eligible_assistant_turn(self.messages)
        if index is None:
            return None
        return index, self.process(self.messages[index])

    def visible_suggestions(self) -> ClassifiedSuggestions:
        latest = self.latest_reply()
        if latest is None:
            return ClassifiedSuggestions()
        suggestions = latest[1].suggestions
        return ClassifiedSuggestions(
            plain=tuple(self.tracker.available(suggestions.plain)),
            confirmatory=tuple(self.tracker.available(suggestions.confirmatory)),
            action=tuple(self.tracker.available(suggestions.action)),
        )

    def latest_document(self) -> DocumentDetection:
        """Brief carried by the most recent assistant message."""

        for message in reversed(self.messages):
            if message.role == ASSISTANT_ROLE:
                return document_extractor.detect(message.raw_content, markers=self.markers)
        return DocumentDetection.absent()

    # Interaction ---------------------------------------------------------
    def click(self, suggestion: Suggestion) -> ClickEffect:
        """Consume ``suggestion`` and report what the caller should do next.

        Export is never consumed: it stays offered while the latest reply
        carries a brief, so a failed export can be retried.
        """

        if suggestion.action is ActionKind.EXPORT_DOCUMENT:
            return ClickEffect.EXPORT_DOCUMENT
        if not self.tracker.select(suggestion):
            return ClickEffect.IGNORED
        if suggestion.category is Category.PLAIN:
            self.pending_input = merge_input(self.pending_input, suggestion.text)
            return ClickEffect.APPEND_TO_INPUT
        if suggestion.action is ActionKind.START_OVER:
            return ClickEffect.START_OVER
        return ClickEffect.SEND

    def export_latest(self, exporter: Callable[..., bytes] = export_brief) -> bytes:
        """Render the brief of the latest assistant reply; raises :class:`ExportError`."""

        detection = self.latest_document()
        if not detection.present or not detection.normalized_text:
            raise ExportError(t("pdf.no_content", self.locale))
        self.export_pdf = exporter(detection.normalized_text, locale=self.locale)
        return self.export_pdf

    def outgoing_text(self, text: str) -> str:
        """Attach the hidden language hint to the conversation's first message."""

        if self.has_user_messages:
            return text
        instruction = LANGUAGE_INSTRUCTIONS.get(normalize_locale(self.locale))
        return f"{text} {instruction}".strip() if instruction else text

    def send(
        self,
        client: ChatBackendClient,
        text: str,
        *,
        selected_template: str | None = None,
    ) -> Message:
        """Send a user turn and append the assistant reply.

        On a transport failure the fallback reply is appended and the error
        re-raised for the caller to report.
        """

        if selected_template:
            self.selected_template = selected_template
        outgoing = self.outgoing_text(text.strip())
        self.append(USER_ROLE, outgoing)
        try:
            reply = client.ask(
                outgoing,
                self.session_id,
                language=self.locale,
                selected_template=selected_template,
            )
        except requests.RequestException:
            self.append(ASSISTANT_ROLE, t("error.chat", self.locale))
            raise
        return self.append(ASSISTANT_ROLE, reply)

    def send_audio(
        self,
        client: ChatBackendClient,
        filename: str,
        data: bytes,
        *,
        content_type: str = "audio/wav",
    ) -> Message:
        """Upload a voice message, then let the backend transcribe and answer it."""

        label = t("voice_message", self.locale)
        self.append(USER_ROLE, label, audio=AudioRef(filename=filename, data=data))
        try:
            audio_url = client.upload_audio(filename, data, content_type=content_type)
            self._replace_last(
                Message(
                    USER_ROLE,
                    label,
                    audio=AudioRef(filename, AudioStatus.UPLOADED, url=audio_url, data=data),
                )
            )
            reply = client.ask("", self.session_id, audio_url=audio_url, language=self.locale)
        except Exception:
            last = self.messages[-1]
            if last.role == USER_ROLE and last.audio is not None:
                self._replace_last(
                    Message(
                        USER_ROLE,
                        label,
                        audio=AudioRef(filename, AudioStatus.ERROR, url=last.audio.url, data=data),
                    )
                )
            self.append(ASSISTANT_ROLE, t("error.audio", self.locale))
            raise
        return self.append(ASSISTANT_ROLE, reply)


def merge_input(current: str, addition: str) -> str:
    current = (current or "").strip()
    if not current:
        return addition
    return f"{current}, {addition}"


def get_session(
    session_state: MutableMapping[str, Any],
    *,
    locale: str | None = None,
    markers: MarkerTable = DEFAULT_MARKERS,
) -> ConversationSession:
    """Return the conversation cached in ``session_state``, creating it once."""

    session = session_state.get(_SESSION_KEY)
    if not isinstance(session, ConversationSession):
        session = ConversationSession(locale=normalize_locale(locale), markers=markers)
        session_state[_SESSION_KEY] = session
    return session


__all__ = [
    "ClickEffect",
    "ConversationSession",
    "get_session",
    "merge_input",
    "process_reply",
]
