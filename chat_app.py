"""Streamlit surface of the brief assistant."""

from __future__ import annotations

import hashlib
import logging

import requests
import streamlit as st

from app_settings import ConfigurationError, load_settings
from backend_client import ChatBackendClient
from locale_text import LANGUAGE_NAMES, SUPPORTED_LOCALES, help_prompts, t
from models import Suggestion
from services.conversation_service import ClickEffect, ConversationSession, get_session
from services.pdf_export import EXPORT_FILENAME, ExportError
from tabs import chat as chat_tab
from ui_components import render_help_prompts, render_suggestions, render_templates
from utils_streamlit import show_api_error, trigger_rerun

logger = logging.getLogger(__name__)

SETTINGS = load_settings()
CLIENT = ChatBackendClient.from_settings(SETTINGS)

DRAFT_KEY = "draft_input"
ERROR_KEY = "last_error"
AUDIO_DIGEST_KEY = "last_audio_digest"


def _session() -> ConversationSession:
    return get_session(st.session_state, locale=SETTINGS.default_locale, markers=SETTINGS.markers)


def _report(exc: Exception) -> None:
    # Callbacks run before the page body, so errors are shown on the next render.
    st.session_state[ERROR_KEY] = exc


def _send(text: str, *, selected_template: str | None = None) -> None:
    session = _session()
    if not text.strip():
        return
    try:
        session.send(CLIENT, text, selected_template=selected_template)
    except requests.RequestException as exc:
        logger.warning("Chat turn failed for session %s: %s", session.session_id, exc)
        _report(exc)


def _on_template(template_id: str, label: str) -> None:
    session = _session()
    _send(t("lets_start", session.locale, template=label), selected_template=template_id)


def _on_submit() -> None:
    session = _session()
    text = st.session_state.get(DRAFT_KEY, "")
    session.pending_input = ""
    st.session_state[DRAFT_KEY] = ""
    _send(text)


def _export_latest() -> None:
    session = _session()
    if not session.latest_document().present:
        _report(ExportError(t("pdf.no_content", session.locale)))
        return
    try:
        session.export_latest()
    except ExportError as exc:
        logger.warning("Brief export failed: %s", exc)
        _report(ExportError(t("error.export", session.locale)))


def _on_suggestion(suggestion: Suggestion) -> None:
    session = _session()
    session.pending_input = st.session_state.get(DRAFT_KEY, session.pending_input)
    effect = session.click(suggestion)
    if effect is ClickEffect.APPEND_TO_INPUT:
        st.session_state[DRAFT_KEY] = session.pending_input
    elif effect is ClickEffect.SEND:
        _send(suggestion.text)
    elif effect is ClickEffect.EXPORT_DOCUMENT:
        _export_latest()
    elif effect is ClickEffect.START_OVER:
        session.reset()
        st.session_state[DRAFT_KEY] = ""


def _on_locale_change() -> None:
    _session().locale = st.session_state["locale_choice"]


def _render_language_selector(session: ConversationSession) -> None:
    st.sidebar.selectbox(
        "Language / Langue",
        SUPPORTED_LOCALES,
        index=SUPPORTED_LOCALES.index(session.locale) if session.locale in SUPPORTED_LOCALES else 0,
        format_func=lambda code: LANGUAGE_NAMES.get(code, code),
        key="locale_choice",
        on_change=_on_locale_change,
    )


def _render_errors() -> None:
    error = st.session_state.pop(ERROR_KEY, None)
    if error is None:
        return
    if isinstance(error, requests.RequestException):
        show_api_error(error)
    else:
        st.error(str(error))


def _maybe_send_audio(session: ConversationSession) -> None:
    recorder = getattr(st, "audio_input", None)
    if not SETTINGS.enable_audio or recorder is None:
        return
    recording = recorder(t("voice_message", session.locale), key="voice_recorder")
    if recording is None:
        return
    data = recording.getvalue()
    digest = hashlib.sha1(data).hexdigest()
    if st.session_state.get(AUDIO_DIGEST_KEY) == digest:
        return
    st.session_state[AUDIO_DIGEST_KEY] = digest
    with st.spinner(t("thinking", session.locale)):
        try:
            session.send_audio(
                CLIENT,
                getattr(recording, "name", None) or "voice.wav",
                data,
                content_type=getattr(recording, "type", None) or "audio/wav",
            )
        except (requests.RequestException, ConfigurationError) as exc:
            logger.warning("Voice message failed for session %s: %s", session.session_id, exc)
            _report(exc)
    trigger_rerun()


def _render_export(session: ConversationSession) -> None:
    payload = session.export_pdf
    if not payload:
        return
    st.download_button(
        t("pdf.download", session.locale),
        data=payload,
        file_name=EXPORT_FILENAME,
        mime="application/pdf",
        key="brief-pdf-download",
    )


def main() -> None:
    st.set_page_config(page_title="Brief Assistant", page_icon="📝")
    session = _session()
    _render_language_selector(session)
    st.title(t("title", session.locale))

    if not session.messages:
        render_templates(on_select=_on_template, locale=session.locale)
    chat_tab.render_tab(session.messages, locale=session.locale)
    _render_errors()

    latest = session.latest_reply()
    if latest is not None:
        turn_index, _ = latest
        render_suggestions(
            session.visible_suggestions(),
            on_select=_on_suggestion,
            turn_index=turn_index,
            locale=session.locale,
        )
    _render_export(session)

    st.session_state.setdefault(DRAFT_KEY, session.pending_input)
    st.text_input(
        t("input_placeholder", session.locale),
        key=DRAFT_KEY,
        placeholder=t("input_placeholder", session.locale),
        label_visibility="collapsed",
    )
    st.button(t("send", session.locale), type="primary", on_click=_on_submit)
    if session.messages:
        render_help_prompts(help_prompts(session.locale), on_select=_send)
    _maybe_send_audio(session)


if __name__ == "__main__":  # pragma: no cover
    main()
