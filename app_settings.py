"""Application configuration helpers for Streamlit surfaces."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

import streamlit as st

from locale_text import normalize_locale
from marker_tables import DEFAULT_MARKERS, MarkerTable, load_marker_overrides

DEFAULT_CHAT_BASE_URL = "http://localhost:5678"
DEFAULT_WEBHOOK_ID = "brief-assistant"
DEFAULT_CHAT_TIMEOUT = 600


class ConfigurationError(RuntimeError):
    """Raised when a feature is used without the settings it needs."""


@dataclass(frozen=True)
class AppSettings:
    """Immutable configuration bundle for the brief assistant."""

    chat_base_url: str
    chat_webhook_id: str
    chat_timeout: int
    audio_upload_url: str | None
    audio_upload_key: str | None
    default_locale: str
    enable_audio: bool
    markers: MarkerTable = field(default=DEFAULT_MARKERS)


def _safe_secret(key: str) -> Any:
    """Return a Streamlit secret when available."""

    try:
        return st.secrets.get(key)
    except Exception:
        return None


def _setting(key: str, default: Any = None) -> Any:
    value = _safe_secret(key)
    if value is None or value == "":
        value = os.getenv(key)
    if value is None or value == "":
        return default
    return value


def _coerce_bool(value: Any, default: bool = False) -> bool:
    """Parse truthy/falsey strings and primitives into booleans."""

    if isinstance(value, bool):
        return value
    if value is None:
        return default
    if isinstance(value, (int, float)):
        return bool(value)
    text = str(value).strip().lower()
    if not text:
        return default
    if text in {"1", "true", "yes", "on", "enabled", "enable"}:
        return True
    if text in {"0", "false", "no", "off", "disabled", "disable"}:
        return False
    return default


def _coerce_int(value: Any, default: int) -> int:
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def load_settings() -> AppSettings:
    """Collect runtime configuration from environment and secrets."""

    base_url = str(_setting("BRIEF_CHAT_BASE_URL", DEFAULT_CHAT_BASE_URL))
    audio_url = _setting("BRIEF_AUDIO_UPLOAD_URL")
    overrides = load_marker_overrides(_setting("BRIEF_MARKERS"))
    return AppSettings(
        chat_base_url=base_url.rstrip("/"),
        chat_webhook_id=str(_setting("BRIEF_CHAT_WEBHOOK_ID", DEFAULT_WEBHOOK_ID)).strip("/"),
        chat_timeout=_coerce_int(_setting("BRIEF_CHAT_TIMEOUT"), DEFAULT_CHAT_TIMEOUT),
        audio_upload_url=str(audio_url) if audio_url else None,
        audio_upload_key=_setting("BRIEF_AUDIO_UPLOAD_KEY"),
        default_locale=normalize_locale(_setting("BRIEF_DEFAULT_LOCALE")),
        enable_audio=_coerce_bool(_setting("BRIEF_ENABLE_AUDIO"), default=True),
        markers=DEFAULT_MARKERS.merged(overrides),
    )


__all__ = ["AppSettings", "ConfigurationError", "load_settings"]
