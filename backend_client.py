"""Thin client for the chat webhook and the audio storage bucket."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Mapping

import requests

from app_settings import AppSettings, ConfigurationError, DEFAULT_CHAT_BASE_URL, DEFAULT_CHAT_TIMEOUT

logger = logging.getLogger(__name__)

AUDIO_UPLOAD_TIMEOUT = 60


def reply_text(body: Any) -> str:
    """Pick the assistant text out of a webhook response body.

    ``output`` wins, then ``data``; anything else is shown as its JSON.
    """

    if isinstance(body, Mapping):
        for field_name in ("output", "data"):
            value = body.get(field_name)
            if value is not None:
                return value if isinstance(value, str) else json.dumps(value, ensure_ascii=False)
    if isinstance(body, str):
        return body
    return json.dumps(body, ensure_ascii=False)


def build_chat_payload(
    *,
    message: str,
    session_id: str,
    audio_url: str | None = None,
    language: str | None = None,
    selected_template: str | None = None,
    metadata: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Return the JSON body the chat webhook expects."""

    payload: dict[str, Any] = {"message": message, "sessionId": session_id}
    if metadata:
        payload["metadata"] = dict(metadata)
    if audio_url:
        payload["audio_url"] = audio_url
    if language:
        payload["language"] = language
    if selected_template:
        payload["selected_template"] = selected_template
    return payload


@dataclass
class ChatBackendClient:
    """REST client for the chat workflow webhook."""

    base_url: str = DEFAULT_CHAT_BASE_URL
    webhook_id: str = "brief-assistant"
    timeout: int = DEFAULT_CHAT_TIMEOUT
    audio_upload_url: str | None = None
    audio_upload_key: str | None = None

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "ChatBackendClient":
        return cls(
            base_url=settings.chat_base_url,
            webhook_id=settings.chat_webhook_id,
            timeout=settings.chat_timeout,
            audio_upload_url=settings.audio_upload_url,
            audio_upload_key=settings.audio_upload_key,
        )

    @property
    def chat_url(self) -> str:
        return f"{self.base_url}/webhook/{self.webhook_id}/chat"

    # Internal helpers -----------------------------------------------------
    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            response = requests.request(method=method, url=url, **kwargs)
            response.raise_for_status()
        except requests.RequestException:
            logger.exception("Request to %s failed", url)
            raise
        return response

    # Public API -----------------------------------------------------------
    def send_message(
        self,
        message: str,
        session_id: str,
        *,
        audio_url: str | None = None,
        language: str | None = None,
        selected_template: str | None = None,
    ) -> Mapping[str, Any]:
        payload = build_chat_payload(
            message=message,
            session_id=session_id,
            audio_url=audio_url,
            language=language,
            selected_template=selected_template,
        )
        response = self._request(
            "post",
            self.chat_url,
            json=payload,
            headers={"content-type": "application/json"},
            timeout=self.timeout,
        )
        try:
            body = response.json()
        except ValueError:
            return {"output": response.text}
        return body if isinstance(body, Mapping) else {"data": body}

    def ask(self, message: str, session_id: str, **kwargs: Any) -> str:
        """Send ``message`` and return the raw assistant reply text."""

        return reply_text(self.send_message(message, session_id, **kwargs))

    def upload_audio(
        self,
        filename: str,
        data: bytes,
        *,
        content_type: str = "audio/wav",
        timestamp_ms: int | None = None,
    ) -> str:
        """Store a voice message and return its public URL."""

        if not self.audio_upload_url:
            raise ConfigurationError("BRIEF_AUDIO_UPLOAD_URL is not configured")
        if not self.audio_upload_key:
            raise ConfigurationError("BRIEF_AUDIO_UPLOAD_KEY is not configured")
        stamp = timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)
        url = f"{self.audio_upload_url}audio_{stamp}_{filename}"
        self._request(
            "post",
            url,
            data=data,
            headers={
                "Authorization": f"Bearer {self.audio_upload_key}",
                "Content-Type": content_type,
            },
            timeout=AUDIO_UPLOAD_TIMEOUT,
        )
        return url


__all__ = ["ChatBackendClient", "build_chat_payload", "reply_text"]
