"""Chat tab renderer."""

from __future__ import annotations

from typing import Sequence

import streamlit as st

import payload_extractor
from models import Message
from ui_components import render_message


def render_tab(messages: Sequence[Message] | None, *, locale: str | None = None, st_module=st) -> None:
    """Render the conversation log, oldest first."""

    for message in messages or ():
        clean_content = None
        if message.is_assistant:
            clean_content = payload_extractor.extract(message.raw_content).clean_content
        render_message(message, clean_content=clean_content, locale=locale, st_module=st_module)
