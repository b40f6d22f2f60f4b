"""Reusable Streamlit UI primitives."""

from __future__ import annotations

from typing import Any, Callable, Sequence

import streamlit as st

from locale_text import TEMPLATES, strip_language_instruction, t
from models import ASSISTANT_ROLE, Category, ClassifiedSuggestions, Message, Suggestion

SuggestionHandler = Callable[[Suggestion], None]


def display_text(message: Message, clean_content: str | None = None) -> str:
    """Text shown in a bubble: payload removed, language hint hidden."""

    content = message.raw_content if clean_content is None else clean_content
    return strip_language_instruction(content)


def button_type(suggestion: Suggestion) -> str:
    if suggestion.category is Category.ACTION:
        return "primary"
    return "secondary"


def button_label(suggestion: Suggestion) -> str:
    if suggestion.category is Category.CONFIRMATORY:
        return f"{'✅' if suggestion.is_affirmative else '✏️'} {suggestion.text}"
    return suggestion.text


def ordered_suggestions(classified: ClassifiedSuggestions) -> list[Suggestion]:
    """Render order: confirmations first, then plain answers, then actions."""

    return [*classified.confirmatory, *classified.plain, *classified.action]


def render_message(
    message: Message,
    *,
    clean_content: str | None = None,
    locale: str | None = None,
    st_module=st,
) -> None:
    """Render one chat bubble, including voice message status."""

    with st_module.chat_message(message.role):
        if message.audio is not None:
            if message.audio.data:
                st_module.audio(message.audio.data)
            st_module.caption(t(f"audio.{message.audio.status.value}", locale))
            return
        text = display_text(message, clean_content)
        if text:
            st_module.markdown(text)


def render_suggestions(
    classified: ClassifiedSuggestions,
    *,
    on_select: SuggestionHandler,
    turn_index: int,
    locale: str | None = None,
    disabled: bool = False,
    st_module=st,
) -> None:
    """Render the quick answers of the eligible assistant turn."""

    suggestions = ordered_suggestions(classified)
    if not suggestions:
        return
    st_module.caption(f"{t('quick_answers', locale)} 💡")
    columns = st_module.columns(min(len(suggestions), 3))
    for position, suggestion in enumerate(suggestions):
        column = columns[position % len(columns)]
        column.button(
            button_label(suggestion),
            key=f"suggestion-{turn_index}-{suggestion.key}",
            type=button_type(suggestion),
            disabled=disabled,
            on_click=on_select,
            args=(suggestion,),
        )


def render_templates(
    *,
    on_select: Callable[[str, str], None],
    locale: str | None = None,
    st_module=st,
) -> None:
    """Greeting bubble with the storytelling template choices."""

    with st_module.chat_message(ASSISTANT_ROLE):
        st_module.markdown(t("greeting", locale))
        st_module.markdown(t("template_question", locale))
        for template_id, label_key in TEMPLATES:
            label = t(label_key, locale)
            st_module.button(
                label,
                key=f"template-{template_id}",
                on_click=on_select,
                args=(template_id, label),
            )


def render_help_prompts(
    prompts: Sequence[str],
    *,
    on_select: Callable[[str], Any],
    disabled: bool = False,
    st_module=st,
) -> None:
    """Small helper buttons beside the input, sent as-is when clicked."""

    if not prompts:
        return
    columns = st_module.columns(len(prompts))
    for index, (column, prompt) in enumerate(zip(columns, prompts)):
        column.button(
            prompt,
            key=f"help-prompt-{index}",
            disabled=disabled,
            on_click=on_select,
            args=(prompt,),
        )


__all__ = [
    "button_label",
    "button_type",
    "display_text",
    "ordered_suggestions",
    "render_help_prompts",
    "render_message",
    "render_suggestions",
    "render_templates",
]
