"""One-shot consumption of suggested replies for a conversation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from models import Category, Message, Suggestion

logger = logging.getLogger(__name__)


@dataclass
class SelectionState:
    clicked: set[str] = field(default_factory=set)
    committed: set[str] = field(default_factory=set)


class SelectionTracker:
    """Records which suggestions were clicked and which went into the input.

    States per suggestion text are ``Unseen -> Clicked``; ``Clicked`` is
    terminal. Lookups are keyed by text, so the same string offered again in
    a later turn stays hidden.
    """

    def __init__(self) -> None:
        self._state = SelectionState()

    @property
    def clicked(self) -> frozenset[str]:
        return frozenset(self._state.clicked)

    @property
    def committed(self) -> frozenset[str]:
        return frozenset(self._state.committed)

    def is_clicked(self, text: str) -> bool:
        return text in self._state.clicked

    def is_committed(self, text: str) -> bool:
        return text in self._state.committed

    def select(self, suggestion: Suggestion) -> bool:
        """Mark ``suggestion`` clicked; return False when it already was."""

        if suggestion.text in self._state.clicked:
            logger.debug("Ignoring repeated click on %r", suggestion.text)
            return False
        self._state.clicked.add(suggestion.text)
        if suggestion.category is Category.PLAIN:
            self._state.committed.add(suggestion.text)
        return True

    def available(self, suggestions: Iterable[Suggestion]) -> list[Suggestion]:
        return [suggestion for suggestion in suggestions if suggestion.text not in self._state.clicked]


def eligible_assistant_turn(messages: Sequence[Message]) -> int | None:
    """Index of the assistant message whose suggestions may be shown.

    Only the latest assistant turn qualifies, and never the first one of the
    conversation.
    """

    assistant_indexes = [idx for idx, message in enumerate(messages) if message.is_assistant]
    if len(assistant_indexes) < 2:
        return None
    return assistant_indexes[-1]


__all__ = ["SelectionState", "SelectionTracker", "eligible_assistant_turn"]
