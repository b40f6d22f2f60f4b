from models import ASSISTANT_ROLE, USER_ROLE, ActionKind, Category, Message, Suggestion
from selection_tracker import SelectionTracker, eligible_assistant_turn


def _messages(*roles: str) -> list[Message]:
    return [Message(role=role, raw_content=f"turn {idx}") for idx, role in enumerate(roles)]


def test_second_click_is_a_noop() -> None:
    tracker = SelectionTracker()
    suggestion = Suggestion("Add a deadline")
    assert tracker.select(suggestion) is True
    assert tracker.select(suggestion) is False
    assert tracker.clicked == frozenset({"Add a deadline"})
    assert tracker.committed == frozenset({"Add a deadline"})


def test_only_plain_suggestions_are_committed() -> None:
    tracker = SelectionTracker()
    tracker.select(Suggestion("Tout est correct", Category.CONFIRMATORY, is_affirmative=True))
    tracker.select(Suggestion("Download as PDF", Category.ACTION, action=ActionKind.EXPORT_DOCUMENT))
    tracker.select(Suggestion("Add risks"))
    assert tracker.is_clicked("Tout est correct")
    assert not tracker.is_committed("Tout est correct")
    assert not tracker.is_committed("Download as PDF")
    assert tracker.is_committed("Add risks")
    assert tracker.committed <= tracker.clicked


def test_available_hides_clicked_text_in_later_turns() -> None:
    tracker = SelectionTracker()
    tracker.select(Suggestion("Add risks", index=0))
    later_turn = [Suggestion("Add risks", index=3), Suggestion("Add budget", index=4)]
    assert [s.text for s in tracker.available(later_turn)] == ["Add budget"]


def test_eligible_turn_skips_first_assistant_reply() -> None:
    assert eligible_assistant_turn([]) is None
    assert eligible_assistant_turn(_messages(USER_ROLE, ASSISTANT_ROLE)) is None
    assert eligible_assistant_turn(_messages(ASSISTANT_ROLE, USER_ROLE, ASSISTANT_ROLE)) == 2
    assert eligible_assistant_turn(
        _messages(USER_ROLE, ASSISTANT_ROLE, USER_ROLE, ASSISTANT_ROLE, USER_ROLE)
    ) == 3
