"""Tests for domain models."""

import dataclasses
from datetime import datetime, timezone

import pytest

from hangouts_takeout.core.models import (
    ChatMessage,
    ConversationRename,
    Event,
    Formatting,
    LineBreakSegment,
    ParticipantId,
    SelfEventState,
    TextSegment,
)


def test_participant_id_equality_is_structural() -> None:
    """ids with the same components are equal and hash alike."""
    a = ParticipantId(gaia_id="1", chat_id="2")
    b = ParticipantId(gaia_id="1", chat_id="2")
    assert a == b
    assert hash(a) == hash(b)
    assert {a: "x"}[b] == "x"


def test_participant_id_ordering_is_component_wise() -> None:
    """gaia_id orders first, then chat_id."""
    ids = [
        ParticipantId("2", "a"),
        ParticipantId("1", "b"),
        ParticipantId("1", "a"),
    ]
    assert sorted(ids) == [
        ParticipantId("1", "a"),
        ParticipantId("1", "b"),
        ParticipantId("2", "a"),
    ]


def test_participant_id_is_immutable() -> None:
    """ids cannot be modified once built."""
    pid = ParticipantId("1", "2")
    with pytest.raises(dataclasses.FrozenInstanceError):
        pid.gaia_id = "3"  # type: ignore[misc]


def test_formatting_defaults() -> None:
    """formatting flags default to False."""
    assert Formatting() == Formatting(
        bold=False, italics=False, strikethrough=False, underline=False
    )


def test_segments_default_formatting() -> None:
    """segments carry default formatting."""
    assert TextSegment(text="hi").formatting == Formatting()
    assert LineBreakSegment().text is None


def test_chat_message_lists_are_not_shared() -> None:
    """default lists are separate per instance."""
    first = ChatMessage()
    second = ChatMessage()
    first.contents.append(TextSegment(text="x"))
    assert second.contents == []


def test_as_chat_message_for_other_kinds() -> None:
    """non-chat events have no chat message."""
    event = Event(
        id="e1",
        sender=ParticipantId("1", "1"),
        timestamp=datetime(2020, 1, 1, tzinfo=timezone.utc),
        data=ConversationRename(old_name="a", new_name="b"),
        self_state=SelfEventState(),
        advances_sort_timestamp=False,
        version=1,
    )
    assert event.as_chat_message() is None
