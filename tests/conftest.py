"""Pytest fixtures building raw Hangouts.json records."""

import copy
from typing import Any, Callable, Optional

import pytest


def _pid(gaia_id: str, chat_id: Optional[str] = None) -> dict[str, str]:
    return {"gaia_id": gaia_id, "chat_id": chat_id or gaia_id}


def _text_message(text: str = "hi", **formatting: bool) -> dict[str, Any]:
    segment: dict[str, Any] = {"type": "TEXT", "text": text}
    if formatting:
        segment["formatting"] = formatting
    return {"chat_message": {"message_content": {"segment": [segment]}}}


def _event(
    event_type: str = "REGULAR_CHAT_MESSAGE",
    sender: str = "P1",
    timestamp: str = "1500000000000000",
    event_id: str = "event-1",
    payload: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    event: dict[str, Any] = {
        "conversation_id": {"id": "conv-1"},
        "sender_id": _pid(sender),
        "timestamp": timestamp,
        "self_event_state": {
            "user_id": _pid("P1"),
            "client_generated_id": "-123",
            "notification_level": "RING",
        },
        "event_id": event_id,
        "advances_sort_timestamp": True,
        "event_otr": "ON_THE_RECORD",
        "delivery_medium": {"medium_type": "BABEL_MEDIUM"},
        "event_version": "1500000000000001",
        "event_type": event_type,
    }
    event.update(_text_message() if payload is None else payload)
    return event


def _conversation(
    conversation_type: str = "GROUP",
    name: Optional[str] = "Friends",
    participants: tuple[str, ...] = ("P1", "P2"),
    read_states: Optional[tuple[str, ...]] = None,
    events: Optional[list[dict[str, Any]]] = None,
    conversation_id: str = "conv-1",
) -> dict[str, Any]:
    read_state_keys = participants if read_states is None else read_states
    details: dict[str, Any] = {
        "id": {"id": conversation_id},
        "type": conversation_type,
        "self_conversation_state": {
            "self_read_state": {
                "participant_id": _pid("P1"),
                "latest_read_timestamp": "1500000000000000",
            },
            "status": "ACTIVE",
            "notification_level": "RING",
            "view": ["INBOX_VIEW"],
            "inviter_id": _pid("P2"),
            "invite_timestamp": "1400000000000000",
            "sort_timestamp": "1500000000000000",
            "active_timestamp": "1500000000000000",
        },
        "read_state": [
            {"participant_id": _pid(key), "latest_read_timestamp": "1500000000000000"}
            for key in read_state_keys
        ],
        "has_active_hangout": False,
        "otr_status": "ON_THE_RECORD",
        "otr_toggle": "ENABLED",
        "current_participant": [_pid(key) for key in participants],
        "participant_data": [
            {
                "id": _pid(key),
                "fallback_name": f"Person {key}",
                "participant_type": "GAIA",
                "new_invitation_status": "ACCEPTED_INVITATION",
            }
            for key in participants
        ],
        "fork_on_external_invite": False,
        "network_type": ["BABEL"],
        "force_history_state": "NO_FORCE",
        "group_link_sharing_status": "LINK_SHARING_OFF",
    }
    if name is not None:
        details["name"] = name

    return {
        "conversation": {
            "conversation_id": {"id": conversation_id},
            "conversation": details,
        },
        "events": [_event()] if events is None else events,
    }


@pytest.fixture
def pid() -> Callable[..., dict[str, str]]:
    """builds a raw participant id."""
    return _pid


@pytest.fixture
def text_message() -> Callable[..., dict[str, Any]]:
    """builds a raw chat_message payload with one text segment."""
    return _text_message


@pytest.fixture
def make_event() -> Callable[..., dict[str, Any]]:
    """builds a raw event record."""
    return _event


@pytest.fixture
def make_conversation() -> Callable[..., dict[str, Any]]:
    """builds a raw conversation record."""
    return _conversation


@pytest.fixture
def raw_document() -> dict[str, Any]:
    """raw document with one group and one one-to-one conversation."""
    return copy.deepcopy(
        {
            "conversations": [
                _conversation(),
                _conversation(
                    conversation_type="STICKY_ONE_TO_ONE",
                    name=None,
                    conversation_id="conv-2",
                ),
            ]
        }
    )
