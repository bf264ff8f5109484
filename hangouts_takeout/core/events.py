"""Conversion of raw events and their tagged payloads."""

from typing import Any, Callable

from hangouts_takeout.core import enums
from hangouts_takeout.core.attachments import (
    convert_attachment,
    convert_formatting,
    convert_participant_id,
    convert_participant_ids,
)
from hangouts_takeout.core.config import DEFAULT_CONFIG, ConverterConfig
from hangouts_takeout.core.errors import (
    MissingRequiredField,
    TagPayloadMismatch,
    UnknownEnumValue,
)
from hangouts_takeout.core.models import (
    Annotation,
    ChatMessage,
    ChatSegment,
    ConversationRename,
    Event,
    EventData,
    HangoutEvent,
    HangoutEventType,
    LineBreakSegment,
    LinkSegment,
    MembershipChange,
    MembershipChangeType,
    SegmentType,
    SelfEventState,
    TextSegment,
)
from hangouts_takeout.core.raw import (
    RawChatMessage,
    RawConversationRename,
    RawEvent,
    RawHangoutEvent,
    RawMembershipChange,
    RawSegment,
    RawSelfEventState,
    optional,
    optional_list,
    require,
    require_bool,
    require_list,
)
from hangouts_takeout.core.scalars import (
    decode_duration,
    decode_integer,
    decode_timestamp_text,
)

# event_type tag -> key of the payload the tag announces
EVENT_PAYLOAD_KEYS: dict[str, str] = {
    "REGULAR_CHAT_MESSAGE": "chat_message",
    "SMS": "chat_message",
    "HANGOUT_EVENT": "hangout_event",
    "ADD_USER": "membership_change",
    "REMOVE_USER": "membership_change",
    "RENAME_CONVERSATION": "conversation_rename",
}

PAYLOAD_KEYS = ("chat_message", "hangout_event", "membership_change", "conversation_rename")

# membership tags pin the direction of the change they carry
_MEMBERSHIP_TAGS = {
    "ADD_USER": MembershipChangeType.JOIN,
    "REMOVE_USER": MembershipChangeType.LEAVE,
}


def convert_segment(raw: RawSegment, path: str = "segment") -> ChatSegment:
    """maps a TEXT, LINK or LINE_BREAK segment."""
    kind = enums.segment_type(require(raw, "type", path))
    formatting = convert_formatting(optional(raw, "formatting"), f"{path}.formatting")

    if kind is SegmentType.TEXT:
        return TextSegment(text=require(raw, "text", path), formatting=formatting)

    if kind is SegmentType.LINK:
        link_path = f"{path}.link_data"
        link_data = require(raw, "link_data", path)
        return LinkSegment(
            text=require(raw, "text", path),
            target=require(link_data, "link_target", link_path),
            display_url=optional(link_data, "display_url"),
            formatting=formatting,
        )

    return LineBreakSegment(text=optional(raw, "text"), formatting=formatting)


def convert_chat_message(
    raw: RawChatMessage, path: str = "chat_message"
) -> ChatMessage:
    content_path = f"{path}.message_content"
    content = require(raw, "message_content", path)

    segments = optional_list(content, "segment", content_path)
    attachments = optional_list(content, "attachment", content_path)
    annotations = optional_list(raw, "annotation", path)

    return ChatMessage(
        contents=[
            convert_segment(item, f"{content_path}.segment[{i}]")
            for i, item in enumerate(segments)
        ],
        attachments=[
            convert_attachment(item, f"{content_path}.attachment[{i}]")
            for i, item in enumerate(attachments)
        ],
        annotations=[
            Annotation(
                type=require(item, "type", f"{path}.annotation[{i}]"),
                value=require(item, "value", f"{path}.annotation[{i}]"),
            )
            for i, item in enumerate(annotations)
        ],
    )


def convert_hangout_event(
    raw: RawHangoutEvent, path: str = "hangout_event"
) -> HangoutEvent:
    """
    maps a hangout call event.

    A start carries no payload; an end must carry its duration in seconds.
    """
    event_type = enums.hangout_event_type(require(raw, "event_type", path))
    raw_media_type = optional(raw, "media_type")

    duration = None
    if event_type is HangoutEventType.END:
        duration_field = f"{path}.hangout_duration_secs"
        duration = decode_duration(
            require(raw, "hangout_duration_secs", path), duration_field
        )

    return HangoutEvent(
        event_type=event_type,
        participants=convert_participant_ids(
            optional_list(raw, "participant_id", path), f"{path}.participant_id"
        ),
        media_type=(
            None
            if raw_media_type is None
            else enums.media_type(raw_media_type, f"{path}.media_type")
        ),
        duration=duration,
    )


def convert_membership_change(
    raw: RawMembershipChange, path: str = "membership_change"
) -> MembershipChange:
    return MembershipChange(
        type=enums.membership_change_type(require(raw, "type", path)),
        participants=convert_participant_ids(
            require_list(raw, "participant_id", path), f"{path}.participant_id"
        ),
    )


def convert_conversation_rename(
    raw: RawConversationRename, path: str = "conversation_rename"
) -> ConversationRename:
    return ConversationRename(
        old_name=require(raw, "old_name", path),
        new_name=require(raw, "new_name", path),
    )


_PAYLOAD_CONVERTERS: dict[str, Callable[[Any, str], EventData]] = {
    "chat_message": convert_chat_message,
    "hangout_event": convert_hangout_event,
    "membership_change": convert_membership_change,
    "conversation_rename": convert_conversation_rename,
}


def convert_event_data(raw: RawEvent, path: str = "event") -> EventData:
    """
    converts the tagged payload of a raw event.

    The ``event_type`` tag names the one payload key the record must carry.

    Raises:
        UnknownEnumValue: if the tag is not a known event type
        TagPayloadMismatch: if the payload keys present disagree with the tag
    """
    tag = require(raw, "event_type", path)
    try:
        expected_key = EVENT_PAYLOAD_KEYS[tag]
    except (KeyError, TypeError):
        raise UnknownEnumValue(f"{path}.event_type", tag) from None

    present = [key for key in PAYLOAD_KEYS if optional(raw, key) is not None]
    if present != [expected_key]:
        raise TagPayloadMismatch(tag, present, f"expected {expected_key!r}")

    data = _PAYLOAD_CONVERTERS[expected_key](raw[expected_key], f"{path}.{expected_key}")

    if isinstance(data, MembershipChange) and data.type is not _MEMBERSHIP_TAGS[tag]:
        raise TagPayloadMismatch(tag, present, f"membership change is {data.type.name}")

    return data


def convert_self_event_state(raw: RawSelfEventState) -> SelfEventState:
    level = optional(raw, "notification_level")
    return SelfEventState(
        client_generated_id=optional(raw, "client_generated_id"),
        notification_level=(
            None
            if level is None
            else enums.notification_level(level, "self_event_state.notification_level")
        ),
    )


def convert_event(
    raw: RawEvent, config: ConverterConfig = DEFAULT_CONFIG, path: str = "event"
) -> Event:
    """
    converts one raw event.

    Args:
        raw: raw event record
        config: converter settings; supplies the timestamp unit
        path: dotted path of the event, used in error messages

    Returns:
        converted Event
    """
    if not isinstance(raw, dict):
        raise MissingRequiredField(path)

    return Event(
        id=require(raw, "event_id", path),
        sender=convert_participant_id(
            require(raw, "sender_id", path), f"{path}.sender_id"
        ),
        timestamp=decode_timestamp_text(
            require(raw, "timestamp", path), config.timestamp_unit, f"{path}.timestamp"
        ),
        data=convert_event_data(raw, path),
        self_state=convert_self_event_state(require(raw, "self_event_state", path)),
        advances_sort_timestamp=require_bool(raw, "advances_sort_timestamp", path),
        version=decode_integer(
            require(raw, "event_version", path), f"{path}.event_version"
        ),
    )
