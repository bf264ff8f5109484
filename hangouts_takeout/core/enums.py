"""
Mappings from raw export codes to domain enumerations.

Every table is closed: a code missing from a table raises UnknownEnumValue so
that schema drift surfaces at conversion time. The only absence default is the
invitation affinity, which Takeout omits when it was never set.
"""

from collections.abc import Mapping
from typing import Any, Optional, TypeVar

from hangouts_takeout.core.errors import UnknownEnumValue
from hangouts_takeout.core.models import (
    ConversationStatus,
    ConversationType,
    HangoutEventType,
    InvitationAffinity,
    InvitationStatus,
    LinkSharingStatus,
    MediaType,
    MembershipChangeType,
    NotificationLevel,
    ParticipantType,
    SegmentType,
    View,
)

E = TypeVar("E")

CONVERSATION_TYPES: Mapping[str, ConversationType] = {
    "GROUP": ConversationType.GROUP,
    "STICKY_ONE_TO_ONE": ConversationType.ONE_TO_ONE,
}

CONVERSATION_STATUSES: Mapping[str, ConversationStatus] = {
    "ACTIVE": ConversationStatus.ACTIVE,
    "INVITED": ConversationStatus.INVITED,
}

NOTIFICATION_LEVELS: Mapping[str, NotificationLevel] = {
    "QUIET": NotificationLevel.QUIET,
    "RING": NotificationLevel.RING,
}

VIEWS: Mapping[str, View] = {
    "INBOX_VIEW": View.INBOX,
    "ARCHIVED_VIEW": View.ARCHIVED,
}

INVITATION_STATUSES: Mapping[str, InvitationStatus] = {
    "PENDING_INVITATION": InvitationStatus.PENDING,
    "ACCEPTED_INVITATION": InvitationStatus.ACCEPTED,
}

INVITATION_AFFINITIES: Mapping[str, InvitationAffinity] = {
    "INVITE_AFFINITY_UNKNOWN": InvitationAffinity.NONE,
    "INVITE_AFFINITY_LOW": InvitationAffinity.LOW,
    "INVITE_AFFINITY_HIGH": InvitationAffinity.HIGH,
}

PARTICIPANT_TYPES: Mapping[str, ParticipantType] = {
    "GAIA": ParticipantType.GAIA,
    "OFF_NETWORK_PHONE": ParticipantType.OFF_NETWORK_PHONE,
}

LINK_SHARING_STATUSES: Mapping[str, LinkSharingStatus] = {
    "LINK_SHARING_OFF": LinkSharingStatus.OFF,
    "LINK_SHARING_ON": LinkSharingStatus.ON,
}

MEDIA_TYPES: Mapping[str, MediaType] = {
    "AUDIO_ONLY": MediaType.AUDIO,
    "VIDEO": MediaType.VIDEO,
    "AUDIO_VIDEO": MediaType.AUDIO_VIDEO,
    "PHOTO": MediaType.PHOTO,
    "ANIMATED_PHOTO": MediaType.ANIMATED_PHOTO,
}

MEMBERSHIP_CHANGE_TYPES: Mapping[str, MembershipChangeType] = {
    "JOIN": MembershipChangeType.JOIN,
    "LEAVE": MembershipChangeType.LEAVE,
}

HANGOUT_EVENT_TYPES: Mapping[str, HangoutEventType] = {
    "START_HANGOUT": HangoutEventType.START,
    "END_HANGOUT": HangoutEventType.END,
}

SEGMENT_TYPES: Mapping[str, SegmentType] = {
    "TEXT": SegmentType.TEXT,
    "LINK": SegmentType.LINK,
    "LINE_BREAK": SegmentType.LINE_BREAK,
}


def lookup(table: Mapping[str, E], field: str, raw_code: Any) -> E:
    """
    maps a raw code through a closed table.

    Raises:
        UnknownEnumValue: if the code is not in the table, including a None
            or unhashable code
    """
    try:
        return table[raw_code]
    except (KeyError, TypeError):
        raise UnknownEnumValue(field, raw_code) from None


def conversation_type(raw_code: Any) -> ConversationType:
    return lookup(CONVERSATION_TYPES, "conversation.type", raw_code)


def conversation_status(raw_code: Any) -> ConversationStatus:
    return lookup(CONVERSATION_STATUSES, "self_conversation_state.status", raw_code)


def notification_level(raw_code: Any, field: str = "notification_level") -> NotificationLevel:
    return lookup(NOTIFICATION_LEVELS, field, raw_code)


def view(raw_code: Any) -> View:
    return lookup(VIEWS, "self_conversation_state.view", raw_code)


def invitation_status(raw_code: Any, field: str = "invitation_status") -> InvitationStatus:
    return lookup(INVITATION_STATUSES, field, raw_code)


def invitation_affinity(raw_code: Optional[Any]) -> InvitationAffinity:
    """maps the invite affinity; an absent affinity means NONE."""
    if raw_code is None:
        return InvitationAffinity.NONE
    return lookup(INVITATION_AFFINITIES, "self_conversation_state.invite_affinity", raw_code)


def participant_type(raw_code: Any) -> ParticipantType:
    return lookup(PARTICIPANT_TYPES, "participant_data.participant_type", raw_code)


def link_sharing_status(raw_code: Any) -> LinkSharingStatus:
    return lookup(LINK_SHARING_STATUSES, "conversation.group_link_sharing_status", raw_code)


def media_type(raw_code: Any, field: str = "media_type") -> MediaType:
    return lookup(MEDIA_TYPES, field, raw_code)


def membership_change_type(raw_code: Any) -> MembershipChangeType:
    return lookup(MEMBERSHIP_CHANGE_TYPES, "membership_change.type", raw_code)


def hangout_event_type(raw_code: Any) -> HangoutEventType:
    return lookup(HANGOUT_EVENT_TYPES, "hangout_event.event_type", raw_code)


def segment_type(raw_code: Any) -> SegmentType:
    return lookup(SEGMENT_TYPES, "segment.type", raw_code)
