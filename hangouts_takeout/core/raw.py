"""
Raw Hangouts.json shapes and accessors for the decoded tree.

The TypedDicts below document the export layout as Takeout writes it: every
timestamp, duration and event version is a decimal string, enumerations are
open string codes, and the payload of an event sits under a key chosen by its
``event_type``. Keys marked ``NotRequired`` may be absent.

Converter entry points are annotated with these types, but the decoded tree is
never trusted to match them: values are read through the accessors at the
bottom of this module, which check presence and, for ids and flags, JSON type.
"""

from typing import Any, NotRequired, Optional, TypedDict

from hangouts_takeout.core.errors import FieldTypeError, MissingRequiredField


class RawParticipantId(TypedDict):
    gaia_id: str
    chat_id: str


class RawId(TypedDict):
    id: str


class RawReadState(TypedDict):
    participant_id: RawParticipantId
    latest_read_timestamp: str


class RawSelfConversationState(TypedDict):
    self_read_state: RawReadState
    status: str
    notification_level: str
    view: NotRequired[list[str]]
    inviter_id: RawParticipantId
    invite_timestamp: str
    invitation_display_type: NotRequired[str]
    invite_affinity: NotRequired[str]
    sort_timestamp: str
    active_timestamp: NotRequired[str]
    is_guest: NotRequired[bool]


class RawParticipantData(TypedDict):
    id: RawParticipantId
    fallback_name: NotRequired[str]
    invitation_status: NotRequired[str]
    participant_type: NotRequired[str]
    new_invitation_status: NotRequired[str]
    in_different_customer_as_requester: NotRequired[bool]
    domain_id: NotRequired[str]


class RawConversationDetails(TypedDict):
    id: RawId
    type: str
    name: NotRequired[str]
    self_conversation_state: RawSelfConversationState
    read_state: list[RawReadState]
    has_active_hangout: NotRequired[bool]
    otr_status: NotRequired[str]
    otr_toggle: NotRequired[str]
    current_participant: list[RawParticipantId]
    participant_data: list[RawParticipantData]
    fork_on_external_invite: NotRequired[bool]
    network_type: NotRequired[list[str]]
    force_history_state: NotRequired[str]
    group_link_sharing_status: str


class RawConversationHeader(TypedDict):
    conversation_id: RawId
    conversation: RawConversationDetails


class RawFormatting(TypedDict, total=False):
    bold: bool
    italics: bool
    strikethrough: bool
    underline: bool


class RawLinkData(TypedDict):
    link_target: str
    display_url: NotRequired[str]


class RawSegment(TypedDict):
    type: str
    text: NotRequired[str]
    formatting: NotRequired[RawFormatting]
    link_data: NotRequired[RawLinkData]


class RawImageObject(TypedDict):
    url: str
    width: NotRequired[str]
    height: NotRequired[str]


class RawRepresentativeImage(TypedDict):
    type: NotRequired[list[str]]
    id: str
    image_object_v2: RawImageObject


class RawPostalAddress(TypedDict, total=False):
    name: str
    street_address: str
    address_locality: str
    address_region: str
    address_country: str
    postal_code: str


class RawAddress(TypedDict):
    type: NotRequired[list[str]]
    postal_address_v2: RawPostalAddress


class RawGeoCoordinates(TypedDict):
    latitude: float
    longitude: float


class RawGeo(TypedDict):
    type: NotRequired[list[str]]
    geo_coordinates_v2: RawGeoCoordinates


class RawThumbnail(TypedDict):
    height_px: int
    width_px: int
    image_url: str
    url: NotRequired[str]


class RawPlusPhoto(TypedDict):
    album_id: str
    media_type: str
    original_content_url: str
    owner_obfuscated_id: str
    photo_id: str
    stream_id: list[str]
    thumbnail: RawThumbnail
    url: str
    download_url: NotRequired[str]


class RawPlaceV2(TypedDict):
    url: str
    name: NotRequired[str]
    address: RawAddress
    geo: RawGeo
    representative_image: RawRepresentativeImage
    place_id: NotRequired[str]
    cluster_id: NotRequired[str]
    reference_id: NotRequired[str]


class RawThingV2(TypedDict):
    url: str
    name: NotRequired[str]
    representative_image: RawRepresentativeImage


class RawEmbedItem(TypedDict):
    id: NotRequired[str]
    type: NotRequired[list[str]]
    plus_photo: NotRequired[RawPlusPhoto]
    place_v2: NotRequired[RawPlaceV2]
    thing_v2: NotRequired[RawThingV2]


class RawAttachment(TypedDict):
    id: str
    embed_item: RawEmbedItem


class RawMessageContent(TypedDict, total=False):
    segment: list[RawSegment]
    attachment: list[RawAttachment]


class RawAnnotation(TypedDict):
    type: int
    value: str


class RawChatMessage(TypedDict):
    message_content: RawMessageContent
    annotation: NotRequired[list[RawAnnotation]]


class RawHangoutEvent(TypedDict):
    event_type: str
    hangout_duration_secs: NotRequired[str]
    media_type: NotRequired[str]
    participant_id: NotRequired[list[RawParticipantId]]


class RawMembershipChange(TypedDict):
    type: str
    participant_id: list[RawParticipantId]


class RawConversationRename(TypedDict):
    new_name: str
    old_name: str


class RawSelfEventState(TypedDict):
    user_id: RawParticipantId
    client_generated_id: NotRequired[str]
    notification_level: NotRequired[str]


class RawEvent(TypedDict):
    conversation_id: RawId
    sender_id: RawParticipantId
    timestamp: str
    self_event_state: RawSelfEventState
    event_id: str
    advances_sort_timestamp: bool
    event_otr: NotRequired[str]
    delivery_medium: NotRequired[dict[str, Any]]
    event_version: str
    event_type: str
    chat_message: NotRequired[RawChatMessage]
    hangout_event: NotRequired[RawHangoutEvent]
    membership_change: NotRequired[RawMembershipChange]
    conversation_rename: NotRequired[RawConversationRename]


class RawConversation(TypedDict):
    conversation: RawConversationHeader
    events: list[RawEvent]


class RawHangouts(TypedDict):
    conversations: list[RawConversation]


def require(node: Any, key: str, path: str) -> Any:
    """
    returns a required key of a raw object.

    Args:
        node: raw object (a dict from the decoded tree)
        key: key to read
        path: dotted path of ``node``, used in error messages

    Raises:
        MissingRequiredField: if node is not a dict, lacks the key or holds
            null under it
    """
    if not isinstance(node, dict):
        raise MissingRequiredField(f"{path}.{key}")
    value = node.get(key)
    if value is None:
        raise MissingRequiredField(f"{path}.{key}")
    return value


def optional(node: Any, key: str) -> Optional[Any]:
    """returns an optional key of a raw object, or None when absent."""
    if not isinstance(node, dict):
        return None
    return node.get(key)


def require_list(node: Any, key: str, path: str) -> list[Any]:
    """returns a required list; a non-list value counts as missing."""
    value = require(node, key, path)
    if not isinstance(value, list):
        raise MissingRequiredField(f"{path}.{key}")
    return value


def optional_list(node: Any, key: str, path: str) -> list[Any]:
    """returns an optional list, or an empty list when absent."""
    value = optional(node, key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MissingRequiredField(f"{path}.{key}")
    return value


def require_str(node: Any, key: str, path: str) -> str:
    """returns a required string."""
    value = require(node, key, path)
    if not isinstance(value, str):
        raise FieldTypeError(f"{path}.{key}", value, "a string")
    return value


def require_bool(node: Any, key: str, path: str) -> bool:
    """returns a required boolean; other truthy values are not accepted."""
    value = require(node, key, path)
    if not isinstance(value, bool):
        raise FieldTypeError(f"{path}.{key}", value, "a boolean")
    return value


def optional_bool(node: Any, key: str, path: str) -> bool:
    """returns an optional boolean, or False when absent."""
    value = optional(node, key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise FieldTypeError(f"{path}.{key}", value, "a boolean")
    return value
