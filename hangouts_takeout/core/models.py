"""Domain models for Hangouts conversations."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional, Union


class ConversationType(Enum):
    """kind of conversation."""

    GROUP = "group"
    ONE_TO_ONE = "one_to_one"


class ConversationStatus(Enum):
    """the user's involvement in a conversation."""

    ACTIVE = "active"
    INVITED = "invited"


class NotificationLevel(Enum):
    """notification ring level."""

    QUIET = "quiet"
    RING = "ring"


class View(Enum):
    """view a conversation is listed in."""

    INBOX = "inbox"
    ARCHIVED = "archived"


class InvitationStatus(Enum):
    """invitation status of a participant."""

    PENDING = "pending"
    ACCEPTED = "accepted"


class InvitationAffinity(Enum):
    """affinity of the invitation to the user."""

    NONE = "none"
    LOW = "low"
    HIGH = "high"


class ParticipantType(Enum):
    """classification of a participant account."""

    GAIA = "gaia"
    OFF_NETWORK_PHONE = "off_network_phone"


class LinkSharingStatus(Enum):
    """group link sharing setting."""

    OFF = "off"
    ON = "on"


class MediaType(Enum):
    """media type of an attachment or a hangout call."""

    AUDIO = "audio"
    VIDEO = "video"
    AUDIO_VIDEO = "audio_video"
    PHOTO = "photo"
    ANIMATED_PHOTO = "animated_photo"


class MembershipChangeType(Enum):
    """direction of a membership change."""

    JOIN = "join"
    LEAVE = "leave"


class HangoutEventType(Enum):
    """start or end of a hangout call."""

    START = "start"
    END = "end"


class SegmentType(Enum):
    """kind of a chat message segment."""

    TEXT = "text"
    LINK = "link"
    LINE_BREAK = "line_break"


@dataclass(frozen=True, order=True)
class ParticipantId:
    """
    composite participant key.

    Compared and ordered component-wise; the components are opaque and kept
    exactly as exported.
    """

    gaia_id: str
    chat_id: str


@dataclass(frozen=True)
class ReadState:
    """last-read marker of a participant."""

    timestamp: datetime


@dataclass(frozen=True)
class Participant:
    """A past or present member of a conversation."""

    id: ParticipantId
    read_state: ReadState
    fallback_name: Optional[str] = None
    type: Optional[ParticipantType] = None
    invitation_status: Optional[InvitationStatus] = None
    new_invitation_status: Optional[InvitationStatus] = None


@dataclass(frozen=True)
class InvitationData:
    """invitation that brought the user into the conversation."""

    inviter: ParticipantId
    timestamp: datetime
    affinity: InvitationAffinity = InvitationAffinity.NONE


@dataclass(frozen=True)
class SelfState:
    """the exporting user's own state in a conversation."""

    status: ConversationStatus
    notification_level: NotificationLevel
    invitation: InvitationData
    read_state: ReadState
    views: list[View] = field(default_factory=list)
    active_timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class Formatting:
    """text formatting flags of a segment."""

    bold: bool = False
    italics: bool = False
    strikethrough: bool = False
    underline: bool = False


@dataclass(frozen=True)
class TextSegment:
    """plain text."""

    text: str
    formatting: Formatting = Formatting()

    segment_type = SegmentType.TEXT


@dataclass(frozen=True)
class LinkSegment:
    """hyperlink with its displayed text."""

    text: str
    target: str
    display_url: Optional[str] = None
    formatting: Formatting = Formatting()

    segment_type = SegmentType.LINK


@dataclass(frozen=True)
class LineBreakSegment:
    """line break inside a message."""

    text: Optional[str] = None
    formatting: Formatting = Formatting()

    segment_type = SegmentType.LINE_BREAK


ChatSegment = Union[TextSegment, LinkSegment, LineBreakSegment]


@dataclass(frozen=True)
class Address:
    """postal address."""

    name: Optional[str] = None
    street: Optional[str] = None
    locality: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None


@dataclass(frozen=True)
class Geo:
    """latitude and longitude pair."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class RepresentativeImage:
    """image shown for a place or thing."""

    id: str
    url: str
    width: Optional[int] = None
    height: Optional[int] = None
    types: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Thumbnail:
    """thumbnail of a photo or video."""

    height: int
    width: int
    image_url: str
    url: Optional[str] = None


@dataclass(frozen=True)
class Photo:
    """photo or video attachment."""

    media_type: MediaType
    thumbnail: Thumbnail
    album_id: str
    photo_id: str
    url: str
    original_url: str
    owner_obfuscated_id: str
    stream_ids: list[str] = field(default_factory=list)
    download_url: Optional[str] = None


@dataclass(frozen=True)
class Place:
    """shared location."""

    url: str
    address: Address
    geo: Geo
    representative_image: RepresentativeImage
    name: Optional[str] = None
    place_id: Optional[str] = None
    cluster_id: Optional[str] = None
    reference_id: Optional[str] = None


@dataclass(frozen=True)
class Thing:
    """shared web item."""

    url: str
    representative_image: RepresentativeImage
    name: Optional[str] = None


@dataclass(frozen=True)
class EmbedItem:
    """attachment payload; at most one of photo, place and thing is set."""

    id: Optional[str] = None
    types: list[str] = field(default_factory=list)
    photo: Optional[Photo] = None
    place: Optional[Place] = None
    thing: Optional[Thing] = None


@dataclass(frozen=True)
class AttachmentSegment:
    """attachment of a chat message."""

    id: str
    item: EmbedItem


@dataclass(frozen=True)
class Annotation:
    """message annotation, such as the /me marker."""

    type: int
    value: str


@dataclass(frozen=True)
class ChatMessage:
    """regular chat message."""

    contents: list[ChatSegment] = field(default_factory=list)
    attachments: list[AttachmentSegment] = field(default_factory=list)
    annotations: list[Annotation] = field(default_factory=list)

    def as_text(self) -> str:
        """joins the text of all segments, rendering line breaks as newlines."""
        parts = []
        for segment in self.contents:
            if isinstance(segment, LineBreakSegment):
                parts.append("\n")
            else:
                parts.append(segment.text)
        return "".join(parts)


@dataclass(frozen=True)
class HangoutEvent:
    """start or end of a call; duration is set only on END."""

    event_type: HangoutEventType
    participants: list[ParticipantId] = field(default_factory=list)
    media_type: Optional[MediaType] = None
    duration: Optional[timedelta] = None


@dataclass(frozen=True)
class MembershipChange:
    """participants joining or leaving."""

    type: MembershipChangeType
    participants: list[ParticipantId] = field(default_factory=list)


@dataclass(frozen=True)
class ConversationRename:
    """conversation name change."""

    old_name: str
    new_name: str


EventData = Union[ChatMessage, HangoutEvent, MembershipChange, ConversationRename]


@dataclass(frozen=True)
class SelfEventState:
    """the user's state with regard to one event."""

    client_generated_id: Optional[str] = None
    notification_level: Optional[NotificationLevel] = None


@dataclass(frozen=True)
class Event:
    """A single event in a conversation."""

    id: str
    sender: ParticipantId
    timestamp: datetime
    data: EventData
    self_state: SelfEventState
    advances_sort_timestamp: bool
    version: int

    def as_chat_message(self) -> Optional[ChatMessage]:
        """returns the chat message payload, or None for other event kinds."""
        if isinstance(self.data, ChatMessage):
            return self.data
        return None


@dataclass(frozen=True)
class Conversation:
    """
    A converted conversation.

    Participants, current participants and events keep the order of the
    export. ``name`` is only ever set for group conversations.
    """

    conversation_id: str
    id: str
    type: ConversationType
    self_state: SelfState
    sort_timestamp: datetime
    group_link_sharing_status: LinkSharingStatus
    name: Optional[str] = None
    current_participants: list[ParticipantId] = field(default_factory=list)
    participants: list[Participant] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)

    def participant(self, participant_id: ParticipantId) -> Optional[Participant]:
        """looks up a participant by id."""
        for candidate in self.participants:
            if candidate.id == participant_id:
                return candidate
        return None


@dataclass(frozen=True)
class Hangouts:
    """Top-level converted export."""

    conversations: list[Conversation] = field(default_factory=list)
