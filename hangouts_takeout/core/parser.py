"""Conversion of raw Hangouts conversations and whole exports."""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Optional

from hangouts_takeout.core import enums
from hangouts_takeout.core.attachments import convert_participant_id, convert_participant_ids
from hangouts_takeout.core.config import DEFAULT_CONFIG, ConverterConfig
from hangouts_takeout.core.errors import ConversionError
from hangouts_takeout.core.events import convert_event
from hangouts_takeout.core.models import (
    Conversation,
    ConversationType,
    Hangouts,
    InvitationData,
    SelfState,
)
from hangouts_takeout.core.reconcile import convert_read_state, reconcile_participants
from hangouts_takeout.core.raw import (
    RawConversation,
    RawHangouts,
    RawSelfConversationState,
    optional,
    optional_list,
    require,
    require_list,
    require_str,
)
from hangouts_takeout.core.scalars import decode_timestamp_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionOutcome:
    """result of converting one conversation in partial mode."""

    index: int
    conversation_id: Optional[str]
    conversation: Optional[Conversation] = None
    error: Optional[ConversionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def convert_self_state(
    raw: RawSelfConversationState,
    config: ConverterConfig,
    path: str = "self_conversation_state",
) -> SelfState:
    """converts the exporting user's state, defaulting an absent affinity."""
    unit = config.timestamp_unit
    active = optional(raw, "active_timestamp")

    invitation = InvitationData(
        inviter=convert_participant_id(
            require(raw, "inviter_id", path), f"{path}.inviter_id"
        ),
        timestamp=decode_timestamp_text(
            require(raw, "invite_timestamp", path), unit, f"{path}.invite_timestamp"
        ),
        affinity=enums.invitation_affinity(optional(raw, "invite_affinity")),
    )
    _, read_state = convert_read_state(
        require(raw, "self_read_state", path), config, f"{path}.self_read_state"
    )

    return SelfState(
        status=enums.conversation_status(require(raw, "status", path)),
        notification_level=enums.notification_level(
            require(raw, "notification_level", path), f"{path}.notification_level"
        ),
        invitation=invitation,
        read_state=read_state,
        views=[enums.view(code) for code in optional_list(raw, "view", path)],
        active_timestamp=(
            None
            if active is None
            else decode_timestamp_text(active, unit, f"{path}.active_timestamp")
        ),
    )


def conversation_id_of(raw: Any) -> Optional[str]:
    """reads the conversation id of a raw conversation without validating the rest."""
    header = optional(raw, "conversation")
    value = optional(optional(header, "conversation_id"), "id")
    return value if isinstance(value, str) else None


def convert_conversation(
    raw: RawConversation, config: ConverterConfig = DEFAULT_CONFIG
) -> Conversation:
    """
    converts one raw conversation.

    Args:
        raw: raw conversation record (``{"conversation": ..., "events": [...]}``)
        config: converter settings

    Returns:
        converted Conversation

    Raises:
        ConversionError: on the first failure of any part; nothing partial is
            returned
    """
    header = require(raw, "conversation", "conversation")
    conversation_id = require_str(
        require(header, "conversation_id", "conversation"), "id", "conversation.conversation_id"
    )
    path = f"conversation[{conversation_id}]"
    details = require(header, "conversation", path)

    conversation_type = enums.conversation_type(require(details, "type", path))
    raw_name = optional(details, "name")
    if conversation_type is ConversationType.GROUP:
        name: Optional[str] = require(details, "name", path)
    else:
        name = None
        if raw_name is not None:
            logger.debug("Dropping name of one-to-one conversation %s", conversation_id)

    self_state = convert_self_state(
        require(details, "self_conversation_state", path),
        config,
        f"{path}.self_conversation_state",
    )
    sort_timestamp = decode_timestamp_text(
        require(details["self_conversation_state"], "sort_timestamp", path),
        config.timestamp_unit,
        f"{path}.self_conversation_state.sort_timestamp",
    )

    participants = reconcile_participants(
        require_list(details, "participant_data", path),
        require_list(details, "read_state", path),
        config,
        path,
    )

    events = [
        convert_event(item, config, f"{path}.events[{i}]")
        for i, item in enumerate(require_list(raw, "events", path))
    ]

    conversation = Conversation(
        conversation_id=conversation_id,
        id=require(require(details, "id", path), "id", f"{path}.id"),
        type=conversation_type,
        name=name,
        self_state=self_state,
        sort_timestamp=sort_timestamp,
        group_link_sharing_status=enums.link_sharing_status(
            require(details, "group_link_sharing_status", path)
        ),
        current_participants=convert_participant_ids(
            optional_list(details, "current_participant", path),
            f"{path}.current_participant",
        ),
        participants=participants,
        events=events,
    )
    logger.debug(
        "Converted conversation %s: %d participant(s), %d event(s)",
        conversation_id,
        len(participants),
        len(events),
    )
    return conversation


def convert_document(
    raw: RawHangouts, config: ConverterConfig = DEFAULT_CONFIG
) -> Hangouts:
    """
    converts a whole raw export, failing on the first bad conversation.

    Raises:
        ConversionError: from the first conversation that fails
    """
    conversations = require_list(raw, "conversations", "hangouts")
    return Hangouts(
        conversations=[convert_conversation(item, config) for item in conversations]
    )


def convert_each(
    raw_conversations: Iterable[RawConversation], config: ConverterConfig = DEFAULT_CONFIG
) -> Iterator[ConversionOutcome]:
    """
    converts conversations independently, yielding one outcome per input.

    A failure is captured in its outcome and does not stop the remaining
    conversations.
    """
    for index, raw in enumerate(raw_conversations):
        conversation_id = conversation_id_of(raw)
        try:
            conversation = convert_conversation(raw, config)
        except ConversionError as e:
            logger.debug("Conversation %s failed: %s", conversation_id, e)
            yield ConversionOutcome(index=index, conversation_id=conversation_id, error=e)
            continue
        yield ConversionOutcome(
            index=index, conversation_id=conversation_id, conversation=conversation
        )
