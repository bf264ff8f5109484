"""Pairing of the participant roster with the per-participant read states."""

import logging

from hangouts_takeout.core import enums
from hangouts_takeout.core.attachments import convert_participant_id
from hangouts_takeout.core.config import DEFAULT_CONFIG, ConverterConfig
from hangouts_takeout.core.errors import ReconciliationError
from hangouts_takeout.core.models import Participant, ParticipantId, ReadState
from hangouts_takeout.core.raw import RawParticipantData, RawReadState, optional, require
from hangouts_takeout.core.scalars import decode_timestamp_text

logger = logging.getLogger(__name__)


def convert_read_state(
    raw: RawReadState, config: ConverterConfig = DEFAULT_CONFIG, path: str = "read_state"
) -> tuple[ParticipantId, ReadState]:
    """converts a raw read state into its participant key and value."""
    participant_id = convert_participant_id(
        require(raw, "participant_id", path), f"{path}.participant_id"
    )
    timestamp = decode_timestamp_text(
        require(raw, "latest_read_timestamp", path),
        config.timestamp_unit,
        f"{path}.latest_read_timestamp",
    )
    return participant_id, ReadState(timestamp=timestamp)


def reconcile_participants(
    roster: list[RawParticipantData],
    read_states: list[RawReadState],
    config: ConverterConfig = DEFAULT_CONFIG,
    path: str = "conversation",
) -> list[Participant]:
    """
    joins participant records with their read states by participant id.

    Each read state is consumed by at most one participant. The lookup is
    local to this call.

    Args:
        roster: raw ``participant_data`` entries, in export order
        read_states: raw ``read_state`` entries
        config: converter settings
        path: dotted path of the enclosing conversation, used in messages

    Returns:
        participants in roster order, each with its own read state

    Raises:
        ReconciliationError: if a key repeats in either list, if a participant
            has no read state, or (in strict mode) if read states are left over
    """
    pending: dict[ParticipantId, ReadState] = {}
    for i, raw_state in enumerate(read_states):
        key, state = convert_read_state(raw_state, config, f"{path}.read_state[{i}]")
        if key in pending:
            raise ReconciliationError(f"duplicate read state for {key}", key)
        pending[key] = state

    participants: list[Participant] = []
    seen: set[ParticipantId] = set()
    for i, raw_participant in enumerate(roster):
        entry_path = f"{path}.participant_data[{i}]"
        key = convert_participant_id(require(raw_participant, "id", entry_path), f"{entry_path}.id")
        if key in seen:
            raise ReconciliationError(f"duplicate participant {key}", key)
        seen.add(key)

        state = pending.pop(key, None)
        if state is None:
            raise ReconciliationError(f"no read state for participant {key}", key)

        participants.append(_convert_participant(raw_participant, key, state, entry_path))

    if pending:
        leftover = sorted(pending)
        if config.strict_read_states:
            raise ReconciliationError(
                f"read states without a participant: {leftover}", leftover[0]
            )
        logger.warning(
            "Ignoring %d read state(s) without a participant in %s: %s",
            len(leftover),
            path,
            leftover,
        )

    return participants


def _convert_participant(
    raw: RawParticipantData, key: ParticipantId, read_state: ReadState, path: str
) -> Participant:
    """maps the optional participant fields."""
    raw_type = optional(raw, "participant_type")
    raw_status = optional(raw, "invitation_status")
    raw_new_status = optional(raw, "new_invitation_status")

    return Participant(
        id=key,
        read_state=read_state,
        fallback_name=optional(raw, "fallback_name"),
        type=None if raw_type is None else enums.participant_type(raw_type),
        invitation_status=(
            None
            if raw_status is None
            else enums.invitation_status(raw_status, f"{path}.invitation_status")
        ),
        new_invitation_status=(
            None
            if raw_new_status is None
            else enums.invitation_status(raw_new_status, f"{path}.new_invitation_status")
        ),
    )
