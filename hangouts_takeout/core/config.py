"""Converter configuration."""

from dataclasses import dataclass

from hangouts_takeout.core.scalars import TimestampUnit


@dataclass(frozen=True)
class ConverterConfig:
    """
    settings fixed for the lifetime of one converter run.

    Attributes:
        timestamp_unit: unit of every raw timestamp in the export; depends on
            the export era and is never guessed from the numbers themselves
        strict_read_states: if True, read states that match no participant
            fail the conversation instead of being logged and dropped
    """

    timestamp_unit: TimestampUnit = TimestampUnit.MICROSECONDS
    strict_read_states: bool = False


DEFAULT_CONFIG = ConverterConfig()
