"""Decoders for numbers and timestamps stored as text in the export."""

import math
import re
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Optional

from hangouts_takeout.core.errors import NumericFormatError

_DECIMAL = re.compile(r"-?[0-9]+")
_FLOAT = re.compile(r"-?[0-9]+(\.[0-9]+)?([eE][-+]?[0-9]+)?")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_MICROS_PER_SECOND = 1_000_000

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class TimestampUnit(Enum):
    """unit of a raw timestamp; the value is the number of units per second."""

    SECONDS = 1
    MILLISECONDS = 1_000
    MICROSECONDS = 1_000_000

    @property
    def micros(self) -> int:
        """number of microseconds in one unit."""
        return _MICROS_PER_SECOND // self.value


def decode_integer(text: Any, field: Optional[str] = None) -> int:
    """
    parses a signed decimal string.

    Args:
        text: raw value, expected to be a string of ASCII digits with an
            optional leading minus sign
        field: name of the raw field, used in error messages

    Returns:
        parsed integer

    Raises:
        NumericFormatError: if text is not a string, is empty, has any other
            character, or falls outside the signed 64-bit range
    """
    if not isinstance(text, str):
        raise NumericFormatError(text, field, "expected a decimal string")
    if not _DECIMAL.fullmatch(text):
        raise NumericFormatError(text, field)

    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise NumericFormatError(text, field, "out of range")
    return value


def decode_timestamp(value: int, unit: TimestampUnit) -> datetime:
    """
    converts a count of units since the Unix epoch to an aware UTC datetime.

    The count is split into whole seconds and a sub-second remainder with
    floor division, so pre-epoch values keep their exact sub-second part.

    Raises:
        NumericFormatError: if the instant is outside datetime's range
    """
    seconds, remainder = divmod(value, unit.value)
    try:
        return EPOCH + timedelta(
            seconds=seconds, microseconds=remainder * unit.micros
        )
    except OverflowError as e:
        raise NumericFormatError(value, reason=str(e)) from e


def encode_timestamp(moment: datetime, unit: TimestampUnit) -> int:
    """converts an aware datetime back to a count of units since the epoch."""
    delta = moment - EPOCH
    micros = (delta.days * 86_400 + delta.seconds) * _MICROS_PER_SECOND
    micros += delta.microseconds
    return micros // unit.micros


def decode_timestamp_text(
    text: Any, unit: TimestampUnit, field: Optional[str] = None
) -> datetime:
    """parses a numeric-string timestamp in the given unit."""
    value = decode_integer(text, field)
    try:
        return decode_timestamp(value, unit)
    except NumericFormatError as e:
        raise NumericFormatError(text, field, "timestamp out of range") from e


def decode_duration(text: Any, field: Optional[str] = None) -> timedelta:
    """parses a whole number of seconds."""
    seconds = decode_integer(text, field)
    if seconds < 0:
        raise NumericFormatError(text, field, "negative duration")
    try:
        return timedelta(seconds=seconds)
    except OverflowError as e:
        raise NumericFormatError(text, field, "out of range") from e


def decode_count(value: Any, field: str) -> int:
    """
    decodes a non-negative size such as a pixel width.

    The export stores some sizes as JSON numbers and others as numeric
    strings, so both are accepted; booleans and floats are not.
    """
    if isinstance(value, bool):
        raise NumericFormatError(value, field, "expected an integer")
    if isinstance(value, int):
        number = value
    else:
        number = decode_integer(value, field)

    if number < 0:
        raise NumericFormatError(value, field, "negative size")
    return number


def decode_float(value: Any, field: str) -> float:
    """decodes a finite coordinate given as a JSON number or numeric string."""
    if isinstance(value, bool):
        raise NumericFormatError(value, field, "expected a number")
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        if not _FLOAT.fullmatch(value):
            raise NumericFormatError(value, field, "expected a decimal number")
        number = float(value)
    else:
        raise NumericFormatError(value, field, "expected a number")

    if not math.isfinite(number):
        raise NumericFormatError(value, field, "not finite")
    return number
