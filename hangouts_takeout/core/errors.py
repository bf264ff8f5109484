"""Error types raised while converting a raw Hangouts export."""

from typing import Any, Optional


class ConversionError(Exception):
    """base class for every failure of the raw-to-domain conversion."""


class NumericFormatError(ConversionError, ValueError):
    """a text field that should hold a decimal number does not parse."""

    def __init__(self, text: Any, field: Optional[str] = None, reason: str = "") -> None:
        self.text = text
        self.field = field
        where = f" in {field}" if field else ""
        detail = f": {reason}" if reason else ""
        super().__init__(f"invalid number {text!r}{where}{detail}")


class UnknownEnumValue(ConversionError):
    """a raw code falls outside the known set for a field."""

    def __init__(self, field: str, raw_code: Any) -> None:
        self.field = field
        self.raw_code = raw_code
        super().__init__(f"unknown value {raw_code!r} for {field}")


class TagPayloadMismatch(ConversionError):
    """a discriminant tag and the payload it accompanies disagree."""

    def __init__(self, tag: str, payload_keys: list[str], reason: str = "") -> None:
        self.tag = tag
        self.payload_keys = payload_keys
        detail = f" ({reason})" if reason else ""
        super().__init__(
            f"tag {tag!r} does not match payload {sorted(payload_keys)}{detail}"
        )


class ReconciliationError(ConversionError):
    """participants and read states cannot be paired one-to-one."""

    def __init__(self, message: str, participant_id: Any = None) -> None:
        self.participant_id = participant_id
        super().__init__(message)


class MissingRequiredField(ConversionError):
    """a field the domain model requires is absent from the raw tree."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"missing required field {field}")


class FieldTypeError(ConversionError):
    """a present field holds a value of the wrong JSON type."""

    def __init__(self, field: str, value: Any, expected: str) -> None:
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(f"expected {expected} in {field}, got {value!r}")
