"""
Error types for the tuning system.

Everything derives from TuningError, which is a ValueError, so callers that
only care about "bad input" can keep catching ValueError.
"""

from __future__ import annotations


class TuningError(ValueError):
    """Base class for all tuning errors."""


# Syntax errors


class InvalidIntervalSyntaxError(TuningError):
    """An interval token is neither a cents value nor a ratio."""


class MalformedScaleFileError(TuningError):
    """A .scl file does not have the expected structure."""


class MalformedKeyboardMappingFileError(TuningError):
    """A .kbm file does not have the expected structure."""


class InvalidPresetNameError(TuningError):
    """A preset name is not 7-bit ASCII or is too long."""


# Range errors


class OutOfRangeError(TuningError):
    """A value does not fit in 7 bits."""

    def __init__(self, value: int, type_name: str = "U7") -> None:
        super().__init__(f"{type_name} must be 0-127, got {value}")
        self.value = value


class InvalidKeyRangeError(TuningError):
    """End key is below start key."""


class EmptyScaleError(TuningError):
    """A scale needs at least one interval (the equave)."""


class DegreeOutOfRangeError(TuningError):
    """A keyboard mapping refers to a degree the scale does not have."""


class UnsupportedEquaveDegreeError(TuningError):
    """Keyboard mapping files must use an equave degree of 12."""


class UnsupportedKeyMappingError(TuningError):
    """Unmapped keys are parsed but cannot be tuned."""


# Protocol errors


class ProtocolError(TuningError):
    """A SysEx message could not be decoded."""


class UnsupportedHeaderError(ProtocolError):
    """Message does not start with the expected SysEx header."""


class UnexpectedSubIdError(ProtocolError):
    """Message is not the expected MTS message type."""


class TruncatedMessageError(ProtocolError):
    """Message ended early or is missing its EOX byte."""


class ChecksumMismatchError(ProtocolError):
    """Computed checksum differs from the one on the wire."""


class ChecksumCountMismatchError(ProtocolError):
    """Wrong number of values were folded into a checksum."""


# Capacity errors


class TooManyEntriesError(TuningError):
    """More note changes than fit in a single message."""


class MessageLengthError(RuntimeError):
    """A built message is not the length its format requires.

    This is an internal invariant, not bad input.
    """


# Devices


class PortNotFoundError(TuningError):
    """No MIDI port with the requested name."""

    def __init__(self, name: str, available: list[str], direction: str = "output") -> None:
        choices = ", ".join(available) if available else "(none)"
        super().__init__(f"No MIDI {direction} port with name {name} found: choose from {choices}")
        self.name = name
        self.available = available
        self.direction = direction
