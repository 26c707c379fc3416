"""
Seven-bit primitives - U7 and its semantic roles.

Every MIDI data byte is a 7-bit value (0-127). U7 is the one bounded-integer
type; the role subclasses (KeyNumber, Msb, Preset, ...) exist so that a key
number can't be compared equal to a preset by accident.
"""

from __future__ import annotations

from collections.abc import Iterator
from functools import total_ordering
from typing import ClassVar, TypeVar

from chuk_mcp_tuning.errors import OutOfRangeError

_MASK = 0x7F

U = TypeVar("U", bound="U7")


@total_ordering
class U7:
    """
    An integer in [0, 127].

    Checked on construction: U7(128) raises OutOfRangeError.
    Use U7.from_lossy() to truncate instead.

    Immutable and hashable.
    """

    __slots__ = ("_value",)
    _value: int

    ZERO: ClassVar[U7]
    MAX: ClassVar[U7]

    def __init__(self, value: int) -> None:
        if isinstance(value, U7):
            value = value._value
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"{type(self).__name__} requires an int, got {type(value).__name__}")
        if not 0 <= value <= _MASK:
            raise OutOfRangeError(value, type(self).__name__)
        object.__setattr__(self, "_value", int(value))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def from_lossy(cls: type[U], value: int) -> U:
        """Construct by masking off everything above bit 6. Never fails."""
        return cls(int(value) & _MASK)

    @classmethod
    def try_from(cls: type[U], value: int) -> U:
        """Construct with a range check (raises OutOfRangeError)."""
        return cls(value)

    @classmethod
    def range(cls: type[U], start: U7 | int, end: U7 | int) -> Iterator[U] | None:
        """
        Iterate the closed range [start, end].

        Returns None if start > end.
        """
        first = int(start)
        last = int(end)
        if first > last:
            return None
        return (cls(i) for i in range(first, last + 1))

    def to_u8(self) -> int:
        return self._value

    def is_max(self) -> bool:
        return self._value == _MASK

    def checked_add(self: U, other: U7 | int) -> U | None:
        """Add, or None if the result leaves [0, 127]."""
        result = self._value + int(other)
        if not 0 <= result <= _MASK:
            return None
        return type(self)(result)

    def checked_sub(self: U, other: U7 | int) -> U | None:
        """Subtract, or None if the result leaves [0, 127]."""
        result = self._value - int(other)
        if not 0 <= result <= _MASK:
            return None
        return type(self)(result)

    def widening_add(self, other: U7 | int) -> int:
        return self._value + int(other)

    def widening_sub(self, other: U7 | int) -> int:
        return self._value - int(other)

    def __xor__(self: U, other: U7 | int) -> U:
        if not isinstance(other, (U7, int)):
            return NotImplemented
        return type(self).from_lossy(self._value ^ int(other))

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, U7):
            return type(self) is type(other) and self._value == other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: U7 | int) -> bool:
        if not isinstance(other, (U7, int)):
            return NotImplemented
        return self._value < int(other)

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __format__(self, format_spec: str) -> str:
        return format(self._value, format_spec)


class MidiValue(U7):
    """A generic 7-bit data byte."""

    __slots__ = ()


class DeviceId(U7):
    """SysEx device id (0x7F = all devices)."""

    __slots__ = ()


class Preset(U7):
    """Tuning program number."""

    __slots__ = ()


class KeyNumber(U7):
    """A MIDI key on the keyboard."""

    __slots__ = ()


class NoteNumber(U7):
    """The equal-tempered base note of an MTS entry."""

    __slots__ = ()


class Msb(U7):
    """Coarse fraction of a semitone (bits 7-13)."""

    __slots__ = ()


class Lsb(U7):
    """Fine fraction of a semitone (bits 0-6)."""

    __slots__ = ()


class Char7(U7):
    """A 7-bit ASCII character."""

    __slots__ = ()


class Checksum(U7):
    """Running XOR checksum of a Bulk Dump Reply."""

    __slots__ = ()


class ChunkSize(U7):
    """Maximum number of note changes per message."""

    __slots__ = ()


# Initialize class constants after the classes are defined
for _cls in (U7, MidiValue, DeviceId, Preset, KeyNumber, NoteNumber, Msb, Lsb, Char7, Checksum, ChunkSize):
    _cls.ZERO = _cls(0)
    _cls.MAX = _cls(_MASK)
del _cls
