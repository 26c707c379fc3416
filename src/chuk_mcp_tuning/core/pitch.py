"""
Pitch primitives - Frequency, Semitones and MtsEntry.

These are the numeric core of the tuning pipeline:

    Frequency (Hz) <-> Semitones (fractional MIDI note) <-> MtsEntry (3 bytes)

Values are rounded to 6 decimal places at the Hz/semitone boundary so that
repeated round trips through the wire format are stable.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar

from chuk_mcp_tuning.constants import (
    A4_FREQUENCY,
    A4_NOTE_NUMBER,
    DEFAULT_ROUNDING_SCALE,
    FRACTION_SCALE,
    SEMITONES_PER_OCTAVE,
)
from chuk_mcp_tuning.core.u7 import Lsb, Msb, NoteNumber


def round_half_away(value: float) -> float:
    """Round to the nearest integer, ties away from zero."""
    return math.copysign(math.floor(abs(value) + 0.5), value)


def round_default_scale(value: float) -> float:
    """Round to the wire format's resolution (6 decimal places)."""
    return round_half_away(value * DEFAULT_ROUNDING_SCALE) / DEFAULT_ROUNDING_SCALE


@dataclass(frozen=True)
class Semitones:
    """
    Fractional MIDI note number (69.0 = A4).

    The integer part is the equal-tempered note, the fraction is carried
    on the wire as a 14-bit MSB/LSB pair.
    """

    value: float

    MAX: ClassVar[Semitones]

    def to_mts_entry(self) -> MtsEntry:
        """
        Pack into note number + 14-bit fraction.

        Values at or below zero clamp to (0, 0, 0). Values above MAX clamp to
        (127, 127, 126): the top of the fraction is one unit below full scale.
        """
        if self.value <= 0.0:
            return MtsEntry(NoteNumber.ZERO, Msb.ZERO, Lsb.ZERO)

        if self.value > Semitones.MAX.value:
            return MtsEntry(NoteNumber.MAX, Msb.MAX, Lsb(0x7E))

        note_number = math.floor(self.value)
        fine = int(round_half_away(FRACTION_SCALE * (self.value - note_number)))
        return MtsEntry(
            NoteNumber(note_number),
            Msb.from_lossy((fine >> 7) & 0x7F),
            Lsb.from_lossy(fine & 0x7F),
        )

    def to_frequency(self) -> Frequency:
        """Equal-tempered frequency, unrounded."""
        exponent = (self.value - A4_NOTE_NUMBER) / SEMITONES_PER_OCTAVE
        return Frequency(A4_FREQUENCY * 2.0**exponent)

    def __str__(self) -> str:
        return f"{self.value}"


Semitones.MAX = Semitones(127.999878)


@dataclass(frozen=True)
class Frequency:
    """A frequency in hertz."""

    hz: float

    MIN: ClassVar[Frequency]
    CONCERT_A4: ClassVar[Frequency]
    MAX: ClassVar[Frequency]

    def to_semitones(self, ignore_limit: bool = False) -> Semitones:
        """
        Distance in semitones from MIDI note 0, rounded to 6 decimal places.

        Non-positive frequencies map to 0. Frequencies above MAX clamp to
        Semitones.MAX unless ignore_limit is set.
        """
        if self.hz <= 0.0:
            return Semitones(0.0)

        if self.hz > Frequency.MAX.hz and not ignore_limit:
            return Semitones.MAX

        raw = A4_NOTE_NUMBER + SEMITONES_PER_OCTAVE * math.log2(self.hz / A4_FREQUENCY)
        return Semitones(round_default_scale(raw))

    def to_mts_entry(self) -> MtsEntry:
        return self.to_semitones().to_mts_entry()

    def __float__(self) -> float:
        return self.hz

    def __str__(self) -> str:
        return f"{self.hz}"


Frequency.MIN = Frequency(A4_FREQUENCY * 2.0 ** (-A4_NOTE_NUMBER / SEMITONES_PER_OCTAVE))
Frequency.CONCERT_A4 = Frequency(A4_FREQUENCY)
Frequency.MAX = Frequency(13289.656616)


@dataclass(frozen=True)
class MtsEntry:
    """
    One key's tuning as carried on the wire.

    note_number is the equal-tempered base note; msb/lsb form a 14-bit
    fraction of a semitone above it.
    """

    note_number: NoteNumber
    msb: Msb
    lsb: Lsb

    @classmethod
    def from_bytes(cls, note_number: int, msb: int, lsb: int) -> MtsEntry:
        """Checked construction from plain ints."""
        return cls(NoteNumber(note_number), Msb(msb), Lsb(lsb))

    def to_semitones(self) -> Semitones:
        # The encoder never emits (127, x, 127); treat it as 126 so the ceiling round-trips
        lsb = 0x7E if self.note_number.is_max() and self.lsb.is_max() else int(self.lsb)
        fine = ((int(self.msb) << 7) + lsb) / FRACTION_SCALE
        return Semitones(int(self.note_number) + fine)

    def to_frequency(self) -> Frequency:
        frequency = self.to_semitones().to_frequency()
        return Frequency(round_default_scale(frequency.hz))

    def as_tuple(self) -> tuple[int, int, int]:
        return (int(self.note_number), int(self.msb), int(self.lsb))

    def __str__(self) -> str:
        return f"{int(self.note_number):02X} {int(self.msb):02X} {int(self.lsb):02X}"
