"""
Core tuning primitives - the numeric layer.

These are the invariants everything else composes on:
- U7 and its roles: 7-bit MIDI data bytes (KeyNumber, Msb, Lsb, Preset, ...)
- Interval: exact ratio or exact cents
- Scale: intervals ending in the equave
- Frequency / Semitones / MtsEntry: Hz <-> fractional note <-> wire bytes
- MidiNote: the 128 equal-tempered notes
"""

from chuk_mcp_tuning.core.interval import CentsInterval, Interval, RatioInterval
from chuk_mcp_tuning.core.midi_note import ALL_MIDI_NOTES, MidiNote
from chuk_mcp_tuning.core.pitch import Frequency, MtsEntry, Semitones, round_default_scale
from chuk_mcp_tuning.core.scale import Scale
from chuk_mcp_tuning.core.u7 import (
    U7,
    Char7,
    Checksum,
    ChunkSize,
    DeviceId,
    KeyNumber,
    Lsb,
    MidiValue,
    Msb,
    NoteNumber,
    Preset,
)

__all__ = [
    # 7-bit values
    "U7",
    "Char7",
    "Checksum",
    "ChunkSize",
    "DeviceId",
    "KeyNumber",
    "Lsb",
    "MidiValue",
    "Msb",
    "NoteNumber",
    "Preset",
    # Intervals
    "Interval",
    "RatioInterval",
    "CentsInterval",
    "Scale",
    # Pitch
    "Frequency",
    "Semitones",
    "MtsEntry",
    "round_default_scale",
    # Notes
    "MidiNote",
    "ALL_MIDI_NOTES",
]
