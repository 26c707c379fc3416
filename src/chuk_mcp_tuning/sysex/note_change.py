"""
MTS Note Change - retune up to 127 keys in real time.

Wire layout:

    F0 7F <device> 08 02 <preset> <count> (<key> <note> <msb> <lsb>) x count F7

Unlike the Bulk Dump Reply there is no checksum. Larger tunings are split
into several messages with chunk_note_changes().
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from mido import Message

from chuk_mcp_tuning.constants import (
    NOTE_CHANGE_ENTRY_SIZE,
    NOTE_CHANGE_HEADER_SIZE,
    NOTE_CHANGE_MAX_ENTRIES,
    ErrorMessages,
    SysExId,
    TuningSubId,
)
from chuk_mcp_tuning.core.pitch import MtsEntry
from chuk_mcp_tuning.core.u7 import U7, ChunkSize, DeviceId, KeyNumber, MidiValue, Preset
from chuk_mcp_tuning.errors import TooManyEntriesError
from chuk_mcp_tuning.sysex.builder import MidiMessageBuilder


@dataclass(frozen=True)
class NoteChangeEntry:
    """Retune one key."""

    key_number: KeyNumber
    mts: MtsEntry


@dataclass(frozen=True)
class NoteChange:
    """One Note Change message."""

    device_id: DeviceId
    preset: Preset
    entries: tuple[NoteChangeEntry, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.entries, tuple):
            object.__setattr__(self, "entries", tuple(self.entries))
        if len(self.entries) > NOTE_CHANGE_MAX_ENTRIES:
            raise TooManyEntriesError(
                f"Too many note changes: {len(self.entries)} (max {NOTE_CHANGE_MAX_ENTRIES})"
            )

    def to_values(self) -> list[U7]:
        """The data values between F0 and F7."""
        entry_count = len(self.entries)
        values = MidiMessageBuilder(NOTE_CHANGE_HEADER_SIZE + entry_count * NOTE_CHANGE_ENTRY_SIZE)
        values.push(MidiValue(SysExId.UNIVERSAL_REAL_TIME))
        values.push(self.device_id)
        values.push(MidiValue(TuningSubId.MIDI_TUNING))
        values.push(MidiValue(TuningSubId.NOTE_CHANGE))
        values.push(self.preset)
        values.push(MidiValue(entry_count))

        for entry in self.entries:
            values.push(entry.key_number)
            values.push(entry.mts.note_number)
            values.push(entry.mts.msb)
            values.push(entry.mts.lsb)

        return values.build()

    def to_message(self) -> Message:
        return Message("sysex", data=[int(v) for v in self.to_values()])

    def to_bytes(self) -> bytes:
        """The framed message, F0 through F7."""
        return bytes(self.to_message().bytes())


def chunk_note_changes(
    device_id: DeviceId,
    preset: Preset,
    entries: Sequence[NoteChangeEntry],
    chunk_size: ChunkSize | int = 1,
) -> list[NoteChange]:
    """
    Split entries into Note Change messages of at most chunk_size entries.

    Args:
        device_id: Target device (0x7F = all)
        preset: Tuning program to modify
        entries: Keys to retune, in send order
        chunk_size: Entries per message, 1-127

    Returns:
        ceil(len(entries) / chunk_size) messages, in order
    """
    size = int(chunk_size)
    if not 1 <= size <= NOTE_CHANGE_MAX_ENTRIES:
        raise ValueError(ErrorMessages.INVALID_CHUNK_SIZE.format(chunk_size=size))
    return [
        NoteChange(device_id, preset, tuple(entries[i : i + size]))
        for i in range(0, len(entries), size)
    ]
