"""
MTS Bulk Dump Reply - a full 128-key tuning in one checksummed SysEx message.

Wire layout (408 bytes):

    F0 7E <device> 08 01 <preset> <name x 16> (<note> <msb> <lsb>) x 128 <checksum> F7

The checksum is the running XOR (seeded with 0x7F) of every byte between
F0 and the checksum.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import TypeVar

from mido import Message

from chuk_mcp_tuning.constants import (
    BULK_DUMP_REPLY_CHECKSUM_COUNT,
    BULK_DUMP_REPLY_MESSAGE_SIZE,
    EOX,
    KEY_COUNT,
    PRESET_NAME_LEN,
    SYSEX,
    SysExId,
    TuningSubId,
)
from chuk_mcp_tuning.core.pitch import Frequency, MtsEntry
from chuk_mcp_tuning.core.u7 import (
    U7,
    Char7,
    Checksum,
    DeviceId,
    Lsb,
    MidiValue,
    Msb,
    NoteNumber,
    Preset,
)
from chuk_mcp_tuning.errors import (
    TruncatedMessageError,
    UnexpectedSubIdError,
    UnsupportedHeaderError,
)
from chuk_mcp_tuning.sysex.builder import MidiMessageBuilder
from chuk_mcp_tuning.sysex.checksum import ChecksumCalculator
from chuk_mcp_tuning.sysex.preset_name import PresetName

logger = logging.getLogger(__name__)

V = TypeVar("V", bound=U7)


class _ByteReader:
    """Pulls typed 7-bit values off a byte stream."""

    def __init__(self, data: Iterable[int]) -> None:
        self._iter: Iterator[int] = iter(data)

    def read_byte(self) -> int:
        try:
            return next(self._iter)
        except StopIteration:
            raise TruncatedMessageError("Failed to read byte: message ended early") from None

    def read(self, value_type: type[V]) -> V:
        return value_type(self.read_byte())


@dataclass(frozen=True)
class BulkDumpReply:
    """A decoded (or to-be-encoded) Bulk Dump Reply."""

    device_id: DeviceId
    preset: Preset
    name: PresetName
    entries: tuple[MtsEntry, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.entries, tuple):
            object.__setattr__(self, "entries", tuple(self.entries))
        if len(self.entries) != KEY_COUNT:
            raise ValueError(f"Bulk dump needs exactly {KEY_COUNT} entries, got {len(self.entries)}")

    @classmethod
    def from_frequencies(
        cls,
        device_id: DeviceId,
        preset: Preset,
        name: PresetName | str,
        frequencies: Sequence[Frequency],
    ) -> BulkDumpReply:
        """Build from one frequency per key (keys 0-127)."""
        if isinstance(name, str):
            name = PresetName.parse(name)
        return cls(
            device_id=device_id,
            preset=preset,
            name=name,
            entries=tuple(f.to_mts_entry() for f in frequencies),
        )

    @classmethod
    def parse(cls, data: Iterable[int]) -> BulkDumpReply:
        """
        Decode a framed Bulk Dump Reply (F0 ... F7).

        Raises:
            UnsupportedHeaderError: Not a universal non-real-time SysEx
            UnexpectedSubIdError: Not an MTS Bulk Dump Reply
            TruncatedMessageError: Message ended early or EOX missing
            OutOfRangeError: A data byte has its high bit set
            ChecksumMismatchError: Checksum does not match contents
        """
        calc = ChecksumCalculator()
        reader = _ByteReader(data)

        if reader.read_byte() != SYSEX:
            raise UnsupportedHeaderError("Unsupported header: expected SysEx start")

        universal_id = reader.read_byte()
        if universal_id != SysExId.UNIVERSAL_NON_REAL_TIME:
            raise UnsupportedHeaderError("Unsupported header: expected universal non-real-time")
        calc.update(MidiValue(universal_id))

        device_id = calc.update(reader.read(DeviceId))

        if calc.update(reader.read(MidiValue)) != TuningSubId.MIDI_TUNING:
            raise UnexpectedSubIdError("Expected MIDI Tuning")

        if calc.update(reader.read(MidiValue)) != TuningSubId.BULK_DUMP_REPLY:
            raise UnexpectedSubIdError("Expected Bulk Dump reply")

        preset = calc.update(reader.read(Preset))

        name = PresetName.from_chars(
            calc.update_from_slice([reader.read(Char7) for _ in range(PRESET_NAME_LEN)])
        )

        entries = []
        for _ in range(KEY_COUNT):
            note_number = calc.update(reader.read(NoteNumber))
            msb = calc.update(reader.read(Msb))
            lsb = calc.update(reader.read(Lsb))
            entries.append(MtsEntry(note_number, msb, lsb))

        checksum = reader.read(Checksum)

        if reader.read_byte() != EOX:
            raise TruncatedMessageError("EOX not found")

        calc.verify(checksum, BULK_DUMP_REPLY_CHECKSUM_COUNT)

        reply = cls(device_id=device_id, preset=preset, name=name, entries=tuple(entries))
        logger.debug(f"Decoded bulk dump '{reply.name}' (device {device_id}, preset {preset})")
        return reply

    def to_values(self) -> list[U7]:
        """The 406 data values between F0 and F7, checksum last."""
        calc = ChecksumCalculator()
        values = MidiMessageBuilder(BULK_DUMP_REPLY_MESSAGE_SIZE)
        values.push(calc.update(MidiValue(SysExId.UNIVERSAL_NON_REAL_TIME)))
        values.push(calc.update(self.device_id))
        values.push(calc.update(MidiValue(TuningSubId.MIDI_TUNING)))
        values.push(calc.update(MidiValue(TuningSubId.BULK_DUMP_REPLY)))
        values.push(calc.update(self.preset))
        values.extend(calc.update_from_slice(self.name.chars))

        for entry in self.entries:
            values.push(calc.update(entry.note_number))
            values.push(calc.update(entry.msb))
            values.push(calc.update(entry.lsb))

        values.push(calc.finalize(BULK_DUMP_REPLY_CHECKSUM_COUNT))
        return values.build()

    def to_message(self) -> Message:
        """A mido SysEx message; mido supplies the F0/F7 framing."""
        return Message("sysex", data=[int(v) for v in self.to_values()])

    def to_bytes(self) -> bytes:
        """The framed message, 408 bytes."""
        return bytes(self.to_message().bytes())

    def frequencies(self) -> list[Frequency]:
        return [entry.to_frequency() for entry in self.entries]
