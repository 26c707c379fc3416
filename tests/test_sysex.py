"""
Tests for the MTS SysEx codecs.

Tests cover:
- ChecksumCalculator and MidiMessageBuilder
- PresetName
- BulkDumpReply encode/decode and its error cases
- NoteChange encoding and chunking
"""

import mido
import pytest

from chuk_mcp_tuning.core import (
    DeviceId,
    Frequency,
    KeyNumber,
    MidiValue,
    MtsEntry,
    Preset,
    Scale,
)
from chuk_mcp_tuning.errors import (
    ChecksumCountMismatchError,
    ChecksumMismatchError,
    InvalidPresetNameError,
    MessageLengthError,
    OutOfRangeError,
    TooManyEntriesError,
    TruncatedMessageError,
    UnexpectedSubIdError,
    UnsupportedHeaderError,
)
from chuk_mcp_tuning.formats import from_hex_dump
from chuk_mcp_tuning.mapping import KeyboardMapping, compute_frequencies
from chuk_mcp_tuning.sysex import (
    BulkDumpReply,
    ChecksumCalculator,
    MidiMessageBuilder,
    NoteChange,
    NoteChangeEntry,
    PresetName,
    chunk_note_changes,
)

CARLOS_SUPER = Scale.parse_intervals("17/16 9/8 6/5 5/4 4/3 11/8 3/2 13/8 5/3 7/4 15/8 2/1")

CARLOS_SUPER_NOTE_CHANGES = [
    """
    F0 7F 00 08 02 08 40 00 00 00 00 01 01 06 2C 02 02 05 01 03 03 14 03 04 03 6E 3E 05 04 7D 40 06
    05 41 58 07 07 02 40 08 08 33 70 09 08 6B 7D 0A 09 58 0C 0B 0A 70 7E 0C 0C 00 00 0D 0D 06 2C 0E
    0E 05 01 0F 0F 14 03 10 0F 6E 3E 11 10 7D 40 12 11 41 58 13 13 02 40 14 14 33 70 15 14 6B 7D 16
    15 58 0C 17 16 70 7E 18 18 00 00 19 19 06 2C 1A 1A 05 01 1B 1B 14 03 1C 1B 6E 3E 1D 1C 7D 40 1E
    1D 41 58 1F 1F 02 40 20 20 33 70 21 20 6B 7D 22 21 58 0C 23 22 70 7E 24 24 00 00 25 25 06 2C 26
    26 05 01 27 27 14 03 28 27 6E 3E 29 28 7D 40 2A 29 41 58 2B 2B 02 40 2C 2C 33 70 2D 2C 6B 7D 2E
    2D 58 0C 2F 2E 70 7E 30 30 00 00 31 31 06 2C 32 32 05 01 33 33 14 03 34 33 6E 3E 35 34 7D 40 36
    35 41 58 37 37 02 40 38 38 33 70 39 38 6B 7D 3A 39 58 0C 3B 3A 70 7E 3C 3C 00 00 3D 3D 06 2C 3E
    3E 05 01 3F 3F 14 03 F7
    """,
    """
    F0 7F 00 08 02 08 40 40 3F 6E 3E 41 40 7D 40 42 41 41 58 43 43 02 40 44 44 33 70 45 44 6B 7D 46
    45 58 0C 47 46 70 7E 48 48 00 00 49 49 06 2C 4A 4A 05 01 4B 4B 14 03 4C 4B 6E 3E 4D 4C 7D 40 4E
    4D 41 58 4F 4F 02 40 50 50 33 70 51 50 6B 7D 52 51 58 0C 53 52 70 7E 54 54 00 00 55 55 06 2C 56
    56 05 01 57 57 14 03 58 57 6E 3E 59 58 7D 40 5A 59 41 58 5B 5B 02 40 5C 5C 33 70 5D 5C 6B 7D 5E
    5D 58 0C 5F 5E 70 7E 60 60 00 00 61 61 06 2C 62 62 05 01 63 63 14 03 64 63 6E 3E 65 64 7D 40 66
    65 41 58 67 67 02 40 68 68 33 70 69 68 6B 7D 6A 69 58 0C 6B 6A 70 7E 6C 6C 00 00 6D 6D 06 2C 6E
    6E 05 01 6F 6F 14 03 70 6F 6E 3E 71 70 7D 40 72 71 41 58 73 73 02 40 74 74 33 70 75 74 6B 7D 76
    75 58 0C 77 76 70 7E 78 78 00 00 79 79 06 2C 7A 7A 05 01 7B 7B 14 03 7C 7B 6E 3E 7D 7C 7D 40 7E
    7D 41 58 7F 7F 02 40 F7
    """,
]


def concert_a_reply() -> BulkDumpReply:
    frequencies = [m.frequency for m in compute_frequencies(
        Scale.parse_intervals("100.0 200.0 300.0 400.0 500.0 600.0 700.0 800.0 900.0 1000.0 1100.0 2/1"),
        KeyboardMapping.full_linear(),
    )]
    return BulkDumpReply.from_frequencies(DeviceId(0), Preset(0), "12-TET", frequencies)


class TestChecksumCalculator:
    """Tests for the running XOR checksum."""

    def test_seed(self) -> None:
        """An empty calculation yields the seed."""
        assert int(ChecksumCalculator().finalize()) == 0x7F

    def test_update_returns_value(self) -> None:
        """update() hands back what it was given and counts it."""
        calc = ChecksumCalculator()
        value = MidiValue(0x7E)
        assert calc.update(value) is value
        assert calc.count == 1
        assert int(calc.finalize()) == 0x01

    def test_update_from_slice(self) -> None:
        """Slices are folded in order."""
        calc = ChecksumCalculator()
        values = [MidiValue(1), MidiValue(2), MidiValue(4)]
        assert calc.update_from_slice(values) is values
        assert calc.count == 3
        assert int(calc.finalize(3)) == 0x7F ^ 1 ^ 2 ^ 4

    def test_count_mismatch(self) -> None:
        """An unexpected count is an error."""
        calc = ChecksumCalculator()
        calc.update(MidiValue(1))
        with pytest.raises(ChecksumCountMismatchError):
            calc.finalize(2)

    def test_verify(self) -> None:
        """verify() compares against the wire checksum."""
        calc = ChecksumCalculator()
        calc.update(MidiValue(0x10))
        calc.verify(0x6F, 1)
        with pytest.raises(ChecksumMismatchError, match="expected 00, computed 6F"):
            calc.verify(0x00)


class TestMidiMessageBuilder:
    """Tests for fixed-length message assembly."""

    def test_build(self) -> None:
        """A full builder hands out its values."""
        builder = MidiMessageBuilder(2).push(MidiValue(1)).extend([MidiValue(2)])
        assert len(builder) == 2
        assert builder.build() == [MidiValue(1), MidiValue(2)]

    def test_wrong_length(self) -> None:
        """Too few or too many values is an internal error."""
        with pytest.raises(MessageLengthError):
            MidiMessageBuilder(2).push(MidiValue(1)).build()
        with pytest.raises(MessageLengthError):
            MidiMessageBuilder(0).push(MidiValue(1)).build()


class TestPresetName:
    """Tests for PresetName."""

    def test_padding(self) -> None:
        """Short names are space padded to 16 characters."""
        name = PresetName.parse("abc")
        assert len(name.chars) == 16
        assert int(name.chars[-1]) == ord(" ")
        assert name.as_str() == "abc"
        assert str(name) == "abc"

    def test_exact_length(self) -> None:
        """16 characters fit exactly."""
        assert PresetName.parse("0123456789abcdef").as_str() == "0123456789abcdef"

    def test_too_long(self) -> None:
        """More than 16 characters is rejected."""
        with pytest.raises(InvalidPresetNameError):
            PresetName.parse("0123456789abcdefg")

    def test_not_ascii(self) -> None:
        """Only 7-bit characters are allowed."""
        with pytest.raises(InvalidPresetNameError):
            PresetName.parse("café")

    def test_from_chars_checks_length(self) -> None:
        """Names built from characters must be 16 long."""
        with pytest.raises(InvalidPresetNameError):
            PresetName.from_chars([])


class TestBulkDumpReply:
    """Tests for the Bulk Dump Reply codec."""

    def test_encode_layout(self) -> None:
        """408 bytes framed by F0/F7 with the MTS header."""
        data = concert_a_reply().to_bytes()
        assert len(data) == 408
        assert data[:5] == bytes([0xF0, 0x7E, 0x00, 0x08, 0x01])
        assert data[5] == 0x00
        assert data[6:22] == b"12-TET          "
        assert data[-1] == 0xF7

    def test_key_entries(self) -> None:
        """12-TET entries are whole note numbers."""
        data = concert_a_reply().to_bytes()
        entry_69 = 22 + 69 * 3
        assert data[entry_69 : entry_69 + 3] == bytes([69, 0, 0])

    def test_checksum(self) -> None:
        """The checksum is the XOR of everything between F0 and the checksum."""
        data = concert_a_reply().to_bytes()
        expected = 0x7F
        for b in data[1:-2]:
            expected ^= b
        assert data[-2] == expected

    def test_to_message(self) -> None:
        """Messages are mido SysEx messages without framing in data."""
        message = concert_a_reply().to_message()
        assert isinstance(message, mido.Message)
        assert message.type == "sysex"
        assert len(message.data) == 406

    def test_round_trip(self) -> None:
        """parse() inverts to_bytes()."""
        reply = concert_a_reply()
        decoded = BulkDumpReply.parse(reply.to_bytes())
        assert decoded == reply
        assert decoded.name.as_str() == "12-TET"
        assert decoded.frequencies()[69].hz == 440.0

    def test_entry_count(self) -> None:
        """A bulk dump always has 128 entries."""
        with pytest.raises(ValueError):
            BulkDumpReply(DeviceId(0), Preset(0), PresetName.parse(""), (MtsEntry.from_bytes(0, 0, 0),))

    def test_corrupt_byte(self) -> None:
        """Changing any checksummed byte after the sub-ids fails the checksum."""
        original = concert_a_reply().to_bytes()
        # device id, then preset, name and key entries up to the checksum
        for index in [2, *range(5, len(original) - 2)]:
            data = bytearray(original)
            data[index] ^= 0x01
            with pytest.raises(ChecksumMismatchError):
                BulkDumpReply.parse(data)

    def test_truncated(self) -> None:
        """A short message is truncated."""
        data = concert_a_reply().to_bytes()
        with pytest.raises(TruncatedMessageError):
            BulkDumpReply.parse(data[:200])

    def test_missing_eox(self) -> None:
        """The final byte must be F7."""
        data = bytearray(concert_a_reply().to_bytes())
        data[-1] = 0x00
        with pytest.raises(TruncatedMessageError, match="EOX"):
            BulkDumpReply.parse(data)

    def test_not_sysex(self) -> None:
        """The first byte must be F0."""
        data = bytearray(concert_a_reply().to_bytes())
        data[0] = 0x90
        with pytest.raises(UnsupportedHeaderError):
            BulkDumpReply.parse(data)

    def test_real_time_header(self) -> None:
        """A real-time universal id is not a bulk dump."""
        data = bytearray(concert_a_reply().to_bytes())
        data[1] = 0x7F
        with pytest.raises(UnsupportedHeaderError):
            BulkDumpReply.parse(data)

    def test_not_midi_tuning(self) -> None:
        """Sub-id #1 must be MIDI Tuning."""
        data = bytearray(concert_a_reply().to_bytes())
        data[3] = 0x09
        with pytest.raises(UnexpectedSubIdError, match="MIDI Tuning"):
            BulkDumpReply.parse(data)

    def test_not_bulk_dump(self) -> None:
        """Sub-id #2 must be Bulk Dump reply."""
        data = bytearray(concert_a_reply().to_bytes())
        data[4] = 0x02
        with pytest.raises(UnexpectedSubIdError, match="Bulk Dump"):
            BulkDumpReply.parse(data)

    def test_universal_id_high_bit_set(self) -> None:
        """A status byte in place of the universal id is an unsupported header."""
        data = bytearray(concert_a_reply().to_bytes())
        data[1] = 0xF7
        with pytest.raises(UnsupportedHeaderError, match="non-real-time"):
            BulkDumpReply.parse(data)

    def test_high_bit_set(self) -> None:
        """Data bytes must be 7-bit."""
        data = bytearray(concert_a_reply().to_bytes())
        data[30] = 0x80
        with pytest.raises(OutOfRangeError):
            BulkDumpReply.parse(data)

    def test_empty(self) -> None:
        """No bytes at all is truncated."""
        with pytest.raises(TruncatedMessageError):
            BulkDumpReply.parse(b"")


class TestNoteChange:
    """Tests for Note Change messages."""

    def test_single_entry(self) -> None:
        """Header, count and one (key, note, msb, lsb) entry."""
        message = NoteChange(
            DeviceId(0),
            Preset(8),
            (NoteChangeEntry(KeyNumber(69), Frequency(440.0).to_mts_entry()),),
        )
        assert message.to_bytes() == bytes([0xF0, 0x7F, 0x00, 0x08, 0x02, 0x08, 0x01, 69, 69, 0, 0, 0xF7])
        assert len(message.to_values()) == 6 + 4

    def test_empty(self) -> None:
        """A message with no entries is just the header."""
        message = NoteChange(DeviceId(0x7F), Preset(0), ())
        assert message.to_bytes() == bytes([0xF0, 0x7F, 0x7F, 0x08, 0x02, 0x00, 0x00, 0xF7])

    def test_too_many_entries(self) -> None:
        """A single message holds at most 127 entries."""
        entry = NoteChangeEntry(KeyNumber(0), MtsEntry.from_bytes(0, 0, 0))
        with pytest.raises(TooManyEntriesError):
            NoteChange(DeviceId(0), Preset(0), (entry,) * 128)

    def test_carlos_super_chunks(self) -> None:
        """Carlos Super above MIDI note 0 in two messages of 64 keys."""
        mappings = compute_frequencies(CARLOS_SUPER, KeyboardMapping.full(0, 0, Frequency.MIN))
        entries = [NoteChangeEntry(m.key, m.frequency.to_mts_entry()) for m in mappings]
        messages = chunk_note_changes(DeviceId(0), Preset(8), entries, 64)
        assert len(messages) == 2
        for message, expected in zip(messages, CARLOS_SUPER_NOTE_CHANGES):
            data = message.to_bytes()
            assert len(data) == 6 + 256 + 2
            assert data == from_hex_dump(expected)

    def test_chunking(self) -> None:
        """Chunks keep order and the last one takes the remainder."""
        entries = [NoteChangeEntry(KeyNumber(k), MtsEntry.from_bytes(k, 0, 0)) for k in range(10)]
        messages = chunk_note_changes(DeviceId(0), Preset(0), entries, 4)
        assert [len(m.entries) for m in messages] == [4, 4, 2]
        assert [int(e.key_number) for m in messages for e in m.entries] == list(range(10))

    def test_default_chunk_size(self) -> None:
        """One entry per message by default."""
        entries = [NoteChangeEntry(KeyNumber(k), MtsEntry.from_bytes(k, 0, 0)) for k in range(3)]
        assert len(chunk_note_changes(DeviceId(0), Preset(0), entries)) == 3

    @pytest.mark.parametrize("size", [0, 128])
    def test_invalid_chunk_size(self, size: int) -> None:
        """Chunk size must be 1-127."""
        with pytest.raises(ValueError, match="Chunk size"):
            chunk_note_changes(DeviceId(0), Preset(0), [], size)
