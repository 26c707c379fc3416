"""
Constants for the MIDI Tuning Standard wire format.

No magic numbers in the codecs - everything the messages are built from lives here.
"""

from enum import IntEnum

# SysEx framing bytes (not 7-bit, never checksummed)
SYSEX = 0xF0
EOX = 0xF7

# Pitch anchor
A4_NOTE_NUMBER = 69
A4_FREQUENCY = 440.0
SEMITONES_PER_OCTAVE = 12
CENTS_PER_OCTAVE = 1200

# 14-bit fraction of a semitone carried as MSB/LSB
FRACTION_SCALE = 0x4000

# Wire format resolution for frequencies and semitones (6 decimal places)
DEFAULT_ROUNDING_SCALE = 1_000_000.0

# Number of keys covered by a Bulk Dump Reply
KEY_COUNT = 128

# Preset names are fixed width
PRESET_NAME_LEN = 16

# Tuning program written when none is chosen
DEFAULT_PRESET = 8

# Bulk Dump Reply: universal id + device id + 2 sub-ids + preset + 16 name + 128 x 3
BULK_DUMP_REPLY_CHECKSUM_COUNT = 405
# Checksummed values plus the checksum itself, excluding F0/F7
BULK_DUMP_REPLY_MESSAGE_SIZE = BULK_DUMP_REPLY_CHECKSUM_COUNT + 1

# Note Change: header is 6 values, then 4 per entry
NOTE_CHANGE_HEADER_SIZE = 6
NOTE_CHANGE_ENTRY_SIZE = 4
NOTE_CHANGE_MAX_ENTRIES = 127

# Keyboard mapping files only support 12-degree equaves
SUPPORTED_EQUAVE_DEGREE = 12


class SysExId(IntEnum):
    """Universal SysEx ids."""

    UNIVERSAL_NON_REAL_TIME = 0x7E
    UNIVERSAL_REAL_TIME = 0x7F


class TuningSubId(IntEnum):
    """MIDI Tuning sub-id #1 and the sub-id #2 message types."""

    MIDI_TUNING = 0x08
    BULK_DUMP_REPLY = 0x01
    NOTE_CHANGE = 0x02


class ErrorMessages:
    """Standardized error messages."""

    FILE_NOT_FOUND = "File not found: {path}"
    INVALID_CHUNK_SIZE = "Chunk size must be 1-127, got {chunk_size}"


class SuccessMessages:
    """Standardized success messages."""

    BULK_DUMP_WRITTEN = "Wrote bulk dump '{name}' to {path}."
    NOTE_CHANGES_SENT = "Sent {count} note change message(s) to '{port}'."
    NOTE_CHANGES_WRITTEN = "Wrote {count} note change message(s) to {path}."
    MONITORING = "Monitoring '{port}', press Ctrl-C to stop."
    MONITOR_STOPPED = "Stopped monitoring after {count} message(s)."
