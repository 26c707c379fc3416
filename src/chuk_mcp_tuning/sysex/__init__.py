"""
MIDI Tuning Standard SysEx codecs.

- BulkDumpReply: full 128-key table, checksummed (parse and encode)
- NoteChange: up to 127 keys per message, no checksum (encode)
"""

from chuk_mcp_tuning.sysex.builder import MidiMessageBuilder
from chuk_mcp_tuning.sysex.bulk_dump_reply import BulkDumpReply
from chuk_mcp_tuning.sysex.checksum import ChecksumCalculator
from chuk_mcp_tuning.sysex.note_change import NoteChange, NoteChangeEntry, chunk_note_changes
from chuk_mcp_tuning.sysex.preset_name import PresetName

__all__ = [
    "BulkDumpReply",
    "ChecksumCalculator",
    "MidiMessageBuilder",
    "NoteChange",
    "NoteChangeEntry",
    "PresetName",
    "chunk_note_changes",
]
