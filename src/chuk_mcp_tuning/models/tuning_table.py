"""
Tuning table models - serializable views of computed and decoded tunings.

These are what the CLI writes as JSON/YAML and what the MCP tools return.
The core types stay plain dataclasses; these models are built from them.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, Field

from chuk_mcp_tuning.core.midi_note import MidiNote
from chuk_mcp_tuning.core.pitch import MtsEntry
from chuk_mcp_tuning.mapping.key_frequency import KeyFrequencyMapping
from chuk_mcp_tuning.sysex.bulk_dump_reply import BulkDumpReply


class MtsBytes(BaseModel):
    """An MTS entry as three data bytes."""

    note_number: int = Field(..., ge=0, le=127, description="Equal-tempered base note")
    msb: int = Field(..., ge=0, le=127, description="Fraction of a semitone, high 7 bits")
    lsb: int = Field(..., ge=0, le=127, description="Fraction of a semitone, low 7 bits")

    model_config = {"frozen": True}

    @classmethod
    def from_entry(cls, entry: MtsEntry) -> MtsBytes:
        note_number, msb, lsb = entry.as_tuple()
        return cls(note_number=note_number, msb=msb, lsb=lsb)


class TuningTableEntry(BaseModel):
    """One key of a computed tuning."""

    key: int = Field(..., ge=0, le=127, description="MIDI key number")
    note_name: str = Field(..., description="Equal-tempered name of the key (e.g., 'A4')")
    degree: int = Field(..., ge=0, description="Scale degree (0 = unison)")
    interval: str = Field(..., description="Interval above the unison (ratio or cents)")
    frequency: float = Field(..., description="Frequency in Hz")
    mts: MtsBytes = Field(..., description="Wire encoding of the frequency")

    model_config = {"frozen": True}

    @classmethod
    def from_mapping(cls, mapping: KeyFrequencyMapping) -> TuningTableEntry:
        return cls(
            key=int(mapping.key),
            note_name=mapping.note_name,
            degree=mapping.degree,
            interval=str(mapping.interval),
            frequency=mapping.frequency.hz,
            mts=MtsBytes.from_entry(mapping.frequency.to_mts_entry()),
        )


class TuningTable(BaseModel):
    """A scale laid out over a keyboard."""

    scale_file: str | None = Field(None, description="Path of the .scl file")
    description: str = Field("", description="Scale description")
    keyboard_mapping: str = Field(..., description="Keyboard mapping summary")
    entries: list[TuningTableEntry] = Field(default_factory=list, description="One row per key")

    @classmethod
    def from_mappings(
        cls,
        mappings: Sequence[KeyFrequencyMapping],
        keyboard_mapping: str,
        scale_file: str | None = None,
        description: str = "",
    ) -> TuningTable:
        return cls(
            scale_file=scale_file,
            description=description,
            keyboard_mapping=keyboard_mapping,
            entries=[TuningTableEntry.from_mapping(m) for m in mappings],
        )

    def frequencies(self) -> list[float]:
        return [entry.frequency for entry in self.entries]


class DecodedKey(BaseModel):
    """One key of a decoded Bulk Dump Reply."""

    key: int = Field(..., ge=0, le=127, description="MIDI key number")
    note_name: str = Field(..., description="Equal-tempered name of the key")
    frequency: float = Field(..., description="Decoded frequency in Hz")
    mts: MtsBytes

    model_config = {"frozen": True}


class DecodedBulkDump(BaseModel):
    """A Bulk Dump Reply in readable form."""

    name: str = Field(..., description="Preset name, padding removed")
    device_id: int = Field(..., ge=0, le=127)
    preset: int = Field(..., ge=0, le=127)
    keys: list[DecodedKey] = Field(default_factory=list)

    @classmethod
    def from_reply(cls, reply: BulkDumpReply) -> DecodedBulkDump:
        return cls(
            name=reply.name.as_str(),
            device_id=int(reply.device_id),
            preset=int(reply.preset),
            keys=[
                DecodedKey(
                    key=i,
                    note_name=MidiNote.get(i).name,
                    frequency=entry.to_frequency().hz,
                    mts=MtsBytes.from_entry(entry),
                )
                for i, entry in enumerate(reply.entries)
            ],
        )
