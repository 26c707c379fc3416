"""
Tuning pipeline - files in, MTS messages out.

    .scl + .kbm -> Scale + KeyboardMapping -> compute_frequencies -> MtsEntry -> messages

The CLI and the MCP tools both go through here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from chuk_mcp_tuning.constants import DEFAULT_PRESET
from chuk_mcp_tuning.core.pitch import Frequency
from chuk_mcp_tuning.core.scale import Scale
from chuk_mcp_tuning.core.u7 import ChunkSize, DeviceId, Preset
from chuk_mcp_tuning.formats.kbm import KbmFile
from chuk_mcp_tuning.formats.scl import SclFile
from chuk_mcp_tuning.mapping.key_frequency import KeyFrequencyMapping, compute_frequencies
from chuk_mcp_tuning.mapping.keyboard_mapping import KeyboardMapping
from chuk_mcp_tuning.models.tuning_table import TuningTable
from chuk_mcp_tuning.sysex.bulk_dump_reply import BulkDumpReply
from chuk_mcp_tuning.sysex.note_change import NoteChange, NoteChangeEntry, chunk_note_changes
from chuk_mcp_tuning.sysex.preset_name import PresetName

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyboardMappingSource:
    """
    Where a keyboard mapping came from: a .kbm file, an explicit linear
    reference, or the linear A4 = 440 Hz default.
    """

    kbm_path: Path | None = None
    reference: KeyboardMapping | None = None

    def __post_init__(self) -> None:
        if self.kbm_path is not None and self.reference is not None:
            raise ValueError("Provide at most one of a keyboard mapping file or a reference")

    def make_keyboard_mapping(self) -> KeyboardMapping:
        if self.kbm_path is not None:
            return KbmFile.read(self.kbm_path).keyboard_mapping
        if self.reference is not None:
            return self.reference
        return KeyboardMapping.full_linear()

    def __str__(self) -> str:
        if self.kbm_path is not None:
            return f"Keyboard mapping file: {self.kbm_path}"
        if self.reference is not None:
            return (
                f"Linear: zero key {self.reference.zero_key}, reference key "
                f"{self.reference.reference_key} at {self.reference.reference_frequency.hz} Hz"
            )
        return "Linear"


def load_scale(scl_path: Path | str) -> SclFile:
    """Read a .scl file."""
    return SclFile.read(scl_path)


def load_keyboard_mapping(
    kbm_path: Path | str | None = None, reference: KeyboardMapping | None = None
) -> KeyboardMapping:
    """Read a .kbm file, or use the linear reference (A4 = 440 Hz when none is given)."""
    source = KeyboardMappingSource(Path(kbm_path) if kbm_path is not None else None, reference)
    keyboard_mapping = source.make_keyboard_mapping()
    logger.debug(f"Keyboard mapping: {keyboard_mapping}")
    return keyboard_mapping


def make_tuning_table(
    scl_file: SclFile,
    keyboard_mapping: KeyboardMapping,
    scale_path: Path | str | None = None,
    source: KeyboardMappingSource | None = None,
) -> tuple[list[KeyFrequencyMapping], TuningTable]:
    """Compute the per-key frequencies and their serializable table."""
    mappings = compute_frequencies(scl_file.scale, keyboard_mapping)
    table = TuningTable.from_mappings(
        mappings,
        keyboard_mapping=str(source) if source is not None else str(keyboard_mapping),
        scale_file=str(scale_path) if scale_path is not None else None,
        description=scl_file.description,
    )
    return mappings, table


def make_note_change_entries(
    scale: Scale,
    keyboard_mapping: KeyboardMapping,
) -> list[tuple[Frequency, NoteChangeEntry]]:
    """One Note Change entry per mapped key, paired with its frequency."""
    return [
        (mapping.frequency, NoteChangeEntry(mapping.key, mapping.frequency.to_mts_entry()))
        for mapping in compute_frequencies(scale, keyboard_mapping)
    ]


def make_note_changes(
    scale: Scale,
    keyboard_mapping: KeyboardMapping,
    device_id: DeviceId | int = 0,
    preset: Preset | int = DEFAULT_PRESET,
    chunk_size: ChunkSize | int = 1,
) -> tuple[list[NoteChange], list[Frequency]]:
    """Note Change messages for the keyboard mapping's key range, plus the per-key frequencies."""
    data = make_note_change_entries(scale, keyboard_mapping)
    entries = [entry for _, entry in data]
    frequencies = [frequency for frequency, _ in data]
    messages = chunk_note_changes(DeviceId(int(device_id)), Preset(int(preset)), entries, chunk_size)
    logger.debug(f"Built {len(messages)} note change message(s) for {len(entries)} key(s)")
    return messages, frequencies


def make_bulk_dump_reply(
    scale: Scale,
    keyboard_mapping: KeyboardMapping,
    device_id: DeviceId | int = 0,
    preset: Preset | int = DEFAULT_PRESET,
    name: PresetName | str = "",
) -> BulkDumpReply:
    """
    A Bulk Dump Reply covering all 128 keys.

    The mapping's key range is ignored: a bulk dump always carries every key.
    """
    full = KeyboardMapping.full(
        zero_key=keyboard_mapping.zero_key,  # type: ignore[arg-type]
        reference_key=keyboard_mapping.reference_key,
        reference_frequency=keyboard_mapping.reference_frequency,
        key_mappings=keyboard_mapping.key_mappings,
    )
    frequencies = [m.frequency for m in compute_frequencies(scale, full)]
    return BulkDumpReply.from_frequencies(DeviceId(int(device_id)), Preset(int(preset)), name, frequencies)


def resolve_scale(scl_path: Path | str | None = None, scl_text: str | None = None) -> SclFile:
    """A scale from a file path or from inline .scl content (exactly one)."""
    if (scl_path is None) == (scl_text is None):
        raise ValueError("Provide exactly one of scl_path or scl_text")
    if scl_text is not None:
        return SclFile.parse(scl_text)
    return load_scale(scl_path)  # type: ignore[arg-type]


def resolve_keyboard_mapping(
    kbm_path: Path | str | None = None, kbm_text: str | None = None
) -> KeyboardMapping:
    """A keyboard mapping from a path, inline .kbm content, or the linear default."""
    if kbm_path is not None and kbm_text is not None:
        raise ValueError("Provide at most one of kbm_path or kbm_text")
    if kbm_text is not None:
        return KbmFile.parse(kbm_text).keyboard_mapping
    return load_keyboard_mapping(kbm_path)
