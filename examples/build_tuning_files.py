#!/usr/bin/env python3
"""
Example: Build MTS tuning files for a just-intonation scale.

Lays Carlos Super Just over the keyboard, prints a few keys, then writes
the tuning both as a Bulk Dump Reply and as chunked Note Change messages.
Load the .syx files into any synth that understands the MIDI Tuning Standard.

Usage:
    python examples/build_tuning_files.py
    # Creates: examples/output/carlos_super_dump.syx
    #          examples/output/carlos_super_notes.syx
"""

from pathlib import Path

from chuk_mcp_tuning.core import Frequency
from chuk_mcp_tuning.formats import SclFile, to_hex_dump, write_syx_file
from chuk_mcp_tuning.mapping import KeyboardMapping, compute_frequencies
from chuk_mcp_tuning.pipeline import make_bulk_dump_reply, make_note_changes

CARLOS_SUPER = """! carlos_super.scl
!
Carlos Super Just
 12
!
 17/16
 9/8
 6/5
 5/4
 4/3
 11/8
 3/2
 13/8
 5/3
 7/4
 15/8
 2/1
"""


def main() -> None:
    """Build the example tuning files."""
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    scl_file = SclFile.parse(CARLOS_SUPER)
    # C4 carries the unison, A4 stays at concert pitch
    keyboard_mapping = KeyboardMapping.full(60, 69, Frequency.CONCERT_A4)

    print(f"{scl_file.description}:")
    for mapping in compute_frequencies(scl_file.scale, keyboard_mapping)[60:73]:
        print(f"  {mapping}")

    # Example 1: One Bulk Dump Reply with all 128 keys
    dump_path = output_dir / "carlos_super_dump.syx"
    reply = make_bulk_dump_reply(scl_file.scale, keyboard_mapping, preset=8, name="carlos super")
    if not dump_path.exists():
        write_syx_file(dump_path, [reply.to_message()])
    print(f"\nBulk dump ({len(reply.to_bytes())} bytes): {dump_path}")
    print(to_hex_dump(reply.to_bytes()[:32]) + " ...")

    # Example 2: Note Change messages, 64 keys each
    notes_path = output_dir / "carlos_super_notes.syx"
    messages, _ = make_note_changes(scl_file.scale, keyboard_mapping, preset=8, chunk_size=64)
    if not notes_path.exists():
        write_syx_file(notes_path, [m.to_message() for m in messages])
    print(f"\nNote changes ({len(messages)} messages): {notes_path}")

    print("\nDone! Send the .syx files to your synth to retune it.")


if __name__ == "__main__":
    main()
