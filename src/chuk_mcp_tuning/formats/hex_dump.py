"""
Hex dumps of raw MIDI bytes: "F0 7E 00 ..." with a line break every N bytes.
"""

from __future__ import annotations

DEFAULT_COLUMNS = 32


def to_hex_dump(data: bytes | bytearray | list[int], columns: int = DEFAULT_COLUMNS) -> str:
    """Upper-case, space separated, no trailing newline."""
    if columns < 1:
        raise ValueError(f"Columns must be >= 1, got {columns}")
    rows = [data[i : i + columns] for i in range(0, len(data), columns)]
    return "\n".join(" ".join(f"{b:02X}" for b in row) for row in rows)


def from_hex_dump(text: str) -> bytes:
    """Parse whitespace-separated hex bytes. Raises ValueError on bad tokens."""
    return bytes(int(token, 16) for token in text.split())
