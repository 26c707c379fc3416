"""
SysEx files (.syx) - raw MIDI SysEx messages back to back.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import mido
from mido import Message

from chuk_mcp_tuning.constants import ErrorMessages

logger = logging.getLogger(__name__)


def read_syx_bytes(path: Path | str) -> bytes:
    """Read a .syx file verbatim, framing bytes included."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(ErrorMessages.FILE_NOT_FOUND.format(path=path))
    data = path.read_bytes()
    logger.debug(f"Read {len(data)} bytes from {path}")
    return data


def write_syx_file(path: Path | str, messages: Sequence[Message]) -> Path:
    """
    Write SysEx messages to a new .syx file.

    Raises:
        FileExistsError: path already exists (never overwritten)
    """
    path = Path(path)
    if path.exists():
        raise FileExistsError(f"File already exists: {path}")
    path.parent.mkdir(parents=True, exist_ok=True)
    mido.write_syx_file(str(path), messages)
    logger.debug(f"Wrote {len(messages)} message(s) to {path}")
    return path
