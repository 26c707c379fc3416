"""
File formats: Scala .scl/.kbm, SysEx .syx and hex dumps.
"""

from chuk_mcp_tuning.formats.hex_dump import from_hex_dump, to_hex_dump
from chuk_mcp_tuning.formats.kbm import KbmFile
from chuk_mcp_tuning.formats.scl import SclFile
from chuk_mcp_tuning.formats.syx import read_syx_bytes, write_syx_file

__all__ = [
    "KbmFile",
    "SclFile",
    "from_hex_dump",
    "read_syx_bytes",
    "to_hex_dump",
    "write_syx_file",
]
