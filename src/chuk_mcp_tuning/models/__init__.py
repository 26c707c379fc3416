"""
Pydantic models for the tuning system.

This module provides:
- TuningTable / TuningTableEntry: a scale laid out over the keyboard
- DecodedBulkDump / DecodedKey: a Bulk Dump Reply in readable form
- MtsBytes: an MTS entry as three data bytes
"""

from chuk_mcp_tuning.models.tuning_table import (
    DecodedBulkDump,
    DecodedKey,
    MtsBytes,
    TuningTable,
    TuningTableEntry,
)

__all__ = [
    "DecodedBulkDump",
    "DecodedKey",
    "MtsBytes",
    "TuningTable",
    "TuningTableEntry",
]
