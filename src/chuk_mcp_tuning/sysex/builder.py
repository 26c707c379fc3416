"""
Fixed-length message assembly.

Every MTS message has a length known up front. The builder collects 7-bit
values and refuses to hand out a message of any other length.
"""

from __future__ import annotations

from collections.abc import Iterable

from chuk_mcp_tuning.core.u7 import U7
from chuk_mcp_tuning.errors import MessageLengthError


class MidiMessageBuilder:
    """Collects the data values of one SysEx message (no F0/F7)."""

    __slots__ = ("_expected_len", "_values")

    def __init__(self, expected_len: int) -> None:
        self._expected_len = expected_len
        self._values: list[U7] = []

    def __len__(self) -> int:
        return len(self._values)

    def push(self, value: U7) -> MidiMessageBuilder:
        self._values.append(value)
        return self

    def extend(self, values: Iterable[U7]) -> MidiMessageBuilder:
        self._values.extend(values)
        return self

    def build(self) -> list[U7]:
        if len(self._values) != self._expected_len:
            raise MessageLengthError(
                f"Message length {len(self._values)} does not match expected {self._expected_len}"
            )
        return list(self._values)
