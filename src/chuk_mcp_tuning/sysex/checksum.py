"""
Running XOR checksum for MTS Bulk Dump Reply messages.

The checksum starts at 0x7F and every data byte between the SysEx start and
the checksum itself is XORed in. The calculator also counts what it has seen,
so a decoder can confirm it consumed exactly the expected number of values.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from chuk_mcp_tuning.core.u7 import U7, Checksum
from chuk_mcp_tuning.errors import ChecksumCountMismatchError, ChecksumMismatchError

V = TypeVar("V", bound=U7)
S = TypeVar("S", bound=Sequence[U7])


class ChecksumCalculator:
    """Accumulates a checksum over one message. Not shared between messages."""

    __slots__ = ("_checksum", "_count")

    SEED = 0x7F

    def __init__(self) -> None:
        self._checksum = self.SEED
        self._count = 0

    @property
    def count(self) -> int:
        return self._count

    def update(self, value: V) -> V:
        """Fold one value in and hand it back unchanged."""
        self._checksum ^= int(value)
        self._count += 1
        return value

    def update_from_slice(self, values: S) -> S:
        for value in values:
            self.update(value)
        return values

    def finalize(self, expected_count: int | None = None) -> Checksum:
        """
        Return the checksum.

        Raises:
            ChecksumCountMismatchError: expected_count given and not matched
        """
        if expected_count is not None and expected_count != self._count:
            raise ChecksumCountMismatchError(
                f"Checksum count mismatch: expected {expected_count}, got {self._count}"
            )
        return Checksum.from_lossy(self._checksum)

    def verify(self, expected_checksum: U7 | int, expected_count: int | None = None) -> None:
        """
        Check the accumulated checksum against the one on the wire.

        Raises:
            ChecksumCountMismatchError: expected_count given and not matched
            ChecksumMismatchError: checksum differs
        """
        checksum = self.finalize(expected_count)
        if int(checksum) != int(expected_checksum):
            raise ChecksumMismatchError(
                f"Checksum mismatch: expected {int(expected_checksum):02X}, computed {int(checksum):02X}"
            )
