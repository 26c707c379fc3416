"""
Scala keyboard mapping files (.kbm).

One value per line, "!" lines and blank lines ignored:

    size of the mapping pattern (0-127)
    first key to retune
    last key to retune
    middle key (degree 0 is mapped here)
    reference key
    reference frequency in Hz
    equave degree (12 is the only supported value)
    one line per key in the pattern: a degree, or "x" for unmapped
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from chuk_mcp_tuning.constants import SUPPORTED_EQUAVE_DEGREE
from chuk_mcp_tuning.core.pitch import Frequency
from chuk_mcp_tuning.core.u7 import KeyNumber
from chuk_mcp_tuning.errors import (
    MalformedKeyboardMappingFileError,
    UnsupportedEquaveDegreeError,
)
from chuk_mcp_tuning.mapping.keyboard_mapping import (
    LINEAR,
    UNMAPPED,
    CustomKeyMappings,
    DegreeMapping,
    KeyboardMapping,
    KeyMapping,
    KeyMappings,
)

logger = logging.getLogger(__name__)

_MAX_SIZE = 127


class _LineReader:
    def __init__(self, text: str) -> None:
        self._lines: Iterator[str] = (
            s for s in (line.strip() for line in text.splitlines()) if s and not s.startswith("!")
        )

    def next_str(self, what: str) -> str:
        try:
            return next(self._lines)
        except StopIteration:
            raise MalformedKeyboardMappingFileError(f"Stream is exhausted: expected {what}") from None

    def next_int(self, what: str) -> int:
        s = self.next_str(what)
        try:
            return int(s)
        except ValueError:
            raise MalformedKeyboardMappingFileError(f"Invalid {what}: {s!r}") from None

    def next_float(self, what: str) -> float:
        s = self.next_str(what)
        try:
            return float(s)
        except ValueError:
            raise MalformedKeyboardMappingFileError(f"Invalid {what}: {s!r}") from None

    def next_key(self, what: str) -> KeyNumber:
        return KeyNumber(self.next_int(what))

    def has_more(self) -> bool:
        return next(self._lines, None) is not None


@dataclass(frozen=True)
class KbmFile:
    """A parsed .kbm file."""

    size: int
    equave_degree: int
    keyboard_mapping: KeyboardMapping

    @classmethod
    def parse(cls, text: str) -> KbmFile:
        """
        Parse .kbm content.

        Raises:
            MalformedKeyboardMappingFileError: Missing, unparsable or trailing values
            OutOfRangeError: A key number is not 0-127
            UnsupportedEquaveDegreeError: Equave degree is not 12
            InvalidKeyRangeError: Last key is below first key
        """
        reader = _LineReader(text)

        size = reader.next_int("size")
        if not 0 <= size <= _MAX_SIZE:
            raise MalformedKeyboardMappingFileError(f"Invalid size {size}")

        start_key = reader.next_key("start key")
        logger.debug(f"Parsed start key {start_key}")

        end_key = reader.next_key("end key")
        logger.debug(f"Parsed end key {end_key}")

        zero_key = reader.next_key("zero key")
        logger.debug(f"Parsed zero key {zero_key}")

        reference_key = reader.next_key("reference key")
        logger.debug(f"Parsed reference key {reference_key}")

        reference_frequency = Frequency(reader.next_float("reference frequency"))
        logger.debug(f"Parsed reference frequency {reference_frequency}")

        equave_degree = reader.next_int("equave degree")
        logger.debug(f"Parsed equave degree {equave_degree}")
        if equave_degree != SUPPORTED_EQUAVE_DEGREE:
            raise UnsupportedEquaveDegreeError(
                f"Unsupported equave degree {equave_degree}: only {SUPPORTED_EQUAVE_DEGREE} is supported"
            )

        is_linear = True
        mappings: list[KeyMapping] = []
        for i in range(size):
            s = reader.next_str("key mapping")
            key_mapping: KeyMapping
            if s == "x":
                is_linear = False
                key_mapping = UNMAPPED
            else:
                try:
                    degree = int(s)
                except ValueError:
                    raise MalformedKeyboardMappingFileError(f"Invalid key mapping {s!r}") from None
                if degree < 0:
                    raise MalformedKeyboardMappingFileError(f"Invalid key mapping {s!r}")
                if degree != i:
                    is_linear = False
                key_mapping = DegreeMapping(degree)
            logger.debug(f"Parsed key mapping {key_mapping}")
            mappings.append(key_mapping)

        if reader.has_more():
            raise MalformedKeyboardMappingFileError("Invalid .kbm file: unexpected trailing content")

        key_mappings: KeyMappings = LINEAR if is_linear else CustomKeyMappings(tuple(mappings))

        keyboard_mapping = KeyboardMapping(
            start_key=start_key,
            end_key=end_key,
            reference_key=reference_key,
            reference_frequency=reference_frequency,
            key_mappings=key_mappings,
            zero_key=zero_key,
        )
        return cls(size=size, equave_degree=equave_degree, keyboard_mapping=keyboard_mapping)

    @classmethod
    def read(cls, path: Path | str) -> KbmFile:
        """Read and parse a .kbm file. Undecodable bytes are replaced."""
        path = Path(path)
        logger.debug(f"Reading .kbm file {path}")
        return cls.parse(path.read_text(encoding="utf-8", errors="replace"))
