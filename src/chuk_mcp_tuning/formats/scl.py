"""
Scala scale files (.scl).

Format:

    ! carlos_super.scl          <- optional file name line
    !                           <- comments start with "!"
    Carlos Super Just           <- description (may be blank)
     12                         <- number of intervals
    !
    17/16                       <- one interval per line: ratio, or cents with a "."
    ...
    2/1                         <- the last interval is the equave
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from chuk_mcp_tuning.core.interval import Interval
from chuk_mcp_tuning.core.scale import Scale
from chuk_mcp_tuning.errors import MalformedScaleFileError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SclFile:
    """A parsed .scl file."""

    file_name: str | None
    description: str
    scale: Scale

    @classmethod
    def parse(cls, text: str) -> SclFile:
        """
        Parse .scl content.

        Raises:
            MalformedScaleFileError: Missing description, count or interval lines,
                or the count does not match the intervals given
            InvalidIntervalSyntaxError: An interval line cannot be parsed
        """
        lines = [line.strip() for line in text.splitlines()]
        if not lines:
            raise MalformedScaleFileError("Invalid tuning string: no content")

        file_name = None
        first = lines[0]
        if first.startswith("!") and first.endswith(".scl"):
            file_name = first[1:].strip()
            lines = lines[1:]
            logger.debug(f"Parsed file name {file_name}")

        lines = [line for line in lines if not line.startswith("!")]
        if not lines:
            raise MalformedScaleFileError("No description found")

        description = lines[0]
        logger.debug(f"Parsed description {description or '(empty)'}")

        lines = [line for line in lines[1:] if line]
        if not lines:
            raise MalformedScaleFileError("No interval count found")

        try:
            interval_count = int(lines[0])
        except ValueError:
            raise MalformedScaleFileError(f"Invalid interval count {lines[0]!r}") from None
        if interval_count < 0:
            raise MalformedScaleFileError(f"Invalid interval count {interval_count}")

        intervals = [Interval.parse(line) for line in lines[1:]]
        if len(intervals) != interval_count:
            raise MalformedScaleFileError(
                f"Incorrect number of notes: expected {interval_count}, got {len(intervals)}"
            )

        return cls(file_name=file_name, description=description, scale=Scale.of(intervals))

    @classmethod
    def read(cls, path: Path | str) -> SclFile:
        """Read and parse a .scl file. Undecodable bytes are replaced."""
        path = Path(path)
        logger.debug(f"Reading .scl file {path}")
        return cls.parse(path.read_text(encoding="utf-8", errors="replace"))
