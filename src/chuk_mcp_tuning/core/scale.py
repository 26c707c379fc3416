"""
Scale primitive - an ordered list of intervals ending in the equave.

Degree 0 (the unison) is implicit and not stored. The last interval is the
equave: the ratio at which the pattern repeats, usually 2/1.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from chuk_mcp_tuning.core.interval import Interval
from chuk_mcp_tuning.errors import EmptyScaleError


@dataclass(frozen=True)
class Scale:
    """
    A tuning scale.

    Examples:
        Scale.parse_intervals("100.0 200.0 ... 1100.0 2/1")  # 12-EDO
        Scale.parse_intervals("9/8 5/4 4/3 3/2 5/3 15/8 2/1")  # just major

    Immutable and hashable.
    """

    intervals: tuple[Interval, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.intervals, tuple):
            object.__setattr__(self, "intervals", tuple(self.intervals))
        if not self.intervals:
            raise EmptyScaleError("Need at least one interval")

    @classmethod
    def of(cls, intervals: Iterable[Interval]) -> Scale:
        return cls(tuple(intervals))

    @classmethod
    def parse_intervals(cls, text: str) -> Scale:
        """Build a scale from whitespace-separated interval tokens."""
        return cls(tuple(Interval.parse(token) for token in text.split()))

    @property
    def interval_count(self) -> int:
        return len(self.intervals)

    @property
    def equave(self) -> Interval:
        return self.intervals[-1]

    def equave_ratio(self) -> float:
        """Frequency ratio of the final interval."""
        return self.equave.as_ratio()

    def __len__(self) -> int:
        return len(self.intervals)

    def __str__(self) -> str:
        return " ".join(str(i) for i in self.intervals)
