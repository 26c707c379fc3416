"""
Interval primitives - exact ratios and exact cents.

A scale-file interval is either a rational ratio (3/2, 2) or a cents value
(701.955). Both are kept exact; as_ratio() projects either onto a float
frequency ratio.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from fractions import Fraction

from chuk_mcp_tuning.constants import CENTS_PER_OCTAVE
from chuk_mcp_tuning.errors import InvalidIntervalSyntaxError

_RATIO_PATTERN = re.compile(r"^(\d+)(?:/(\d+))?$")


class Interval:
    """
    A scale interval: RatioInterval or CentsInterval.

    Parse with Interval.parse(). Only the first whitespace-delimited token
    is significant; anything after it is commentary.
    """

    __slots__ = ()

    @staticmethod
    def parse(text: str) -> Interval:
        """
        Parse an interval token.

        Tokens containing "." are cents, everything else is a ratio
        ("p/q" or a bare integer).
        """
        tokens = text.split()
        if not tokens:
            raise InvalidIntervalSyntaxError(f"Invalid interval {text!r}")
        token = tokens[0]

        if "." in token:
            return CentsInterval.parse(token)
        return RatioInterval.parse(token)

    @staticmethod
    def unison() -> RatioInterval:
        return RatioInterval(Fraction(1))

    def as_ratio(self) -> float:
        raise NotImplementedError

    def to_cents(self) -> float:
        """Size of the interval in cents."""
        return CENTS_PER_OCTAVE * math.log2(self.as_ratio())


@dataclass(frozen=True)
class RatioInterval(Interval):
    """An exact rational interval such as 3/2."""

    value: Fraction

    @classmethod
    def parse(cls, token: str) -> RatioInterval:
        match = _RATIO_PATTERN.match(token)
        if match is None:
            raise InvalidIntervalSyntaxError(f"Invalid ratio {token!r}")
        numerator = int(match.group(1))
        denominator = int(match.group(2)) if match.group(2) is not None else 1
        if denominator == 0:
            raise InvalidIntervalSyntaxError(f"Invalid ratio {token!r}: zero denominator")
        if numerator == 0:
            raise InvalidIntervalSyntaxError(f"Invalid ratio {token!r}: must be positive")
        return cls(Fraction(numerator, denominator))

    def as_ratio(self) -> float:
        return float(self.value)

    def __str__(self) -> str:
        return f"{self.value.numerator}/{self.value.denominator}"


@dataclass(frozen=True)
class CentsInterval(Interval):
    """An exact decimal cents value such as 701.955."""

    value: Decimal

    @classmethod
    def parse(cls, token: str) -> CentsInterval:
        try:
            value = Decimal(token)
        except InvalidOperation as e:
            raise InvalidIntervalSyntaxError(f"Invalid cents value {token!r}") from e
        if not value.is_finite():
            raise InvalidIntervalSyntaxError(f"Invalid cents value {token!r}")
        return cls(value)

    def as_ratio(self) -> float:
        return 2.0 ** (float(self.value) / CENTS_PER_OCTAVE)

    def __str__(self) -> str:
        return str(self.value)
