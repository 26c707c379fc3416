"""
Keyboard mapping - which keys get which scale degrees, and where the pitch is anchored.

A KeyboardMapping says:
- which keys are retuned (start_key..end_key, inclusive)
- where degree 0 sits (zero_key, the "middle key" of a .kbm file)
- which key is pinned to which frequency (reference_key, reference_frequency)
- how keys map to degrees (linear, or an explicit repeating degree list)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from chuk_mcp_tuning.core.pitch import Frequency
from chuk_mcp_tuning.core.u7 import KeyNumber
from chuk_mcp_tuning.errors import InvalidKeyRangeError


@dataclass(frozen=True)
class DegreeMapping:
    """Key plays this scale degree (0 = unison)."""

    degree: int

    def __post_init__(self) -> None:
        if self.degree < 0:
            raise ValueError(f"Degree must be >= 0, got {self.degree}")

    def __str__(self) -> str:
        return str(self.degree)


@dataclass(frozen=True)
class Unmapped:
    """Key is silent. Accepted by .kbm files, not supported when tuning."""

    def __str__(self) -> str:
        return "(unmapped)"


KeyMapping = DegreeMapping | Unmapped

UNMAPPED = Unmapped()


@dataclass(frozen=True)
class LinearKeyMappings:
    """Every key plays the next degree: key offset == degree."""

    def __str__(self) -> str:
        return "Linear"


@dataclass(frozen=True)
class CustomKeyMappings:
    """An explicit degree list, repeated every len(mappings) keys."""

    mappings: tuple[KeyMapping, ...]

    @classmethod
    def of(cls, mappings: Sequence[KeyMapping | int | None]) -> CustomKeyMappings:
        """Build from degrees; None means unmapped."""
        items: list[KeyMapping] = []
        for m in mappings:
            if m is None:
                items.append(UNMAPPED)
            elif isinstance(m, int):
                items.append(DegreeMapping(m))
            else:
                items.append(m)
        return cls(tuple(items))

    def __len__(self) -> int:
        return len(self.mappings)

    def __str__(self) -> str:
        return "Custom(" + " ".join(str(m) for m in self.mappings) + ")"


KeyMappings = LinearKeyMappings | CustomKeyMappings

LINEAR = LinearKeyMappings()


@dataclass(frozen=True)
class KeyboardMapping:
    """
    Maps a key range to scale degrees anchored at a reference frequency.

    zero_key defaults to reference_key when not given.

    Examples:
        KeyboardMapping.full_linear()  # keys 0-127, A4 = 440 Hz
        KeyboardMapping(KeyNumber(0), KeyNumber(127), KeyNumber(60), Frequency(261.63))
    """

    start_key: KeyNumber
    end_key: KeyNumber
    reference_key: KeyNumber
    reference_frequency: Frequency
    key_mappings: KeyMappings = field(default=LINEAR)
    zero_key: KeyNumber | None = None

    def __post_init__(self) -> None:
        for name in ("start_key", "end_key", "reference_key"):
            value = getattr(self, name)
            if not isinstance(value, KeyNumber):
                object.__setattr__(self, name, KeyNumber(int(value)))
        if self.zero_key is None:
            object.__setattr__(self, "zero_key", self.reference_key)
        elif not isinstance(self.zero_key, KeyNumber):
            object.__setattr__(self, "zero_key", KeyNumber(int(self.zero_key)))
        if not isinstance(self.reference_frequency, Frequency):
            object.__setattr__(self, "reference_frequency", Frequency(float(self.reference_frequency)))

        if self.end_key.checked_sub(self.start_key) is None:
            raise InvalidKeyRangeError(
                f"Invalid end key {self.end_key}: must not be below start key {self.start_key}"
            )

    @classmethod
    def full(
        cls,
        zero_key: KeyNumber | int,
        reference_key: KeyNumber | int,
        reference_frequency: Frequency,
        key_mappings: KeyMappings = LINEAR,
    ) -> KeyboardMapping:
        """Cover all 128 keys."""
        return cls(
            start_key=KeyNumber.ZERO,
            end_key=KeyNumber.MAX,
            reference_key=KeyNumber(int(reference_key)),
            reference_frequency=reference_frequency,
            key_mappings=key_mappings,
            zero_key=KeyNumber(int(zero_key)),
        )

    @classmethod
    def full_linear(
        cls,
        zero_key: KeyNumber | int = 69,
        reference_key: KeyNumber | int | None = None,
        reference_frequency: Frequency = Frequency.CONCERT_A4,
    ) -> KeyboardMapping:
        """All 128 keys, linear, by default A4 (key 69) at 440 Hz."""
        if reference_key is None:
            reference_key = zero_key
        return cls.full(zero_key, reference_key, reference_frequency)

    @property
    def key_count(self) -> int:
        return int(self.end_key) - int(self.start_key) + 1

    @property
    def is_linear(self) -> bool:
        return isinstance(self.key_mappings, LinearKeyMappings)

    def __str__(self) -> str:
        return (
            f"keys {self.start_key}-{self.end_key}, zero key {self.zero_key}, "
            f"reference key {self.reference_key} at {self.reference_frequency.hz} Hz, "
            f"{self.key_mappings}"
        )
