"""
Key-frequency mapping - assigns a frequency to every key.

Given a Scale and a KeyboardMapping:

1. The degree cycle is unison + the scale's intervals, minus the equave
   (the equave is where the cycle wraps, not a degree of its own). A custom
   mapping picks degrees from that cycle instead.
2. The cycle is laid over the 128 keys so that degree 0 falls on zero_key.
3. The reference key's degree fixes the frequency of "degree 0, equave 0".
4. Each key is that frequency x its degree ratio x equave_ratio^equave.

Deterministic and pure: same inputs -> same frequencies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chuk_mcp_tuning.constants import KEY_COUNT
from chuk_mcp_tuning.core.interval import Interval
from chuk_mcp_tuning.core.midi_note import MidiNote
from chuk_mcp_tuning.core.pitch import Frequency
from chuk_mcp_tuning.core.scale import Scale
from chuk_mcp_tuning.core.u7 import KeyNumber
from chuk_mcp_tuning.errors import DegreeOutOfRangeError, UnsupportedKeyMappingError
from chuk_mcp_tuning.mapping.keyboard_mapping import (
    CustomKeyMappings,
    DegreeMapping,
    KeyboardMapping,
    KeyMappings,
    Unmapped,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScaleDegree:
    """A degree index together with its interval above the unison."""

    degree: int
    interval: Interval


@dataclass(frozen=True)
class KeyFrequencyMapping:
    """One row of a computed tuning table."""

    key: KeyNumber
    frequency: Frequency
    degree: int
    interval: Interval

    @property
    def note_name(self) -> str:
        return MidiNote.get(int(self.key)).name

    def __str__(self) -> str:
        return (
            f"{int(self.key):<3}  {self.note_name:<4}  {self.degree:<2}  "
            f"{str(self.interval):<12}  {self.frequency.hz:>9.2f} Hz"
        )


def select_degrees(scale: Scale, key_mappings: KeyMappings) -> list[ScaleDegree]:
    """
    Build the repeating degree cycle for a scale.

    Raises:
        DegreeOutOfRangeError: A custom mapping names a degree the scale lacks
        UnsupportedKeyMappingError: A custom mapping contains unmapped keys
    """
    interval_count = scale.interval_count
    intervals = [Interval.unison(), *scale.intervals][:interval_count]

    if not isinstance(key_mappings, CustomKeyMappings):
        return [ScaleDegree(degree, interval) for degree, interval in enumerate(intervals)]

    degrees: list[ScaleDegree] = []
    for key_mapping in key_mappings.mappings:
        if isinstance(key_mapping, Unmapped):
            raise UnsupportedKeyMappingError("Unmapped keys are not supported")
        if not isinstance(key_mapping, DegreeMapping):
            raise TypeError(f"Unknown key mapping {key_mapping!r}")
        if key_mapping.degree >= len(intervals):
            raise DegreeOutOfRangeError(
                f"Degree {key_mapping.degree} does not exist in scale "
                f"(degrees 0-{len(intervals) - 1})"
            )
        degrees.append(ScaleDegree(key_mapping.degree, intervals[key_mapping.degree]))

    if not degrees:
        raise DegreeOutOfRangeError("Custom key mapping has no degrees")

    return degrees


def _equave_number(
    key: int, reference: int, keys_per_equave: int, ratio: float, reference_ratio: float
) -> int:
    equave = (key - reference) // keys_per_equave
    # Degrees below the reference degree belong to the next equave up
    if ratio < reference_ratio:
        equave += 1
    return equave


def compute_frequencies(
    scale: Scale, keyboard_mapping: KeyboardMapping
) -> list[KeyFrequencyMapping]:
    """
    Compute the frequency of every key in the mapping's key range.

    Args:
        scale: The scale to lay out
        keyboard_mapping: Key range, anchor and degree mapping

    Returns:
        One KeyFrequencyMapping per key from start_key to end_key, in order
    """
    degrees = select_degrees(scale, keyboard_mapping.key_mappings)
    keys_per_equave = len(degrees)

    zero = int(keyboard_mapping.zero_key)  # type: ignore[arg-type]
    offset = (-zero) % keys_per_equave
    layout = [degrees[(key + offset) % keys_per_equave] for key in range(KEY_COUNT)]

    reference = int(keyboard_mapping.reference_key)
    reference_ratio = layout[reference].interval.as_ratio()
    reference_frequency = keyboard_mapping.reference_frequency.hz
    zero_frequency = reference_frequency / reference_ratio
    equave_ratio = scale.equave_ratio()

    logger.debug(f"Reference key {reference} at {reference_frequency:.2f} Hz")

    def frequency_of(key: int, interval: Interval) -> float:
        ratio = interval.as_ratio()
        equave = _equave_number(key, reference, keys_per_equave, ratio, reference_ratio)
        return zero_frequency * ratio * equave_ratio**equave

    logger.debug(
        f"Zero key {zero} at {frequency_of(zero, Interval.unison()):.2f} Hz (unison/prime interval)"
    )

    mappings: list[KeyFrequencyMapping] = []
    for key in range(int(keyboard_mapping.start_key), int(keyboard_mapping.end_key) + 1):
        scale_degree = layout[key]
        mapping = KeyFrequencyMapping(
            key=KeyNumber(key),
            frequency=Frequency(frequency_of(key, scale_degree.interval)),
            degree=scale_degree.degree,
            interval=scale_degree.interval,
        )
        logger.debug(str(mapping))
        mappings.append(mapping)

    return mappings
