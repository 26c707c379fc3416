"""
Tests for keyboard mappings and the key-frequency algorithm.
"""

import pytest

from chuk_mcp_tuning.core import Frequency, KeyNumber, Scale
from chuk_mcp_tuning.errors import (
    DegreeOutOfRangeError,
    InvalidKeyRangeError,
    UnsupportedKeyMappingError,
)
from chuk_mcp_tuning.mapping import (
    LINEAR,
    UNMAPPED,
    CustomKeyMappings,
    DegreeMapping,
    KeyboardMapping,
    compute_frequencies,
    select_degrees,
)

EDO12 = Scale.parse_intervals("100.0 200.0 300.0 400.0 500.0 600.0 700.0 800.0 900.0 1000.0 1100.0 2/1")

CARLOS_SUPER = Scale.parse_intervals("17/16 9/8 6/5 5/4 4/3 11/8 3/2 13/8 5/3 7/4 15/8 2/1")

BOHLEN_P = Scale.parse_intervals(
    "27/25 25/21 9/7 7/5 75/49 5/3 9/5 49/25 15/7 7/3 63/25 25/9 3/1"
)

EDO31 = Scale.parse_intervals(
    " ".join(f"{1200 * i / 31:.5f}" for i in range(1, 31)) + " 2/1"
)

EDO31_DEGREES = CustomKeyMappings.of([0, 3, 5, 8, 10, 13, 16, 18, 21, 23, 26, 28])


def frequencies(scale: Scale, keyboard_mapping: KeyboardMapping) -> list[float]:
    return [m.frequency.hz for m in compute_frequencies(scale, keyboard_mapping)]


class TestKeyboardMapping:
    """Tests for KeyboardMapping construction."""

    def test_full_linear_defaults(self) -> None:
        """Default mapping: all keys, A4 = 440 Hz, linear."""
        mapping = KeyboardMapping.full_linear()
        assert mapping.start_key == KeyNumber(0)
        assert mapping.end_key == KeyNumber(127)
        assert mapping.zero_key == KeyNumber(69)
        assert mapping.reference_key == KeyNumber(69)
        assert mapping.reference_frequency == Frequency.CONCERT_A4
        assert mapping.is_linear
        assert mapping.key_count == 128

    def test_zero_key_defaults_to_reference(self) -> None:
        """Without a zero key, degree 0 sits on the reference key."""
        mapping = KeyboardMapping(KeyNumber(0), KeyNumber(127), KeyNumber(60), Frequency(261.63))
        assert mapping.zero_key == KeyNumber(60)

    def test_coerces_plain_values(self) -> None:
        """Ints and floats are accepted."""
        mapping = KeyboardMapping(10, 20, 15, 300.0)  # type: ignore[arg-type]
        assert mapping.start_key == KeyNumber(10)
        assert mapping.reference_frequency == Frequency(300.0)

    def test_end_below_start(self) -> None:
        """End key must not be below start key."""
        with pytest.raises(InvalidKeyRangeError):
            KeyboardMapping(KeyNumber(10), KeyNumber(9), KeyNumber(60), Frequency(440.0))

    def test_single_key_range(self) -> None:
        """start == end is a one-key mapping."""
        mapping = KeyboardMapping(KeyNumber(60), KeyNumber(60), KeyNumber(60), Frequency(440.0))
        assert mapping.key_count == 1

    def test_custom_mappings(self) -> None:
        """None entries become Unmapped."""
        custom = CustomKeyMappings.of([0, None, 2])
        assert custom.mappings == (DegreeMapping(0), UNMAPPED, DegreeMapping(2))
        assert len(custom) == 3

    def test_negative_degree(self) -> None:
        """Degrees start at 0."""
        with pytest.raises(ValueError):
            DegreeMapping(-1)


class TestSelectDegrees:
    """Tests for building the degree cycle."""

    def test_linear_drops_equave(self) -> None:
        """The cycle is unison plus every interval but the equave."""
        degrees = select_degrees(EDO12, LINEAR)
        assert len(degrees) == 12
        assert str(degrees[0].interval) == "1/1"
        assert str(degrees[11].interval) == "1100.0"

    def test_custom_selects_by_degree(self) -> None:
        """A custom mapping picks degrees out of the cycle."""
        degrees = select_degrees(EDO31, EDO31_DEGREES)
        assert [d.degree for d in degrees] == [0, 3, 5, 8, 10, 13, 16, 18, 21, 23, 26, 28]

    def test_missing_degree(self) -> None:
        """A degree beyond the scale is an error."""
        with pytest.raises(DegreeOutOfRangeError, match="Degree 12"):
            select_degrees(EDO12, CustomKeyMappings.of([0, 12]))

    def test_unmapped(self) -> None:
        """Unmapped keys are not supported."""
        with pytest.raises(UnsupportedKeyMappingError):
            select_degrees(EDO12, CustomKeyMappings.of([0, None, 2]))


class TestComputeFrequencies:
    """Tests for compute_frequencies."""

    def test_12edo_is_equal_temperament(self) -> None:
        """12-EDO on the default mapping is standard concert pitch."""
        result = frequencies(EDO12, KeyboardMapping.full_linear())
        assert len(result) == 128
        for key, hz in enumerate(result):
            assert hz == pytest.approx(440.0 * 2 ** ((key - 69) / 12), rel=1e-9)

    def test_reference_key_gets_reference_frequency(self) -> None:
        """The reference key sounds at the reference frequency."""
        mapping = KeyboardMapping.full(69, 60, Frequency(400.0), EDO31_DEGREES)
        result = frequencies(EDO31, mapping)
        assert result[60] == pytest.approx(400.0)

    def test_degrees_below_reference_wrap_up(self) -> None:
        """Keys between the reference and the next zero key stay above the reference."""
        mapping = KeyboardMapping.full(69, 60, Frequency(400.0), EDO31_DEGREES)
        result = frequencies(EDO31, mapping)
        # 23 steps of 31-EDO above key 60
        assert result[69] == pytest.approx(400.0 * 2 ** (23 / 31), rel=1e-6)
        assert all(a < b for a, b in zip(result, result[1:]))

    def test_zero_key_congruent_mappings_agree(self) -> None:
        """Zero keys a whole pattern apart give the same tuning."""
        a = frequencies(EDO31, KeyboardMapping.full(69, 60, Frequency(400.0), EDO31_DEGREES))
        b = frequencies(EDO31, KeyboardMapping.full(57, 60, Frequency(400.0), EDO31_DEGREES))
        assert a == pytest.approx(b)

    def test_subset_is_slice_of_full(self) -> None:
        """A key range returns the same frequencies as the full layout."""
        full = frequencies(EDO31, KeyboardMapping.full(69, 60, Frequency(400.0), EDO31_DEGREES))
        subset = KeyboardMapping(
            KeyNumber(1), KeyNumber(3), KeyNumber(60), Frequency(400.0), EDO31_DEGREES, KeyNumber(69)
        )
        mappings = compute_frequencies(EDO31, subset)
        assert [int(m.key) for m in mappings] == [1, 2, 3]
        assert [m.frequency.hz for m in mappings] == pytest.approx(full[1:4])

    def test_equave_wraparound(self) -> None:
        """Each pattern repeat multiplies by the equave."""
        result = frequencies(CARLOS_SUPER, KeyboardMapping.full(0, 0, Frequency.MIN))
        for key in range(128 - 12):
            assert result[key + 12] == pytest.approx(result[key] * 2.0)

    def test_tritave_scale(self) -> None:
        """Bohlen-Pierce repeats every 13 keys at 3/1."""
        result = frequencies(BOHLEN_P, KeyboardMapping.full_linear())
        assert result[69] == pytest.approx(440.0)
        assert result[69 + 13] == pytest.approx(1320.0)
        assert result[69 + 1] == pytest.approx(440.0 * 27 / 25)
        assert result[69 - 1] == pytest.approx(440.0 / 3 * 25 / 9)

    def test_carlos_super_from_key_zero(self) -> None:
        """Just ratios above MIDI note 0."""
        result = frequencies(CARLOS_SUPER, KeyboardMapping.full(0, 0, Frequency.MIN))
        assert result[0] == pytest.approx(Frequency.MIN.hz)
        assert result[7] == pytest.approx(Frequency.MIN.hz * 3 / 2)
        assert result[19] == pytest.approx(Frequency.MIN.hz * 3)

    def test_rows(self) -> None:
        """Rows carry key, degree and interval, and render as a table line."""
        mappings = compute_frequencies(CARLOS_SUPER, KeyboardMapping.full(0, 0, Frequency.MIN))
        row = mappings[7]
        assert row.key == KeyNumber(7)
        assert row.degree == 7
        assert str(row.interval) == "3/2"
        assert row.note_name == "G-1"
        line = str(row)
        assert line.startswith("7    G-1")
        assert "3/2" in line
        assert line.endswith("Hz")

    def test_unmapped_fails_fast(self) -> None:
        """Unmapped keys stop the computation."""
        mapping = KeyboardMapping.full(60, 60, Frequency(261.63), CustomKeyMappings.of([0, None]))
        with pytest.raises(UnsupportedKeyMappingError):
            compute_frequencies(EDO12, mapping)

    def test_deterministic(self) -> None:
        """Same inputs, same output."""
        mapping = KeyboardMapping.full_linear()
        assert frequencies(CARLOS_SUPER, mapping) == frequencies(CARLOS_SUPER, mapping)
