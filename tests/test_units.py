"""Tests for millimetre length parsing and formatting."""

from __future__ import annotations

import math

import pytest

from tablesmith.units import format_mm, parse_length_mm


class TestParseLengthMM:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (20, 20.0),
            (12.5, 12.5),
            ("20", 20.0),
            ("20mm", 20.0),
            (" 2cm ", 20.0),
            ("0.75m", 750.0),
            ("1.2 M", 1200.0),
        ],
    )
    def test_accepts_numbers_and_unit_strings(self, value: object, expected: float) -> None:
        assert parse_length_mm(value) == expected  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", [-1, "-5mm", math.inf, math.nan, "", "abc", "20in", True])
    def test_rejects_invalid_lengths(self, value: object) -> None:
        with pytest.raises(ValueError):
            parse_length_mm(value)  # type: ignore[arg-type]

    def test_zero_is_allowed(self) -> None:
        assert parse_length_mm(0) == 0.0


class TestFormatMM:
    def test_whole_numbers_drop_decimal(self) -> None:
        assert format_mm(20.0) == "20"
        assert format_mm(300) == "300"

    def test_fractions_keep_up_to_two_decimals(self) -> None:
        assert format_mm(12.5) == "12.5"
        assert format_mm(1.234) == "1.23"
