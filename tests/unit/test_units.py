"""Unit tests for length unit conversion."""

import pytest

from stonecut.domain.units import LengthUnit, convert_length, square_meters, to_cm, to_m


class TestConversions:
    """Tests for to_cm, to_m and convert_length."""

    def test_meters_to_centimeters(self) -> None:
        assert to_cm(1.5, LengthUnit.M) == pytest.approx(150.0)

    def test_centimeters_unchanged(self) -> None:
        assert to_cm(40.0, LengthUnit.CM) == 40.0

    def test_centimeters_to_meters(self) -> None:
        assert to_m(250.0, LengthUnit.CM) == pytest.approx(2.5)

    def test_meters_unchanged(self) -> None:
        assert to_m(2.0, LengthUnit.M) == 2.0

    def test_accepts_unit_strings(self) -> None:
        """Raw unit values from JSON are accepted."""
        assert to_cm(0.4, "m") == pytest.approx(40.0)

    def test_unknown_unit_rejected(self) -> None:
        with pytest.raises(ValueError):
            to_cm(1.0, "mm")

    @pytest.mark.parametrize(
        "value,from_unit,to_unit,expected",
        [
            (1.0, LengthUnit.M, LengthUnit.CM, 100.0),
            (100.0, LengthUnit.CM, LengthUnit.M, 1.0),
            (3.0, LengthUnit.M, LengthUnit.M, 3.0),
            (7.0, LengthUnit.CM, LengthUnit.CM, 7.0),
        ],
    )
    def test_convert_length(
        self, value: float, from_unit: LengthUnit, to_unit: LengthUnit, expected: float
    ) -> None:
        assert convert_length(value, from_unit, to_unit) == pytest.approx(expected)


class TestSquareMeters:
    """Tests for the area helper."""

    def test_single_piece(self) -> None:
        assert square_meters(20.0, 2.0) == pytest.approx(0.4)

    def test_multiple_pieces(self) -> None:
        assert square_meters(20.0, 2.0, 3) == pytest.approx(1.2)
