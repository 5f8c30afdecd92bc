"""Unit tests for the longitudinal and slab remainder calculators."""

import random

import pytest

from stonecut.domain.services.directional_cut import (
    calculate_cutting_cost,
    calculate_longitudinal_remaining_stones,
    calculate_slab_remaining_stones,
    has_longitudinal_geometry_changed,
    has_slab_geometry_changed,
)
from stonecut.domain.units import LengthUnit
from stonecut.domain.value_objects import CutType, StandardDimension


class TestCuttingCost:
    """Tests for calculate_cutting_cost."""

    def test_rate_times_length_times_quantity(self) -> None:
        assert calculate_cutting_cost(2.0, 5.0, 3) == pytest.approx(30.0)

    @pytest.mark.parametrize("length,rate,qty", [(0, 5, 1), (2, 0, 1), (2, 5, 0), (-1, 5, 1)])
    def test_non_positive_inputs_cost_nothing(self, length, rate, qty) -> None:
        assert calculate_cutting_cost(length, rate, qty) == 0.0


class TestLongitudinalCut:
    """Tests for calculate_longitudinal_remaining_stones."""

    def test_leftover_strip(self) -> None:
        """60cm stock cut to 40cm x 2m x3 leaves a 20cm strip of 1.2m2."""
        result = calculate_longitudinal_remaining_stones(
            60.0, 40.0, LengthUnit.CM, 2.0, LengthUnit.M, 3, seed=5
        )

        assert result.is_cut
        assert result.cut_type is CutType.LONGITUDINAL
        assert len(result.remaining_stones) == 1
        stone = result.remaining_stones[0]
        assert stone.width_cm == pytest.approx(20.0)
        assert stone.length_m == pytest.approx(2.0)
        assert stone.quantity == 3
        assert stone.square_meters == pytest.approx(1.2)
        assert stone.id == "remaining_5_0"
        assert stone.source_cut_id == "cut_5_0"
        assert stone.cut_type is CutType.LONGITUDINAL

    def test_units_converted(self) -> None:
        """Width in meters and length in centimeters are canonicalized."""
        result = calculate_longitudinal_remaining_stones(
            60.0, 0.4, LengthUnit.M, 200.0, LengthUnit.CM, 1
        )

        assert result.canonical_width_cm == pytest.approx(40.0)
        assert result.canonical_length_m == pytest.approx(2.0)
        assert result.remaining_stones[0].width_cm == pytest.approx(20.0)

    def test_full_width_request_not_cut(self) -> None:
        result = calculate_longitudinal_remaining_stones(
            60.0, 60.0, LengthUnit.CM, 2.0, LengthUnit.M, 1
        )

        assert not result.is_cut
        assert result.cut_type is None
        assert result.remaining_stones == ()

    def test_wider_request_not_cut(self) -> None:
        result = calculate_longitudinal_remaining_stones(
            60.0, 70.0, LengthUnit.CM, 2.0, LengthUnit.M, 1
        )
        assert not result.is_cut
        assert result.remaining_stones == ()

    @pytest.mark.parametrize(
        "original,width,length,quantity",
        [(0.0, 40.0, 2.0, 1), (60.0, 0.0, 2.0, 1), (60.0, 40.0, 0.0, 1), (60.0, 40.0, 2.0, 0)],
    )
    def test_missing_inputs_produce_nothing(self, original, width, length, quantity) -> None:
        result = calculate_longitudinal_remaining_stones(
            original, width, LengthUnit.CM, length, LengthUnit.M, quantity
        )
        assert not result.is_cut
        assert result.remaining_stones == ()

    def test_cutting_cost(self) -> None:
        result = calculate_longitudinal_remaining_stones(
            60.0, 40.0, LengthUnit.CM, 2.0, LengthUnit.M, 3, cutting_cost_per_meter=1.5
        )

        assert result.cutting_cost == pytest.approx(9.0)
        assert result.remaining_stones[0].cutting_cost == pytest.approx(9.0)
        assert result.remaining_stones[0].cutting_cost_per_meter == pytest.approx(1.5)

    def test_same_seed_same_ids(self) -> None:
        first = calculate_longitudinal_remaining_stones(60, 40, LengthUnit.CM, 2, LengthUnit.M, 1, seed=9)
        second = calculate_longitudinal_remaining_stones(60, 40, LengthUnit.CM, 2, LengthUnit.M, 1, seed=9)
        assert first == second

    @pytest.mark.parametrize("seed", range(5))
    def test_area_conserved(self, seed: int) -> None:
        """Requested area plus remainder area equals the original area."""
        rng = random.Random(seed)
        for _ in range(40):
            original = rng.uniform(1, 200)
            width = rng.uniform(0.5, original)
            length = rng.uniform(0.1, 5)
            quantity = rng.randint(1, 10)

            result = calculate_longitudinal_remaining_stones(
                original, width, LengthUnit.CM, length, LengthUnit.M, quantity
            )

            requested_area = width / 100 * length * quantity
            remainder_area = sum(s.square_meters for s in result.remaining_stones)
            original_area = original / 100 * length * quantity
            assert requested_area + remainder_area == pytest.approx(original_area, abs=1e-6)


class TestSlabCut:
    """Tests for calculate_slab_remaining_stones."""

    def test_width_length_and_corner_remainders(self) -> None:
        """100x200cm from 120x250cm x2 leaves a width strip, a length strip and a corner."""
        result = calculate_slab_remaining_stones(
            100.0, 200.0, [StandardDimension(120.0, 250.0, 2)], seed=1
        )

        assert result.is_cut
        assert result.cut_type is CutType.CROSS
        width_strip, length_strip, corner = result.remaining_stones

        assert (width_strip.width_cm, width_strip.length_m, width_strip.quantity) == (
            pytest.approx(20.0),
            pytest.approx(2.0),
            2,
        )
        assert (length_strip.width_cm, length_strip.length_m, length_strip.quantity) == (
            pytest.approx(100.0),
            pytest.approx(0.5),
            2,
        )
        assert (corner.width_cm, corner.length_m, corner.quantity) == (
            pytest.approx(20.0),
            pytest.approx(0.5),
            2,
        )
        assert width_strip.cut_type is CutType.LONGITUDINAL
        assert length_strip.cut_type is CutType.CROSS

    def test_area_conserved(self) -> None:
        """Used piece plus remainders cover the standard stock."""
        result = calculate_slab_remaining_stones(100.0, 200.0, [StandardDimension(120.0, 250.0, 2)])

        used = 1.0 * 2.0 * 2
        standard = 1.2 * 2.5 * 2
        remainders = sum(s.square_meters for s in result.remaining_stones)
        assert used + remainders == pytest.approx(standard)

    def test_width_only_trim(self) -> None:
        result = calculate_slab_remaining_stones(100.0, 250.0, [StandardDimension(120.0, 250.0, 1)])

        assert result.cut_type is CutType.LONGITUDINAL
        assert len(result.remaining_stones) == 1
        assert result.remaining_stones[0].width_cm == pytest.approx(20.0)

    def test_exact_size_not_cut(self) -> None:
        result = calculate_slab_remaining_stones(120.0, 250.0, [StandardDimension(120.0, 250.0, 1)])

        assert not result.is_cut
        assert result.cut_type is None
        assert result.remaining_stones == ()

    def test_oversize_entry_rejected(self) -> None:
        """An entry smaller than the request yields no remainders and is reported."""
        result = calculate_slab_remaining_stones(
            130.0,
            200.0,
            [StandardDimension(120.0, 250.0, 1), StandardDimension(140.0, 250.0, 1)],
        )

        assert len(result.rejected_entries) == 1
        assert result.rejected_entries[0].entry.standard_width_cm == 120.0
        assert "width" in result.rejected_entries[0].message
        assert all(s.width_cm > 0 for s in result.remaining_stones)
        assert len(result.remaining_stones) == 3

    def test_empty_entries_skipped(self) -> None:
        result = calculate_slab_remaining_stones(100.0, 200.0, [StandardDimension(120.0, 250.0, 0)])
        assert result.remaining_stones == ()
        assert result.rejected_entries == ()

    def test_cutting_cost_per_trim_direction(self) -> None:
        """Width trims run along the length, length trims across the width."""
        result = calculate_slab_remaining_stones(
            100.0,
            200.0,
            [StandardDimension(120.0, 250.0, 2)],
            longitudinal_rate_per_meter=2.0,
            cross_rate_per_meter=3.0,
        )
        assert result.cutting_cost == pytest.approx(2.0 * 2.0 * 2 + 1.0 * 3.0 * 2)


class TestGeometryChanged:
    """Tests for the recompute guards."""

    def test_no_previous_cut(self) -> None:
        assert has_longitudinal_geometry_changed(None, 60, 40, LengthUnit.CM, 2, LengthUnit.M, 1)
        assert has_slab_geometry_changed(None, 100, 200, 1, [])

    def test_same_canonical_geometry_unchanged(self) -> None:
        previous = (60.0, 40.0, LengthUnit.CM, 2.0, LengthUnit.M, 3)
        assert not has_longitudinal_geometry_changed(
            previous, 60.0, 0.4, LengthUnit.M, 200.0, LengthUnit.CM, 3
        )

    def test_quantity_change_detected(self) -> None:
        previous = (60.0, 40.0, LengthUnit.CM, 2.0, LengthUnit.M, 3)
        assert has_longitudinal_geometry_changed(
            previous, 60.0, 40.0, LengthUnit.CM, 2.0, LengthUnit.M, 4
        )

    def test_slab_entries_change_detected(self) -> None:
        entries = [StandardDimension(120.0, 250.0, 1)]
        previous = (100.0, 200.0, 1, entries)

        assert not has_slab_geometry_changed(previous, 100.0, 200.0, 1, list(entries))
        assert has_slab_geometry_changed(
            previous, 100.0, 200.0, 1, [StandardDimension(120.0, 250.0, 2)]
        )
