"""Unit tests for sequential partition positioning."""

import random

import pytest

from stonecut.domain.entities import StonePartition
from stonecut.domain.services.partition_positioning import (
    NO_SPACE_MESSAGE,
    calculate_partition_positions,
    calculate_remaining_areas_after_partitions,
    partitions_overlap,
    validate_partition_fit,
    validate_partitions,
)
from stonecut.domain.value_objects import StonePosition


def _partition(id: str, width_cm: float, length_m: float) -> StonePartition:
    return StonePartition(
        id=id,
        width_cm=width_cm,
        length_m=length_m,
        square_meters=width_cm * length_m / 100,
    )


@pytest.fixture
def three_partitions() -> list[StonePartition]:
    """Full-width strip followed by two half-width pieces."""
    return [
        _partition("p1", 100.0, 1.0),
        _partition("p2", 50.0, 1.0),
        _partition("p3", 50.0, 1.0),
    ]


class TestCalculatePartitionPositions:
    """Tests for calculate_partition_positions."""

    def test_places_in_cutting_order(self, three_partitions) -> None:
        result = calculate_partition_positions(three_partitions, 100.0, 5.0)

        assert [p.id for p in result] == ["p1", "p2", "p3"]
        assert result[0].position == StonePosition(0.0, 0.0)
        assert result[1].position == StonePosition(0.0, 1.0)
        assert result[2].position == StonePosition(50.0, 1.0)
        assert all(p.validation_error is None for p in result)

    def test_too_wide_partition_gets_error(self) -> None:
        result = calculate_partition_positions([_partition("wide", 150.0, 1.0)], 100.0, 5.0)

        assert result[0].position is None
        assert result[0].validation_error == (
            "Partition width 150cm exceeds available width 100cm by 50cm"
        )

    def test_too_long_partition_gets_error(self) -> None:
        result = calculate_partition_positions([_partition("long", 50.0, 6.0)], 100.0, 5.0)

        assert result[0].position is None
        assert result[0].validation_error == (
            "Partition length 6m exceeds available length 5m by 1m"
        )

    def test_failure_does_not_block_later_partitions(self) -> None:
        partitions = [
            _partition("a", 100.0, 4.0),
            _partition("b", 100.0, 2.0),
            _partition("c", 100.0, 1.0),
        ]

        result = calculate_partition_positions(partitions, 100.0, 5.0)

        assert result[0].position == StonePosition(0.0, 0.0)
        assert result[1].position is None
        assert "remaining length" in result[1].validation_error
        assert result[2].position == StonePosition(0.0, 4.0)

    def test_stock_exhausted(self) -> None:
        partitions = [_partition("a", 100.0, 5.0), _partition("b", 10.0, 1.0)]

        result = calculate_partition_positions(partitions, 100.0, 5.0)

        assert result[1].validation_error == NO_SPACE_MESSAGE

    def test_partition_without_geometry_passed_through(self) -> None:
        empty = StonePartition(id="empty", width_cm=0.0, length_m=1.0)

        result = calculate_partition_positions([empty, _partition("a", 10.0, 1.0)], 100.0, 5.0)

        assert result[0] == empty
        assert result[1].position == StonePosition(0.0, 0.0)

    def test_previous_error_cleared_on_success(self) -> None:
        stale = StonePartition(id="a", width_cm=10.0, length_m=1.0, validation_error="old")

        result = calculate_partition_positions([stale], 100.0, 5.0)

        assert result[0].validation_error is None
        assert result[0].is_positioned

    def test_random_layouts_never_overlap(self) -> None:
        """Placed partitions stay inside the stock and never overlap."""
        rng = random.Random(42)
        for _ in range(50):
            partitions = [
                _partition(f"p{i}", rng.choice([10, 20, 25, 50, 100]), rng.choice([0.5, 1, 1.5, 2]))
                for i in range(rng.randint(1, 12))
            ]

            result = calculate_partition_positions(partitions, 100.0, 5.0)
            placed = [p for p in result if p.is_positioned]

            for p in placed:
                assert p.end_width_cm <= 100.0 + 1e-6
                assert p.end_length_m <= 5.0 + 1e-6
            for i, first in enumerate(placed):
                for second in placed[i + 1 :]:
                    assert not partitions_overlap(first, second)
            for p in result:
                assert p.is_positioned != (p.validation_error is not None)


class TestValidatePartitionFit:
    """Tests for validate_partition_fit."""

    def test_fits(self) -> None:
        assert validate_partition_fit(_partition("a", 100.0, 5.0), 100.0, 5.0).is_valid

    def test_too_wide(self) -> None:
        result = validate_partition_fit(_partition("a", 120.0, 1.0), 100.0, 5.0)

        assert not result.is_valid
        assert "exceeds available width" in result.error

    def test_missing_dimensions(self) -> None:
        result = validate_partition_fit(StonePartition("a", 0.0, 0.0), 100.0, 5.0)

        assert not result.is_valid
        assert result.error == "Partition dimensions must be positive"


class TestValidatePartitions:
    """Tests for validate_partitions."""

    def test_valid_list(self, three_partitions) -> None:
        result = validate_partitions(three_partitions, 100.0, 5.0)

        assert result.is_valid
        assert result.partition_errors == {}
        assert all(p.is_positioned for p in result.validated_partitions)

    def test_no_partition_with_geometry(self) -> None:
        result = validate_partitions([StonePartition("a", 0.0, 1.0)], 100.0, 5.0)

        assert not result.is_valid
        assert result.error == "Define at least one partition with valid dimensions"

    def test_total_area_exceeded(self) -> None:
        partitions = [_partition("a", 100.0, 3.0), _partition("b", 100.0, 3.0)]

        result = validate_partitions(partitions, 100.0, 5.0)

        assert not result.is_valid
        assert "Total partition area 6m2 exceeds available area 5m2" == result.error
        assert set(result.partition_errors) == {"a", "b"}
        assert not any(p.is_positioned for p in result.validated_partitions)

    def test_explicit_area_limit(self, three_partitions) -> None:
        result = validate_partitions(three_partitions, 100.0, 5.0, available_square_meters=1.5)

        assert not result.is_valid
        assert "exceeds available area 1.5m2" in result.error

    def test_placement_errors_reported_per_partition(self) -> None:
        partitions = [_partition("a", 60.0, 4.0), _partition("b", 60.0, 2.0)]

        result = validate_partitions(partitions, 100.0, 5.0)

        assert not result.is_valid
        assert list(result.partition_errors) == ["b"]
        assert result.partition_errors["b"] == (
            "Partition width 60cm exceeds remaining width 40cm by 20cm"
        )
        assert result.error == "1 partition(s) have problems; check their dimensions"


class TestPartitionsOverlap:
    """Tests for partitions_overlap."""

    def test_touching_edges_do_not_overlap(self) -> None:
        first = StonePartition("a", 50.0, 1.0, position=StonePosition(0.0, 0.0))
        second = StonePartition("b", 50.0, 1.0, position=StonePosition(50.0, 0.0))

        assert not partitions_overlap(first, second)

    def test_shared_area_overlaps(self) -> None:
        first = StonePartition("a", 50.0, 1.0, position=StonePosition(0.0, 0.0))
        second = StonePartition("b", 50.0, 1.0, position=StonePosition(25.0, 0.5))

        assert partitions_overlap(first, second)

    def test_unpositioned_never_overlaps(self) -> None:
        first = StonePartition("a", 50.0, 1.0, position=StonePosition(0.0, 0.0))
        assert not partitions_overlap(first, StonePartition("b", 50.0, 1.0))


class TestRemainingAreas:
    """Tests for calculate_remaining_areas_after_partitions."""

    def test_free_slices_become_remainders(self, three_partitions) -> None:
        remaining = calculate_remaining_areas_after_partitions(
            three_partitions, 100.0, 5.0, seed=3
        )

        assert [r.id for r in remaining] == ["remaining_slice_3_0", "remaining_slice_3_1"]
        assert [r.position for r in remaining] == [
            StonePosition(0.0, 2.0),
            StonePosition(50.0, 2.0),
        ]
        for stone in remaining:
            assert stone.width_cm == pytest.approx(50.0)
            assert stone.length_m == pytest.approx(3.0)
            assert stone.square_meters == pytest.approx(1.5)
            assert stone.quantity == 1

    def test_area_conserved(self, three_partitions) -> None:
        remaining = calculate_remaining_areas_after_partitions(three_partitions, 100.0, 5.0)

        used = sum(p.square_meters for p in three_partitions)
        assert used + sum(r.square_meters for r in remaining) == pytest.approx(5.0)

    def test_no_partitions_returns_whole_stock(self) -> None:
        remaining = calculate_remaining_areas_after_partitions([], 100.0, 5.0, seed=1)

        assert len(remaining) == 1
        assert remaining[0].id == "remaining_all_1_0"
        assert remaining[0].position == StonePosition(0.0, 0.0)
        assert remaining[0].square_meters == pytest.approx(5.0)

    def test_no_stock_returns_nothing(self) -> None:
        assert calculate_remaining_areas_after_partitions([], 0.0, 5.0) == []

    def test_full_coverage_leaves_nothing(self) -> None:
        partitions = [_partition("a", 100.0, 5.0)]
        assert calculate_remaining_areas_after_partitions(partitions, 100.0, 5.0) == []
