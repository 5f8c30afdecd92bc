"""Sequential placement of partitions on a single stock piece.

Partitions are cut in the order the user entered them; that order is a
cutting sequence, not an optimization target, so it is never changed.
Free space is tracked as a list of width slices. Each slice is a column of
the stock, ``width_cm`` wide, whose free part starts at ``start_length_m``
and runs for ``remaining_length_m``. Slices never overlap, so partitions
placed inside them never overlap either.

Each placement picks the first slice that fits (slices are ordered by free
start length, then by start width). Using the full slice width shortens the
slice; using part of it splits off a sibling slice for the unused width.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Sequence

from stonecut.domain.entities import RemainingStone, StonePartition
from stonecut.domain.units import EPSILON, square_meters
from stonecut.domain.value_objects import IdSequence, StonePosition

logger = logging.getLogger(__name__)

NO_SPACE_MESSAGE = "Partition does not fit: no remaining space on the stock"


@dataclass(frozen=True)
class WidthSlice:
    """Free column of the stock during one positioning pass.

    Attributes:
        start_width_cm: Left edge of the column.
        width_cm: Column width.
        start_length_m: Where the free part of the column begins.
        remaining_length_m: Free length from ``start_length_m``.
    """

    start_width_cm: float
    width_cm: float
    start_length_m: float
    remaining_length_m: float

    @property
    def area(self) -> float:
        return self.width_cm * self.remaining_length_m

    def fits(self, width_cm: float, length_m: float) -> bool:
        """True if a piece of the given size fits in the free part."""
        return (
            width_cm <= self.width_cm + EPSILON
            and length_m <= self.remaining_length_m + EPSILON
        )


@dataclass(frozen=True)
class PartitionFitResult:
    """Result of the quick bounds check of one partition."""

    is_valid: bool
    error: str | None = None


@dataclass(frozen=True)
class PartitionValidationResult:
    """Result of validating a whole partition list.

    Attributes:
        is_valid: True if every partition with geometry was placed.
        error: Summary message when invalid.
        partition_errors: Error message by partition id.
        validated_partitions: Partitions in input order with positions and
            errors applied.
    """

    is_valid: bool
    error: str | None = None
    partition_errors: dict[str, str] = field(default_factory=dict)
    validated_partitions: tuple[StonePartition, ...] = ()


def _fmt(value: float) -> str:
    return f"{round(value, 4):g}"


def _slice_order(slice_: WidthSlice) -> tuple[float, float]:
    """Sort key: free start length first, then start width.

    Sorting by start width alone would offer the slice left below a
    narrow partition before the sibling slice beside it, so
    100x1, 50x1, 50x1 on a 100cm stock would not land at (0, 0), (0, 1)
    and (50, 1).
    """
    return (round(slice_.start_length_m, 9), round(slice_.start_width_cm, 9))


def _bounds_error(
    partition: StonePartition,
    available_width_cm: float,
    available_length_m: float,
) -> str | None:
    if partition.width_cm > available_width_cm + EPSILON:
        return (
            f"Partition width {_fmt(partition.width_cm)}cm exceeds available width "
            f"{_fmt(available_width_cm)}cm by "
            f"{_fmt(partition.width_cm - available_width_cm)}cm"
        )
    if partition.length_m > available_length_m + EPSILON:
        return (
            f"Partition length {_fmt(partition.length_m)}m exceeds available length "
            f"{_fmt(available_length_m)}m by "
            f"{_fmt(partition.length_m - available_length_m)}m"
        )
    return None


def _placement_error(partition: StonePartition, slices: Sequence[WidthSlice]) -> str:
    """Describe why no slice fits, based on the most promising slice."""
    if not slices:
        return NO_SPACE_MESSAGE

    best: WidthSlice | None = None
    for slice_ in slices:
        width_fails = partition.width_cm > slice_.width_cm + EPSILON
        length_fails = partition.length_m > slice_.remaining_length_m + EPSILON
        if width_fails != length_fails:
            best = slice_
            break
    if best is None:
        best = max(slices, key=lambda s: s.area)

    if partition.width_cm > best.width_cm + EPSILON:
        return (
            f"Partition width {_fmt(partition.width_cm)}cm exceeds remaining width "
            f"{_fmt(best.width_cm)}cm by {_fmt(partition.width_cm - best.width_cm)}cm"
        )
    if partition.length_m > best.remaining_length_m + EPSILON:
        return (
            f"Partition length {_fmt(partition.length_m)}m exceeds remaining length "
            f"{_fmt(best.remaining_length_m)}m by "
            f"{_fmt(partition.length_m - best.remaining_length_m)}m"
        )
    return NO_SPACE_MESSAGE


def _place_in_slice(
    slices: tuple[WidthSlice, ...],
    index: int,
    width_cm: float,
    length_m: float,
) -> tuple[WidthSlice, ...]:
    """Return the slice list after cutting a piece from ``slices[index]``."""
    target = slices[index]
    others = slices[:index] + slices[index + 1 :]
    produced: list[WidthSlice] = []

    if target.width_cm - width_cm > EPSILON:
        produced.append(
            WidthSlice(
                start_width_cm=target.start_width_cm + width_cm,
                width_cm=target.width_cm - width_cm,
                start_length_m=target.start_length_m,
                remaining_length_m=target.remaining_length_m,
            )
        )
        used_width = width_cm
        logger.debug(
            "Split slice at %.2fcm: %.2fcm used, %.2fcm sibling",
            target.start_width_cm,
            width_cm,
            target.width_cm - width_cm,
        )
    else:
        used_width = target.width_cm

    shrunk = WidthSlice(
        start_width_cm=target.start_width_cm,
        width_cm=used_width,
        start_length_m=target.start_length_m + length_m,
        remaining_length_m=target.remaining_length_m - length_m,
    )
    if shrunk.remaining_length_m > EPSILON:
        produced.append(shrunk)

    return tuple(sorted(others + tuple(produced), key=_slice_order))


def _position_partitions(
    partitions: Sequence[StonePartition],
    available_width_cm: float,
    available_length_m: float,
) -> tuple[list[StonePartition], tuple[WidthSlice, ...]]:
    """Place partitions in order; return them with the final free slices."""
    slices: tuple[WidthSlice, ...] = ()
    if available_width_cm > EPSILON and available_length_m > EPSILON:
        slices = (WidthSlice(0.0, available_width_cm, 0.0, available_length_m),)

    results: list[StonePartition] = []
    for partition in partitions:
        if not partition.has_geometry:
            results.append(partition)
            continue

        error = _bounds_error(partition, available_width_cm, available_length_m)
        index = None
        if error is None:
            index = next(
                (
                    i
                    for i, slice_ in enumerate(slices)
                    if slice_.fits(partition.width_cm, partition.length_m)
                ),
                None,
            )
            if index is None:
                error = _placement_error(partition, slices)

        if index is None:
            logger.warning("Partition %s not placed: %s", partition.id, error)
            results.append(replace(partition, position=None, validation_error=error))
            continue

        target = slices[index]
        position = StonePosition(
            start_width_cm=target.start_width_cm,
            start_length_m=target.start_length_m,
        )
        results.append(replace(partition, position=position, validation_error=None))
        slices = _place_in_slice(slices, index, partition.width_cm, partition.length_m)

    return results, slices


def calculate_partition_positions(
    partitions: Sequence[StonePartition],
    available_width_cm: float,
    available_length_m: float,
) -> list[StonePartition]:
    """Place partitions on the stock in the given order.

    Partitions without positive geometry are returned unchanged at their
    index. Every other partition comes back either with a ``position`` or
    with a ``validation_error`` naming the failing dimension, its limit and
    the excess. One failing partition never prevents the others from being
    placed.

    Args:
        partitions: Partitions in cutting order.
        available_width_cm: Stock width in centimeters.
        available_length_m: Stock length in meters.

    Returns:
        Partitions in input order with placement applied.
    """
    results, slices = _position_partitions(
        partitions, available_width_cm, available_length_m
    )
    placed = sum(1 for p in results if p.is_positioned)
    logger.debug(
        "Placed %d of %d partitions, %d free slices left",
        placed,
        len(results),
        len(slices),
    )
    return results


def validate_partition_fit(
    partition: StonePartition,
    available_width_cm: float,
    available_length_m: float,
) -> PartitionFitResult:
    """Quick bounds check of one partition against the whole stock.

    Independent of any other partition, for instant feedback while editing.
    """
    if not partition.has_geometry:
        return PartitionFitResult(
            is_valid=False, error="Partition dimensions must be positive"
        )

    error = _bounds_error(partition, available_width_cm, available_length_m)
    if error is not None:
        return PartitionFitResult(is_valid=False, error=error)
    return PartitionFitResult(is_valid=True)


def partitions_overlap(first: StonePartition, second: StonePartition) -> bool:
    """True if two positioned partitions share any area.

    Touching edges do not count as overlap. Unpositioned partitions never
    overlap anything.
    """
    if first.position is None or second.position is None:
        return False
    return not (
        first.end_width_cm <= second.position.start_width_cm + EPSILON
        or second.end_width_cm <= first.position.start_width_cm + EPSILON
        or first.end_length_m <= second.position.start_length_m + EPSILON
        or second.end_length_m <= first.position.start_length_m + EPSILON
    )


def _partition_area(partition: StonePartition) -> float:
    if partition.square_meters > 0:
        return partition.square_meters
    return square_meters(partition.width_cm, partition.length_m)


def validate_partitions(
    partitions: Sequence[StonePartition],
    available_width_cm: float,
    available_length_m: float,
    available_square_meters: float | None = None,
) -> PartitionValidationResult:
    """Validate a partition list before committing it.

    Checks, in order: at least one partition has geometry, the total area
    fits the available area, every partition can be placed, and no two
    placed partitions overlap.

    Args:
        partitions: Partitions in cutting order.
        available_width_cm: Stock width in centimeters.
        available_length_m: Stock length in meters.
        available_square_meters: Area limit; defaults to the stock area.

    Returns:
        PartitionValidationResult with per-partition errors.
    """
    candidates = [p for p in partitions if p.has_geometry]
    if not candidates:
        return PartitionValidationResult(
            is_valid=False,
            error="Define at least one partition with valid dimensions",
            validated_partitions=tuple(partitions),
        )

    if available_square_meters is None:
        available_square_meters = square_meters(available_width_cm, available_length_m)

    errors: dict[str, str] = {}
    total_area = sum(_partition_area(p) for p in candidates)
    if total_area > available_square_meters + EPSILON:
        message = (
            f"Total partition area {_fmt(total_area)}m2 exceeds available area "
            f"{_fmt(available_square_meters)}m2"
        )
        for partition in candidates:
            errors.setdefault(
                partition.id,
                _bounds_error(partition, available_width_cm, available_length_m)
                or message,
            )
        return PartitionValidationResult(
            is_valid=False,
            error=message,
            partition_errors=errors,
            validated_partitions=tuple(
                replace(p, validation_error=errors.get(p.id)) for p in partitions
            ),
        )

    positioned, _ = _position_partitions(
        partitions, available_width_cm, available_length_m
    )
    for partition in positioned:
        if partition.has_geometry and partition.validation_error:
            errors.setdefault(partition.id, partition.validation_error)

    placed = [p for p in positioned if p.is_positioned]
    for i, first in enumerate(placed):
        for second in placed[i + 1 :]:
            if partitions_overlap(first, second):
                errors[first.id] = "Partition overlaps another partition"
                errors[second.id] = "Partition overlaps another partition"

    validated = tuple(
        replace(p, validation_error=errors.get(p.id)) if p.id in errors else p
        for p in positioned
    )

    if errors:
        return PartitionValidationResult(
            is_valid=False,
            error=f"{len(errors)} partition(s) have problems; check their dimensions",
            partition_errors=errors,
            validated_partitions=validated,
        )
    return PartitionValidationResult(is_valid=True, validated_partitions=validated)


def calculate_remaining_areas_after_partitions(
    partitions: Sequence[StonePartition],
    available_width_cm: float,
    available_length_m: float,
    seed: int = 0,
) -> list[RemainingStone]:
    """Free stock left after placing the partitions, as remainders.

    Each free slice becomes one positioned remainder. Without any partition
    with geometry the whole stock is returned.

    Args:
        partitions: Partitions in cutting order.
        available_width_cm: Stock width in centimeters.
        available_length_m: Stock length in meters.
        seed: Seed of the id sequence.

    Returns:
        Positioned remainders, one per free slice.
    """
    ids = IdSequence(seed)

    if not any(p.has_geometry for p in partitions):
        if available_width_cm <= EPSILON or available_length_m <= EPSILON:
            return []
        return [
            RemainingStone(
                id=ids.next("remaining_all"),
                width_cm=available_width_cm,
                length_m=available_length_m,
                square_meters=square_meters(available_width_cm, available_length_m),
                quantity=1,
                position=StonePosition(0.0, 0.0),
            )
        ]

    _, slices = _position_partitions(partitions, available_width_cm, available_length_m)
    return [
        RemainingStone(
            id=ids.next("remaining_slice"),
            width_cm=slice_.width_cm,
            length_m=slice_.remaining_length_m,
            square_meters=square_meters(slice_.width_cm, slice_.remaining_length_m),
            quantity=1,
            position=StonePosition(slice_.start_width_cm, slice_.start_length_m),
        )
        for slice_ in slices
        if slice_.width_cm > EPSILON and slice_.remaining_length_m > EPSILON
    ]
