"""Remainder calculation for single directional cuts.

Two cut shapes are supported:

- Longitudinal: a rip cut along the width axis of a stock piece. The
  leftover is one strip of the unused width running the full requested
  length.
- Slab: a requested rectangle trimmed from one or more standard stock
  units. Each unit may need a width trim, a length trim or both, leaving up
  to three leftover pieces (width strip, length strip, corner).

Geometry problems are reported in the result instead of raised, because
requests are usually mid-edit user input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from stonecut.domain.entities import RemainingStone
from stonecut.domain.units import LengthUnit, square_meters, to_cm, to_m
from stonecut.domain.value_objects import CutType, IdSequence, StandardDimension

logger = logging.getLogger(__name__)

# Tolerance when comparing previous and next cut geometry
GEOMETRY_CHANGE_TOLERANCE = 1e-4


@dataclass(frozen=True)
class LongitudinalCutResult:
    """Outcome of a longitudinal cut.

    Attributes:
        is_cut: True if the request needed a rip cut.
        cut_type: ``CutType.LONGITUDINAL`` when cut, else None.
        remaining_stones: The leftover strip, at most one record.
        canonical_width_cm: Requested width converted to centimeters.
        canonical_length_m: Requested length converted to meters.
        cutting_cost: Rate times cut length times quantity.
    """

    is_cut: bool
    cut_type: CutType | None
    remaining_stones: tuple[RemainingStone, ...]
    canonical_width_cm: float
    canonical_length_m: float
    cutting_cost: float = 0.0


@dataclass(frozen=True)
class RejectedSlabEntry:
    """A standard dimension entry that cannot produce the requested slab."""

    entry: StandardDimension
    message: str


@dataclass(frozen=True)
class SlabCutResult:
    """Outcome of trimming a slab from standard stock.

    Attributes:
        is_cut: True if any entry needed a trim.
        cut_type: ``CROSS`` if any entry needed a length trim, else
            ``LONGITUDINAL`` if any needed a width trim, else None.
        remaining_stones: Width strips, length strips and corners, in entry
            order.
        rejected_entries: Entries smaller than the request on some axis.
        cutting_cost: Line based cutting cost over all entries.
    """

    is_cut: bool
    cut_type: CutType | None
    remaining_stones: tuple[RemainingStone, ...]
    rejected_entries: tuple[RejectedSlabEntry, ...] = ()
    cutting_cost: float = 0.0


def calculate_cutting_cost(
    cut_length_m: float,
    rate_per_meter: float,
    quantity: int = 1,
) -> float:
    """Cost of cutting ``quantity`` pieces along ``cut_length_m`` each.

    Returns 0 when the rate or length is not positive.
    """
    if rate_per_meter <= 0 or cut_length_m <= 0 or quantity <= 0:
        return 0.0
    return cut_length_m * rate_per_meter * quantity


def calculate_longitudinal_remaining_stones(
    original_width_cm: float,
    requested_width: float,
    requested_width_unit: LengthUnit,
    requested_length: float,
    requested_length_unit: LengthUnit,
    quantity: int,
    seed: int = 0,
    cutting_cost_per_meter: float = 0.0,
) -> LongitudinalCutResult:
    """Compute the leftover strip of a longitudinal cut.

    A remainder is emitted only when the original width, requested width,
    requested length, quantity and width difference are all positive.

    Args:
        original_width_cm: Width of the stock piece in centimeters.
        requested_width: Requested width in ``requested_width_unit``.
        requested_width_unit: Unit of ``requested_width``.
        requested_length: Requested length in ``requested_length_unit``.
        requested_length_unit: Unit of ``requested_length``.
        quantity: Number of pieces requested.
        seed: Seed of the id sequence.
        cutting_cost_per_meter: Longitudinal cutting rate.

    Returns:
        LongitudinalCutResult with canonical dimensions and the leftover.
    """
    width_cm = to_cm(requested_width or 0.0, requested_width_unit)
    length_m = to_m(requested_length or 0.0, requested_length_unit)
    quantity = int(quantity or 0)
    leftover_width_cm = original_width_cm - width_cm

    should_cut = (
        original_width_cm > 0
        and width_cm > 0
        and length_m > 0
        and quantity > 0
        and leftover_width_cm > 0
    )
    if not should_cut:
        return LongitudinalCutResult(
            is_cut=False,
            cut_type=None,
            remaining_stones=(),
            canonical_width_cm=width_cm,
            canonical_length_m=length_m,
        )

    ids = IdSequence(seed)
    cutting_cost = calculate_cutting_cost(length_m, cutting_cost_per_meter, quantity)
    stone_id = ids.next("remaining")
    remainder = RemainingStone(
        id=stone_id,
        width_cm=leftover_width_cm,
        length_m=length_m,
        square_meters=square_meters(leftover_width_cm, length_m, quantity),
        quantity=quantity,
        source_cut_id=stone_id.replace("remaining", "cut", 1),
        cutting_cost=cutting_cost or None,
        cutting_cost_per_meter=cutting_cost_per_meter or None,
        cut_type=CutType.LONGITUDINAL,
    )

    logger.debug(
        "Longitudinal cut %.2fcm from %.2fcm leaves %.2fcm x %.3fm x %d",
        width_cm,
        original_width_cm,
        leftover_width_cm,
        length_m,
        quantity,
    )

    return LongitudinalCutResult(
        is_cut=True,
        cut_type=CutType.LONGITUDINAL,
        remaining_stones=(remainder,),
        canonical_width_cm=width_cm,
        canonical_length_m=length_m,
        cutting_cost=cutting_cost,
    )


def _rejection_message(
    entry: StandardDimension,
    requested_width_cm: float,
    requested_length_cm: float,
) -> str | None:
    """Describe why ``entry`` cannot produce the request, or None if it can."""
    if requested_width_cm > entry.standard_width_cm:
        return (
            f"Requested width {requested_width_cm:g}cm exceeds standard width "
            f"{entry.standard_width_cm:g}cm"
        )
    if requested_length_cm > entry.standard_length_cm:
        return (
            f"Requested length {requested_length_cm:g}cm exceeds standard length "
            f"{entry.standard_length_cm:g}cm"
        )
    return None


def calculate_slab_remaining_stones(
    requested_width_cm: float,
    requested_length_cm: float,
    standard_dimensions: Sequence[StandardDimension],
    seed: int = 0,
    longitudinal_rate_per_meter: float = 0.0,
    cross_rate_per_meter: float = 0.0,
) -> SlabCutResult:
    """Compute the leftovers of trimming a slab from standard stock units.

    Entries with non-positive dimensions or quantity are skipped. Entries
    where the request exceeds the stock on either axis are rejected and
    produce no remainders. For every other entry the used piece, width
    strip, length strip and corner together cover the standard area.

    Args:
        requested_width_cm: Requested slab width in centimeters.
        requested_length_cm: Requested slab length in centimeters.
        standard_dimensions: Stock units the slab can be cut from.
        seed: Seed of the id sequence shared by all entries.
        longitudinal_rate_per_meter: Rate for width trims.
        cross_rate_per_meter: Rate for length trims.

    Returns:
        SlabCutResult with leftovers in entry order.
    """
    ids = IdSequence(seed)
    remaining: list[RemainingStone] = []
    rejected: list[RejectedSlabEntry] = []
    has_longitudinal = False
    has_cross = False
    cutting_cost = 0.0

    for entry in standard_dimensions:
        standard_width = entry.standard_width_cm or 0.0
        standard_length = entry.standard_length_cm or 0.0
        quantity = int(entry.quantity or 0)

        if standard_width <= 0 or standard_length <= 0 or quantity <= 0:
            continue

        message = _rejection_message(entry, requested_width_cm, requested_length_cm)
        if message is not None:
            logger.warning("Rejected standard dimension entry: %s", message)
            rejected.append(RejectedSlabEntry(entry=entry, message=message))
            continue

        needs_width_cut = 0 < requested_width_cm < standard_width
        needs_length_cut = 0 < requested_length_cm < standard_length
        if not needs_width_cut and not needs_length_cut:
            continue

        has_longitudinal = has_longitudinal or needs_width_cut
        has_cross = has_cross or needs_length_cut

        leftover_width = standard_width - requested_width_cm
        leftover_length_m = (standard_length - requested_length_cm) / 100
        requested_length_m = requested_length_cm / 100

        if needs_width_cut and requested_length_cm > 0:
            remaining.append(
                _slab_piece(ids, "width", leftover_width, requested_length_m, quantity)
            )
            cutting_cost += calculate_cutting_cost(
                requested_length_m, longitudinal_rate_per_meter, quantity
            )

        if needs_length_cut and requested_width_cm > 0:
            remaining.append(
                _slab_piece(ids, "length", requested_width_cm, leftover_length_m, quantity)
            )
            cutting_cost += calculate_cutting_cost(
                requested_width_cm / 100, cross_rate_per_meter, quantity
            )

        if needs_width_cut and needs_length_cut:
            remaining.append(
                _slab_piece(ids, "corner", leftover_width, leftover_length_m, quantity)
            )

    if has_cross:
        cut_type: CutType | None = CutType.CROSS
    elif has_longitudinal:
        cut_type = CutType.LONGITUDINAL
    else:
        cut_type = None

    logger.debug(
        "Slab %gx%gcm produced %d remainders, rejected %d entries",
        requested_width_cm,
        requested_length_cm,
        len(remaining),
        len(rejected),
    )

    return SlabCutResult(
        is_cut=has_longitudinal or has_cross,
        cut_type=cut_type,
        remaining_stones=tuple(remaining),
        rejected_entries=tuple(rejected),
        cutting_cost=cutting_cost,
    )


def _slab_piece(
    ids: IdSequence,
    kind: str,
    width_cm: float,
    length_m: float,
    quantity: int,
) -> RemainingStone:
    stone_id = ids.next(f"remaining_slab_{kind}")
    return RemainingStone(
        id=stone_id,
        width_cm=width_cm,
        length_m=length_m,
        square_meters=square_meters(width_cm, length_m, quantity),
        quantity=quantity,
        source_cut_id=ids.next(f"cut_slab_{kind}"),
        cut_type=CutType.LONGITUDINAL if kind == "width" else CutType.CROSS,
    )


def _almost_equal(a: float, b: float) -> bool:
    return abs(a - b) <= GEOMETRY_CHANGE_TOLERANCE


def has_longitudinal_geometry_changed(
    previous: tuple[float, float, LengthUnit, float, LengthUnit, int] | None,
    original_width_cm: float,
    width: float,
    width_unit: LengthUnit,
    length: float,
    length_unit: LengthUnit,
    quantity: int,
) -> bool:
    """Check whether a longitudinal cut needs its remainders recomputed.

    Args:
        previous: ``(original_width_cm, width, width_unit, length,
            length_unit, quantity)`` of the previous cut, or None if there
            was none.
        original_width_cm: Next original width.
        width: Next requested width.
        width_unit: Unit of ``width``.
        length: Next requested length.
        length_unit: Unit of ``length``.
        quantity: Next quantity.

    Returns:
        True if any canonical dimension or the quantity changed.
    """
    if previous is None:
        return True

    prev_original, prev_width, prev_width_unit, prev_length, prev_length_unit, prev_qty = (
        previous
    )
    return not (
        _almost_equal(prev_original, original_width_cm)
        and _almost_equal(to_cm(prev_width, prev_width_unit), to_cm(width, width_unit))
        and _almost_equal(to_m(prev_length, prev_length_unit), to_m(length, length_unit))
        and _almost_equal(prev_qty, quantity)
    )


def has_slab_geometry_changed(
    previous: tuple[float, float, int, Sequence[StandardDimension]] | None,
    width_cm: float,
    length_cm: float,
    quantity: int,
    standard_dimensions: Sequence[StandardDimension],
) -> bool:
    """Check whether a slab cut needs its remainders recomputed.

    Args:
        previous: ``(width_cm, length_cm, quantity, standard_dimensions)`` of
            the previous cut, or None if there was none.
        width_cm: Next requested width in centimeters.
        length_cm: Next requested length in centimeters.
        quantity: Next quantity.
        standard_dimensions: Next standard stock entries.

    Returns:
        True if the dimensions, the quantity or the stock entries changed.
    """
    if previous is None:
        return True

    prev_width, prev_length, prev_quantity, prev_standard = previous
    if not _almost_equal(prev_width, width_cm):
        return True
    if not _almost_equal(prev_length, length_cm):
        return True
    if not _almost_equal(prev_quantity, quantity):
        return True
    return tuple(prev_standard) != tuple(standard_dimensions)
