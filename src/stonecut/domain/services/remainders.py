"""Remainder sanitization, merging and pool bookkeeping.

Raw remainder records arrive from user edits and chained calculations with
missing or inconsistent geometry. Every record passes through
``sanitize_remaining_stone`` before it is offered to a consumer, and
``is_usable_remaining_stone`` is the single gate deciding whether it can be.

The pool of available remainders is never mutated in place. Consumption is
recorded as ``RemainderUsage`` references and the available quantity is
re-derived as produced quantity minus referenced quantity.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Iterable, Sequence

from stonecut.domain.entities import LineItem, RemainingStone
from stonecut.domain.units import EPSILON
from stonecut.domain.value_objects import RemainderUsage

logger = logging.getLogger(__name__)

MergeKey = tuple[str, float, float, float, float]


def _finite_non_negative(value: float | None) -> float:
    """Coerce a raw number to a finite, non-negative float."""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return max(0.0, number)


def sanitize_remaining_stone(stone: RemainingStone) -> RemainingStone:
    """Normalize a raw remainder record.

    Clamps geometry to non-negative finite values, infers the quantity from
    the area when no positive quantity is given, recomputes the area from the
    piece geometry and derives availability. Idempotent.

    Args:
        stone: The raw remainder.

    Returns:
        A new, normalized remainder.
    """
    width = _finite_non_negative(stone.width_cm)
    length = _finite_non_negative(stone.length_m)
    raw_square_meters = _finite_non_negative(stone.square_meters)
    piece_area = (width * length) / 100

    explicit_quantity = int(math.floor(_finite_non_negative(stone.quantity)))
    if explicit_quantity > 0:
        quantity = explicit_quantity
    elif piece_area > EPSILON:
        quantity = int(math.floor((raw_square_meters + EPSILON) / piece_area))
    else:
        quantity = 0

    if quantity > 0 and piece_area > EPSILON:
        area = piece_area * quantity
    else:
        area = 0.0

    has_valid_geometry = (
        quantity >= 1 and width > EPSILON and length > EPSILON and area > EPSILON
    )
    is_available = has_valid_geometry and stone.is_available is not False

    return replace(
        stone,
        width_cm=width,
        length_m=length,
        square_meters=area,
        quantity=quantity,
        is_available=is_available,
    )


def is_usable_remaining_stone(stone: RemainingStone) -> bool:
    """Return True if the remainder can be offered to a consumer."""
    sanitized = sanitize_remaining_stone(stone)
    return (
        sanitized.is_available
        and sanitized.width_cm > EPSILON
        and sanitized.length_m > EPSILON
        and sanitized.square_meters > EPSILON
        and (sanitized.quantity or 0) >= 1
    )


def normalize_remaining_stone_collection(
    stones: Iterable[RemainingStone],
) -> list[RemainingStone]:
    """Sanitize every remainder of a collection, keeping unusable ones."""
    return [sanitize_remaining_stone(stone) for stone in stones]


def remaining_stone_merge_key(stone: RemainingStone) -> MergeKey:
    """Grouping key of a sanitized remainder.

    Remainders merge when they come from the same cut, have identical
    geometry and sit at the same position (unpositioned counts as origin).
    """
    start_width = stone.position.start_width_cm if stone.position else 0.0
    start_length = stone.position.start_length_m if stone.position else 0.0
    return (
        stone.source_cut_id or "",
        round(stone.width_cm, 6),
        round(stone.length_m, 6),
        round(start_width, 6),
        round(start_length, 6),
    )


def merge_remaining_stone_collection(
    stones: Iterable[RemainingStone],
) -> list[RemainingStone]:
    """Merge duplicate remainders into one record per merge key.

    Unusable stones are dropped. Quantities and areas are summed within a
    group and the result is re-sanitized. Output is ordered by merge key and
    each group keeps the smallest id, so the result does not depend on input
    order and merging twice changes nothing.

    Args:
        stones: Raw or sanitized remainders.

    Returns:
        Merged, sanitized, usable remainders.
    """
    groups: dict[MergeKey, RemainingStone] = {}

    for raw in stones:
        stone = sanitize_remaining_stone(raw)
        if not stone.is_available:
            continue

        key = remaining_stone_merge_key(stone)
        existing = groups.get(key)
        if existing is None:
            groups[key] = stone
            continue

        groups[key] = replace(
            existing if existing.id <= stone.id else stone,
            quantity=(existing.quantity or 0) + (stone.quantity or 0),
            square_meters=existing.square_meters + stone.square_meters,
        )

    merged = [sanitize_remaining_stone(groups[key]) for key in sorted(groups)]
    logger.debug("Merged remainders into %d groups", len(merged))
    return merged


def usage_for_stone(stone: RemainingStone, quantity: int) -> RemainderUsage:
    """Build a usage reference consuming ``quantity`` pieces of ``stone``."""
    return RemainderUsage(
        stone_id=stone.id,
        source_cut_id=stone.source_cut_id or stone.id,
        width_cm=stone.width_cm,
        length_m=stone.length_m,
        quantity=quantity,
    )


def available_quantity(
    stone: RemainingStone,
    usages: Iterable[RemainderUsage],
) -> int:
    """Produced quantity of ``stone`` minus every usage referencing it."""
    sanitized = sanitize_remaining_stone(stone)
    if not sanitized.is_available:
        return 0
    used = sum(usage.quantity for usage in usages if usage.stone_id == stone.id)
    return max(0, (sanitized.quantity or 0) - used)


def with_available_quantity(stone: RemainingStone, quantity: int) -> RemainingStone:
    """Snapshot of ``stone`` reduced to ``quantity`` pieces.

    A quantity of zero yields an unavailable record rather than a deletion.
    """
    sanitized = sanitize_remaining_stone(stone)
    if quantity <= 0:
        return replace(sanitized, quantity=0, square_meters=0.0, is_available=False)
    return sanitize_remaining_stone(
        replace(
            sanitized,
            quantity=quantity,
            square_meters=sanitized.piece_square_meters * quantity,
        )
    )


def _all_usages(line_items: Sequence[LineItem]) -> list[RemainderUsage]:
    usages: list[RemainderUsage] = []
    for item in line_items:
        usages.extend(item.used_remainders)
    return usages


def collect_available_remainders(
    line_items: Sequence[LineItem],
    current_remainders: Sequence[RemainingStone] = (),
) -> list[RemainingStone]:
    """Derive the pool of usable remainders for a new allocation.

    Remainders owned by line items are reduced by every usage recorded on
    any line item; fully consumed ones are left out. Remainders of the draft
    being edited are appended as they are.

    Args:
        line_items: Contract line items, in creation order.
        current_remainders: Remainders of the draft being edited.

    Returns:
        Usable remainders in creation order (FIFO).
    """
    usages = _all_usages(line_items)
    pool: list[RemainingStone] = []

    for item in line_items:
        for stone in item.remaining_stones:
            remaining = available_quantity(stone, usages)
            if remaining > 0:
                pool.append(with_available_quantity(stone, remaining))

    for stone in current_remainders:
        if is_usable_remaining_stone(stone):
            pool.append(sanitize_remaining_stone(stone))

    return pool


def record_remainder_usage(
    line_items: Sequence[LineItem],
    usages: Sequence[RemainderUsage],
    consumer_index: int,
) -> list[LineItem]:
    """Record consumed remainders on the consumer and on their owners.

    The consumer carries the usages in ``used_remainders``; every owning
    line item carries the usages of its own remainders in
    ``consumed_remainders``. Returns a new list; the given line items are
    not modified.

    Args:
        line_items: Contract line items.
        usages: Usage references produced by an allocation.
        consumer_index: Index of the consuming line item, or -1 when the
            consumer is not part of ``line_items`` yet.

    Returns:
        Updated line items.
    """
    updated: list[LineItem] = list(line_items)
    if not usages:
        return updated

    owner_by_stone: dict[str, int] = {}
    for index, item in enumerate(line_items):
        for stone in item.remaining_stones:
            owner_by_stone.setdefault(stone.id, index)

    by_owner: dict[int, list[RemainderUsage]] = {}
    for usage in usages:
        owner = owner_by_stone.get(usage.stone_id)
        if owner is not None:
            by_owner.setdefault(owner, []).append(usage)

    if 0 <= consumer_index < len(updated):
        consumer = updated[consumer_index]
        updated[consumer_index] = replace(
            consumer, used_remainders=consumer.used_remainders + tuple(usages)
        )

    for owner, owner_usages in by_owner.items():
        item = updated[owner]
        updated[owner] = replace(
            item, consumed_remainders=item.consumed_remainders + tuple(owner_usages)
        )

    logger.debug(
        "Recorded %d remainder usages across %d owners",
        len(usages),
        len(by_owner),
    )
    return updated
