"""Layer strip allocation for stair parts.

Layers are thin strips applied along selected edges of a stair part. Each
selected edge needs ``quantity * layers_per_stair`` strips of its run
length. Strips are satisfied first from usable remainders and then from
fresh stock:

- A remainder is ripped into columns of the layer width (``floor(width /
  layer_width)`` per piece), and every column yields strips along its
  length. Remainders are consumed first-in first-out, edges in the order
  front, back, left, right, perimeter.
- Fresh stock is opened one stone at a time as columns of the stock length.
  The unused width of the opened stones leaves through the longitudinal cut
  calculator.

Whatever neither source can satisfy is reported as a shortfall count. The
remainder pool passed in is never modified; a new merged snapshot is
returned instead.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Sequence

from stonecut.domain.entities import LayerLineItem, LineItem, RemainingStone
from stonecut.domain.services.directional_cut import (
    calculate_cutting_cost,
    calculate_longitudinal_remaining_stones,
)
from stonecut.domain.services.remainders import (
    is_usable_remaining_stone,
    merge_remaining_stone_collection,
    sanitize_remaining_stone,
    usage_for_stone,
    with_available_quantity,
)
from stonecut.domain.units import EPSILON, LengthUnit, square_meters
from stonecut.domain.value_objects import (
    IdSequence,
    LayerEdge,
    LayerEdges,
    LayerStoneChoice,
    LayerType,
    RemainderUsage,
    StairPart,
)

logger = logging.getLogger(__name__)

LayerMergeKey = tuple[StairPart, LayerEdges, str | None, str | None, float, float, float, int]


@dataclass(frozen=True)
class LayerDraft:
    """Layer request for one stair part, as entered by the user.

    Attributes:
        part: Stair part carrying the layers.
        quantity: Number of stairs.
        stair_width_cm: Depth of the stair part in centimeters.
        stair_length_m: Length of the stair part in meters.
        layer_width_cm: Strip width in centimeters.
        layers_per_stair: Layers stacked on each stair.
        edges: Edge selection.
        stock_width_cm: Width of the fresh stock strips are cut from.
        stock_length_m: Length of the fresh stock; defaults to the stair
            length.
        price_per_square_meter: Price of the stair's own stone.
        cutting_cost_per_meter: Rate for cutting fresh strips.
        layer_type: Optional layer type priced per running meter.
        layer_stone: Optional alternate stone for the layers.
        standard_length_m: Standard length the stair stone is sold in.
    """

    part: StairPart
    quantity: int
    stair_width_cm: float
    stair_length_m: float
    layer_width_cm: float
    layers_per_stair: int
    edges: LayerEdges
    stock_width_cm: float
    stock_length_m: float | None = None
    price_per_square_meter: float = 0.0
    cutting_cost_per_meter: float = 0.0
    layer_type: LayerType | None = None
    layer_stone: LayerStoneChoice | None = None
    standard_length_m: float | None = None

    @property
    def total_layers_needed(self) -> int:
        """Layers per edge over all stairs."""
        return max(0, self.quantity) * max(0, self.layers_per_stair)

    @property
    def effective_stock_length_m(self) -> float:
        """Length of a fresh stock piece."""
        if self.stock_length_m is not None and self.stock_length_m > 0:
            return self.stock_length_m
        if self.standard_length_m is not None and self.standard_length_m > 0:
            return self.standard_length_m
        return self.stair_length_m

    @property
    def effective_price_per_square_meter(self) -> float:
        """Layer stone price, honoring an alternate stone."""
        if self.layer_stone is not None:
            return self.layer_stone.effective_price_per_square_meter
        return self.price_per_square_meter


@dataclass(frozen=True)
class EdgeDemand:
    """Strips one edge needs over all stairs.

    Attributes:
        edge: The edge.
        strips: Number of strips.
        length_m: Length of each strip.
    """

    edge: LayerEdge
    strips: int
    length_m: float


@dataclass(frozen=True)
class LayerAllocationResult:
    """Outcome of allocating one layer draft.

    Attributes:
        layer_item: The new layer line item.
        updated_remainders: Merged pool snapshot after consumption, with
            the leftovers of this allocation added.
        shortfall: Strips that could not be satisfied.
    """

    layer_item: LayerLineItem
    updated_remainders: tuple[RemainingStone, ...]
    shortfall: int = 0


def _layer_runs(draft: LayerDraft) -> list[tuple[LayerEdge, float]]:
    """Run length of every selected edge on one stair.

    Where two adjacent edges are both selected, one of them is shortened by
    the layer width so the corner square is counted once.
    """
    if draft.layer_width_cm <= 0 or not draft.edges.any_selected:
        return []

    length_m = max(0.0, draft.stair_length_m)
    width_m = max(0.0, draft.stair_width_cm) / 100
    layer_width_m = draft.layer_width_cm / 100
    edges = draft.edges
    runs: list[tuple[LayerEdge, float]] = []

    if draft.part is StairPart.LANDING:
        if edges.perimeter:
            return [(LayerEdge.PERIMETER, 2 * (length_m + width_m))]

        has_front_or_back = edges.front or edges.back
        has_side = edges.left or edges.right
        front_back = max(0.0, width_m - layer_width_m) if has_side else width_m
        sides = max(0.0, length_m - layer_width_m) if has_front_or_back else length_m

        if edges.front:
            runs.append((LayerEdge.FRONT, front_back))
        if edges.back:
            runs.append((LayerEdge.BACK, front_back))
        if edges.left:
            runs.append((LayerEdge.LEFT, sides))
        if edges.right:
            runs.append((LayerEdge.RIGHT, sides))
        return runs

    if edges.front:
        runs.append((LayerEdge.FRONT, length_m))
    sides = max(0.0, width_m - layer_width_m) if edges.front else width_m
    if edges.left:
        runs.append((LayerEdge.LEFT, sides))
    if edges.right:
        runs.append((LayerEdge.RIGHT, sides))
    return runs


def total_layer_length_per_stair_m(draft: LayerDraft) -> float:
    """Sum of the selected edge runs on one stair."""
    return sum(run for _, run in _layer_runs(draft))


def layer_edge_demands(draft: LayerDraft) -> list[EdgeDemand]:
    """Strip demands of a draft, in allocation priority order.

    A landing perimeter is cut as two strips along the length and two
    along the width per layer.
    """
    layers = draft.total_layers_needed
    if layers <= 0 or draft.stair_length_m <= 0 or draft.stair_width_cm <= 0:
        return []

    demands: list[EdgeDemand] = []
    for edge, run in _layer_runs(draft):
        if edge is LayerEdge.PERIMETER:
            width_m = draft.stair_width_cm / 100
            demands.append(EdgeDemand(edge, 2 * layers, draft.stair_length_m))
            demands.append(EdgeDemand(edge, 2 * layers, width_m))
        elif run > EPSILON:
            demands.append(EdgeDemand(edge, layers, run))
    return demands


def max_layer_length_m(draft: LayerDraft) -> float:
    """Longest single strip the draft needs."""
    demands = layer_edge_demands(draft)
    if not demands:
        return 0.0
    return max(demand.length_m for demand in demands)


def compute_layer_square_meters(draft: LayerDraft) -> float:
    """Strip area over all stairs and layers."""
    per_stair = total_layer_length_per_stair_m(draft) * draft.layer_width_cm / 100
    return per_stair * draft.total_layers_needed


@dataclass
class _Column:
    """Layer-width column ripped from one remainder piece or stock stone."""

    stone_index: int
    unit: int
    remaining_length_m: float
    original_length_m: float

    @property
    def touched(self) -> bool:
        return self.remaining_length_m < self.original_length_m - EPSILON


@dataclass
class _StripTally:
    strips: int = 0
    area: float = 0.0
    cutting_cost: float = 0.0
    usages: list[RemainderUsage] = field(default_factory=list)


def _take_strips(
    columns: Sequence[_Column],
    needed: int,
    length_m: float,
) -> int:
    """Cut up to ``needed`` strips from ``columns`` first-fit; return count."""
    taken = 0
    for column in columns:
        if taken >= needed:
            break
        if column.remaining_length_m + EPSILON < length_m:
            continue
        possible = int(math.floor((column.remaining_length_m + EPSILON) / length_m))
        used = min(needed - taken, possible)
        column.remaining_length_m = max(0.0, column.remaining_length_m - used * length_m)
        taken += used
    return taken


def _remainder_columns(
    pool: Sequence[RemainingStone],
    layer_width_cm: float,
) -> list[_Column]:
    columns: list[_Column] = []
    for index, stone in enumerate(pool):
        per_piece = int(math.floor((stone.width_cm + EPSILON) / layer_width_cm))
        if per_piece <= 0 or stone.length_m <= EPSILON:
            continue
        for unit in range(stone.quantity or 0):
            for _ in range(per_piece):
                columns.append(_Column(index, unit, stone.length_m, stone.length_m))
    return columns


def _consume_remainders(
    draft: LayerDraft,
    pool: list[RemainingStone],
    columns: list[_Column],
    ids: IdSequence,
) -> tuple[list[RemainderUsage], list[RemainingStone], list[RemainingStone]]:
    """Turn touched remainder columns into usages and leftovers.

    Returns the usages, the pool with consumed pieces removed, and the
    leftovers cut from the consumed pieces.
    """
    layer_width = draft.layer_width_cm
    touched_units: dict[int, set[int]] = {}
    for column in columns:
        if column.touched:
            touched_units.setdefault(column.stone_index, set()).add(column.unit)

    leftover_counts: dict[tuple[str, float, float], int] = {}
    for column in columns:
        if column.unit not in touched_units.get(column.stone_index, ()):
            continue
        if column.remaining_length_m > EPSILON:
            source = pool[column.stone_index]
            key = (source.source_cut_id or source.id, layer_width, column.remaining_length_m)
            leftover_counts[key] = leftover_counts.get(key, 0) + 1

    usages: list[RemainderUsage] = []
    reduced_pool: list[RemainingStone] = []
    for index, stone in enumerate(pool):
        units = touched_units.get(index)
        if not units:
            reduced_pool.append(stone)
            continue

        usages.append(usage_for_stone(stone, len(units)))
        reduced_pool.append(with_available_quantity(stone, (stone.quantity or 0) - len(units)))

        per_piece = int(math.floor((stone.width_cm + EPSILON) / layer_width))
        residual = stone.width_cm - per_piece * layer_width
        if residual > EPSILON:
            key = (stone.source_cut_id or stone.id, residual, stone.length_m)
            leftover_counts[key] = leftover_counts.get(key, 0) + len(units)

        logger.debug(
            "Consumed %d piece(s) of remainder %s for %s layers",
            len(units),
            stone.id,
            draft.part.value,
        )

    leftovers = [
        RemainingStone(
            id=ids.next("layer_remaining"),
            width_cm=width,
            length_m=length,
            square_meters=square_meters(width, length, count),
            quantity=count,
            source_cut_id=source_cut_id,
        )
        for (source_cut_id, width, length), count in leftover_counts.items()
    ]
    return usages, reduced_pool, leftovers


def compute_layer_allocation(
    draft: LayerDraft,
    available_remainders: Sequence[RemainingStone],
    seed: int = 0,
) -> LayerAllocationResult:
    """Allocate the strips of a layer draft from remainders and fresh stock.

    Args:
        draft: The layer request.
        available_remainders: Remainder pool, in creation order.
        seed: Seed of the id sequence for the item and produced remainders.

    Returns:
        LayerAllocationResult with the line item, the new pool snapshot and
        the unsatisfied strip count.
    """
    ids = IdSequence(seed)
    pool = [
        sanitize_remaining_stone(stone)
        for stone in available_remainders
        if is_usable_remaining_stone(stone)
    ]
    demands = layer_edge_demands(draft)
    layer_width = draft.layer_width_cm

    from_remainders = _StripTally()
    from_stock = _StripTally()
    shortfall = 0

    remainder_columns = (
        _remainder_columns(pool, layer_width) if layer_width > EPSILON else []
    )

    stock_width = draft.stock_width_cm
    stock_length = draft.effective_stock_length_m
    stock_columns_per_stone = (
        int(math.floor((stock_width + EPSILON) / layer_width))
        if layer_width > EPSILON
        else 0
    )
    stock_columns: list[_Column] = []
    stones_opened = 0

    for demand in demands:
        needed = demand.strips
        strip_area = square_meters(layer_width, demand.length_m)

        taken = _take_strips(remainder_columns, needed, demand.length_m)
        from_remainders.strips += taken
        from_remainders.area += taken * strip_area
        needed -= taken

        if needed <= 0:
            continue

        if stock_columns_per_stone <= 0 or demand.length_m > stock_length + EPSILON:
            logger.warning(
                "Cannot cut %d %s strip(s) of %.2fcm x %.3fm from %.2fcm x %.3fm stock",
                needed,
                demand.edge.value,
                layer_width,
                demand.length_m,
                stock_width,
                stock_length,
            )
            shortfall += needed
            continue

        cut = _take_strips(stock_columns, needed, demand.length_m)
        while cut < needed:
            stones_opened += 1
            opened = [
                _Column(stones_opened - 1, column, stock_length, stock_length)
                for column in range(stock_columns_per_stone)
            ]
            stock_columns.extend(opened)
            cut += _take_strips(opened, needed - cut, demand.length_m)

        from_stock.strips += cut
        from_stock.area += cut * strip_area
        from_stock.cutting_cost += calculate_cutting_cost(
            demand.length_m, draft.cutting_cost_per_meter, cut
        )

    item_id = ids.next("layer")
    usages, reduced_pool, leftovers = _consume_remainders(
        draft, pool, remainder_columns, ids
    )
    from_remainders.usages = usages
    leftovers.extend(
        _stock_leftovers(draft, stock_columns, stones_opened, stock_columns_per_stone, ids)
    )

    stone_area_used = stones_opened * square_meters(stock_width, stock_length)
    price = draft.effective_price_per_square_meter
    layer_type_cost = 0.0
    if draft.layer_type is not None:
        layer_type_cost = (
            total_layer_length_per_stair_m(draft)
            * max(0, draft.quantity)
            * draft.layer_type.price_per_meter
        )

    item = LayerLineItem(
        id=item_id,
        parent_part=draft.part,
        edges=draft.edges,
        layer_width_cm=layer_width,
        layer_length_m=draft.stair_length_m,
        layers_per_stair=draft.layers_per_stair,
        parent_quantity=max(0, draft.quantity),
        layers_from_remaining_stones=from_remainders.strips,
        layers_from_new_stones=from_stock.strips,
        square_meters=from_remainders.area + from_stock.area,
        material_price=(from_remainders.area + stone_area_used) * price,
        layer_type_cost=layer_type_cost,
        cutting_cost=from_stock.cutting_cost,
        stone_area_used_sqm=stone_area_used,
        used_remainders=tuple(from_remainders.usages),
        remaining_stones=tuple(merge_remaining_stone_collection(leftovers)),
        layer_type=draft.layer_type,
        price_per_square_meter=price,
        layer_stone_id=draft.layer_stone.product_id if draft.layer_stone else None,
    )

    logger.info(
        "Layer allocation for %s: %d strip(s) from remainders, %d from %d new stone(s), "
        "%d short",
        draft.part.value,
        item.layers_from_remaining_stones,
        item.layers_from_new_stones,
        stones_opened,
        shortfall,
    )

    updated = merge_remaining_stone_collection([*reduced_pool, *item.remaining_stones])
    return LayerAllocationResult(
        layer_item=item,
        updated_remainders=tuple(updated),
        shortfall=shortfall,
    )


def _stock_leftovers(
    draft: LayerDraft,
    columns: Sequence[_Column],
    stones_opened: int,
    columns_per_stone: int,
    ids: IdSequence,
) -> list[RemainingStone]:
    """Leftovers of the fresh stock opened for an allocation.

    The unused stock width comes back as one strip per stone. It is emitted
    without a cutting rate: the cut that frees it is the edge of the last
    layer strip, which the per-strip cutting cost already charges.
    """
    if stones_opened <= 0:
        return []

    counts: dict[float, int] = {}
    for column in columns:
        if column.remaining_length_m > EPSILON:
            length = column.remaining_length_m
            counts[length] = counts.get(length, 0) + 1

    stock_cut_id = ids.next("layer_stock_cut")
    leftovers = [
        RemainingStone(
            id=ids.next("layer_stock_remaining"),
            width_cm=draft.layer_width_cm,
            length_m=length,
            square_meters=square_meters(draft.layer_width_cm, length, count),
            quantity=count,
            source_cut_id=stock_cut_id,
        )
        for length, count in counts.items()
    ]

    rip = calculate_longitudinal_remaining_stones(
        original_width_cm=draft.stock_width_cm,
        requested_width=columns_per_stone * draft.layer_width_cm,
        requested_width_unit=LengthUnit.CM,
        requested_length=draft.effective_stock_length_m,
        requested_length_unit=LengthUnit.M,
        quantity=stones_opened,
        seed=ids.seed,
    )
    if rip.remaining_stones and rip.remaining_stones[0].width_cm > EPSILON:
        leftovers.extend(rip.remaining_stones)
    return leftovers


def layer_merge_key(source: LayerLineItem | LayerDraft) -> LayerMergeKey:
    """Configuration identity of a layer item or draft.

    Items with equal keys are merged instead of duplicated.
    """
    if isinstance(source, LayerDraft):
        return (
            source.part,
            source.edges,
            source.layer_type.id if source.layer_type else None,
            source.layer_stone.product_id if source.layer_stone else None,
            round(source.effective_price_per_square_meter, 4),
            round(source.layer_width_cm, 2),
            round(source.stair_length_m, 3),
            source.layers_per_stair,
        )
    return (
        source.parent_part,
        source.edges,
        source.layer_type.id if source.layer_type else None,
        source.layer_stone_id,
        round(source.price_per_square_meter, 4),
        round(source.layer_width_cm, 2),
        round(source.layer_length_m, 3),
        source.layers_per_stair,
    )


def find_existing_layer_item(
    items: Sequence[LineItem],
    draft: LayerDraft | LayerLineItem,
) -> int | None:
    """Index of the layer item with the same configuration, if any."""
    key = layer_merge_key(draft)
    for index, item in enumerate(items):
        if isinstance(item, LayerLineItem) and layer_merge_key(item) == key:
            return index
    return None


def merge_layer_allocation(
    existing: LayerLineItem,
    new: LayerLineItem,
) -> LayerLineItem:
    """Sum a new allocation into an existing item of the same configuration.

    Counts, areas, costs and remainder references are additive; layer type
    and price metadata come from the newer allocation.

    Raises:
        ValueError: If the two items have different configurations.
    """
    if layer_merge_key(existing) != layer_merge_key(new):
        raise ValueError(
            f"Cannot merge layer item {new.id} into {existing.id}: configurations differ"
        )

    return replace(
        existing,
        parent_quantity=existing.parent_quantity + new.parent_quantity,
        layers_from_remaining_stones=(
            existing.layers_from_remaining_stones + new.layers_from_remaining_stones
        ),
        layers_from_new_stones=existing.layers_from_new_stones + new.layers_from_new_stones,
        square_meters=existing.square_meters + new.square_meters,
        material_price=existing.material_price + new.material_price,
        layer_type_cost=existing.layer_type_cost + new.layer_type_cost,
        cutting_cost=existing.cutting_cost + new.cutting_cost,
        stone_area_used_sqm=existing.stone_area_used_sqm + new.stone_area_used_sqm,
        used_remainders=existing.used_remainders + new.used_remainders,
        remaining_stones=existing.remaining_stones + new.remaining_stones,
        consumed_remainders=existing.consumed_remainders + new.consumed_remainders,
        layer_type=new.layer_type or existing.layer_type,
        price_per_square_meter=new.price_per_square_meter,
        layer_stone_id=new.layer_stone_id,
    )


def upsert_layer_allocation(
    items: Sequence[LineItem],
    new_item: LayerLineItem,
) -> list[LineItem]:
    """Merge ``new_item`` into a matching layer item, or append it."""
    updated = list(items)
    index = find_existing_layer_item(updated, new_item)
    if index is None:
        updated.append(new_item)
        return updated

    existing = updated[index]
    assert isinstance(existing, LayerLineItem)
    updated[index] = merge_layer_allocation(existing, new_item)
    logger.debug("Merged layer allocation %s into %s", new_item.id, existing.id)
    return updated
