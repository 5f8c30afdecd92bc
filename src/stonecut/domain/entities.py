"""Domain entities: remainders, partitions and contract line items."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .units import EPSILON
from .value_objects import (
    CutType,
    LayerEdges,
    LayerType,
    RemainderUsage,
    StairPart,
    StonePosition,
)


@dataclass(frozen=True)
class RemainingStone:
    """Leftover material produced by a cut, eligible for reuse.

    Records are not validated on construction: partially edited input
    (negative or missing geometry, absent quantity) must be representable so
    sanitization can normalize it. Use ``sanitize_remaining_stone`` and
    ``is_usable_remaining_stone`` before offering a record to a consumer.

    Attributes:
        id: Unique id, derived from a deterministic seed and counter.
        width_cm: Piece width in centimeters.
        length_m: Piece length in meters.
        square_meters: Total area of all pieces in square meters.
        quantity: Number of identical pieces, or None when it must be
            inferred from the area.
        is_available: False once consumed or invalid.
        source_cut_id: Cut operation that produced this remainder.
        position: Placement on the stock, only for spatially tracked pieces.
        cutting_cost: Cost of the cut that produced this piece, if any.
        cutting_cost_per_meter: Rate used for ``cutting_cost``.
        cut_type: Type of the cut that produced this piece, if any.
    """

    id: str
    width_cm: float
    length_m: float
    square_meters: float
    quantity: int | None = None
    is_available: bool = True
    source_cut_id: str = ""
    position: StonePosition | None = None
    cutting_cost: float | None = None
    cutting_cost_per_meter: float | None = None
    cut_type: CutType | None = None

    @property
    def piece_square_meters(self) -> float:
        """Area of a single piece in square meters."""
        return (self.width_cm * self.length_m) / 100


@dataclass(frozen=True)
class StonePartition:
    """A rectangular piece to be cut from stock, in user cutting order.

    Created with geometry only; placement either sets ``position`` (and
    clears ``validation_error``) or sets ``validation_error`` and leaves
    ``position`` empty.

    Attributes:
        id: Caller-assigned id, unique within one positioning pass.
        width_cm: Partition width in centimeters.
        length_m: Partition length in meters.
        square_meters: Partition area in square meters.
        position: Placement on the stock, once positioned.
        validation_error: Why the partition could not be placed.
    """

    id: str
    width_cm: float
    length_m: float
    square_meters: float = 0.0
    position: StonePosition | None = None
    validation_error: str | None = None

    @property
    def has_geometry(self) -> bool:
        """True if both dimensions are positive."""
        return self.width_cm > 0 and self.length_m > 0

    @property
    def is_positioned(self) -> bool:
        """True if the partition received a placement."""
        return self.position is not None

    @property
    def end_width_cm(self) -> float:
        """Far edge on the width axis; only meaningful once positioned."""
        start = self.position.start_width_cm if self.position else 0.0
        return start + self.width_cm

    @property
    def end_length_m(self) -> float:
        """Far edge on the length axis; only meaningful once positioned."""
        start = self.position.start_length_m if self.position else 0.0
        return start + self.length_m


@dataclass(frozen=True)
class CutLineItem:
    """A longitudinal or slab product line in a contract.

    Exclusively owns the remainders its cut produced; other line items only
    reference them through ``RemainderUsage`` records.

    Attributes:
        used_remainders: Remainders this item consumed.
        consumed_remainders: Usages of this item's own remainders recorded
            by other items. Informational; availability is derived from
            ``used_remainders`` of every item.
    """

    id: str
    cut_type: CutType | None
    width_cm: float
    length_m: float
    quantity: int
    original_width_cm: float = 0.0
    remaining_stones: tuple[RemainingStone, ...] = ()
    used_remainders: tuple[RemainderUsage, ...] = ()
    consumed_remainders: tuple[RemainderUsage, ...] = ()
    cutting_cost: float = 0.0


@dataclass(frozen=True)
class LayerLineItem:
    """Layer strips applied to one stair part, as a contract line.

    Totals are cumulative across merges: adding more layers with the same
    configuration sums into the existing item.

    Attributes:
        id: Line item id.
        parent_part: Stair part the layers belong to.
        edges: Edge selection of the layers.
        layer_width_cm: Strip width in centimeters.
        layer_length_m: Stair length the strips were computed for.
        layers_per_stair: Layers stacked on each stair.
        parent_quantity: Cumulative number of stairs covered.
        layers_from_remaining_stones: Strips cut from remainders.
        layers_from_new_stones: Strips cut from fresh stock.
        square_meters: Cumulative strip area.
        material_price: Cumulative stone price.
        layer_type_cost: Cumulative layer type (profile) cost.
        cutting_cost: Cumulative cutting cost.
        stone_area_used_sqm: Cumulative fresh stone area consumed.
        used_remainders: Remainders consumed by these layers.
        remaining_stones: Leftovers produced while cutting these layers.
        consumed_remainders: Usages of these leftovers recorded by other items.
        layer_type: Layer type metadata, taken from the newest allocation.
        price_per_square_meter: Effective stone price, from the newest allocation.
        layer_stone_id: Alternate stone product id, if any.
    """

    id: str
    parent_part: StairPart
    edges: LayerEdges
    layer_width_cm: float
    layer_length_m: float
    layers_per_stair: int
    parent_quantity: int
    layers_from_remaining_stones: int = 0
    layers_from_new_stones: int = 0
    square_meters: float = 0.0
    material_price: float = 0.0
    layer_type_cost: float = 0.0
    cutting_cost: float = 0.0
    stone_area_used_sqm: float = 0.0
    used_remainders: tuple[RemainderUsage, ...] = ()
    remaining_stones: tuple[RemainingStone, ...] = field(default_factory=tuple)
    consumed_remainders: tuple[RemainderUsage, ...] = ()
    layer_type: LayerType | None = None
    price_per_square_meter: float = 0.0
    layer_stone_id: str | None = None

    @property
    def total_layers(self) -> int:
        """Strips satisfied from either source."""
        return self.layers_from_remaining_stones + self.layers_from_new_stones

    @property
    def total_price(self) -> float:
        """Material, layer type and cutting cost, rounded to cents."""
        return round(self.material_price + self.layer_type_cost + self.cutting_cost, 2)

    @property
    def is_cut(self) -> bool:
        """True if any strip needed cutting."""
        return self.layers_from_remaining_stones > 0 or self.cutting_cost > EPSILON


LineItem = Union[CutLineItem, LayerLineItem]
