"""Value objects for the stone cutting domain.

Immutable data types shared by the cutting calculators, the partition
positioning engine and the layer allocation engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CutType(str, Enum):
    """Direction of the cut that produced a piece.

    - LONGITUDINAL: rip cut along the width axis (leftover strip runs the
      full requested length)
    - CROSS: cut along the length axis (leftover keeps the requested width)
    """

    LONGITUDINAL = "longitudinal"
    CROSS = "cross"


class StairPart(str, Enum):
    """Stair parts that can carry layers."""

    TREAD = "tread"
    RISER = "riser"
    LANDING = "landing"


class LayerEdge(str, Enum):
    """Edges of a stair part a layer strip can run along."""

    FRONT = "front"
    BACK = "back"
    LEFT = "left"
    RIGHT = "right"
    PERIMETER = "perimeter"


@dataclass(frozen=True)
class StonePosition:
    """Placement of a piece on its stock, from the stock's origin corner.

    Attributes:
        start_width_cm: Offset along the width axis in centimeters.
        start_length_m: Offset along the length axis in meters.
    """

    start_width_cm: float
    start_length_m: float

    def __post_init__(self) -> None:
        if self.start_width_cm < 0 or self.start_length_m < 0:
            raise ValueError("Position offsets must be non-negative")


@dataclass(frozen=True)
class StandardDimension:
    """A standard stock unit a slab can be cut from.

    Attributes:
        standard_width_cm: Stock width in centimeters.
        standard_length_cm: Stock length in centimeters.
        quantity: Number of stock units of this size.
    """

    standard_width_cm: float
    standard_length_cm: float
    quantity: int


@dataclass(frozen=True)
class RemainderUsage:
    """Reference recording that pieces of a remainder were consumed.

    The consumed remainder is never deleted from its owner; its available
    quantity is re-derived as produced quantity minus all recorded usages.

    Attributes:
        stone_id: Id of the consumed remainder.
        source_cut_id: Cut that produced the consumed remainder.
        width_cm: Width of the consumed remainder in centimeters.
        length_m: Length of the consumed remainder in meters.
        quantity: Number of remainder pieces consumed.
    """

    stone_id: str
    source_cut_id: str
    width_cm: float
    length_m: float
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("Usage quantity must be at least 1")


@dataclass(frozen=True)
class LayerEdges:
    """Edge selection for a layered stair part."""

    front: bool = False
    back: bool = False
    left: bool = False
    right: bool = False
    perimeter: bool = False

    @property
    def any_selected(self) -> bool:
        """True if at least one edge is selected."""
        return self.front or self.back or self.left or self.right or self.perimeter

    def selected(self) -> tuple[LayerEdge, ...]:
        """Selected edges in allocation priority order."""
        flags = {
            LayerEdge.FRONT: self.front,
            LayerEdge.BACK: self.back,
            LayerEdge.LEFT: self.left,
            LayerEdge.RIGHT: self.right,
            LayerEdge.PERIMETER: self.perimeter,
        }
        return tuple(edge for edge, on in flags.items() if on)


@dataclass(frozen=True)
class LayerType:
    """Catalog layer type (edge profile) priced per running meter."""

    id: str
    name: str
    price_per_meter: float = 0.0


@dataclass(frozen=True)
class LayerStoneChoice:
    """Alternate stone used for layers instead of the stair's own stone.

    Attributes:
        product_id: Catalog id of the alternate stone.
        price_per_square_meter: Base price of the alternate stone.
        use_mandatory: Whether the mandatory surcharge applies.
        mandatory_percentage: Surcharge percentage on the base price.
    """

    product_id: str
    price_per_square_meter: float
    use_mandatory: bool = True
    mandatory_percentage: float = 20.0

    @property
    def effective_price_per_square_meter(self) -> float:
        """Base price with the mandatory surcharge applied."""
        if self.use_mandatory and self.mandatory_percentage > 0:
            return self.price_per_square_meter * (1 + self.mandatory_percentage / 100)
        return self.price_per_square_meter


class IdSequence:
    """Deterministic id generator for records produced by one calculation.

    Ids have the form ``{prefix}_{seed}_{n}`` where ``n`` counts every id
    handed out by this sequence. The same seed reproduces the same ids.
    """

    def __init__(self, seed: int = 0) -> None:
        if seed < 0:
            raise ValueError("Id seed must be non-negative")
        self.seed = seed
        self._counter = 0

    def next(self, prefix: str) -> str:
        """Return the next id for ``prefix``."""
        value = f"{prefix}_{self.seed}_{self._counter}"
        self._counter += 1
        return value
