"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from stonecut.domain.entities import (
    CutLineItem,
    LayerLineItem,
    LineItem,
    RemainingStone,
    StonePartition,
)
from stonecut.domain.services import (
    LayerAllocationResult,
    LongitudinalCutResult,
    SlabCutResult,
)


@dataclass
class CuttingJobOutput:
    """Output DTO containing every result of a planned cutting job.

    Attributes:
        seed: Seed the job's ids were generated from.
        line_items: Cut and layer line items, in creation order, with
            remainder usages recorded on consumers and owners.
        longitudinal_results: One result per longitudinal cut.
        slab_results: One result per slab cut.
        partitions: Partitions in cutting order with placement applied.
        partition_remainders: Free stock left after placing the partitions.
        layer_results: One allocation result per stair layer request.
        remainders: Final remainder pool snapshot.
        shortfall: Layer strips no source could satisfy.
        errors: Per-item problems (rejected entries, unplaced partitions).
    """

    seed: int
    line_items: list[LineItem] = field(default_factory=list)
    longitudinal_results: list[LongitudinalCutResult] = field(default_factory=list)
    slab_results: list[SlabCutResult] = field(default_factory=list)
    partitions: list[StonePartition] = field(default_factory=list)
    partition_remainders: list[RemainingStone] = field(default_factory=list)
    layer_results: list[LayerAllocationResult] = field(default_factory=list)
    remainders: list[RemainingStone] = field(default_factory=list)
    shortfall: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True if every request was fully satisfied."""
        return not self.errors and self.shortfall == 0

    @property
    def cut_items(self) -> list[CutLineItem]:
        """Longitudinal and slab line items."""
        return [item for item in self.line_items if isinstance(item, CutLineItem)]

    @property
    def layer_items(self) -> list[LayerLineItem]:
        """Layer line items after merging."""
        return [item for item in self.line_items if isinstance(item, LayerLineItem)]

    @property
    def placed_partitions(self) -> list[StonePartition]:
        """Partitions that received a position."""
        return [p for p in self.partitions if p.is_positioned]

    @property
    def total_remainder_square_meters(self) -> float:
        """Area of the final remainder pool."""
        return sum(stone.square_meters for stone in self.remainders)

    @property
    def total_cutting_cost(self) -> float:
        """Cutting cost over all line items."""
        return sum(item.cutting_cost for item in self.line_items)
