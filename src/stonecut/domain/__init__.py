"""Domain layer - cutting geometry, remainders and layer allocation."""

from .entities import CutLineItem, LayerLineItem, LineItem, RemainingStone, StonePartition
from .services import (
    LayerAllocationResult,
    LayerDraft,
    LongitudinalCutResult,
    PartitionFitResult,
    PartitionValidationResult,
    SlabCutResult,
    calculate_longitudinal_remaining_stones,
    calculate_partition_positions,
    calculate_slab_remaining_stones,
    compute_layer_allocation,
    is_usable_remaining_stone,
    merge_layer_allocation,
    merge_remaining_stone_collection,
    sanitize_remaining_stone,
    validate_partition_fit,
)
from .units import EPSILON, LengthUnit, square_meters, to_cm, to_m
from .value_objects import (
    CutType,
    IdSequence,
    LayerEdge,
    LayerEdges,
    LayerStoneChoice,
    LayerType,
    RemainderUsage,
    StairPart,
    StandardDimension,
    StonePosition,
)

__all__ = [
    "EPSILON",
    "CutLineItem",
    "CutType",
    "IdSequence",
    "LayerAllocationResult",
    "LayerDraft",
    "LayerEdge",
    "LayerEdges",
    "LayerLineItem",
    "LayerStoneChoice",
    "LayerType",
    "LengthUnit",
    "LineItem",
    "LongitudinalCutResult",
    "PartitionFitResult",
    "PartitionValidationResult",
    "RemainderUsage",
    "RemainingStone",
    "SlabCutResult",
    "StairPart",
    "StandardDimension",
    "StonePartition",
    "StonePosition",
    "calculate_longitudinal_remaining_stones",
    "calculate_partition_positions",
    "calculate_slab_remaining_stones",
    "compute_layer_allocation",
    "is_usable_remaining_stone",
    "merge_layer_allocation",
    "merge_remaining_stone_collection",
    "sanitize_remaining_stone",
    "square_meters",
    "to_cm",
    "to_m",
    "validate_partition_fit",
]
