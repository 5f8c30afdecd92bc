"""Domain services for stone cutting and remainder tracking.

This package provides:
- Remainder sanitization, merging and pool bookkeeping
- Longitudinal and slab remainder calculation
- Sequential partition positioning on a single stock piece
- Layer strip allocation and merging for stair parts
"""

from .directional_cut import (
    LongitudinalCutResult,
    RejectedSlabEntry,
    SlabCutResult,
    calculate_cutting_cost,
    calculate_longitudinal_remaining_stones,
    calculate_slab_remaining_stones,
    has_longitudinal_geometry_changed,
    has_slab_geometry_changed,
)
from .layer_allocation import (
    EdgeDemand,
    LayerAllocationResult,
    LayerDraft,
    compute_layer_allocation,
    compute_layer_square_meters,
    find_existing_layer_item,
    layer_edge_demands,
    layer_merge_key,
    max_layer_length_m,
    merge_layer_allocation,
    total_layer_length_per_stair_m,
    upsert_layer_allocation,
)
from .partition_positioning import (
    PartitionFitResult,
    PartitionValidationResult,
    WidthSlice,
    calculate_partition_positions,
    calculate_remaining_areas_after_partitions,
    partitions_overlap,
    validate_partition_fit,
    validate_partitions,
)
from .remainders import (
    available_quantity,
    collect_available_remainders,
    is_usable_remaining_stone,
    merge_remaining_stone_collection,
    normalize_remaining_stone_collection,
    record_remainder_usage,
    sanitize_remaining_stone,
)

__all__ = [
    "EdgeDemand",
    "LayerAllocationResult",
    "LayerDraft",
    "LongitudinalCutResult",
    "PartitionFitResult",
    "PartitionValidationResult",
    "RejectedSlabEntry",
    "SlabCutResult",
    "WidthSlice",
    "available_quantity",
    "calculate_cutting_cost",
    "calculate_longitudinal_remaining_stones",
    "calculate_partition_positions",
    "calculate_remaining_areas_after_partitions",
    "calculate_slab_remaining_stones",
    "collect_available_remainders",
    "compute_layer_allocation",
    "compute_layer_square_meters",
    "find_existing_layer_item",
    "has_longitudinal_geometry_changed",
    "has_slab_geometry_changed",
    "is_usable_remaining_stone",
    "layer_edge_demands",
    "layer_merge_key",
    "max_layer_length_m",
    "merge_layer_allocation",
    "merge_remaining_stone_collection",
    "normalize_remaining_stone_collection",
    "partitions_overlap",
    "record_remainder_usage",
    "sanitize_remaining_stone",
    "total_layer_length_per_stair_m",
    "upsert_layer_allocation",
    "validate_partition_fit",
    "validate_partitions",
]
