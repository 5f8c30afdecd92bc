"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field

from stonecut.domain.value_objects import CutType
from stonecut.web.schemas.common import (
    CutItemSchema,
    LayerItemSchema,
    PartitionSchema,
    RemainingStoneSchema,
)


class PartitionPositionsResponse(BaseModel):
    """Response for partition placement."""

    is_valid: bool = Field(..., description="Whether every partition was placed")
    error: str | None = Field(default=None, description="Summary error")
    partition_errors: dict[str, str] = Field(
        default_factory=dict, description="Error message by partition id"
    )
    partitions: list[PartitionSchema] = Field(default_factory=list)
    remaining_areas: list[RemainingStoneSchema] = Field(
        default_factory=list, description="Free stock after placement"
    )


class PartitionFitResponse(BaseModel):
    """Response for the quick bounds check."""

    is_valid: bool
    error: str | None = None


class LongitudinalCutResponse(BaseModel):
    """Response for a longitudinal cut."""

    is_cut: bool
    cut_type: CutType | None = None
    canonical_width_cm: float
    canonical_length_m: float
    cutting_cost: float = 0.0
    remaining_stones: list[RemainingStoneSchema] = Field(default_factory=list)


class RejectedEntrySchema(BaseModel):
    """Standard stock entry that could not produce the slab."""

    standard_width_cm: float
    standard_length_cm: float
    quantity: int
    message: str


class SlabCutResponse(BaseModel):
    """Response for a slab cut."""

    is_cut: bool
    cut_type: CutType | None = None
    cutting_cost: float = 0.0
    remaining_stones: list[RemainingStoneSchema] = Field(default_factory=list)
    rejected_entries: list[RejectedEntrySchema] = Field(default_factory=list)


class RemainderCollectionResponse(BaseModel):
    """Response carrying a remainder collection."""

    remainders: list[RemainingStoneSchema] = Field(default_factory=list)


class LayerAllocationResponse(BaseModel):
    """Response for one layer allocation."""

    layer_item: LayerItemSchema
    updated_remainders: list[RemainingStoneSchema] = Field(
        default_factory=list, description="Pool snapshot after the allocation"
    )
    shortfall: int = Field(default=0, description="Strips no source could satisfy")


class LayerMergeResponse(BaseModel):
    """Response with merged layer items."""

    items: list[LayerItemSchema] = Field(default_factory=list)


class CuttingJobResponse(BaseModel):
    """Response for a planned cutting job."""

    is_valid: bool = Field(..., description="Whether every request was satisfied")
    seed: int = Field(..., description="Seed the ids were generated from")
    errors: list[str] = Field(default_factory=list)
    cuts: list[CutItemSchema] = Field(default_factory=list)
    partitions: list[PartitionSchema] = Field(default_factory=list)
    partition_remainders: list[RemainingStoneSchema] = Field(default_factory=list)
    layers: list[LayerItemSchema] = Field(default_factory=list)
    remainders: list[RemainingStoneSchema] = Field(default_factory=list)
    shortfall: int = 0
    total_cutting_cost: float = 0.0


class ValidationResultSchema(BaseModel):
    """Response for cutting job validation."""

    is_valid: bool = Field(..., description="Whether the job is valid")
    exit_code: int = Field(..., description="0 valid, 1 errors, 2 warnings")
    errors: list[dict[str, Any]] = Field(default_factory=list)
    warnings: list[dict[str, Any]] = Field(default_factory=list)


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error category")
    details: Any = Field(default=None, description="Additional details")
