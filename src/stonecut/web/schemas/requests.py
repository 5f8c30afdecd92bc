"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field

from stonecut.application.config import (
    LongitudinalCutConfig,
    PartitionConfig,
    RatesConfig,
    SlabCutConfig,
    StairLayerConfig,
)
from stonecut.web.schemas.common import LayerItemSchema, RemainingStoneSchema


class PartitionPositionsRequest(BaseModel):
    """Request for placing partitions on a stock piece."""

    width_cm: float = Field(..., gt=0, description="Stock width in centimeters")
    length_m: float = Field(..., gt=0, description="Stock length in meters")
    partitions: list[PartitionConfig] = Field(..., description="Partitions in cutting order")
    available_square_meters: float | None = Field(
        default=None, gt=0, description="Area limit (defaults to the stock area)"
    )
    seed: int | None = Field(default=None, ge=0, description="Seed for remainder ids")


class PartitionFitRequest(BaseModel):
    """Request for the quick bounds check of one partition."""

    width_cm: float = Field(..., gt=0, description="Stock width in centimeters")
    length_m: float = Field(..., gt=0, description="Stock length in meters")
    partition: PartitionConfig


class LongitudinalCutRequest(LongitudinalCutConfig):
    """Request for the leftover strip of a longitudinal cut."""

    seed: int | None = Field(default=None, ge=0, description="Seed for remainder ids")


class SlabCutRequest(SlabCutConfig):
    """Request for the leftovers of a slab cut."""

    longitudinal_rate_per_meter: float = Field(default=0.0, ge=0)
    cross_rate_per_meter: float = Field(default=0.0, ge=0)
    seed: int | None = Field(default=None, ge=0, description="Seed for remainder ids")


class RemainderCollectionRequest(BaseModel):
    """Request carrying a remainder collection to sanitize or merge."""

    remainders: list[RemainingStoneSchema] = Field(default_factory=list)


class LayerAllocateRequest(BaseModel):
    """Request for allocating one layer draft against a remainder pool."""

    layer: StairLayerConfig
    remainders: list[RemainingStoneSchema] = Field(
        default_factory=list, description="Remainder pool in creation order"
    )
    rates: RatesConfig = Field(default_factory=RatesConfig)
    seed: int | None = Field(default=None, ge=0, description="Seed for generated ids")


class LayerMergeRequest(BaseModel):
    """Request for folding layer items into merged items."""

    items: list[LayerItemSchema] = Field(..., description="Layer items in creation order")


class PlanJobRequest(BaseModel):
    """Request for planning a full cutting job."""

    config: dict[str, Any] = Field(..., description="Cutting job configuration JSON")
    seed: int | None = Field(default=None, ge=0, description="Overrides the job seed")


class ConfigValidateRequest(BaseModel):
    """Request for validating a cutting job."""

    config: dict[str, Any] = Field(..., description="Cutting job configuration JSON")
