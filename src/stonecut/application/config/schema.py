"""Pydantic configuration schema models for cutting jobs.

This module defines the schema of JSON cutting job files. It uses Pydantic
v2 for validation and serialization.

The unit and stair part enums are reused from the domain layer to ensure
consistency and avoid duplication.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from stonecut.domain.units import LengthUnit
from stonecut.domain.value_objects import StairPart

# Supported schema versions for cutting job files
# Version 1.0: Stock, partitions, directional cuts and remainders
# Version 1.1: Added stair layers and cutting rates
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0", "1.1"})


class StockConfig(BaseModel):
    """Stock piece partitions are cut from.

    Attributes:
        width_cm: Stock width in centimeters.
        length_m: Stock length in meters.
    """

    model_config = ConfigDict(extra="forbid")

    width_cm: float = Field(..., gt=0, description="Stock width in centimeters")
    length_m: float = Field(..., gt=0, description="Stock length in meters")


class PartitionConfig(BaseModel):
    """A partition to cut from the stock, in cutting order.

    Zero dimensions are accepted: such partitions are skipped by placement,
    as a half-entered row would be.
    """

    model_config = ConfigDict(extra="forbid")

    id: str | None = Field(default=None, description="Partition id (defaults to position)")
    width_cm: float = Field(..., ge=0, description="Partition width in centimeters")
    length_m: float = Field(..., ge=0, description="Partition length in meters")


class LongitudinalCutConfig(BaseModel):
    """A longitudinal product cut from stock of a given width."""

    model_config = ConfigDict(extra="forbid")

    id: str | None = None
    original_width_cm: float = Field(..., gt=0, description="Stock width in centimeters")
    width: float = Field(..., ge=0, description="Requested width")
    width_unit: LengthUnit = LengthUnit.CM
    length: float = Field(..., ge=0, description="Requested length")
    length_unit: LengthUnit = LengthUnit.M
    quantity: int = Field(default=1, ge=0)
    cutting_cost_per_meter: float | None = Field(
        default=None,
        ge=0,
        description="Overrides rates.longitudinal_per_meter",
    )


class StandardDimensionConfig(BaseModel):
    """A standard stock unit size a slab can be cut from."""

    model_config = ConfigDict(extra="forbid")

    standard_width_cm: float = Field(..., gt=0)
    standard_length_cm: float = Field(..., gt=0)
    quantity: int = Field(default=1, ge=1)


class SlabCutConfig(BaseModel):
    """A slab product trimmed from standard stock units."""

    model_config = ConfigDict(extra="forbid")

    id: str | None = None
    width_cm: float = Field(..., gt=0, description="Requested width in centimeters")
    length_cm: float = Field(..., gt=0, description="Requested length in centimeters")
    standard_dimensions: list[StandardDimensionConfig] = Field(..., min_length=1)


class PositionConfig(BaseModel):
    """Placement of a remainder on its stock."""

    model_config = ConfigDict(extra="forbid")

    start_width_cm: float = Field(default=0.0, ge=0)
    start_length_m: float = Field(default=0.0, ge=0)


class RemainderConfig(BaseModel):
    """A remainder in the initial pool.

    Geometry is not constrained here: remainders are normalized by the
    sanitizer, which also drops unusable ones.
    """

    model_config = ConfigDict(extra="forbid")

    id: str
    width_cm: float
    length_m: float
    square_meters: float = 0.0
    quantity: int | None = None
    is_available: bool = True
    source_cut_id: str = ""
    position: PositionConfig | None = None


class LayerEdgesConfig(BaseModel):
    """Edges of a stair part that carry layers."""

    model_config = ConfigDict(extra="forbid")

    front: bool = False
    back: bool = False
    left: bool = False
    right: bool = False
    perimeter: bool = False

    @model_validator(mode="after")
    def validate_any_selected(self) -> "LayerEdgesConfig":
        if not (self.front or self.back or self.left or self.right or self.perimeter):
            raise ValueError("At least one layer edge must be selected")
        return self


class LayerTypeConfig(BaseModel):
    """Layer type (edge profile) priced per running meter."""

    model_config = ConfigDict(extra="forbid")

    id: str
    name: str
    price_per_meter: float = Field(default=0.0, ge=0)


class LayerStoneConfig(BaseModel):
    """Alternate stone used for the layers."""

    model_config = ConfigDict(extra="forbid")

    product_id: str
    price_per_square_meter: float = Field(..., ge=0)
    use_mandatory: bool = True
    mandatory_percentage: float = Field(default=20.0, ge=0, le=100)


class StairLayerConfig(BaseModel):
    """Layers requested for one stair part.

    Attributes:
        part: Stair part carrying the layers.
        quantity: Number of stairs.
        stair_width_cm: Depth of the stair part.
        stair_length_m: Length of the stair part.
        layer_width_cm: Strip width.
        layers_per_stair: Layers stacked on each stair.
        edges: Edge selection.
        stock_width_cm: Width of the fresh stock.
        stock_length_m: Length of the fresh stock (defaults to stair length).
        price_per_square_meter: Price of the stair's stone.
        cutting_cost_per_meter: Overrides rates.longitudinal_per_meter.
        layer_type: Optional layer type.
        layer_stone: Optional alternate stone.
        standard_length_m: Standard length the stair stone is sold in.
    """

    model_config = ConfigDict(extra="forbid")

    part: StairPart
    quantity: int = Field(..., ge=0)
    stair_width_cm: float = Field(..., gt=0)
    stair_length_m: float = Field(..., gt=0)
    layer_width_cm: float = Field(..., gt=0)
    layers_per_stair: int = Field(default=1, ge=1)
    edges: LayerEdgesConfig
    stock_width_cm: float = Field(..., gt=0)
    stock_length_m: float | None = Field(default=None, gt=0)
    price_per_square_meter: float = Field(default=0.0, ge=0)
    cutting_cost_per_meter: float | None = Field(default=None, ge=0)
    layer_type: LayerTypeConfig | None = None
    layer_stone: LayerStoneConfig | None = None
    standard_length_m: float | None = Field(default=None, gt=0)


class RatesConfig(BaseModel):
    """Default cutting rates per running meter."""

    model_config = ConfigDict(extra="forbid")

    longitudinal_per_meter: float = Field(default=0.0, ge=0)
    cross_per_meter: float = Field(default=0.0, ge=0)


class CuttingJobConfiguration(BaseModel):
    """Root configuration model for a cutting job.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        seed: Seed for generated ids; a time based seed is used when absent
        stock: Stock piece for partitions (required when partitions are given)
        partitions: Partitions in cutting order
        longitudinal_cuts: Longitudinal products
        slab_cuts: Slab products
        remainders: Initial remainder pool
        stair_layers: Layer requests, allocated in order
        rates: Default cutting rates

    Example:
        >>> config = CuttingJobConfiguration(
        ...     schema_version="1.0",
        ...     stock=StockConfig(width_cm=100.0, length_m=5.0),
        ...     partitions=[PartitionConfig(width_cm=50.0, length_m=1.0)],
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    seed: int | None = Field(default=None, ge=0)
    stock: StockConfig | None = None
    partitions: list[PartitionConfig] = Field(default_factory=list)
    longitudinal_cuts: list[LongitudinalCutConfig] = Field(default_factory=list)
    slab_cuts: list[SlabCutConfig] = Field(default_factory=list)
    remainders: list[RemainderConfig] = Field(default_factory=list)
    stair_layers: list[StairLayerConfig] = Field(default_factory=list)
    rates: RatesConfig = Field(default_factory=RatesConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_schema_version(cls, v: str) -> str:
        """Validate that the schema version is supported.

        Newer minor versions of a supported major version are accepted for
        forward compatibility.
        """
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @model_validator(mode="after")
    def validate_stock_for_partitions(self) -> "CuttingJobConfiguration":
        if self.partitions and self.stock is None:
            raise ValueError("'stock' is required when partitions are given")
        return self

    def summary(self) -> dict[str, Any]:
        """Count of each kind of request, for logging."""
        return {
            "partitions": len(self.partitions),
            "longitudinal_cuts": len(self.longitudinal_cuts),
            "slab_cuts": len(self.slab_cuts),
            "remainders": len(self.remainders),
            "stair_layers": len(self.stair_layers),
        }
