"""Common Pydantic schemas shared across requests and responses.

These mirror the domain dataclasses and read them with
``from_attributes=True``; computed properties (such as ``total_price``)
are read the same way.
"""

from pydantic import BaseModel, ConfigDict, Field

from stonecut.domain.value_objects import CutType, StairPart


class PositionSchema(BaseModel):
    """Placement of a piece on its stock."""

    model_config = ConfigDict(from_attributes=True)

    start_width_cm: float = Field(default=0.0, ge=0, description="Offset on the width axis")
    start_length_m: float = Field(default=0.0, ge=0, description="Offset on the length axis")


class RemainingStoneSchema(BaseModel):
    """Remainder record.

    Geometry is not constrained: pool endpoints sanitize what they receive.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Remainder id")
    width_cm: float = Field(..., description="Piece width in centimeters")
    length_m: float = Field(..., description="Piece length in meters")
    square_meters: float = Field(default=0.0, description="Total area of all pieces")
    quantity: int | None = Field(default=None, description="Number of pieces")
    is_available: bool = Field(default=True, description="False once consumed")
    source_cut_id: str = Field(default="", description="Cut that produced the piece")
    position: PositionSchema | None = Field(default=None, description="Placement, if tracked")
    cutting_cost: float | None = None
    cutting_cost_per_meter: float | None = None
    cut_type: CutType | None = None


class PartitionSchema(BaseModel):
    """Partition with its placement outcome."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    width_cm: float
    length_m: float
    square_meters: float = 0.0
    position: PositionSchema | None = None
    validation_error: str | None = None


class RemainderUsageSchema(BaseModel):
    """Reference to consumed remainder pieces."""

    model_config = ConfigDict(from_attributes=True)

    stone_id: str
    source_cut_id: str = ""
    width_cm: float
    length_m: float
    quantity: int = Field(..., ge=1)


class LayerEdgesSchema(BaseModel):
    """Edge selection of a layer item."""

    model_config = ConfigDict(from_attributes=True)

    front: bool = False
    back: bool = False
    left: bool = False
    right: bool = False
    perimeter: bool = False


class LayerTypeSchema(BaseModel):
    """Layer type metadata."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    price_per_meter: float = 0.0


class LayerItemSchema(BaseModel):
    """Layer line item with cumulative totals.

    ``total_layers``, ``total_price`` and ``is_cut`` are derived and ignored
    when the schema is used as input.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    parent_part: StairPart
    edges: LayerEdgesSchema
    layer_width_cm: float = Field(..., gt=0)
    layer_length_m: float = Field(..., gt=0)
    layers_per_stair: int = Field(..., ge=1)
    parent_quantity: int = Field(..., ge=0)
    layers_from_remaining_stones: int = Field(default=0, ge=0)
    layers_from_new_stones: int = Field(default=0, ge=0)
    square_meters: float = 0.0
    material_price: float = 0.0
    layer_type_cost: float = 0.0
    cutting_cost: float = 0.0
    stone_area_used_sqm: float = 0.0
    used_remainders: list[RemainderUsageSchema] = Field(default_factory=list)
    remaining_stones: list[RemainingStoneSchema] = Field(default_factory=list)
    consumed_remainders: list[RemainderUsageSchema] = Field(default_factory=list)
    layer_type: LayerTypeSchema | None = None
    price_per_square_meter: float = 0.0
    layer_stone_id: str | None = None
    total_layers: int = 0
    total_price: float = 0.0
    is_cut: bool = False


class CutItemSchema(BaseModel):
    """Longitudinal or slab line item."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    cut_type: CutType | None = None
    width_cm: float
    length_m: float
    quantity: int
    original_width_cm: float = 0.0
    remaining_stones: list[RemainingStoneSchema] = Field(default_factory=list)
    used_remainders: list[RemainderUsageSchema] = Field(default_factory=list)
    consumed_remainders: list[RemainderUsageSchema] = Field(default_factory=list)
    cutting_cost: float = 0.0
