"""Conversions from request schemas into domain objects.

Responses are built from the domain with ``model_validate`` directly; only
the inbound direction needs explicit code.
"""

from stonecut.domain.entities import LayerLineItem, RemainingStone
from stonecut.domain.value_objects import (
    LayerEdges,
    LayerType,
    RemainderUsage,
    StonePosition,
)
from stonecut.web.schemas.common import (
    LayerItemSchema,
    PositionSchema,
    RemainderUsageSchema,
    RemainingStoneSchema,
)


def to_position(schema: PositionSchema | None) -> StonePosition | None:
    if schema is None:
        return None
    return StonePosition(schema.start_width_cm, schema.start_length_m)


def to_remaining_stone(schema: RemainingStoneSchema) -> RemainingStone:
    """Convert a remainder schema without sanitizing it."""
    return RemainingStone(
        id=schema.id,
        width_cm=schema.width_cm,
        length_m=schema.length_m,
        square_meters=schema.square_meters,
        quantity=schema.quantity,
        is_available=schema.is_available,
        source_cut_id=schema.source_cut_id,
        position=to_position(schema.position),
        cutting_cost=schema.cutting_cost,
        cutting_cost_per_meter=schema.cutting_cost_per_meter,
        cut_type=schema.cut_type,
    )


def to_remaining_stones(schemas: list[RemainingStoneSchema]) -> list[RemainingStone]:
    return [to_remaining_stone(schema) for schema in schemas]


def to_usage(schema: RemainderUsageSchema) -> RemainderUsage:
    return RemainderUsage(
        stone_id=schema.stone_id,
        source_cut_id=schema.source_cut_id,
        width_cm=schema.width_cm,
        length_m=schema.length_m,
        quantity=schema.quantity,
    )


def to_layer_item(schema: LayerItemSchema) -> LayerLineItem:
    """Convert a layer item schema; derived fields are recomputed."""
    layer_type = None
    if schema.layer_type is not None:
        layer_type = LayerType(
            id=schema.layer_type.id,
            name=schema.layer_type.name,
            price_per_meter=schema.layer_type.price_per_meter,
        )
    return LayerLineItem(
        id=schema.id,
        parent_part=schema.parent_part,
        edges=LayerEdges(**schema.edges.model_dump()),
        layer_width_cm=schema.layer_width_cm,
        layer_length_m=schema.layer_length_m,
        layers_per_stair=schema.layers_per_stair,
        parent_quantity=schema.parent_quantity,
        layers_from_remaining_stones=schema.layers_from_remaining_stones,
        layers_from_new_stones=schema.layers_from_new_stones,
        square_meters=schema.square_meters,
        material_price=schema.material_price,
        layer_type_cost=schema.layer_type_cost,
        cutting_cost=schema.cutting_cost,
        stone_area_used_sqm=schema.stone_area_used_sqm,
        used_remainders=tuple(to_usage(u) for u in schema.used_remainders),
        remaining_stones=tuple(to_remaining_stone(s) for s in schema.remaining_stones),
        consumed_remainders=tuple(to_usage(u) for u in schema.consumed_remainders),
        layer_type=layer_type,
        price_per_square_meter=schema.price_per_square_meter,
        layer_stone_id=schema.layer_stone_id,
    )
