"""Adapters converting CuttingJobConfiguration models into domain objects.

The schema models describe the JSON file; the domain works with frozen
dataclasses in canonical units. Ids missing from the file are derived from
the item's position so repeated runs produce the same ids.
"""

from stonecut.application.config.schema import (
    CuttingJobConfiguration,
    LongitudinalCutConfig,
    RemainderConfig,
    SlabCutConfig,
    StairLayerConfig,
)
from stonecut.domain.entities import RemainingStone, StonePartition
from stonecut.domain.services.layer_allocation import LayerDraft
from stonecut.domain.units import square_meters
from stonecut.domain.value_objects import (
    LayerEdges,
    LayerStoneChoice,
    LayerType,
    StandardDimension,
    StonePosition,
)


def config_to_stock(config: CuttingJobConfiguration) -> tuple[float, float] | None:
    """Stock width (cm) and length (m), or None when the job has no stock."""
    if config.stock is None:
        return None
    return config.stock.width_cm, config.stock.length_m


def config_to_partitions(config: CuttingJobConfiguration) -> list[StonePartition]:
    """Convert partition configs to domain partitions, in cutting order."""
    return [
        StonePartition(
            id=partition.id or f"partition_{index}",
            width_cm=partition.width_cm,
            length_m=partition.length_m,
            square_meters=square_meters(partition.width_cm, partition.length_m),
        )
        for index, partition in enumerate(config.partitions)
    ]


def config_to_remainder(remainder: RemainderConfig) -> RemainingStone:
    """Convert one remainder config to a raw domain remainder."""
    position = None
    if remainder.position is not None:
        position = StonePosition(
            start_width_cm=remainder.position.start_width_cm,
            start_length_m=remainder.position.start_length_m,
        )
    return RemainingStone(
        id=remainder.id,
        width_cm=remainder.width_cm,
        length_m=remainder.length_m,
        square_meters=remainder.square_meters,
        quantity=remainder.quantity,
        is_available=remainder.is_available,
        source_cut_id=remainder.source_cut_id,
        position=position,
    )


def config_to_remainders(config: CuttingJobConfiguration) -> list[RemainingStone]:
    """Convert the initial remainder pool. Remainders are not sanitized here."""
    return [config_to_remainder(remainder) for remainder in config.remainders]


def config_to_standard_dimensions(slab: SlabCutConfig) -> list[StandardDimension]:
    """Convert the standard stock entries of a slab cut."""
    return [
        StandardDimension(
            standard_width_cm=entry.standard_width_cm,
            standard_length_cm=entry.standard_length_cm,
            quantity=entry.quantity,
        )
        for entry in slab.standard_dimensions
    ]


def longitudinal_rate(
    cut: LongitudinalCutConfig | StairLayerConfig,
    config: CuttingJobConfiguration,
) -> float:
    """Cutting rate of a cut, falling back to the job's longitudinal rate."""
    if cut.cutting_cost_per_meter is not None:
        return cut.cutting_cost_per_meter
    return config.rates.longitudinal_per_meter


def config_to_layer_draft(
    layer: StairLayerConfig,
    config: CuttingJobConfiguration,
) -> LayerDraft:
    """Convert one stair layer config to a domain draft."""
    edges = LayerEdges(
        front=layer.edges.front,
        back=layer.edges.back,
        left=layer.edges.left,
        right=layer.edges.right,
        perimeter=layer.edges.perimeter,
    )
    layer_type = None
    if layer.layer_type is not None:
        layer_type = LayerType(
            id=layer.layer_type.id,
            name=layer.layer_type.name,
            price_per_meter=layer.layer_type.price_per_meter,
        )
    layer_stone = None
    if layer.layer_stone is not None:
        layer_stone = LayerStoneChoice(
            product_id=layer.layer_stone.product_id,
            price_per_square_meter=layer.layer_stone.price_per_square_meter,
            use_mandatory=layer.layer_stone.use_mandatory,
            mandatory_percentage=layer.layer_stone.mandatory_percentage,
        )

    return LayerDraft(
        part=layer.part,
        quantity=layer.quantity,
        stair_width_cm=layer.stair_width_cm,
        stair_length_m=layer.stair_length_m,
        layer_width_cm=layer.layer_width_cm,
        layers_per_stair=layer.layers_per_stair,
        edges=edges,
        stock_width_cm=layer.stock_width_cm,
        stock_length_m=layer.stock_length_m,
        price_per_square_meter=layer.price_per_square_meter,
        cutting_cost_per_meter=longitudinal_rate(layer, config),
        layer_type=layer_type,
        layer_stone=layer_stone,
        standard_length_m=layer.standard_length_m,
    )


def config_to_layer_drafts(config: CuttingJobConfiguration) -> list[LayerDraft]:
    """Convert every stair layer config, in allocation order."""
    return [config_to_layer_draft(layer, config) for layer in config.stair_layers]
