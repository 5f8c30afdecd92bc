"""Output formatters and exporters for cutting jobs."""

from __future__ import annotations

import json
from typing import Any, Sequence

from stonecut.application.dtos import CuttingJobOutput
from stonecut.domain.entities import (
    CutLineItem,
    LayerLineItem,
    RemainingStone,
    StonePartition,
)
from stonecut.domain.value_objects import RemainderUsage


def _quantity(stone: RemainingStone) -> str:
    return "-" if stone.quantity is None else str(stone.quantity)


def _position(stone: RemainingStone | StonePartition) -> str:
    if stone.position is None:
        return "-"
    return f"{stone.position.start_width_cm:g}cm @ {stone.position.start_length_m:g}m"


class PartitionFormatter:
    """Formats positioned partitions as a table."""

    def format(self, partitions: Sequence[StonePartition]) -> str:
        """Format partitions in cutting order.

        Unplaced partitions are listed with their validation error below
        the table.
        """
        if not partitions:
            return "No partitions."

        lines = [
            "PARTITIONS",
            "=" * 70,
            f"{'Id':<20} {'Width cm':<10} {'Length m':<10} {'Area m2':<10} {'Position'}",
            "-" * 70,
        ]

        total_area = 0.0
        errors: list[str] = []
        for partition in partitions:
            position = _position(partition)
            if partition.validation_error:
                position = "NOT PLACED"
                errors.append(f"  {partition.id}: {partition.validation_error}")
            lines.append(
                f"{partition.id:<20} {partition.width_cm:<10g} {partition.length_m:<10g} "
                f"{partition.square_meters:<10.3f} {position}"
            )
            if partition.is_positioned:
                total_area += partition.square_meters

        lines.append("-" * 70)
        lines.append(f"{'PLACED':<20} {'':<10} {'':<10} {total_area:<10.3f}")

        if errors:
            lines.append("")
            lines.append("Errors:")
            lines.extend(errors)

        return "\n".join(lines)


class RemainderFormatter:
    """Formats a remainder pool as a table."""

    def __init__(self, title: str = "REMAINDERS") -> None:
        """Initialize formatter.

        Args:
            title: Heading printed above the table.
        """
        self._title = title

    def format(self, remainders: Sequence[RemainingStone]) -> str:
        """Format remainders with their source and placement."""
        if not remainders:
            return "No remainders."

        lines = [
            self._title,
            "=" * 90,
            f"{'Id':<28} {'Width cm':<10} {'Length m':<10} {'Qty':<5} "
            f"{'Area m2':<10} {'Source':<14} {'Position'}",
            "-" * 90,
        ]

        total_area = 0.0
        for stone in remainders:
            lines.append(
                f"{stone.id:<28} {stone.width_cm:<10g} {stone.length_m:<10g} "
                f"{_quantity(stone):<5} {stone.square_meters:<10.3f} "
                f"{stone.source_cut_id or '-':<14} {_position(stone)}"
            )
            if stone.is_available:
                total_area += stone.square_meters

        lines.append("-" * 90)
        lines.append(f"{'TOTAL':<28} {'':<10} {'':<10} {'':<5} {total_area:.3f}")

        return "\n".join(lines)


class CutItemFormatter:
    """Formats longitudinal and slab line items."""

    def format(self, items: Sequence[CutLineItem]) -> str:
        """Format cut line items with their produced remainders."""
        if not items:
            return "No cuts."

        lines = [
            "CUTS",
            "=" * 70,
            f"{'Id':<20} {'Type':<14} {'Width cm':<10} {'Length m':<10} "
            f"{'Qty':<5} {'Cost'}",
            "-" * 70,
        ]

        total_cost = 0.0
        for item in items:
            cut_type = item.cut_type.value if item.cut_type else "none"
            lines.append(
                f"{item.id:<20} {cut_type:<14} {item.width_cm:<10g} "
                f"{item.length_m:<10g} {item.quantity:<5} {item.cutting_cost:.2f}"
            )
            for stone in item.remaining_stones:
                lines.append(
                    f"  -> {stone.id}: {stone.width_cm:g}cm x {stone.length_m:g}m "
                    f"x{_quantity(stone)}"
                )
            total_cost += item.cutting_cost

        lines.append("-" * 70)
        lines.append(f"{'TOTAL':<20} {'':<14} {'':<10} {'':<10} {'':<5} {total_cost:.2f}")

        return "\n".join(lines)


class LayerItemFormatter:
    """Formats layer line items with their strip sources and prices."""

    def format(self, items: Sequence[LayerLineItem]) -> str:
        """Format layer items as a report."""
        if not items:
            return "No layers."

        lines = [
            "LAYERS",
            "=" * 70,
            "",
        ]

        total_price = 0.0
        for item in items:
            edges = ", ".join(edge.value for edge in item.edges.selected())
            lines.append(f"{item.parent_part.value.title()} ({edges})")
            lines.append(
                f"  Strip: {item.layer_width_cm:g}cm for {item.layer_length_m:g}m stairs, "
                f"{item.layers_per_stair} per stair x {item.parent_quantity} stairs"
            )
            lines.append(
                f"  Strips: {item.total_layers} "
                f"({item.layers_from_remaining_stones} from remainders, "
                f"{item.layers_from_new_stones} from new stone)"
            )
            lines.append(f"  Area: {item.square_meters:.3f} m2")
            lines.append(f"  Stone used: {item.stone_area_used_sqm:.3f} m2")
            if item.layer_type is not None:
                lines.append(
                    f"  Layer type: {item.layer_type.name} "
                    f"({item.layer_type_cost:.2f})"
                )
            lines.append(
                f"  Price: {item.total_price:.2f} (material {item.material_price:.2f}, "
                f"cutting {item.cutting_cost:.2f})"
            )
            lines.append("")
            total_price += item.total_price

        lines.append("-" * 70)
        lines.append(f"TOTAL: {total_price:.2f}")

        return "\n".join(lines)


class CuttingJobFormatter:
    """Formats a complete cutting job report."""

    def format(self, output: CuttingJobOutput) -> str:
        """Format every section of a planned job."""
        sections = [
            f"CUTTING JOB (seed {output.seed})",
            CutItemFormatter().format(output.cut_items),
            PartitionFormatter().format(output.partitions),
            LayerItemFormatter().format(output.layer_items),
            RemainderFormatter().format(output.remainders),
        ]

        if output.shortfall:
            sections.append(f"SHORTFALL: {output.shortfall} strip(s) not satisfied")
        if output.errors:
            sections.append("\n".join(["ERRORS:"] + [f"  - {e}" for e in output.errors]))

        return "\n\n".join(sections)


class JsonExporter:
    """Exports cutting job data as JSON."""

    def export(self, output: CuttingJobOutput) -> str:
        """Export a cutting job output as JSON string."""
        return json.dumps(self.to_dict(output), indent=2)

    def to_dict(self, output: CuttingJobOutput) -> dict[str, Any]:
        """Convert a cutting job output to JSON-compatible data."""
        return {
            "seed": output.seed,
            "is_valid": output.is_valid,
            "cuts": [self.format_cut_item(item) for item in output.cut_items],
            "partitions": [self.format_partition(p) for p in output.partitions],
            "partition_remainders": [
                self.format_remainder(stone) for stone in output.partition_remainders
            ],
            "layers": [self.format_layer_item(item) for item in output.layer_items],
            "remainders": [self.format_remainder(stone) for stone in output.remainders],
            "summary": {
                "shortfall": output.shortfall,
                "total_remainder_square_meters": round(
                    output.total_remainder_square_meters, 6
                ),
                "total_cutting_cost": round(output.total_cutting_cost, 2),
            },
            "errors": output.errors,
        }

    @staticmethod
    def format_remainder(stone: RemainingStone) -> dict[str, Any]:
        position = None
        if stone.position is not None:
            position = {
                "start_width_cm": stone.position.start_width_cm,
                "start_length_m": stone.position.start_length_m,
            }
        return {
            "id": stone.id,
            "width_cm": stone.width_cm,
            "length_m": stone.length_m,
            "square_meters": stone.square_meters,
            "quantity": stone.quantity,
            "is_available": stone.is_available,
            "source_cut_id": stone.source_cut_id,
            "position": position,
            "cutting_cost": stone.cutting_cost,
            "cut_type": stone.cut_type.value if stone.cut_type else None,
        }

    @staticmethod
    def format_partition(partition: StonePartition) -> dict[str, Any]:
        position = None
        if partition.position is not None:
            position = {
                "start_width_cm": partition.position.start_width_cm,
                "start_length_m": partition.position.start_length_m,
            }
        return {
            "id": partition.id,
            "width_cm": partition.width_cm,
            "length_m": partition.length_m,
            "square_meters": partition.square_meters,
            "position": position,
            "validation_error": partition.validation_error,
        }

    @staticmethod
    def format_usage(usage: RemainderUsage) -> dict[str, Any]:
        return {
            "stone_id": usage.stone_id,
            "source_cut_id": usage.source_cut_id,
            "quantity": usage.quantity,
            "width_cm": usage.width_cm,
            "length_m": usage.length_m,
        }

    def format_cut_item(self, item: CutLineItem) -> dict[str, Any]:
        return {
            "id": item.id,
            "cut_type": item.cut_type.value if item.cut_type else None,
            "width_cm": item.width_cm,
            "length_m": item.length_m,
            "quantity": item.quantity,
            "original_width_cm": item.original_width_cm,
            "cutting_cost": item.cutting_cost,
            "remaining_stones": [self.format_remainder(s) for s in item.remaining_stones],
            "consumed_remainders": [
                self.format_usage(u) for u in item.consumed_remainders
            ],
        }

    def format_layer_item(self, item: LayerLineItem) -> dict[str, Any]:
        return {
            "id": item.id,
            "parent_part": item.parent_part.value,
            "edges": [edge.value for edge in item.edges.selected()],
            "layer_width_cm": item.layer_width_cm,
            "layer_length_m": item.layer_length_m,
            "layers_per_stair": item.layers_per_stair,
            "parent_quantity": item.parent_quantity,
            "layers_from_remaining_stones": item.layers_from_remaining_stones,
            "layers_from_new_stones": item.layers_from_new_stones,
            "square_meters": item.square_meters,
            "stone_area_used_sqm": item.stone_area_used_sqm,
            "material_price": item.material_price,
            "layer_type_cost": item.layer_type_cost,
            "cutting_cost": item.cutting_cost,
            "total_price": item.total_price,
            "layer_type": item.layer_type.id if item.layer_type else None,
            "layer_stone_id": item.layer_stone_id,
            "used_remainders": [self.format_usage(u) for u in item.used_remainders],
            "remaining_stones": [self.format_remainder(s) for s in item.remaining_stones],
        }
