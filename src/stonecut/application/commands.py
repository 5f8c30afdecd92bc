"""Application commands (use cases) for cutting jobs."""

from __future__ import annotations

import logging
import time

from stonecut.application.config import (
    CuttingJobConfiguration,
    config_to_layer_drafts,
    config_to_partitions,
    config_to_remainders,
    config_to_standard_dimensions,
    longitudinal_rate,
)
from stonecut.domain.entities import CutLineItem, LineItem, RemainingStone
from stonecut.domain.services import (
    calculate_longitudinal_remaining_stones,
    calculate_partition_positions,
    calculate_remaining_areas_after_partitions,
    calculate_slab_remaining_stones,
    collect_available_remainders,
    compute_layer_allocation,
    merge_remaining_stone_collection,
    record_remainder_usage,
    upsert_layer_allocation,
)

from .dtos import CuttingJobOutput

logger = logging.getLogger(__name__)


def time_based_seed() -> int:
    """Seed for jobs that do not fix one, in milliseconds since the epoch."""
    return int(time.time() * 1000)


class PlanCuttingJobCommand:
    """Command to plan a complete cutting job.

    Runs the job's requests in a fixed order and threads the remainder pool
    through them:

    1. Longitudinal and slab cuts produce line items owning their remainders.
    2. Partitions are placed on the stock; the free stock left over joins
       the pool.
    3. Layer requests consume the pool and add their own leftovers. Layer
       items with the same configuration are merged.

    Each operation gets its own seed, counted up from the job seed, so ids
    never collide within a job and a fixed seed reproduces the whole plan.
    """

    def execute(
        self,
        config: CuttingJobConfiguration,
        seed: int | None = None,
    ) -> CuttingJobOutput:
        """Execute the planning command.

        Args:
            config: A validated cutting job.
            seed: Overrides the job's seed. When neither is given a time
                based seed is used.

        Returns:
            CuttingJobOutput with every result and the final pool.
        """
        if seed is None:
            seed = config.seed if config.seed is not None else time_based_seed()

        output = CuttingJobOutput(seed=seed)
        next_seed = seed
        line_items: list[LineItem] = []

        for i, cut in enumerate(config.longitudinal_cuts):
            result = calculate_longitudinal_remaining_stones(
                original_width_cm=cut.original_width_cm,
                requested_width=cut.width,
                requested_width_unit=cut.width_unit,
                requested_length=cut.length,
                requested_length_unit=cut.length_unit,
                quantity=cut.quantity,
                seed=next_seed,
                cutting_cost_per_meter=longitudinal_rate(cut, config),
            )
            next_seed += 1
            output.longitudinal_results.append(result)
            line_items.append(
                CutLineItem(
                    id=cut.id or f"longitudinal_{i}",
                    cut_type=result.cut_type,
                    width_cm=result.canonical_width_cm,
                    length_m=result.canonical_length_m,
                    quantity=cut.quantity,
                    original_width_cm=cut.original_width_cm,
                    remaining_stones=result.remaining_stones,
                    cutting_cost=result.cutting_cost,
                )
            )

        for i, slab in enumerate(config.slab_cuts):
            standard_dimensions = config_to_standard_dimensions(slab)
            result = calculate_slab_remaining_stones(
                requested_width_cm=slab.width_cm,
                requested_length_cm=slab.length_cm,
                standard_dimensions=standard_dimensions,
                seed=next_seed,
                longitudinal_rate_per_meter=config.rates.longitudinal_per_meter,
                cross_rate_per_meter=config.rates.cross_per_meter,
            )
            next_seed += 1
            output.slab_results.append(result)

            item_id = slab.id or f"slab_{i}"
            for rejected in result.rejected_entries:
                output.errors.append(f"Slab {item_id}: {rejected.message}")

            rejected_quantity = sum(r.entry.quantity for r in result.rejected_entries)
            line_items.append(
                CutLineItem(
                    id=item_id,
                    cut_type=result.cut_type,
                    width_cm=slab.width_cm,
                    length_m=slab.length_cm / 100,
                    quantity=sum(e.quantity for e in standard_dimensions) - rejected_quantity,
                    remaining_stones=result.remaining_stones,
                    cutting_cost=result.cutting_cost,
                )
            )

        unowned: list[RemainingStone] = config_to_remainders(config)

        if config.stock is not None and config.partitions:
            width_cm, length_m = config.stock.width_cm, config.stock.length_m
            partitions = config_to_partitions(config)
            output.partitions = calculate_partition_positions(partitions, width_cm, length_m)
            for partition in output.partitions:
                if partition.validation_error:
                    output.errors.append(
                        f"Partition {partition.id}: {partition.validation_error}"
                    )
            output.partition_remainders = calculate_remaining_areas_after_partitions(
                partitions, width_cm, length_m, seed=next_seed
            )
            next_seed += 1
            unowned.extend(output.partition_remainders)

        pool = merge_remaining_stone_collection(
            collect_available_remainders(line_items, unowned)
        )

        for draft in config_to_layer_drafts(config):
            allocation = compute_layer_allocation(draft, pool, seed=next_seed)
            next_seed += 1
            output.layer_results.append(allocation)
            output.shortfall += allocation.shortfall
            pool = list(allocation.updated_remainders)

            line_items = record_remainder_usage(
                line_items, allocation.layer_item.used_remainders, consumer_index=-1
            )
            line_items = upsert_layer_allocation(line_items, allocation.layer_item)

            if allocation.shortfall:
                output.errors.append(
                    f"Layers for {draft.part.value}: {allocation.shortfall} strip(s) "
                    "could not be cut from remainders or stock"
                )

        output.line_items = line_items
        output.remainders = pool

        logger.info(
            "Planned cutting job (seed %d): %d line items, %d/%d partitions placed, "
            "%d remainders, shortfall %d",
            seed,
            len(line_items),
            len(output.placed_partitions),
            len(output.partitions),
            len(output.remainders),
            output.shortfall,
        )
        return output
