"""Integration tests for planning complete cutting jobs.

These tests run PlanCuttingJobCommand over whole jobs and verify:
- Ids are reproducible for a fixed seed and never collide within a job
- The remainder pool threads through cuts, partitions and layers
- Consumed remainders are recorded on both consumer and owner
- Problems are reported per item without aborting the job
"""

from typing import Any

import pytest

from stonecut.application.config import load_config_from_dict
from stonecut.domain.entities import CutLineItem, LayerLineItem


@pytest.fixture
def plan(plan_command):
    """Plan a job from a dictionary."""

    def _plan(data: dict[str, Any], seed: int | None = None):
        return plan_command.execute(load_config_from_dict(data), seed=seed)

    return _plan


class TestFullJob:
    """Tests for a job using every request kind."""

    def test_line_items(self, plan, job_data) -> None:
        output = plan(job_data)

        assert output.seed == 7
        assert output.is_valid
        assert [item.id for item in output.cut_items] == ["long_1", "slab_1"]
        assert len(output.layer_items) == 1
        assert output.total_cutting_cost == pytest.approx(12.0 + 14.0)

    def test_operation_seeds_count_up(self, plan, job_data) -> None:
        output = plan(job_data)

        long_cut, slab = output.cut_items
        assert long_cut.remaining_stones[0].id == "remaining_7_0"
        assert slab.remaining_stones[0].id == "remaining_slab_width_8_0"
        assert [s.id for s in output.partition_remainders] == [
            "remaining_slice_9_0",
            "remaining_slice_9_1",
        ]
        assert output.layer_items[0].id == "layer_10_0"

    def test_ids_unique(self, plan, job_data) -> None:
        output = plan(job_data)

        ids = [s.id for item in output.line_items for s in item.remaining_stones]
        ids += [s.id for s in output.partition_remainders]
        assert len(ids) == len(set(ids))

    def test_reproducible(self, plan, job_data) -> None:
        assert plan(job_data) == plan(job_data)

    def test_seed_override(self, plan, job_data) -> None:
        output = plan(job_data, seed=100)

        assert output.seed == 100
        assert output.cut_items[0].remaining_stones[0].id == "remaining_100_0"

    def test_partitions_placed(self, plan, job_data) -> None:
        output = plan(job_data)

        assert [(p.position.start_width_cm, p.position.start_length_m) for p in output.partitions] == [
            (0.0, 0.0),
            (0.0, 1.0),
            (50.0, 1.0),
        ]

    def test_layers_cut_from_free_stock_first(self, plan, job_data) -> None:
        """The free stock after partitioning is the oldest usable remainder."""
        output = plan(job_data)
        layer = output.layer_items[0]

        assert layer.layers_from_remaining_stones == 2
        assert layer.layers_from_new_stones == 0
        assert [u.stone_id for u in layer.used_remainders] == ["remaining_slice_9_0"]

    def test_remainder_area_balance(self, plan, job_data) -> None:
        """Final pool area is everything produced minus the strips cut."""
        output = plan(job_data)

        produced = 1.2 + (0.8 + 1.0 + 0.2) + (1.5 + 1.5)
        strips = output.layer_items[0].square_meters
        assert output.total_remainder_square_meters == pytest.approx(produced - strips)
        assert all(s.id != "remaining_slice_9_0" for s in output.remainders)


class TestRemainderBookkeeping:
    """Tests for usages recorded between line items."""

    def test_owner_records_consumption(self, plan, job_data) -> None:
        del job_data["partitions"]
        del job_data["stock"]
        del job_data["slab_cuts"]

        output = plan(job_data)
        long_cut = output.cut_items[0]
        layer = output.layer_items[0]

        assert [u.stone_id for u in layer.used_remainders] == ["remaining_7_0"]
        assert [u.stone_id for u in long_cut.consumed_remainders] == ["remaining_7_0"]
        assert long_cut.consumed_remainders[0].quantity == 1

    def test_owned_remainder_reduced_in_pool(self, plan, job_data) -> None:
        del job_data["partitions"]
        del job_data["stock"]
        del job_data["slab_cuts"]

        output = plan(job_data)

        reduced = next(s for s in output.remainders if s.id == "remaining_7_0")
        assert reduced.quantity == 2
        assert reduced.square_meters == pytest.approx(0.8)
        owned = output.cut_items[0].remaining_stones[0]
        assert owned.quantity == 3

    def test_initial_remainders_used(self, plan, job_data) -> None:
        job_data = {
            "schema_version": "1.1",
            "seed": 1,
            "remainders": [
                {"id": "offcut", "width_cm": 10, "length_m": 2.5, "quantity": 1},
                {"id": "broken", "width_cm": -3, "length_m": 1, "quantity": 1},
            ],
            "stair_layers": job_data["stair_layers"],
        }

        output = plan(job_data)
        layer = output.layer_items[0]

        assert layer.layers_from_remaining_stones == 2
        assert layer.used_remainders[0].stone_id == "offcut"
        assert all(s.id != "broken" for s in output.remainders)


class TestLayerMerging:
    """Tests for layer requests with the same configuration."""

    def test_same_configuration_merged(self, plan, job_data) -> None:
        job_data["stair_layers"].append(dict(job_data["stair_layers"][0]))

        output = plan(job_data)

        assert len(output.layer_items) == 1
        layer = output.layer_items[0]
        assert layer.parent_quantity == 4
        assert layer.total_layers == 4
        assert len(output.layer_results) == 2

    def test_different_configuration_kept_apart(self, plan, job_data) -> None:
        riser = dict(job_data["stair_layers"][0], part="riser")
        job_data["stair_layers"].append(riser)

        output = plan(job_data)

        assert [item.parent_part.value for item in output.layer_items] == ["tread", "riser"]
        assert all(isinstance(i, (CutLineItem, LayerLineItem)) for i in output.line_items)


class TestReportedProblems:
    """Tests for per-item errors and shortfall."""

    def test_unplaced_partition(self, plan, job_data) -> None:
        job_data["partitions"].append({"id": "wide", "width_cm": 150, "length_m": 1})

        output = plan(job_data)

        assert not output.is_valid
        assert "Partition wide: Partition width 150cm exceeds available width 100cm by 50cm" in (
            output.errors
        )
        assert len(output.placed_partitions) == 3

    def test_rejected_slab_entry(self, plan, job_data) -> None:
        job_data["slab_cuts"][0]["width_cm"] = 130

        output = plan(job_data)
        slab = output.cut_items[1]

        assert "Slab slab_1: Requested width 130cm exceeds standard width 120cm" in output.errors
        assert slab.quantity == 0
        assert slab.remaining_stones == ()

    def test_shortfall(self, plan) -> None:
        data = {
            "schema_version": "1.1",
            "seed": 3,
            "stair_layers": [
                {
                    "part": "landing",
                    "quantity": 1,
                    "stair_width_cm": 100,
                    "stair_length_m": 2,
                    "layer_width_cm": 15,
                    "edges": {"front": True},
                    "stock_width_cm": 12,
                }
            ],
        }

        output = plan(data)

        assert output.shortfall == 1
        assert output.errors == [
            "Layers for landing: 1 strip(s) could not be cut from remainders or stock"
        ]
        assert not output.is_valid
