"""Pytest configuration and shared fixtures for stonecut tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from stonecut.application import PlanCuttingJobCommand
from stonecut.domain import LayerEdges, RemainingStone, StairPart
from stonecut.domain.services import LayerDraft


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def make_stone() -> Callable[..., RemainingStone]:
    """Factory for remainders with sensible defaults."""

    def _make(
        id: str = "stone_1",
        width_cm: float = 20.0,
        length_m: float = 2.0,
        quantity: int | None = 1,
        square_meters: float | None = None,
        source_cut_id: str = "cut_1",
        **kwargs: Any,
    ) -> RemainingStone:
        if square_meters is None:
            square_meters = width_cm * length_m / 100 * (quantity or 0)
        return RemainingStone(
            id=id,
            width_cm=width_cm,
            length_m=length_m,
            square_meters=square_meters,
            quantity=quantity,
            source_cut_id=source_cut_id,
            **kwargs,
        )

    return _make


@pytest.fixture
def tread_draft() -> LayerDraft:
    """Two 1.2m treads with a 5cm front layer cut from 12cm stock."""
    return LayerDraft(
        part=StairPart.TREAD,
        quantity=2,
        stair_width_cm=30.0,
        stair_length_m=1.2,
        layer_width_cm=5.0,
        layers_per_stair=1,
        edges=LayerEdges(front=True),
        stock_width_cm=12.0,
        price_per_square_meter=100.0,
    )


# =============================================================================
# Configuration fixtures
# =============================================================================


@pytest.fixture
def job_data() -> dict[str, Any]:
    """A job touching every request kind."""
    return {
        "schema_version": "1.1",
        "seed": 7,
        "stock": {"width_cm": 100, "length_m": 5},
        "partitions": [
            {"id": "p1", "width_cm": 100, "length_m": 1},
            {"id": "p2", "width_cm": 50, "length_m": 1},
            {"id": "p3", "width_cm": 50, "length_m": 1},
        ],
        "longitudinal_cuts": [
            {
                "id": "long_1",
                "original_width_cm": 60,
                "width": 40,
                "length": 2,
                "quantity": 3,
            }
        ],
        "slab_cuts": [
            {
                "id": "slab_1",
                "width_cm": 100,
                "length_cm": 200,
                "standard_dimensions": [
                    {"standard_width_cm": 120, "standard_length_cm": 250, "quantity": 2}
                ],
            }
        ],
        "stair_layers": [
            {
                "part": "tread",
                "quantity": 2,
                "stair_width_cm": 30,
                "stair_length_m": 1.2,
                "layer_width_cm": 5,
                "edges": {"front": True},
                "stock_width_cm": 12,
                "price_per_square_meter": 100,
            }
        ],
        "rates": {"longitudinal_per_meter": 2.0, "cross_per_meter": 3.0},
    }


@pytest.fixture
def write_job(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Write job data to a JSON file and return its path."""

    def _write(data: dict[str, Any], name: str = "job.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return path

    return _write


@pytest.fixture
def plan_command() -> PlanCuttingJobCommand:
    """Create a PlanCuttingJobCommand instance."""
    return PlanCuttingJobCommand()
