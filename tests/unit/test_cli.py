"""Unit tests for the stonecut CLI commands."""

import json
from pathlib import Path
from typing import Any

import pytest
import typer
from typer.testing import CliRunner

from stonecut.cli.main import _parse_dimensions, app


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


class TestParseDimensions:
    """Tests for the WIDTHxLENGTH argument parser."""

    def test_two_parts(self) -> None:
        assert _parse_dimensions("50x1.5", "WIDTHxLENGTH") == [50.0, 1.5]

    def test_optional_quantity(self) -> None:
        assert _parse_dimensions("120X250x2", "WIDTHxLENGTH[xQTY]") == [120.0, 250.0, 2.0]
        assert _parse_dimensions("120x250", "WIDTHxLENGTH[xQTY]") == [120.0, 250.0]

    @pytest.mark.parametrize("value", ["50", "50x1x2", "50xabc"])
    def test_rejected(self, value: str) -> None:
        with pytest.raises(typer.BadParameter):
            _parse_dimensions(value, "WIDTHxLENGTH")


class TestPlanCommand:
    """Tests for the plan command."""

    def test_text_report(self, runner, write_job, job_data: dict[str, Any]) -> None:
        result = runner.invoke(app, ["plan", str(write_job(job_data))])

        assert result.exit_code == 0
        assert "CUTTING JOB (seed 7)" in result.output
        assert "CUTS" in result.output
        assert "LAYERS" in result.output

    def test_seed_override(self, runner, write_job, job_data) -> None:
        result = runner.invoke(app, ["plan", str(write_job(job_data)), "--seed", "11"])

        assert result.exit_code == 0
        assert "CUTTING JOB (seed 11)" in result.output
        assert "remaining_11_0" in result.output

    def test_json_to_file(self, runner, write_job, job_data, tmp_path: Path) -> None:
        target = tmp_path / "plan.json"

        result = runner.invoke(
            app, ["plan", str(write_job(job_data)), "-f", "json", "-o", str(target)]
        )

        assert result.exit_code == 0
        assert f"Wrote {target}" in result.output
        data = json.loads(target.read_text())
        assert data["seed"] == 7
        assert [cut["id"] for cut in data["cuts"]] == ["long_1", "slab_1"]

    def test_unknown_format(self, runner, write_job, job_data) -> None:
        result = runner.invoke(app, ["plan", str(write_job(job_data)), "-f", "xml"])

        assert result.exit_code == 1
        assert "Unknown format: xml" in result.output

    def test_missing_file(self, runner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["plan", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_shortfall_fails(self, runner, write_job) -> None:
        data = {
            "schema_version": "1.1",
            "seed": 1,
            "stair_layers": [
                {
                    "part": "tread",
                    "quantity": 2,
                    "stair_width_cm": 30,
                    "stair_length_m": 1.2,
                    "layer_width_cm": 15,
                    "edges": {"front": True},
                    "stock_width_cm": 12,
                }
            ],
        }

        result = runner.invoke(app, ["plan", str(write_job(data))])

        assert result.exit_code == 1
        assert "SHORTFALL: 2 strip(s) not satisfied" in result.output


class TestFitCommand:
    """Tests for the fit command."""

    def test_places_partitions(self, runner) -> None:
        result = runner.invoke(
            app, ["fit", "100x1", "50x1", "50x1", "-w", "100", "-l", "5", "--seed", "3"]
        )

        assert result.exit_code == 0
        assert "PARTITIONS" in result.output
        assert "FREE STOCK" in result.output
        assert "remaining_slice_3_0" in result.output
        assert "remaining_slice_3_1" in result.output

    def test_unplaceable_partition(self, runner) -> None:
        result = runner.invoke(app, ["fit", "150x1", "-w", "100", "-l", "5", "--seed", "1"])

        assert result.exit_code == 1
        assert "NOT PLACED" in result.output
        assert "Error:" in result.output

    def test_bad_dimensions(self, runner) -> None:
        result = runner.invoke(app, ["fit", "100", "-w", "100", "-l", "5"])

        assert result.exit_code == 2


class TestLongitudinalCommand:
    """Tests for the longitudinal command."""

    def test_leftover(self, runner) -> None:
        result = runner.invoke(
            app,
            [
                "longitudinal",
                "--original-width-cm", "60",
                "-w", "40",
                "-l", "2",
                "-q", "3",
                "--rate", "2",
                "--seed", "5",
            ],
        )

        assert result.exit_code == 0
        assert "Requested: 40cm x 2m x3" in result.output
        assert "Cut: longitudinal" in result.output
        assert "Cutting cost: 12.00" in result.output
        assert "remaining_5_0" in result.output

    def test_units(self, runner) -> None:
        result = runner.invoke(
            app,
            [
                "longitudinal",
                "--original-width-cm", "60",
                "-w", "0.4",
                "--width-unit", "m",
                "-l", "200",
                "--length-unit", "cm",
                "--seed", "0",
            ],
        )

        assert result.exit_code == 0
        assert "Requested: 40cm x 2m x1" in result.output

    def test_no_cut(self, runner) -> None:
        result = runner.invoke(
            app, ["longitudinal", "--original-width-cm", "60", "-w", "60", "-l", "2"]
        )

        assert result.exit_code == 0
        assert "Cut: none" in result.output
        assert "No remainders." in result.output


class TestSlabCommand:
    """Tests for the slab command."""

    def test_leftovers(self, runner) -> None:
        result = runner.invoke(
            app,
            [
                "slab", "-w", "100", "-l", "200", "-s", "120x250x2",
                "--longitudinal-rate", "2", "--cross-rate", "3", "--seed", "1",
            ],
        )

        assert result.exit_code == 0
        assert "Cut: cross" in result.output
        assert "Cutting cost: 14.00" in result.output
        assert "remaining_slab_corner_1_4" in result.output

    def test_rejected_entry(self, runner) -> None:
        result = runner.invoke(app, ["slab", "-w", "100", "-l", "200", "-s", "90x250"])

        assert result.exit_code == 1
        assert "Error: Requested width 100cm exceeds standard width 90cm" in result.output
