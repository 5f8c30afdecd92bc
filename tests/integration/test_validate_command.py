"""End-to-end tests for ``stonecut validate`` over the JSON fixtures."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from stonecut.cli.main import app

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "configs"


def validate(name: str):
    return CliRunner().invoke(app, ["validate", str(FIXTURES_PATH / name)])


@pytest.mark.parametrize(
    "fixture,exit_code",
    [
        ("valid_minimal.json", 0),
        ("valid_full.json", 0),
        ("valid_with_warnings.json", 2),
        ("invalid_partition.json", 1),
        ("unknown_field.json", 1),
        ("invalid_json.json", 1),
        ("nonexistent.json", 1),
    ],
)
def test_exit_codes(fixture: str, exit_code: int) -> None:
    result = validate(fixture)

    assert result.exit_code == exit_code
    assert result.output.startswith(f"Validating {FIXTURES_PATH / fixture}...")


class TestLoadFailures:
    """Files that never reach the cutting checks."""

    def test_missing_file(self) -> None:
        output = validate("nonexistent.json").output

        assert "File not found" in output
        assert output.rstrip().endswith("Validation failed.")

    def test_broken_json(self) -> None:
        output = validate("invalid_json.json").output

        assert "Errors:" in output
        assert "Invalid JSON syntax" in output
        assert "Line " in output

    def test_unknown_field_named_by_path(self) -> None:
        assert "stock.thickness_cm" in validate("unknown_field.json").output


class TestCuttingChecks:
    """Jobs that load but are checked against the stock."""

    def test_clean_job(self) -> None:
        assert "Validation passed. Cutting job is valid." in validate("valid_minimal.json").output

    def test_partition_larger_than_stock(self) -> None:
        output = validate("invalid_partition.json").output

        assert "partitions[0]" in output
        assert "Validation failed: 1 error(s), 0 warning(s)" in output

    def test_layer_wider_than_stock(self) -> None:
        output = validate("valid_with_warnings.json").output

        assert "Warnings:" in output
        assert "Suggestion: Only remainders can supply these strips" in output
        assert "Validation passed with 1 warning(s)" in output
