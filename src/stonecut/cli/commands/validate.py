"""The ``validate`` command: check a cutting job file without planning it."""

from pathlib import Path
from typing import Annotated

import typer

from stonecut.application.config import (
    ConfigError,
    ValidationResult,
    load_config,
    validate_config,
)


def _load_error_lines(error: ConfigError) -> list[str]:
    if error.error_type == "file_not_found":
        return [f"File not found: {error.path}"]
    if error.error_type == "json_parse":
        return ["Invalid JSON syntax"] + [
            f"  Line {d.get('line', '?')}, Column {d.get('column', '?')}: {d.get('message')}"
            for d in error.details
        ]
    if error.error_type == "validation":
        lines = []
        for detail in error.details:
            lines.append(f"{detail.get('path') or '(root)'}: {detail.get('message')}")
            if detail.get("value") is not None:
                lines.append(f"  Value: {detail['value']!r}")
        return lines
    return [error.message]


def display_load_error(error: ConfigError) -> None:
    """Print a ConfigError to stderr, one indented line per detail."""
    typer.echo("Errors:", err=True)
    for line in _load_error_lines(error):
        typer.echo(f"  {line}", err=True)


def _display_validation_result(result: ValidationResult) -> None:
    if result.errors:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            typer.echo(f"  {error.path}: {error.message}", err=True)
            if error.value is not None:
                typer.echo(f"    Value: {error.value!r}", err=True)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        for warning in result.warnings:
            typer.echo(f"  {warning.path or '(job)'}: {warning.message}")
            if warning.suggestion:
                typer.echo(f"    Suggestion: {warning.suggestion}")
        typer.echo()

    errors, warnings = len(result.errors), len(result.warnings)
    if errors:
        typer.echo(f"Validation failed: {errors} error(s), {warnings} warning(s)", err=True)
    elif warnings:
        typer.echo(f"Validation passed with {warnings} warning(s)")
    else:
        typer.echo("Validation passed. Cutting job is valid.")


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON cutting job to validate"),
    ],
) -> None:
    """Validate a cutting job file.

    Reports JSON and schema errors, partitions that cannot fit the stock,
    and layer strips the fresh stock cannot supply.

    Exit codes: 0 valid, 1 errors, 2 valid with warnings.
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        typer.echo()
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    result = validate_config(config)
    _display_validation_result(result)
    raise typer.Exit(code=result.exit_code)
