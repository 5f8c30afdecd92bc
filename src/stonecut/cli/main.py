"""Typer CLI for stone cutting jobs."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from stonecut.application import PlanCuttingJobCommand
from stonecut.application.commands import time_based_seed
from stonecut.application.config import ConfigError, load_config
from stonecut.cli.commands import display_load_error, validate_command
from stonecut.domain import StandardDimension, StonePartition
from stonecut.domain.services import (
    calculate_longitudinal_remaining_stones,
    calculate_partition_positions,
    calculate_remaining_areas_after_partitions,
    calculate_slab_remaining_stones,
    validate_partitions,
)
from stonecut.domain.units import LengthUnit, square_meters
from stonecut.infrastructure import (
    CuttingJobFormatter,
    JsonExporter,
    PartitionFormatter,
    RemainderFormatter,
)

app = typer.Typer(
    name="stonecut",
    help="Plan stone cuts, partition layouts and layer strips while tracking remainders.",
)

# Register validate command
app.command(name="validate")(validate_command)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _parse_dimensions(value: str, shape: str) -> list[float]:
    """Parse an ``AxB`` or ``AxBxC`` dimension string into numbers.

    Args:
        value: The dimension string, e.g. ``50x1``.
        shape: Expected shape for messages; parts in brackets are optional.

    Raises:
        typer.BadParameter: If the string has the wrong shape or a part is
            not a number.
    """
    parts = value.lower().split("x")
    required = shape.split("[")[0].count("x") + 1
    allowed = shape.count("x") + 1
    if not required <= len(parts) <= allowed:
        raise typer.BadParameter(f"Expected {shape}, got '{value}'")
    try:
        return [float(part) for part in parts]
    except ValueError:
        raise typer.BadParameter(f"Dimensions must be numbers, got '{value}'") from None


@app.command()
def plan(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON cutting job"),
    ],
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json"),
    ] = "text",
    seed: Annotated[
        int | None,
        typer.Option("--seed", min=0, help="Seed for generated ids (overrides the job seed)"),
    ] = None,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the output to a file instead of stdout"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every calculation step"),
    ] = False,
) -> None:
    """Plan a cutting job: cuts, partitions, layers and the remainder pool.

    Exits with code 1 when the job cannot be loaded or when some request
    could not be satisfied.
    """
    _configure_logging(verbose)

    if output_format not in ("text", "json"):
        typer.echo(f"Unknown format: {output_format}", err=True)
        typer.echo("Available formats: text, json", err=True)
        raise typer.Exit(code=1)

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    result = PlanCuttingJobCommand().execute(config, seed=seed)

    if output_format == "json":
        text = JsonExporter().export(result)
    else:
        text = CuttingJobFormatter().format(result)

    if output_file is not None:
        output_file.write_text(text)
        typer.echo(f"Wrote {output_file}")
    else:
        typer.echo(text)

    if not result.is_valid:
        raise typer.Exit(code=1)


@app.command()
def fit(
    partitions: Annotated[
        list[str],
        typer.Argument(help="Partitions in cutting order as WIDTHxLENGTH (cm x m)"),
    ],
    width_cm: Annotated[float, typer.Option("--width-cm", "-w", help="Stock width in centimeters")],
    length_m: Annotated[float, typer.Option("--length-m", "-l", help="Stock length in meters")],
    seed: Annotated[
        int | None,
        typer.Option("--seed", min=0, help="Seed for generated remainder ids"),
    ] = None,
) -> None:
    """Place partitions on a stock piece and show the free stock left."""
    stones = []
    for index, text in enumerate(partitions):
        width, length = _parse_dimensions(text, "WIDTHxLENGTH")
        stones.append(
            StonePartition(
                id=f"partition_{index}",
                width_cm=width,
                length_m=length,
                square_meters=square_meters(width, length),
            )
        )

    positioned = calculate_partition_positions(stones, width_cm, length_m)
    typer.echo(PartitionFormatter().format(positioned))
    typer.echo()

    remaining = calculate_remaining_areas_after_partitions(
        stones, width_cm, length_m, seed=time_based_seed() if seed is None else seed
    )
    typer.echo(RemainderFormatter(title="FREE STOCK").format(remaining))

    validation = validate_partitions(stones, width_cm, length_m)
    if not validation.is_valid:
        typer.echo()
        typer.echo(f"Error: {validation.error}", err=True)
        raise typer.Exit(code=1)


@app.command()
def longitudinal(
    original_width_cm: Annotated[
        float, typer.Option("--original-width-cm", help="Stock width in centimeters")
    ],
    width: Annotated[float, typer.Option("--width", "-w", help="Requested width")],
    length: Annotated[float, typer.Option("--length", "-l", help="Requested length")],
    width_unit: Annotated[
        LengthUnit, typer.Option("--width-unit", help="Unit of the requested width")
    ] = LengthUnit.CM,
    length_unit: Annotated[
        LengthUnit, typer.Option("--length-unit", help="Unit of the requested length")
    ] = LengthUnit.M,
    quantity: Annotated[int, typer.Option("--quantity", "-q", help="Pieces requested")] = 1,
    rate: Annotated[
        float, typer.Option("--rate", help="Cutting cost per running meter")
    ] = 0.0,
    seed: Annotated[
        int | None,
        typer.Option("--seed", min=0, help="Seed for generated remainder ids"),
    ] = None,
) -> None:
    """Show the leftover strip of a longitudinal cut."""
    result = calculate_longitudinal_remaining_stones(
        original_width_cm=original_width_cm,
        requested_width=width,
        requested_width_unit=width_unit,
        requested_length=length,
        requested_length_unit=length_unit,
        quantity=quantity,
        seed=time_based_seed() if seed is None else seed,
        cutting_cost_per_meter=rate,
    )

    typer.echo(
        f"Requested: {result.canonical_width_cm:g}cm x {result.canonical_length_m:g}m "
        f"x{quantity}"
    )
    typer.echo(f"Cut: {result.cut_type.value if result.cut_type else 'none'}")
    typer.echo(f"Cutting cost: {result.cutting_cost:.2f}")
    typer.echo()
    typer.echo(RemainderFormatter().format(result.remaining_stones))


@app.command()
def slab(
    width_cm: Annotated[float, typer.Option("--width-cm", "-w", help="Requested width in centimeters")],
    length_cm: Annotated[float, typer.Option("--length-cm", "-l", help="Requested length in centimeters")],
    standard: Annotated[
        list[str],
        typer.Option(
            "--standard",
            "-s",
            help="Standard stock as WIDTHxLENGTH[xQTY] in centimeters (repeatable)",
        ),
    ],
    longitudinal_rate: Annotated[
        float, typer.Option("--longitudinal-rate", help="Cost per meter of width trims")
    ] = 0.0,
    cross_rate: Annotated[
        float, typer.Option("--cross-rate", help="Cost per meter of length trims")
    ] = 0.0,
    seed: Annotated[
        int | None,
        typer.Option("--seed", min=0, help="Seed for generated remainder ids"),
    ] = None,
) -> None:
    """Show the leftovers of trimming a slab from standard stock."""
    dimensions = []
    for text in standard:
        values = _parse_dimensions(text, "WIDTHxLENGTH[xQTY]")
        quantity = int(values[2]) if len(values) == 3 else 1
        dimensions.append(StandardDimension(values[0], values[1], quantity))

    result = calculate_slab_remaining_stones(
        requested_width_cm=width_cm,
        requested_length_cm=length_cm,
        standard_dimensions=dimensions,
        seed=time_based_seed() if seed is None else seed,
        longitudinal_rate_per_meter=longitudinal_rate,
        cross_rate_per_meter=cross_rate,
    )

    typer.echo(f"Requested: {width_cm:g}cm x {length_cm:g}cm")
    typer.echo(f"Cut: {result.cut_type.value if result.cut_type else 'none'}")
    typer.echo(f"Cutting cost: {result.cutting_cost:.2f}")
    typer.echo()
    typer.echo(RemainderFormatter().format(result.remaining_stones))

    if result.rejected_entries:
        typer.echo()
        for rejected in result.rejected_entries:
            typer.echo(f"Error: {rejected.message}", err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
