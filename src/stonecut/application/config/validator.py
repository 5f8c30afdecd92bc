"""Validation structures and cutting job advisory checks.

Pydantic already enforces the structure of a job file. The checks here look
at the job as a whole: partitions that cannot fit the stock, slab requests
larger than their standard stock, and layer strips wider than the stock
they are cut from.
"""

from dataclasses import dataclass, field
from typing import Any

from stonecut.application.config.adapter import (
    config_to_layer_draft,
    config_to_partitions,
)
from stonecut.application.config.schema import CuttingJobConfiguration
from stonecut.domain.services.layer_allocation import max_layer_length_m
from stonecut.domain.services.partition_positioning import validate_partition_fit
from stonecut.domain.units import EPSILON, square_meters, to_cm


@dataclass
class ValidationError:
    """A problem that prevents the job from being planned."""

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A job that can be planned but will likely not come out as intended."""

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Errors and warnings collected over a job.

    ``exit_code`` follows the ``validate`` command: 1 when there are errors,
    2 when there are only warnings, 0 otherwise.
    """

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def exit_code(self) -> int:
        if self.errors:
            return 1
        return 2 if self.warnings else 0

    def add_error(self, path: str, message: str, value: Any = None) -> "ValidationResult":
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        self.warnings.append(ValidationWarning(path=path, message=message, suggestion=suggestion))
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.errors += other.errors
        self.warnings += other.warnings
        return self


def check_partition_advisories(config: CuttingJobConfiguration) -> ValidationResult:
    """Check partitions against the stock.

    A partition larger than the stock is an error. A total area above the
    stock area is an error too, since placement could never succeed. Empty
    partitions are only warned about.
    """
    result = ValidationResult()
    if config.stock is None:
        return result

    width_cm = config.stock.width_cm
    length_m = config.stock.length_m
    total_area = 0.0

    for i, partition in enumerate(config_to_partitions(config)):
        path = f"partitions[{i}]"
        if not partition.has_geometry:
            result.add_warning(
                path=path,
                message="Partition has no area and will be skipped",
                suggestion="Enter both width_cm and length_m or remove the partition",
            )
            continue

        fit = validate_partition_fit(partition, width_cm, length_m)
        if not fit.is_valid:
            result.add_error(path=path, message=fit.error or "Invalid partition")
        total_area += partition.square_meters

    stock_area = square_meters(width_cm, length_m)
    if total_area > stock_area + EPSILON:
        result.add_error(
            path="partitions",
            message=(
                f"Total partition area ({total_area:.3f}m2) exceeds stock area "
                f"({stock_area:.3f}m2)"
            ),
            value=total_area,
        )

    return result


def check_cut_advisories(config: CuttingJobConfiguration) -> ValidationResult:
    """Check longitudinal and slab cuts that cannot be cut or produce nothing."""
    result = ValidationResult()

    for i, cut in enumerate(config.longitudinal_cuts):
        path = f"longitudinal_cuts[{i}]"
        width_cm = to_cm(cut.width, cut.width_unit)
        if width_cm > cut.original_width_cm + EPSILON:
            result.add_error(
                path=f"{path}.width",
                message=(
                    f"Requested width ({width_cm:g}cm) exceeds original width "
                    f"({cut.original_width_cm:g}cm)"
                ),
                value=cut.width,
            )
        elif cut.quantity == 0 or cut.width == 0 or cut.length == 0:
            result.add_warning(
                path=path,
                message="Cut has no quantity or geometry and produces nothing",
            )

    for i, slab in enumerate(config.slab_cuts):
        for j, entry in enumerate(slab.standard_dimensions):
            if (
                slab.width_cm > entry.standard_width_cm
                or slab.length_cm > entry.standard_length_cm
            ):
                result.add_warning(
                    path=f"slab_cuts[{i}].standard_dimensions[{j}]",
                    message=(
                        f"Requested slab {slab.width_cm:g}x{slab.length_cm:g}cm is larger "
                        f"than standard stock {entry.standard_width_cm:g}x"
                        f"{entry.standard_length_cm:g}cm; entry will be rejected"
                    ),
                )

    return result


def check_layer_advisories(config: CuttingJobConfiguration) -> ValidationResult:
    """Warn about layer requests that fresh stock cannot satisfy.

    These are not errors: remainders may still cover the demand, and an
    unsatisfied demand is reported as a shortfall.
    """
    result = ValidationResult()

    for i, layer in enumerate(config.stair_layers):
        path = f"stair_layers[{i}]"
        draft = config_to_layer_draft(layer, config)

        if layer.layer_width_cm > layer.stock_width_cm:
            result.add_warning(
                path=f"{path}.layer_width_cm",
                message=(
                    f"Layer width ({layer.layer_width_cm:g}cm) exceeds stock width "
                    f"({layer.stock_width_cm:g}cm)"
                ),
                suggestion="Only remainders can supply these strips",
            )

        longest = max_layer_length_m(draft)
        if longest > draft.effective_stock_length_m + EPSILON:
            result.add_warning(
                path=path,
                message=(
                    f"Longest strip ({longest:.3f}m) exceeds stock length "
                    f"({draft.effective_stock_length_m:.3f}m)"
                ),
                suggestion="Set stock_length_m to a longer stock",
            )

        if layer.quantity == 0:
            result.add_warning(path=f"{path}.quantity", message="Layer quantity is 0")

    return result


def validate_config(config: CuttingJobConfiguration) -> ValidationResult:
    """Perform full validation of a cutting job.

    Args:
        config: A CuttingJobConfiguration instance (already validated by Pydantic)

    Returns:
        ValidationResult containing any errors or warnings
    """
    result = ValidationResult()
    result.merge(check_partition_advisories(config))
    result.merge(check_cut_advisories(config))
    result.merge(check_layer_advisories(config))

    if not (
        config.partitions
        or config.longitudinal_cuts
        or config.slab_cuts
        or config.stair_layers
    ):
        result.add_warning(path="", message="Job contains nothing to cut")

    return result
