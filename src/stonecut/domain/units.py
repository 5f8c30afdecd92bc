"""Length unit conversion between centimeters and meters.

Widths are canonically stored in centimeters and lengths in meters. Every
user-entered value is converted with these helpers before any geometry
math runs.
"""

from __future__ import annotations

from enum import Enum

# Tolerance for floating comparisons across the engine
EPSILON = 1e-6


class LengthUnit(str, Enum):
    """Unit a dimension was entered in."""

    CM = "cm"
    M = "m"


def to_cm(value: float, unit: LengthUnit) -> float:
    """Convert a value to centimeters."""
    unit = LengthUnit(unit)
    if unit is LengthUnit.M:
        return value * 100
    return value


def to_m(value: float, unit: LengthUnit) -> float:
    """Convert a value to meters."""
    unit = LengthUnit(unit)
    if unit is LengthUnit.CM:
        return value / 100
    return value


def convert_length(value: float, from_unit: LengthUnit, to_unit: LengthUnit) -> float:
    """Convert a value between any two length units.

    Args:
        value: The magnitude to convert.
        from_unit: Unit the value is expressed in.
        to_unit: Unit to convert into.

    Returns:
        The converted magnitude.
    """
    if LengthUnit(to_unit) is LengthUnit.CM:
        return to_cm(value, from_unit)
    return to_m(value, from_unit)


def square_meters(width_cm: float, length_m: float, quantity: float = 1) -> float:
    """Area in square meters of ``quantity`` pieces of width x length."""
    return (width_cm / 100) * length_m * quantity
