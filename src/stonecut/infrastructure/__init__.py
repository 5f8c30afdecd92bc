"""Infrastructure layer - external concerns and formatters."""

from .formatters import (
    CutItemFormatter,
    CuttingJobFormatter,
    JsonExporter,
    LayerItemFormatter,
    PartitionFormatter,
    RemainderFormatter,
)

__all__ = [
    "CutItemFormatter",
    "CuttingJobFormatter",
    "JsonExporter",
    "LayerItemFormatter",
    "PartitionFormatter",
    "RemainderFormatter",
]
