"""Application layer - use cases and orchestration."""

from .commands import PlanCuttingJobCommand
from .dtos import CuttingJobOutput

__all__ = [
    "CuttingJobOutput",
    "PlanCuttingJobCommand",
]
