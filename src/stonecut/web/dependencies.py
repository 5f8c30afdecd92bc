"""FastAPI dependency injection for cutting job services."""

from typing import Annotated, Callable

from fastapi import Depends

from stonecut.application.commands import PlanCuttingJobCommand, time_based_seed


def get_plan_command() -> PlanCuttingJobCommand:
    """Dependency for PlanCuttingJobCommand."""
    return PlanCuttingJobCommand()


def get_seed_factory() -> Callable[[], int]:
    """Dependency for the seed source of requests that carry no seed."""
    return time_based_seed


# Type aliases for cleaner endpoint signatures
PlanCommandDep = Annotated[PlanCuttingJobCommand, Depends(get_plan_command)]
SeedFactoryDep = Annotated[Callable[[], int], Depends(get_seed_factory)]
