"""Partition positioning endpoints."""

from fastapi import APIRouter

from stonecut.application.config import PartitionConfig
from stonecut.domain.entities import StonePartition
from stonecut.domain.services import (
    calculate_remaining_areas_after_partitions,
    validate_partition_fit,
    validate_partitions,
)
from stonecut.domain.units import square_meters
from stonecut.web.dependencies import SeedFactoryDep
from stonecut.web.schemas.common import PartitionSchema, RemainingStoneSchema
from stonecut.web.schemas.requests import PartitionFitRequest, PartitionPositionsRequest
from stonecut.web.schemas.responses import PartitionFitResponse, PartitionPositionsResponse

router = APIRouter(prefix="/partitions", tags=["partitions"])


def _to_partition(config: PartitionConfig, index: int) -> StonePartition:
    return StonePartition(
        id=config.id or f"partition_{index}",
        width_cm=config.width_cm,
        length_m=config.length_m,
        square_meters=square_meters(config.width_cm, config.length_m),
    )


@router.post("/positions", response_model=PartitionPositionsResponse)
async def position_partitions(
    request: PartitionPositionsRequest,
    seed_factory: SeedFactoryDep,
) -> PartitionPositionsResponse:
    """Place partitions in cutting order and return the free stock left.

    Placement failures are reported per partition; the request itself
    succeeds.
    """
    partitions = [_to_partition(p, i) for i, p in enumerate(request.partitions)]
    validation = validate_partitions(
        partitions,
        request.width_cm,
        request.length_m,
        available_square_meters=request.available_square_meters,
    )
    remaining = calculate_remaining_areas_after_partitions(
        partitions,
        request.width_cm,
        request.length_m,
        seed=request.seed if request.seed is not None else seed_factory(),
    )

    return PartitionPositionsResponse(
        is_valid=validation.is_valid,
        error=validation.error,
        partition_errors=validation.partition_errors,
        partitions=[PartitionSchema.model_validate(p) for p in validation.validated_partitions],
        remaining_areas=[RemainingStoneSchema.model_validate(s) for s in remaining],
    )


@router.post("/fit", response_model=PartitionFitResponse)
async def check_partition_fit(request: PartitionFitRequest) -> PartitionFitResponse:
    """Quick bounds check of one partition against the whole stock."""
    result = validate_partition_fit(
        _to_partition(request.partition, 0), request.width_cm, request.length_m
    )
    return PartitionFitResponse(is_valid=result.is_valid, error=result.error)
