"""Remainder calculation and pool maintenance endpoints."""

from fastapi import APIRouter

from stonecut.domain.services import (
    calculate_longitudinal_remaining_stones,
    calculate_slab_remaining_stones,
    merge_remaining_stone_collection,
    normalize_remaining_stone_collection,
)
from stonecut.domain.value_objects import StandardDimension
from stonecut.web.converters import to_remaining_stones
from stonecut.web.dependencies import SeedFactoryDep
from stonecut.web.schemas.common import RemainingStoneSchema
from stonecut.web.schemas.requests import (
    LongitudinalCutRequest,
    RemainderCollectionRequest,
    SlabCutRequest,
)
from stonecut.web.schemas.responses import (
    LongitudinalCutResponse,
    RejectedEntrySchema,
    RemainderCollectionResponse,
    SlabCutResponse,
)

router = APIRouter(prefix="/remainders", tags=["remainders"])


@router.post("/longitudinal", response_model=LongitudinalCutResponse)
async def longitudinal_cut(
    request: LongitudinalCutRequest,
    seed_factory: SeedFactoryDep,
) -> LongitudinalCutResponse:
    """Compute the leftover strip of a longitudinal cut."""
    result = calculate_longitudinal_remaining_stones(
        original_width_cm=request.original_width_cm,
        requested_width=request.width,
        requested_width_unit=request.width_unit,
        requested_length=request.length,
        requested_length_unit=request.length_unit,
        quantity=request.quantity,
        seed=request.seed if request.seed is not None else seed_factory(),
        cutting_cost_per_meter=request.cutting_cost_per_meter or 0.0,
    )
    return LongitudinalCutResponse(
        is_cut=result.is_cut,
        cut_type=result.cut_type,
        canonical_width_cm=result.canonical_width_cm,
        canonical_length_m=result.canonical_length_m,
        cutting_cost=result.cutting_cost,
        remaining_stones=[
            RemainingStoneSchema.model_validate(s) for s in result.remaining_stones
        ],
    )


@router.post("/slab", response_model=SlabCutResponse)
async def slab_cut(
    request: SlabCutRequest,
    seed_factory: SeedFactoryDep,
) -> SlabCutResponse:
    """Compute the leftovers of trimming a slab from standard stock.

    Entries smaller than the request are listed in ``rejected_entries``.
    """
    result = calculate_slab_remaining_stones(
        requested_width_cm=request.width_cm,
        requested_length_cm=request.length_cm,
        standard_dimensions=[
            StandardDimension(d.standard_width_cm, d.standard_length_cm, d.quantity)
            for d in request.standard_dimensions
        ],
        seed=request.seed if request.seed is not None else seed_factory(),
        longitudinal_rate_per_meter=request.longitudinal_rate_per_meter,
        cross_rate_per_meter=request.cross_rate_per_meter,
    )
    return SlabCutResponse(
        is_cut=result.is_cut,
        cut_type=result.cut_type,
        cutting_cost=result.cutting_cost,
        remaining_stones=[
            RemainingStoneSchema.model_validate(s) for s in result.remaining_stones
        ],
        rejected_entries=[
            RejectedEntrySchema(
                standard_width_cm=r.entry.standard_width_cm,
                standard_length_cm=r.entry.standard_length_cm,
                quantity=r.entry.quantity,
                message=r.message,
            )
            for r in result.rejected_entries
        ],
    )


@router.post("/sanitize", response_model=RemainderCollectionResponse)
async def sanitize_remainders(
    request: RemainderCollectionRequest,
) -> RemainderCollectionResponse:
    """Sanitize remainders in order; unusable ones come back unavailable."""
    stones = normalize_remaining_stone_collection(to_remaining_stones(request.remainders))
    return RemainderCollectionResponse(
        remainders=[RemainingStoneSchema.model_validate(s) for s in stones]
    )


@router.post("/merge", response_model=RemainderCollectionResponse)
async def merge_remainders(
    request: RemainderCollectionRequest,
) -> RemainderCollectionResponse:
    """Sanitize remainders and merge identical pieces from the same cut."""
    stones = merge_remaining_stone_collection(to_remaining_stones(request.remainders))
    return RemainderCollectionResponse(
        remainders=[RemainingStoneSchema.model_validate(s) for s in stones]
    )
