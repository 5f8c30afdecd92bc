"""Layer allocation and merge endpoints."""

from fastapi import APIRouter

from stonecut.application.config import CuttingJobConfiguration, config_to_layer_draft
from stonecut.domain.entities import LineItem
from stonecut.domain.services import compute_layer_allocation, upsert_layer_allocation
from stonecut.web.converters import to_layer_item, to_remaining_stones
from stonecut.web.dependencies import SeedFactoryDep
from stonecut.web.schemas.common import LayerItemSchema, RemainingStoneSchema
from stonecut.web.schemas.requests import LayerAllocateRequest, LayerMergeRequest
from stonecut.web.schemas.responses import LayerAllocationResponse, LayerMergeResponse

router = APIRouter(prefix="/layers", tags=["layers"])


@router.post("/allocate", response_model=LayerAllocationResponse)
async def allocate_layers(
    request: LayerAllocateRequest,
    seed_factory: SeedFactoryDep,
) -> LayerAllocationResponse:
    """Allocate layer strips from the given pool and fresh stock.

    The pool in the request is not modified; the response carries the new
    snapshot the caller should keep.
    """
    job = CuttingJobConfiguration(schema_version="1.1", rates=request.rates)
    draft = config_to_layer_draft(request.layer, job)
    result = compute_layer_allocation(
        draft,
        to_remaining_stones(request.remainders),
        seed=request.seed if request.seed is not None else seed_factory(),
    )
    return LayerAllocationResponse(
        layer_item=LayerItemSchema.model_validate(result.layer_item),
        updated_remainders=[
            RemainingStoneSchema.model_validate(s) for s in result.updated_remainders
        ],
        shortfall=result.shortfall,
    )


@router.post("/merge", response_model=LayerMergeResponse)
async def merge_layers(request: LayerMergeRequest) -> LayerMergeResponse:
    """Fold layer items in order, merging those with the same configuration."""
    items: list[LineItem] = []
    for schema in request.items:
        items = upsert_layer_allocation(items, to_layer_item(schema))
    return LayerMergeResponse(items=[LayerItemSchema.model_validate(i) for i in items])
