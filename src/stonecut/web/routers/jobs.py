"""Cutting job planning and validation endpoints."""

from fastapi import APIRouter

from stonecut.application.config import load_config_from_dict, validate_config
from stonecut.web.dependencies import PlanCommandDep
from stonecut.web.schemas.common import (
    CutItemSchema,
    LayerItemSchema,
    PartitionSchema,
    RemainingStoneSchema,
)
from stonecut.web.schemas.requests import ConfigValidateRequest, PlanJobRequest
from stonecut.web.schemas.responses import CuttingJobResponse, ValidationResultSchema

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("/plan", response_model=CuttingJobResponse)
async def plan_job(request: PlanJobRequest, command: PlanCommandDep) -> CuttingJobResponse:
    """Plan a full cutting job.

    Raises:
        ConfigError: If the configuration is invalid (handled as 422).
    """
    config = load_config_from_dict(request.config)
    output = command.execute(config, seed=request.seed)

    return CuttingJobResponse(
        is_valid=output.is_valid,
        seed=output.seed,
        errors=output.errors,
        cuts=[CutItemSchema.model_validate(item) for item in output.cut_items],
        partitions=[PartitionSchema.model_validate(p) for p in output.partitions],
        partition_remainders=[
            RemainingStoneSchema.model_validate(s) for s in output.partition_remainders
        ],
        layers=[LayerItemSchema.model_validate(item) for item in output.layer_items],
        remainders=[RemainingStoneSchema.model_validate(s) for s in output.remainders],
        shortfall=output.shortfall,
        total_cutting_cost=output.total_cutting_cost,
    )


@router.post("/validate", response_model=ValidationResultSchema)
async def validate_job(request: ConfigValidateRequest) -> ValidationResultSchema:
    """Validate a cutting job without planning it."""
    config = load_config_from_dict(request.config)
    result = validate_config(config)

    return ValidationResultSchema(
        is_valid=result.is_valid,
        exit_code=result.exit_code,
        errors=[
            {"path": e.path, "message": e.message, "value": e.value} for e in result.errors
        ],
        warnings=[
            {"path": w.path, "message": w.message, "suggestion": w.suggestion}
            for w in result.warnings
        ],
    )
