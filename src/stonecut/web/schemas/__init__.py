"""Pydantic schemas for the REST API."""

from stonecut.web.schemas.common import (
    CutItemSchema,
    LayerEdgesSchema,
    LayerItemSchema,
    LayerTypeSchema,
    PartitionSchema,
    PositionSchema,
    RemainderUsageSchema,
    RemainingStoneSchema,
)
from stonecut.web.schemas.requests import (
    ConfigValidateRequest,
    LayerAllocateRequest,
    LayerMergeRequest,
    LongitudinalCutRequest,
    PartitionFitRequest,
    PartitionPositionsRequest,
    PlanJobRequest,
    RemainderCollectionRequest,
    SlabCutRequest,
)
from stonecut.web.schemas.responses import (
    CuttingJobResponse,
    ErrorResponseSchema,
    LayerAllocationResponse,
    LayerMergeResponse,
    LongitudinalCutResponse,
    PartitionFitResponse,
    PartitionPositionsResponse,
    RejectedEntrySchema,
    RemainderCollectionResponse,
    SlabCutResponse,
    ValidationResultSchema,
)

__all__ = [
    # Common
    "CutItemSchema",
    "LayerEdgesSchema",
    "LayerItemSchema",
    "LayerTypeSchema",
    "PartitionSchema",
    "PositionSchema",
    "RemainderUsageSchema",
    "RemainingStoneSchema",
    # Requests
    "ConfigValidateRequest",
    "LayerAllocateRequest",
    "LayerMergeRequest",
    "LongitudinalCutRequest",
    "PartitionFitRequest",
    "PartitionPositionsRequest",
    "PlanJobRequest",
    "RemainderCollectionRequest",
    "SlabCutRequest",
    # Responses
    "CuttingJobResponse",
    "ErrorResponseSchema",
    "LayerAllocationResponse",
    "LayerMergeResponse",
    "LongitudinalCutResponse",
    "PartitionFitResponse",
    "PartitionPositionsResponse",
    "RejectedEntrySchema",
    "RemainderCollectionResponse",
    "SlabCutResponse",
    "ValidationResultSchema",
]
