"""API routers for the REST API."""

from stonecut.web.routers.jobs import router as jobs_router
from stonecut.web.routers.layers import router as layers_router
from stonecut.web.routers.partitions import router as partitions_router
from stonecut.web.routers.remainders import router as remainders_router

__all__ = [
    "jobs_router",
    "layers_router",
    "partitions_router",
    "remainders_router",
]
