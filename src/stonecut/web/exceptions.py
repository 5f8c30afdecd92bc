"""Error handlers for the REST API."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from stonecut.application.config import ConfigError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.message,
                "error_type": exc.error_type,
                "details": exc.details,
            },
        )

    @app.exception_handler(ValueError)
    async def domain_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=422,
            content={
                "error": str(exc),
                "error_type": "domain",
                "details": None,
            },
        )
