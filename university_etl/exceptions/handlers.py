import logging
from datetime import datetime, timezone

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .custom import DataNotFoundError

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = [
    "GET /",
    "GET /api/universities/csv",
    "GET /api/universities/json",
    "POST /api/refresh",
    "GET /api/status",
]


async def data_not_found_handler(_request: Request, exc: DataNotFoundError) -> JSONResponse:
    logger.error("Failed to serve %s: %s", exc.artifact, exc.message)
    return JSONResponse(
        status_code=404,
        content={
            "error": exc.message,
            "suggestion": "Try calling /api/refresh to generate the data",
        },
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code in (404, 405):
        logger.info("No route for %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=404,
            content={
                "error": "Endpoint not found",
                "availableEndpoints": AVAILABLE_ENDPOINTS,
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error: %s", exc, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )
