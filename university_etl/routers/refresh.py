import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from university_etl.dependencies import PipelineDep
from university_etl.schemas.responses import (
    RefreshFailedResponse,
    RefreshResponse,
    StatusResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.post(
    "/refresh",
    response_model=RefreshResponse,
    responses={500: {"model": RefreshFailedResponse}},
)
async def refresh(pipeline: PipelineDep) -> RefreshResponse:
    logger.info("Manual refresh triggered")
    result = await pipeline.run(trigger="manual")

    if not result.success:
        failed = RefreshFailedResponse(
            error="Data refresh failed",
            details=result.error_message,
            timestamp=datetime.now(timezone.utc),
        )
        return JSONResponse(status_code=500, content=failed.model_dump(mode="json"))

    return RefreshResponse(
        message="Data refresh completed successfully",
        record_count=result.record_count or 0,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/status", response_model=StatusResponse)
async def status(pipeline: PipelineDep, recent: int = Query(10, ge=0, le=50)) -> StatusResponse:
    return StatusResponse(
        status=pipeline.status.value,
        running=pipeline.is_running,
        last_result=pipeline.last_result,
        last_success=pipeline.history.latest_success(),
        recent_runs=pipeline.history.recent(limit=recent),
    )
