import logging

from fastapi import APIRouter
from fastapi.responses import Response

from university_etl.dependencies import StagingStoreDep
from university_etl.schemas.responses import IndexResponse, UniversitiesResponse

logger = logging.getLogger(__name__)

router = APIRouter()

ENDPOINTS = {
    "/api/universities/csv": "Download universities data as CSV",
    "/api/universities/json": "Get universities data as JSON",
    "/api/refresh": "Manually trigger data refresh",
    "/api/status": "Current pipeline state and last run result",
}


@router.get("/", response_model=IndexResponse)
async def index() -> IndexResponse:
    return IndexResponse(message="University ETL API", endpoints=ENDPOINTS)


@router.get("/api/universities/csv")
async def download_csv(store: StagingStoreDep) -> Response:
    content = await store.read_csv()
    logger.info("CSV file downloaded")
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={store.csv_path.name}"},
    )


@router.get("/api/universities/json", response_model=UniversitiesResponse)
async def get_universities(store: StagingStoreDep) -> UniversitiesResponse:
    universities = await store.read_json()
    logger.info("JSON data served")
    return UniversitiesResponse(
        count=len(universities),
        data=universities,
        last_updated=universities[0].get("last_updated") if universities else None,
    )
