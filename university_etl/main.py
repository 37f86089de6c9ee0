import logging
import sys
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from university_etl.config import Settings
from university_etl.exceptions.custom import DataNotFoundError
from university_etl.exceptions.handlers import (
    data_not_found_handler,
    http_error_handler,
    unhandled_error_handler,
)
from university_etl.routers.refresh import router as refresh_router
from university_etl.routers.universities import router as universities_router
from university_etl.runs import RunHistory
from university_etl.scheduler import DailyScheduler
from university_etl.services.pipeline import ETLPipeline
from university_etl.services.staging import StagingStore
from university_etl.services.universities_api import UniversitiesAPIService

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()
    configure_logging(settings.log_level)

    async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
        source = UniversitiesAPIService(
            client, settings.universities_api_url, settings.countries
        )
        store = StagingStore(
            settings.data_dir, settings.json_filename, settings.csv_filename
        )
        store.ensure_directory()

        pipeline = ETLPipeline(source, store, history=RunHistory())
        app.state.staging_store = store
        app.state.pipeline = pipeline

        if settings.run_on_startup:
            logger.info("Running initial ETL process...")
            await pipeline.run(trigger="startup")

        scheduler: DailyScheduler | None = None
        if settings.scheduler_enabled:
            scheduler = DailyScheduler(
                pipeline, settings.refresh_hour_utc, settings.refresh_minute_utc
            )
            scheduler.start()
        app.state.scheduler = scheduler

        try:
            yield
        finally:
            if scheduler is not None:
                await scheduler.stop()


app = FastAPI(title="University ETL", lifespan=lifespan)

app.add_exception_handler(DataNotFoundError, data_not_found_handler)
app.add_exception_handler(StarletteHTTPException, http_error_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

app.include_router(universities_router)
app.include_router(refresh_router)


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    settings = Settings()
    configure_logging(settings.log_level)
    logger.info("Server starting on port %d", settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        timeout_graceful_shutdown=0,
    )
