from typing import Annotated

from fastapi import Depends, Request

from university_etl.services.pipeline import ETLPipeline
from university_etl.services.staging import StagingStore


def get_pipeline(request: Request) -> ETLPipeline:
    return request.app.state.pipeline


def get_staging_store(request: Request) -> StagingStore:
    return request.app.state.staging_store


PipelineDep = Annotated[ETLPipeline, Depends(get_pipeline)]
StagingStoreDep = Annotated[StagingStore, Depends(get_staging_store)]
