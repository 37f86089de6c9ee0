from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from university_etl.schemas.university import SourceResult


class RunResult(BaseModel):
    success: bool
    trigger: str  # "startup" | "manual" | "scheduled"
    record_count: int | None = None
    error_message: str | None = None
    dropped: int = 0
    sources: list[SourceResult] = []
    started_at: datetime
    finished_at: datetime | None = None


class IndexResponse(BaseModel):
    message: str
    endpoints: dict[str, str]


class UniversitiesResponse(BaseModel):
    count: int
    data: list[dict[str, Any]]
    last_updated: str | None = None


class RefreshResponse(BaseModel):
    model_config = {"populate_by_name": True}

    message: str
    record_count: int = Field(alias="recordCount")
    timestamp: datetime


class RefreshFailedResponse(BaseModel):
    error: str
    details: str | None = None
    timestamp: datetime


class StatusResponse(BaseModel):
    status: str
    running: bool
    last_result: RunResult | None = None
    last_success: RunResult | None = None
    recent_runs: list[RunResult] = []
