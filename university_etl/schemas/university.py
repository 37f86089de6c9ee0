from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel

RawUniversity = dict[str, Any]


class CanonicalUniversity(BaseModel):
    name: str
    country: str
    state_province: str | None = None
    alpha_two_code: str | None = None
    domains: list[str] = []
    web_pages: list[str] = []
    primary_domain: str | None = None
    primary_website: str | None = None
    last_updated: datetime


class SourceResult(BaseModel):
    country: str
    success: bool
    record_count: int = 0
    error: str | None = None


class ExtractResult(BaseModel):
    records: list[Any] = []
    sources: list[SourceResult] = []

    @property
    def succeeded(self) -> list[SourceResult]:
        return [s for s in self.sources if s.success]

    @property
    def failed(self) -> list[SourceResult]:
        return [s for s in self.sources if not s.success]


class TransformResult(BaseModel):
    records: list[CanonicalUniversity] = []
    received: int = 0

    @property
    def accepted(self) -> int:
        return len(self.records)

    @property
    def dropped(self) -> int:
        return self.received - len(self.records)
