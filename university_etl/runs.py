from __future__ import annotations

from collections import deque
from enum import StrEnum

from university_etl.schemas.responses import RunResult


class PipelineStatus(StrEnum):
    idle = "idle"
    extracting = "extracting"
    transforming = "transforming"
    staging = "staging"


class RunHistory:
    def __init__(self, max_runs: int = 50) -> None:
        self._runs: deque[RunResult] = deque(maxlen=max_runs)

    def record(self, result: RunResult) -> None:
        self._runs.append(result)

    def latest(self) -> RunResult | None:
        return self._runs[-1] if self._runs else None

    def latest_success(self) -> RunResult | None:
        return next((r for r in reversed(self._runs) if r.success), None)

    def recent(self, limit: int = 10) -> list[RunResult]:
        """Most recent first."""
        return list(reversed(self._runs))[:limit]
