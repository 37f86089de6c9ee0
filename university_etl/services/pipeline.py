import asyncio
import logging
from datetime import datetime, timezone

from university_etl.mappers.university_mapper import normalize_universities
from university_etl.runs import PipelineStatus, RunHistory
from university_etl.schemas.responses import RunResult
from university_etl.services.staging import StagingStore
from university_etl.services.universities_api import UniversitiesAPIService

logger = logging.getLogger(__name__)


class ETLPipeline:
    """Extract → Transform → Stage, one run at a time.

    Runs are serialized: a trigger that arrives while another run is in
    flight waits for it to finish and then performs its own pass.
    """

    def __init__(
        self,
        source: UniversitiesAPIService,
        store: StagingStore,
        history: RunHistory | None = None,
    ):
        self._source = source
        self._store = store
        self._history = history if history is not None else RunHistory()
        self._lock = asyncio.Lock()
        self._status = PipelineStatus.idle

    @property
    def status(self) -> PipelineStatus:
        return self._status

    @property
    def is_running(self) -> bool:
        return self._lock.locked()

    @property
    def history(self) -> RunHistory:
        return self._history

    @property
    def last_result(self) -> RunResult | None:
        return self._history.latest()

    async def run(self, trigger: str = "manual") -> RunResult:
        if self._lock.locked():
            logger.info("ETL run already in progress; %s run queued", trigger)
        async with self._lock:
            result = await self._run(trigger)
        self._history.record(result)
        return result

    async def _run(self, trigger: str) -> RunResult:
        started_at = datetime.now(timezone.utc)
        logger.info("Starting ETL process (trigger=%s)...", trigger)

        try:
            self._status = PipelineStatus.extracting
            extracted = await self._source.fetch_all()

            if extracted is None:
                logger.info(
                    "No extracted data available, skipping transformation and staging processes"
                )
                return RunResult(
                    success=True,
                    trigger=trigger,
                    record_count=0,
                    started_at=started_at,
                    finished_at=datetime.now(timezone.utc),
                )

            if extracted.failed:
                logger.warning(
                    "No data from %s; staging what the other sources returned",
                    ", ".join(s.country for s in extracted.failed),
                )

            self._status = PipelineStatus.transforming
            transformed = normalize_universities(extracted.records)

            self._status = PipelineStatus.staging
            await self._store.write(transformed.records)
        except Exception as exc:
            logger.exception("ETL process failed: %s", exc)
            return RunResult(
                success=False,
                trigger=trigger,
                error_message=str(exc),
                started_at=started_at,
                finished_at=datetime.now(timezone.utc),
            )
        finally:
            self._status = PipelineStatus.idle

        logger.info(
            "ETL process completed successfully: %d records (%d dropped, %d/%d sources ok)",
            transformed.accepted,
            transformed.dropped,
            len(extracted.succeeded),
            len(extracted.sources),
        )
        return RunResult(
            success=True,
            trigger=trigger,
            record_count=transformed.accepted,
            dropped=transformed.dropped,
            sources=extracted.sources,
            started_at=started_at,
            finished_at=datetime.now(timezone.utc),
        )
