import asyncio
import logging

import schedule

from university_etl.services.pipeline import ETLPipeline

logger = logging.getLogger(__name__)

# Upper bound on a single sleep so wall-clock changes are noticed.
MAX_IDLE_SECONDS = 60.0


class DailyScheduler:
    """Runs the pipeline once a day at a fixed UTC time."""

    def __init__(
        self,
        pipeline: ETLPipeline,
        hour: int = 0,
        minute: int = 0,
        max_idle: float = MAX_IDLE_SECONDS,
    ):
        if not 0 <= hour <= 23 or not 0 <= minute <= 59:
            raise ValueError(f"Invalid refresh time {hour:02d}:{minute:02d}")
        self._pipeline = pipeline
        self._max_idle = max_idle
        self._scheduler = schedule.Scheduler()
        self.job = self._scheduler.every().day.at(f"{hour:02d}:{minute:02d}", "UTC").do(
            self._launch_run
        )
        self._task: asyncio.Task | None = None
        self._runs: set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def next_run(self):
        return self._scheduler.next_run

    async def run_once(self) -> None:
        logger.info("Scheduled ETL process starting...")
        result = await self._pipeline.run(trigger="scheduled")
        if result.success:
            logger.info("Scheduled ETL process finished: %d records", result.record_count)
        else:
            logger.error("Scheduled ETL process failed: %s", result.error_message)

    def _launch_run(self) -> None:
        task = asyncio.create_task(self.run_once())
        self._runs.add(task)
        task.add_done_callback(self._runs.discard)

    def tick(self) -> float:
        """Fire any due job; return how long to sleep before the next check."""
        self._scheduler.run_pending()
        idle = self._scheduler.idle_seconds
        if idle is None:
            return self._max_idle
        return min(max(idle, 0.0), self._max_idle)

    async def _loop(self) -> None:
        logger.info("Next scheduled ETL run at %s", self.next_run)
        while True:
            await asyncio.sleep(self.tick())

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._loop())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
