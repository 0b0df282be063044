"""Periodic aggregation scheduler.

Runs one cycle as soon as it starts and then one per interval on a fixed
grid, regardless of how long each cycle takes. A tick that finds a cycle
still running is skipped. Cycle failures are logged and the schedule goes on.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any

from newsdesk.exceptions import AggregationError, AggregationInProgressError

logger = logging.getLogger(__name__)


class SchedulerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


class AggregationScheduler:
    """Drives ``run_cycle`` at startup and every ``interval`` after that."""

    def __init__(self, run_cycle: Callable[[], Awaitable[Any]], interval: timedelta):
        if interval.total_seconds() <= 0:
            raise ValueError("interval must be positive")
        self.run_cycle = run_cycle
        self.interval = interval
        self.state = SchedulerState.IDLE

        self.cycles_completed = 0
        self.cycles_failed = 0
        self.ticks_skipped = 0
        self.last_started_at: datetime | None = None
        self.last_finished_at: datetime | None = None
        self.last_error: str | None = None

        self._loop_task: asyncio.Task | None = None
        self._cycle_task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self.state == SchedulerState.RUNNING

    @property
    def is_started(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    def start(self) -> None:
        """Start ticking; the first cycle fires immediately."""
        if self.is_started:
            return
        logger.info("Starting aggregation scheduler (every %s)", self.interval)
        self._loop_task = asyncio.create_task(self._tick_loop(), name="aggregation-scheduler")

    async def stop(self) -> None:
        """Stop ticking and cancel any cycle in flight."""
        tasks = [t for t in (self._loop_task, self._cycle_task) if t is not None and not t.done()]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._loop_task = None
        self._cycle_task = None
        self.state = SchedulerState.IDLE

    async def run_now(self) -> Any:
        """
        Run a cycle immediately and return its result.

        Raises AggregationInProgressError if a cycle is already running and
        AggregationError if the cycle fails. The cycle is tracked like a
        scheduled one, so ``stop()`` cancels it too.
        """
        if self.is_running:
            raise AggregationInProgressError("An aggregation cycle is already running")
        self._begin()
        self._cycle_task = asyncio.create_task(self._execute(), name="aggregation-cycle-on-demand")
        try:
            return await self._cycle_task
        except Exception as e:
            logger.exception("On-demand aggregation cycle failed")
            raise AggregationError("Aggregation cycle failed") from e

    def status(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "started": self.is_started,
            "interval_seconds": self.interval.total_seconds(),
            "cycles_completed": self.cycles_completed,
            "cycles_failed": self.cycles_failed,
            "ticks_skipped": self.ticks_skipped,
            "last_started_at": self.last_started_at,
            "last_finished_at": self.last_finished_at,
            "last_error": self.last_error,
        }

    async def _tick_loop(self) -> None:
        loop = asyncio.get_running_loop()
        period = self.interval.total_seconds()
        next_tick = loop.time()
        while True:
            self._tick()
            next_tick += period
            # Late wake-ups realign to the grid instead of firing catch-up ticks
            while next_tick <= loop.time():
                next_tick += period
            await asyncio.sleep(next_tick - loop.time())

    def _tick(self) -> None:
        if self.is_running:
            self.ticks_skipped += 1
            logger.warning("Previous aggregation cycle still running; skipping this tick")
            return
        self._begin()
        self._cycle_task = asyncio.create_task(self._run_scheduled(), name="aggregation-cycle")

    def _begin(self) -> None:
        self.state = SchedulerState.RUNNING
        self.last_started_at = datetime.now(UTC)

    async def _run_scheduled(self) -> None:
        try:
            await self._execute()
        except Exception:
            logger.exception("Scheduled aggregation cycle failed")

    async def _execute(self) -> Any:
        try:
            result = await self.run_cycle()
        except Exception as e:
            self.cycles_failed += 1
            self.last_error = repr(e)
            raise
        else:
            self.cycles_completed += 1
            self.last_error = None
            return result
        finally:
            self.state = SchedulerState.IDLE
            self.last_finished_at = datetime.now(UTC)
