"""Scheduler tests. Intervals are tiny and assertions generous so timing jitter does not matter."""

import asyncio
from datetime import timedelta

import pytest

from newsdesk.exceptions import AggregationError, AggregationInProgressError
from newsdesk.services.scheduler import AggregationScheduler, SchedulerState

FAST = timedelta(milliseconds=40)
HOURLY = timedelta(hours=1)


class Counter:
    def __init__(self, error: Exception | None = None, gate: asyncio.Event | None = None):
        self.calls = 0
        self.error = error
        self.gate = gate

    async def __call__(self) -> int:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.calls


class TestScheduling:
    async def test_first_cycle_runs_immediately(self) -> None:
        cycle = Counter()
        scheduler = AggregationScheduler(cycle, HOURLY)
        scheduler.start()
        try:
            await asyncio.sleep(0.05)
            assert cycle.calls == 1
            assert scheduler.cycles_completed == 1
            assert scheduler.is_started
        finally:
            await scheduler.stop()

        assert not scheduler.is_started

    async def test_cycles_repeat_every_interval(self) -> None:
        cycle = Counter()
        scheduler = AggregationScheduler(cycle, FAST)
        scheduler.start()
        try:
            await asyncio.sleep(0.3)
        finally:
            await scheduler.stop()

        assert cycle.calls >= 3

    async def test_start_twice_keeps_one_loop(self) -> None:
        cycle = Counter()
        scheduler = AggregationScheduler(cycle, HOURLY)
        scheduler.start()
        scheduler.start()
        try:
            await asyncio.sleep(0.05)
        finally:
            await scheduler.stop()

        assert cycle.calls == 1

    async def test_failed_cycle_does_not_stop_the_schedule(self) -> None:
        cycle = Counter(error=RuntimeError("provider outage"))
        scheduler = AggregationScheduler(cycle, FAST)
        scheduler.start()
        try:
            await asyncio.sleep(0.3)
        finally:
            await scheduler.stop()

        assert scheduler.cycles_failed >= 2
        assert scheduler.cycles_completed == 0
        assert "provider outage" in scheduler.last_error

    async def test_tick_during_running_cycle_is_skipped(self) -> None:
        gate = asyncio.Event()
        cycle = Counter(gate=gate)
        scheduler = AggregationScheduler(cycle, FAST)
        scheduler.start()
        try:
            await asyncio.sleep(0.2)
            assert cycle.calls == 1
            assert scheduler.is_running
            assert scheduler.ticks_skipped >= 2

            gate.set()
            await asyncio.sleep(0.15)
            assert cycle.calls >= 2
        finally:
            await scheduler.stop()

    async def test_stop_cancels_cycle_in_flight(self) -> None:
        scheduler = AggregationScheduler(Counter(gate=asyncio.Event()), HOURLY)
        scheduler.start()
        await asyncio.sleep(0.05)
        assert scheduler.is_running

        await scheduler.stop()

        assert scheduler.state == SchedulerState.IDLE

    def test_interval_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            AggregationScheduler(Counter(), timedelta(0))


class TestRunNow:
    async def test_returns_cycle_result(self) -> None:
        scheduler = AggregationScheduler(Counter(), HOURLY)

        assert await scheduler.run_now() == 1
        assert scheduler.cycles_completed == 1
        assert scheduler.state == SchedulerState.IDLE
        assert scheduler.last_finished_at is not None

    async def test_rejected_while_a_cycle_runs(self) -> None:
        gate = asyncio.Event()
        scheduler = AggregationScheduler(Counter(gate=gate), HOURLY)
        first = asyncio.create_task(scheduler.run_now())
        await asyncio.sleep(0)

        with pytest.raises(AggregationInProgressError):
            await scheduler.run_now()

        gate.set()
        assert await first == 1

    async def test_stop_cancels_on_demand_cycle(self) -> None:
        scheduler = AggregationScheduler(Counter(gate=asyncio.Event()), HOURLY)
        on_demand = asyncio.create_task(scheduler.run_now())
        await asyncio.sleep(0.01)
        assert scheduler.is_running

        await scheduler.stop()

        with pytest.raises(asyncio.CancelledError):
            await on_demand
        assert scheduler.state == SchedulerState.IDLE

    async def test_failure_is_wrapped(self) -> None:
        scheduler = AggregationScheduler(Counter(error=RuntimeError("boom")), HOURLY)

        with pytest.raises(AggregationError) as exc_info:
            await scheduler.run_now()

        assert not isinstance(exc_info.value, AggregationInProgressError)
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert scheduler.cycles_failed == 1
        assert scheduler.state == SchedulerState.IDLE

    async def test_status_snapshot(self) -> None:
        scheduler = AggregationScheduler(Counter(), timedelta(minutes=30))
        await scheduler.run_now()

        status = scheduler.status()

        assert status["state"] == "idle"
        assert status["started"] is False
        assert status["interval_seconds"] == 1800
        assert status["cycles_completed"] == 1
        assert status["last_error"] is None
