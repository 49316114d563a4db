import asyncio

import pytest

from pepperpal.runtime.maintenance import MaintenanceScheduler, SweepJob


def test_register_rejects_non_positive_interval() -> None:
    scheduler = MaintenanceScheduler()

    with pytest.raises(ValueError):
        scheduler.register("bad", lambda: 0, 0)


def test_run_once_logs_and_survives_failures() -> None:
    def broken() -> int:
        raise RuntimeError("boom")

    assert MaintenanceScheduler.run_once(SweepJob("broken", 1, broken)) == 0
    assert MaintenanceScheduler.run_once(SweepJob("ok", 1, lambda: 3)) == 3


def test_sweeps_run_on_their_interval_until_stopped() -> None:
    calls: list[int] = []

    def sweep() -> int:
        calls.append(1)
        return 1

    async def scenario() -> None:
        scheduler = MaintenanceScheduler()
        scheduler.register("fast", sweep, 0.01)
        scheduler.start()
        assert scheduler.running
        await asyncio.sleep(0.05)
        tasks = list(scheduler._tasks.values())
        await scheduler.stop()
        assert tasks and all(t.done() for t in tasks)
        seen = len(calls)
        await asyncio.sleep(0.03)
        assert len(calls) == seen
        assert not scheduler.running

    asyncio.run(scenario())

    assert calls


def test_stop_without_start_is_harmless() -> None:
    scheduler = MaintenanceScheduler()
    scheduler.register("idle", lambda: 0, 1)

    asyncio.run(scheduler.stop())

    assert not scheduler.running
