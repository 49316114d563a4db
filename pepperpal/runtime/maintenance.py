"""Fixed-interval background sweeps for the in-memory stores."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable

from loguru import logger


@dataclass(frozen=True, slots=True)
class SweepJob:
    name: str
    interval_seconds: float
    sweep: Callable[[], int]


class MaintenanceScheduler:
    """
    One asyncio task per registered sweep.

    Sweeps are synchronous and short; a failing sweep is logged and retried
    on its next tick.
    """

    def __init__(self) -> None:
        self._jobs: list[SweepJob] = []
        self._tasks: dict[str, asyncio.Task] = {}
        self._running = False

    def register(self, name: str, sweep: Callable[[], int], interval_seconds: float) -> None:
        if interval_seconds <= 0:
            raise ValueError(f"interval must be positive, got {interval_seconds}")
        self._jobs.append(SweepJob(name=name, interval_seconds=interval_seconds, sweep=sweep))
        if self._running:
            self._arm(self._jobs[-1])

    @property
    def jobs(self) -> list[SweepJob]:
        return list(self._jobs)

    @property
    def running(self) -> bool:
        return self._running

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start every sweep loop; requires a running event loop."""
        if self._running:
            return
        self._running = True
        for job in self._jobs:
            self._arm(job)
        logger.info(f"Maintenance started with {len(self._jobs)} sweeps")

    async def stop(self) -> None:
        """Cancel every sweep loop and wait for them to finish."""
        self._running = False
        tasks = list(self._tasks.values())
        self._tasks.clear()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("Maintenance stopped")

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def _arm(self, job: SweepJob) -> None:
        async def loop() -> None:
            while self._running:
                await asyncio.sleep(job.interval_seconds)
                if self._running:
                    self.run_once(job)

        self._tasks[job.name] = asyncio.create_task(loop(), name=f"sweep:{job.name}")

    @staticmethod
    def run_once(job: SweepJob) -> int:
        try:
            removed = job.sweep()
        except Exception as e:
            logger.error(f"Sweep '{job.name}' failed: {e}")
            return 0
        if removed:
            logger.debug(f"Sweep '{job.name}' removed {removed} entries")
        return removed
