"""Rebuild the recipe store whenever documents in the vault change."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from .vault import Snapshot, diff_snapshots

if TYPE_CHECKING:
    from .service import NutritionService

logger = logging.getLogger(__name__)


class VaultWatcher:
    """Polls the vault on an interval and rebuilds on any change.

    Uses APScheduler for the polling job. Overlapping runs are coalesced
    so at most one rebuild is in flight.
    """

    def __init__(self, service: NutritionService, interval_seconds: float = 2.0) -> None:
        """Initialize the watcher.

        Args:
            service: NutritionService whose store is rebuilt.
            interval_seconds: Polling interval.

        Raises:
            ImportError: If apscheduler is not installed.
            ValueError: If the interval is not positive.
        """
        try:
            from apscheduler.schedulers.asyncio import AsyncIOScheduler
            from apscheduler.triggers.interval import IntervalTrigger
        except ImportError:
            raise ImportError(
                "apscheduler is required: pip install 'recipe-metrics[scheduler]'"
            )

        if interval_seconds <= 0:
            raise ValueError(f"invalid polling interval: {interval_seconds}")

        self._service = service
        self._interval = interval_seconds
        self._scheduler = AsyncIOScheduler()
        self._IntervalTrigger = IntervalTrigger
        self._snapshot: Snapshot = {}
        self._running = False

    def setup_jobs(self) -> None:
        """Register the polling job."""
        self._scheduler.add_job(
            self._job_check_vault,
            trigger=self._IntervalTrigger(seconds=self._interval),
            id="check_vault",
            name="vault change check",
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        logger.info("vault polling job registered: every %ss", self._interval)

    def start(self) -> None:
        """Load the store once, then start polling."""
        self.rebuild()
        self.setup_jobs()
        self._scheduler.start()
        self._running = True
        logger.info("watching %s", self._service.vault.root)

    def stop(self) -> None:
        if self._running:
            self._scheduler.shutdown(wait=False)
            self._running = False
            logger.info("watcher stopped")

    @property
    def running(self) -> bool:
        return self._running

    def get_jobs(self) -> list[dict]:
        """Return info about scheduled jobs."""
        jobs = []
        for job in self._scheduler.get_jobs():
            next_run = getattr(job, "next_run_time", None)
            jobs.append({
                "id": job.id,
                "name": job.name,
                "next_run": str(next_run) if next_run else None,
            })
        return jobs

    def rebuild(self) -> int:
        """Snapshot the vault and rebuild the store from it."""
        self._snapshot = self._service.vault.snapshot()
        return self._service.update_recipes()

    def check_for_changes(self) -> bool:
        """Rebuild if any document was created, modified, removed or renamed.

        Returns:
            True if a rebuild happened.
        """
        current = self._service.vault.snapshot()
        changes = diff_snapshots(self._snapshot, current)
        if not changes:
            return False

        logger.info(
            "vault changed (%d created, %d modified, %d removed)",
            len(changes.created),
            len(changes.modified),
            len(changes.removed),
        )
        self._snapshot = current
        count = self._service.update_recipes()
        logger.info("%d recipes after rebuild", count)
        return True

    async def _job_check_vault(self) -> None:
        try:
            await asyncio.to_thread(self.check_for_changes)
        except Exception:
            logger.exception("vault check failed")
