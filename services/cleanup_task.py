"""
Periodic cleanup of expired anti-spam state.

Owns an APScheduler background scheduler that runs every registered sweep
at a fixed interval. The application starts it on startup and stops it on
shutdown; tests call run_once() directly instead of waiting on the clock.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Callable, Dict, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)

Sweep = Callable[[], int]

JOB_ID = "antispam_cleanup_job"


class CleanupTask:
    def __init__(self, sweeps: Dict[str, Sweep], interval: timedelta) -> None:
        if interval <= timedelta(0):
            raise ValueError("interval must be positive")
        self.sweeps = dict(sweeps)
        self.interval = interval
        self._scheduler: Optional[BackgroundScheduler] = None

    @property
    def is_running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def run_once(self) -> Dict[str, int]:
        """Run every sweep now; returns the number of entries each one removed."""

        return {name: sweep() for name, sweep in self.sweeps.items()}

    def _run_scheduled(self) -> None:
        try:
            removed = self.run_once()
            logger.info("Scheduled anti-spam cleanup finished: %s", removed)
        except Exception:
            logger.exception("Error in scheduled anti-spam cleanup job")

    def start(self) -> None:
        if self.is_running:
            return

        scheduler = BackgroundScheduler(daemon=True)
        scheduler.add_job(
            func=self._run_scheduled,
            trigger=IntervalTrigger(seconds=self.interval.total_seconds()),
            id=JOB_ID,
            name="Remove expired rate limit records and challenges",
            replace_existing=True,
        )
        scheduler.start()
        self._scheduler = scheduler
        logger.info("Anti-spam cleanup scheduler started (every %s)", self.interval)

    def stop(self) -> None:
        if self._scheduler is None:
            return
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("Anti-spam cleanup scheduler stopped")


__all__ = ["CleanupTask"]
