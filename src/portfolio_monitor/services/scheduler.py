"""Periodic trigger for refresh cycles."""

import logging
from datetime import datetime
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from portfolio_monitor.core.timezone import MARKET_TZ, now_market

logger = logging.getLogger(__name__)

REFRESH_JOB_ID = "market_data_refresh"


class RefreshScheduler:
    """
    Fires `job` once at start, then every `interval_seconds` until stopped.

    Ticks run on the scheduler's worker threads and never wait for the
    previous run to finish. Missed ticks are coalesced rather than replayed.
    Overlapping runs are left to the job's own single-flight guard.
    """

    def __init__(
        self,
        job: Callable[[], object],
        interval_seconds: float,
        clock: Callable[[], datetime] = now_market,
    ):
        self._job = job
        self._interval_seconds = interval_seconds
        self._clock = clock
        self._scheduler: Optional[BackgroundScheduler] = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None

    def start(self) -> None:
        """Start the background scheduler. The first tick fires immediately."""
        if self._scheduler is not None:
            logger.warning("Scheduler already running")
            return

        self._scheduler = BackgroundScheduler(timezone=MARKET_TZ)
        self._scheduler.add_job(
            func=self._job,
            trigger=IntervalTrigger(seconds=self._interval_seconds, timezone=MARKET_TZ),
            id=REFRESH_JOB_ID,
            name="Market data refresh",
            next_run_time=self._clock(),
            # Let an overlapping tick reach the job so it can log the skip itself
            max_instances=2,
            coalesce=True,
            replace_existing=True,
        )
        self._scheduler.start()
        logger.info(
            "Scheduled market data refresh every %g minutes", self._interval_seconds / 60
        )

    def stop(self) -> None:
        """Stop the scheduler without waiting for a running cycle."""
        if self._scheduler is not None:
            self._scheduler.shutdown(wait=False)
            self._scheduler = None
            logger.info("Refresh scheduler stopped")
