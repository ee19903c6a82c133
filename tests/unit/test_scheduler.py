"""
Unit tests for RefreshScheduler.

These run a real background scheduler. Most use a long interval so only the
immediate first tick fires; the overlap test uses a short one.
"""

import threading
import time

import pytest

from portfolio_monitor.services import RefreshScheduler
from portfolio_monitor.services.scheduler import REFRESH_JOB_ID

from tests.conftest import BlockingMarketProvider


def wait_for(predicate, timeout: float = 5.0) -> bool:
    """Poll `predicate` until it is true or `timeout` seconds pass."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture
def fired() -> threading.Event:
    return threading.Event()


@pytest.fixture
def scheduler(fired):
    scheduler = RefreshScheduler(job=fired.set, interval_seconds=3600)
    yield scheduler
    scheduler.stop()


class TestRefreshScheduler:
    """Tests for starting and stopping the scheduler."""

    def test_not_running_before_start(self, scheduler: RefreshScheduler):
        assert scheduler.running is False

    def test_first_tick_fires_immediately(self, scheduler: RefreshScheduler, fired):
        """
        GIVEN a scheduler with a one hour interval
        WHEN it is started
        THEN the job runs right away and the next tick stays scheduled
        """
        scheduler.start()

        assert fired.wait(timeout=5)
        assert scheduler.running is True
        job = scheduler._scheduler.get_job(REFRESH_JOB_ID)
        assert job is not None
        assert job.next_run_time is not None

    def test_start_twice_keeps_single_job(self, scheduler: RefreshScheduler):
        scheduler.start()
        first = scheduler._scheduler

        scheduler.start()

        assert scheduler._scheduler is first
        assert [job.id for job in first.get_jobs()] == [REFRESH_JOB_ID]

    def test_stop(self, scheduler: RefreshScheduler, fired):
        scheduler.start()
        fired.wait(timeout=5)

        scheduler.stop()

        assert scheduler.running is False

    def test_stop_when_not_started_is_noop(self, scheduler: RefreshScheduler):
        scheduler.stop()

        assert scheduler.running is False


class TestOverlappingTicks:
    """Tests for ticks that arrive while a cycle is still running."""

    def test_tick_during_running_cycle_is_skipped(self, coordinator_factory, cache_store):
        """
        GIVEN a cycle blocked inside its first price request
        WHEN the next tick fires
        THEN the tick runs without waiting, is turned away, and status is unchanged
        """
        provider = BlockingMarketProvider()
        coordinator = coordinator_factory(price_fetcher=provider, ratio_fetcher=provider)
        results: list[bool] = []
        scheduler = RefreshScheduler(
            job=lambda: results.append(coordinator.try_run_cycle()),
            interval_seconds=0.2,
        )

        scheduler.start()
        try:
            assert provider.started.wait(timeout=5)
            status_before = coordinator.get_status()

            assert wait_for(lambda: False in results)

            status_after = coordinator.get_status()
            assert status_after == status_before
            assert status_after.is_running is True
            assert status_after.next_run_at is None
            assert cache_store.is_refresh_locked() is True
        finally:
            scheduler.stop()
            provider.release.set()

        assert wait_for(lambda: True in results)
        assert cache_store.is_refresh_locked() is False
