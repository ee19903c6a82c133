"""Service layer - refresh, caching and snapshot orchestration."""

from portfolio_monitor.services.cache_store import TtlCacheStore
from portfolio_monitor.services.refresh_coordinator import RefreshCoordinator, RefreshSettings
from portfolio_monitor.services.scheduler import RefreshScheduler
from portfolio_monitor.services.snapshot_assembler import SnapshotAssembler

__all__ = [
    "TtlCacheStore",
    "RefreshCoordinator",
    "RefreshSettings",
    "RefreshScheduler",
    "SnapshotAssembler",
]
