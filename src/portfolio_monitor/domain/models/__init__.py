"""Domain models package."""

from portfolio_monitor.domain.models.holding import Holding, UNKNOWN_SECTOR
from portfolio_monitor.domain.models.cache import CacheEntry, CacheKind, cache_key
from portfolio_monitor.domain.models.status import RefreshStatus

__all__ = [
    "Holding",
    "UNKNOWN_SECTOR",
    "CacheEntry",
    "CacheKind",
    "cache_key",
    "RefreshStatus",
]
