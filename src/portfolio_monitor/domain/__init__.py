"""Domain layer - pure business models with no external dependencies."""

from portfolio_monitor.domain.models import (
    CacheEntry,
    CacheKind,
    Holding,
    RefreshStatus,
    UNKNOWN_SECTOR,
)

__all__ = [
    "CacheEntry",
    "CacheKind",
    "Holding",
    "RefreshStatus",
    "UNKNOWN_SECTOR",
]
