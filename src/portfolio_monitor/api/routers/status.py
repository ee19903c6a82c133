"""Monitoring endpoints: refresh status, cache stats, health."""

from fastapi import APIRouter, Depends

from portfolio_monitor.api.deps import get_cache_store, get_refresh_coordinator
from portfolio_monitor.api.schemas import (
    CacheEntryResponse,
    CacheStatsEnvelope,
    CacheStatsResponse,
    HealthResponse,
    RefreshStatusEnvelope,
    RefreshStatusResponse,
)
from portfolio_monitor.core.timezone import now_market
from portfolio_monitor.services import RefreshCoordinator, TtlCacheStore

router = APIRouter(prefix="/api", tags=["status"])


@router.get("/status/scraper", response_model=RefreshStatusEnvelope)
def get_scraper_status(
    coordinator: RefreshCoordinator = Depends(get_refresh_coordinator),
) -> RefreshStatusEnvelope:
    """Get refresh cycle status."""
    status = coordinator.get_status()
    return RefreshStatusEnvelope(
        data=RefreshStatusResponse(
            is_running=status.is_running,
            last_run_at=status.last_run_at,
            next_run_at=status.next_run_at,
            last_error=status.last_error,
        )
    )


@router.get("/status/cache", response_model=CacheStatsEnvelope)
def get_cache_stats(
    cache: TtlCacheStore = Depends(get_cache_store),
) -> CacheStatsEnvelope:
    """Get cache statistics. Does not evict expired entries."""
    stats = cache.stats()
    return CacheStatsEnvelope(
        data=CacheStatsResponse(
            total_entries=stats.total_entries,
            refresh_locked=stats.refresh_locked,
            entries=[
                CacheEntryResponse(
                    key=e.key,
                    expired=e.expired,
                    updated_at=e.updated_at,
                    expires_at=e.expires_at,
                )
                for e in stats.entries
            ],
        )
    )


@router.get("/health", response_model=HealthResponse)
def get_health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(message="Server is running", timestamp=now_market())
