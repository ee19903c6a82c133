"""Dependency injection for FastAPI."""

from fastapi import Depends, Request

from portfolio_monitor.app_context import AppContext
from portfolio_monitor.services import RefreshCoordinator, SnapshotAssembler, TtlCacheStore


def get_app_context(request: Request) -> AppContext:
    """Provide the process-wide AppContext built during startup."""
    return request.app.state.context


def get_snapshot_assembler(context: AppContext = Depends(get_app_context)) -> SnapshotAssembler:
    """Provide SnapshotAssembler instance."""
    return context.snapshots


def get_refresh_coordinator(context: AppContext = Depends(get_app_context)) -> RefreshCoordinator:
    """Provide RefreshCoordinator instance."""
    return context.coordinator


def get_cache_store(context: AppContext = Depends(get_app_context)) -> TtlCacheStore:
    """Provide TtlCacheStore instance."""
    return context.cache
