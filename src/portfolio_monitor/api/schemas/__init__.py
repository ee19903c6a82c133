"""Pydantic schemas for API request/response."""

from portfolio_monitor.api.schemas.portfolio import (
    HoldingResponse,
    SectorSummaryResponse,
    PortfolioSummaryResponse,
    PortfolioEnvelope,
)
from portfolio_monitor.api.schemas.status import (
    RefreshStatusResponse,
    RefreshStatusEnvelope,
    CacheEntryResponse,
    CacheStatsResponse,
    CacheStatsEnvelope,
    HealthResponse,
    ErrorResponse,
)

__all__ = [
    "HoldingResponse",
    "SectorSummaryResponse",
    "PortfolioSummaryResponse",
    "PortfolioEnvelope",
    "RefreshStatusResponse",
    "RefreshStatusEnvelope",
    "CacheEntryResponse",
    "CacheStatsResponse",
    "CacheStatsEnvelope",
    "HealthResponse",
    "ErrorResponse",
]
