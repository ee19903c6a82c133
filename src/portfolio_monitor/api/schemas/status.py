"""Pydantic schemas for monitoring endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class RefreshStatusResponse(BaseModel):
    is_running: bool
    last_run_at: Optional[datetime] = None
    next_run_at: Optional[datetime] = None
    last_error: Optional[str] = None


class RefreshStatusEnvelope(BaseModel):
    success: bool = True
    data: RefreshStatusResponse


class CacheEntryResponse(BaseModel):
    key: str
    expired: bool
    updated_at: datetime
    expires_at: datetime


class CacheStatsResponse(BaseModel):
    total_entries: int
    refresh_locked: bool
    entries: list[CacheEntryResponse]


class CacheStatsEnvelope(BaseModel):
    success: bool = True
    data: CacheStatsResponse


class HealthResponse(BaseModel):
    success: bool = True
    message: str
    timestamp: datetime


class ErrorResponse(BaseModel):
    """Body returned for application errors."""

    success: bool = False
    error: str
    message: str
