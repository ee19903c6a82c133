"""Cache statistics for monitoring."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class CacheEntryStats:
    key: str
    expired: bool
    updated_at: datetime
    expires_at: datetime


@dataclass
class CacheStats:
    total_entries: int
    refresh_locked: bool
    entries: list[CacheEntryStats] = field(default_factory=list)
