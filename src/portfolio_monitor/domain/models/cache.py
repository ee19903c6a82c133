"""Cache entry model for market data."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class CacheKind(str, Enum):
    """Kind of market data stored under a cache key prefix."""

    CMP = "cmp"
    PE_RATIO = "pe_ratio"
    EARNINGS = "earnings"


def cache_key(kind: CacheKind, symbol: str) -> str:
    """Build the composite cache key, e.g. ``cmp:RELIANCE``."""
    return f"{kind.value}:{symbol}"


@dataclass(frozen=True)
class CacheEntry:
    """A cached value with its absolute expiry and last write time."""

    value: Any
    expires_at: datetime
    updated_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at
