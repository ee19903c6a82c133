"""In-memory TTL cache for scraped market data."""

import logging
import threading
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from portfolio_monitor.core.timezone import now_market
from portfolio_monitor.domain.models import CacheEntry
from portfolio_monitor.domain.views import CacheEntryStats, CacheStats

logger = logging.getLogger(__name__)


class TtlCacheStore:
    """
    Key -> (value, expiry, last write) map with two read modes.

    Strict reads honor expiry and evict expired entries on the way out.
    Stale reads ignore expiry and never evict, so the read path can always
    answer with the last known value.

    The store also holds the refresh exclusion flag so that cache stats can
    report whether a refresh cycle currently owns it.
    """

    def __init__(self, clock: Callable[[], datetime] = now_market):
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._refresh_lock = threading.Lock()

    def put(self, key: str, value: Any, ttl_seconds: float) -> None:
        """Overwrite `key` unconditionally; expiry is now + ttl."""
        now = self._clock()
        previous = self._entries.get(key)
        if previous is not None and previous.updated_at > now:
            # Clock stepped backwards; keep last-write time non-decreasing
            now = previous.updated_at
        self._entries[key] = CacheEntry(
            value=value,
            expires_at=now + timedelta(seconds=ttl_seconds),
            updated_at=now,
        )

    def get_strict(self, key: str) -> Optional[Any]:
        """Return the value if present and unexpired; evict it if expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            # Only drop the entry we inspected, not a concurrent overwrite
            if self._entries.get(key) is entry:
                self._entries.pop(key, None)
                logger.debug("Evicted expired cache entry %s", key)
            return None
        return entry.value

    def get_stale(self, key: str) -> Optional[Any]:
        """Return the last written value regardless of expiry."""
        entry = self._entries.get(key)
        return entry.value if entry is not None else None

    def get_stale_entry(self, key: str) -> Optional[CacheEntry]:
        """Return the full entry regardless of expiry (value plus timestamps)."""
        return self._entries.get(key)

    # Refresh exclusion flag
    def try_lock_refresh(self) -> bool:
        """Take the refresh flag without waiting; False if already held."""
        return self._refresh_lock.acquire(blocking=False)

    def unlock_refresh(self) -> None:
        self._refresh_lock.release()

    def is_refresh_locked(self) -> bool:
        return self._refresh_lock.locked()

    def stats(self) -> CacheStats:
        """Snapshot of entry timestamps for monitoring. Never evicts."""
        now = self._clock()
        entries = list(self._entries.items())
        return CacheStats(
            total_entries=len(entries),
            refresh_locked=self.is_refresh_locked(),
            entries=[
                CacheEntryStats(
                    key=key,
                    expired=entry.is_expired(now),
                    updated_at=entry.updated_at,
                    expires_at=entry.expires_at,
                )
                for key, entry in entries
            ],
        )

    def __len__(self) -> int:
        return len(self._entries)
