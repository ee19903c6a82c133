"""Timezone utilities for exchange-local market time."""

from datetime import datetime

import pytz

# Holdings trade on NSE/BSE by default
MARKET_TZ = pytz.timezone("Asia/Kolkata")


def now_market() -> datetime:
    """Return current time in the market timezone."""
    return datetime.now(MARKET_TZ)


def to_market(dt: datetime) -> datetime:
    """Convert a datetime to the market timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already market-local
        return MARKET_TZ.localize(dt)
    return dt.astimezone(MARKET_TZ)
