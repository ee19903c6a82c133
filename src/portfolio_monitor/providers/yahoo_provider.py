"""Current market price from Yahoo Finance via yfinance."""

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from portfolio_monitor.core.exceptions import FetchError
from portfolio_monitor.core.timezone import MARKET_TZ, now_market
from portfolio_monitor.domain.views import PriceQuote
from portfolio_monitor.providers.symbols import to_yahoo_symbol

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT_SECONDS = 10.0


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


def _extract_price(info: Any) -> Optional[Decimal]:
    """Pull the current price out of a yfinance info dict (currentPrice, then regularMarketPrice)."""
    if not isinstance(info, dict):
        return None
    price = info.get("currentPrice")
    if price is None:
        price = info.get("regularMarketPrice")
    if price is None:
        return None
    try:
        value = Decimal(str(price))
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite() or value <= 0:
        return None
    return value


def _extract_as_of(info: dict) -> datetime:
    market_time = info.get("regularMarketTime")
    if isinstance(market_time, (int, float)):
        return datetime.fromtimestamp(market_time, MARKET_TZ)
    return now_market()


def _fetch_info(yahoo_symbol: str) -> Any:
    yf = _get_yf()
    return yf.Ticker(yahoo_symbol).info


class YahooPriceFetcher:
    """
    Fetches one symbol's current price per call.

    Each yfinance call runs on its own worker thread and is abandoned after
    `timeout_seconds`. A hung request never delays the next one.
    """

    def __init__(
        self,
        default_exchange: str = "NSE",
        timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
    ):
        self._exchange = default_exchange
        self._timeout = timeout_seconds

    def fetch_price(self, symbol: str, exchange: Optional[str] = None) -> PriceQuote:
        yahoo_symbol = to_yahoo_symbol(symbol, exchange or self._exchange)
        logger.debug("Fetching price for %s (%s)", symbol, yahoo_symbol)

        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="yahoo-fetch")
        try:
            future = executor.submit(_fetch_info, yahoo_symbol)
            info = future.result(timeout=self._timeout)
        except FuturesTimeoutError:
            raise FetchError(symbol, f"timed out after {self._timeout:g}s")
        except Exception as e:
            raise FetchError(symbol, str(e) or type(e).__name__) from e
        finally:
            executor.shutdown(wait=False)

        price = _extract_price(info)
        if price is None:
            raise FetchError(symbol, "no price in response")
        try:
            as_of = _extract_as_of(info)
        except (ValueError, OverflowError, OSError) as e:
            raise FetchError(symbol, f"malformed response: {e}") from e

        return PriceQuote(symbol=symbol, price=price, as_of=as_of)

    def close(self) -> None:
        """Nothing to release; workers are created per call."""
