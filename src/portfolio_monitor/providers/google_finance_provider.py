"""
P/E ratio and earnings date scraped from Google Finance quote pages.

The page lays out key stats as label/value rows; the class names below are
the ones Google currently ships and are matched by substring.
"""

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from portfolio_monitor.core.exceptions import FetchError
from portfolio_monitor.domain.views import RatioAndEarnings
from portfolio_monitor.providers.symbols import to_google_quote_id

logger = logging.getLogger(__name__)

GOOGLE_FINANCE_QUOTE_URL = "https://www.google.com/finance/quote/{quote_id}"
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
DEFAULT_FETCH_TIMEOUT_SECONDS = 10.0

_ROW_SELECTOR = 'div[class*="gyFHrc"]'
_LABEL_SELECTOR = 'div[class*="mfs7Fc"]'
_VALUE_SELECTOR = 'div[class*="P6K39c"]'

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")


def _parse_ratio(text: str) -> Optional[Decimal]:
    match = _NUMBER_RE.search(text.replace(",", ""))
    if not match:
        return None
    try:
        return Decimal(match.group(0))
    except InvalidOperation:
        return None


def parse_quote_page(symbol: str, html: str) -> RatioAndEarnings:
    """Extract P/E ratio and earnings date from a quote page. Missing fields stay None."""
    soup = BeautifulSoup(html, "html.parser")
    pe_ratio: Optional[Decimal] = None
    latest_earnings: Optional[str] = None

    for row in soup.select(_ROW_SELECTOR):
        label_el = row.select_one(_LABEL_SELECTOR)
        value_el = row.select_one(_VALUE_SELECTOR)
        if label_el is None or value_el is None:
            continue
        label = label_el.get_text(strip=True)
        value = value_el.get_text(strip=True)

        if "P/E ratio" in label or "PE ratio" in label:
            pe_ratio = _parse_ratio(value)
        elif "earnings" in label.lower():
            latest_earnings = value or None

    return RatioAndEarnings(symbol=symbol, pe_ratio=pe_ratio, latest_earnings=latest_earnings)


class GoogleFinanceRatioFetcher:
    """Fetches and parses one quote page per call."""

    def __init__(
        self,
        default_exchange: str = "NSE",
        timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        client: Optional[httpx.Client] = None,
    ):
        self._exchange = default_exchange
        self._client = client or httpx.Client(
            timeout=timeout_seconds,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        )

    def fetch_ratio_and_earnings(
        self, symbol: str, exchange: Optional[str] = None
    ) -> RatioAndEarnings:
        quote_id = to_google_quote_id(symbol, exchange or self._exchange)
        url = GOOGLE_FINANCE_QUOTE_URL.format(quote_id=quote_id)
        logger.debug("Scraping P/E and earnings for %s from %s", symbol, url)
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(symbol, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise FetchError(symbol, str(e) or type(e).__name__) from e

        result = parse_quote_page(symbol, response.text)
        logger.debug("%s: P/E=%s, earnings=%s", symbol, result.pe_ratio, result.latest_earnings)
        return result

    def close(self) -> None:
        self._client.close()
