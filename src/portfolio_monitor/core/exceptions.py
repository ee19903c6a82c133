"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class PortfolioNotReadyError(AppError):
    """Raised when a snapshot is requested but no holdings are loaded.

    Callers should retry later; this is not a fatal condition.
    """

    status_code = 503

    def __init__(self, message: str = "Portfolio data not loaded"):
        super().__init__(message, code="PORTFOLIO_NOT_READY")


class PortfolioLoadError(AppError):
    """Raised when the portfolio file cannot be read or parsed at all."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message, code="PORTFOLIO_LOAD_ERROR")


class FetchError(AppError):
    """Raised by a market-data fetcher when one symbol cannot be fetched."""

    status_code = 502

    def __init__(self, symbol: str, reason: str):
        self.symbol = symbol
        self.reason = reason
        super().__init__(f"Failed to fetch {symbol}: {reason}", code="FETCH_ERROR")
