"""Symbol formatting for the Yahoo and Google Finance quote endpoints."""

# BSE scrip codes that have an NSE listing under a text symbol
BSE_TO_NSE_MAP: dict[str, str] = {
    "532174": "ICICIBANK",
    "544252": "BAJAJHFL",
    "542651": "KPITTECH",
    "544028": "TATATECH",
    "544107": "BLSE",
    "532790": "TANLA",
    "532540": "TATACONSUM",
    "500331": "PIDILITIND",
    "500400": "TATAPOWER",
    "542323": "KPIGREEN",
    "532667": "SUZLON",
    "542851": "GENSOL",
    "543517": "HARIOMPIPE",
    "542652": "POLYCAB",
    "543318": "CLEANSCIENCE",
    "506401": "DEEPAKNTR",
    "541557": "FINEORG",
    "533282": "GRAVITA",
    "540719": "SBILIFE",
    "500209": "INFY",
    "543237": "HAPPSTMNDS",
    "543272": "EASEMYTRIP",
    "511577": "STEL",
}

_YAHOO_SUFFIX = {"NSE": ".NS", "BSE": ".BO"}
_GOOGLE_EXCHANGE = {"NSE": "NSE", "BSE": "BOM"}


def to_yahoo_symbol(symbol: str, exchange: str = "NSE") -> str:
    """
    Return the Yahoo Finance ticker for a portfolio symbol.

    Symbols that already carry a suffix are returned as-is. Known BSE codes
    are mapped to their NSE symbol; other numeric codes stay on BSE.
    """
    symbol = symbol.strip().upper()
    if "." in symbol:
        return symbol
    if symbol in BSE_TO_NSE_MAP:
        return f"{BSE_TO_NSE_MAP[symbol]}.NS"
    if symbol.isdigit():
        return f"{symbol}.BO"
    return f"{symbol}{_YAHOO_SUFFIX.get(exchange.upper(), '.NS')}"


def to_google_quote_id(symbol: str, exchange: str = "NSE") -> str:
    """Return the ``SYMBOL:EXCHANGE`` id used in Google Finance quote URLs."""
    symbol = symbol.strip().upper()
    if symbol in BSE_TO_NSE_MAP:
        return f"{BSE_TO_NSE_MAP[symbol]}:NSE"
    if symbol.isdigit():
        return f"{symbol}:BOM"
    return f"{symbol}:{_GOOGLE_EXCHANGE.get(exchange.upper(), exchange.upper())}"
