"""
Ticker and Kline Lookup Helpers

Shared by every exchange api_client:
- lookup_symbol: case-insensitive scan of a full ticker table
- earliest_kline: pick the first candle of a time window, refusing empty windows
"""

from typing import Iterable, Mapping, Optional, TypeVar

from core.errors import NoDataError
from core.schemas import Kline


T = TypeVar("T")

# Kline lookups request [start, start + KLINE_WINDOW_SECONDS]; wide enough to
# contain at least one candle of the smallest bucket, even on thin markets.
KLINE_WINDOW_SECONDS = 30 * 60


def lookup_symbol(symbol: str, tickers: Mapping[str, T]) -> Optional[T]:
    """
    Find a symbol's entry in a ticker table, ignoring case on both sides.

    Example:
        >>> lookup_symbol("btc_usdt", {"BTC_USDT": ticker})
        ticker
    """
    wanted = symbol.upper()
    for name, ticker in tickers.items():
        if name.upper() == wanted:
            return ticker
    return None


def earliest_kline(klines: Iterable[Kline], exchange: str, symbol: str, start: int, end: int) -> Kline:
    """
    Return the earliest candle of a window.

    Raises:
        NoDataError: If the window holds no candles. Zero is never substituted.
    """
    klines = list(klines)
    if not klines:
        raise NoDataError(exchange, symbol, start, end)
    return min(klines, key=lambda k: k.date)
