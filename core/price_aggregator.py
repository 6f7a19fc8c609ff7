"""
Price Aggregator

Combines an exchange's current ticker with the candle open from one hour ago
into a SymbolPrice. Exchange clients only supply the two fetch coroutines;
the failure policy lives here so every exchange behaves the same way:

    ticker fetch fails    -> the whole call fails (error re-raised unchanged)
    1h-ago fetch fails    -> warning logged, percent_change_1h = None
    1h-ago open is zero   -> warning logged, percent_change_1h = None

Both fetches run concurrently; the kline window only depends on the call
time, not on the ticker.
"""

import asyncio
import math
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Awaitable, Callable, Optional

from core.logging import get_logger
from core.schemas import SymbolPrice, Ticker
from core.utils.time import current_utc_datetime


logger = get_logger(__name__)

ONE_HOUR = timedelta(hours=1)

TickerFetcher = Callable[[str], Awaitable[Ticker]]
OpenPriceFetcher = Callable[[str, datetime, int], Awaitable[Decimal]]


def percent_change(current: Decimal, previous: Optional[Decimal]) -> Optional[float]:
    """
    Percent change from previous to current.

    Returns None instead of dividing by zero or producing a non-finite value.

    Example:
        >>> percent_change(Decimal("100.0"), Decimal("80.0"))
        25.0
    """
    if previous is None or previous == 0:
        return None
    value = float((current - previous) / previous * 100)
    return value if math.isfinite(value) else None


def format_price(price: Decimal) -> str:
    """Decimal to plain (non-exponent) text: Decimal("1.2E-7") -> "0.00000012"."""
    return format(price, "f")


async def aggregate_symbol_price(
    source: str,
    symbol: str,
    fetch_ticker: TickerFetcher,
    fetch_open_price: OpenPriceFetcher,
    bucket_seconds: int = 300,
    now: Optional[datetime] = None
) -> SymbolPrice:
    """
    Build a SymbolPrice from a ticker lookup and a 1h-ago kline lookup.

    Args:
        source: Exchange name reported in SymbolPrice.source
        symbol: Symbol as passed by the caller (echoed back unchanged)
        fetch_ticker: Coroutine function returning the symbol's Ticker
        fetch_open_price: Coroutine function (symbol, start, bucket_seconds)
            returning the open price of the first candle at/after start
        bucket_seconds: Candle width for the historical lookup
        now: Reference time (defaults to the current UTC time)

    Returns:
        SymbolPrice

    Raises:
        Whatever fetch_ticker raised. Historical lookup failures never propagate
        (except cancellation).
    """
    reference = now or current_utc_datetime()
    one_hour_ago = reference - ONE_HOUR

    ticker_result, open_result = await asyncio.gather(
        fetch_ticker(symbol),
        fetch_open_price(symbol, one_hour_ago, bucket_seconds),
        return_exceptions=True
    )

    if isinstance(ticker_result, BaseException):
        raise ticker_result

    price_1h_ago: Optional[Decimal] = None
    if isinstance(open_result, BaseException):
        if not isinstance(open_result, Exception):
            raise open_result
        logger.warning(f"{source} - Failed to get price 1 hour ago for {symbol}, error: {open_result}")
    elif open_result == 0:
        logger.warning(f"{source} - Price 1 hour ago for {symbol} is zero, 1h change unavailable")
    else:
        price_1h_ago = open_result

    return SymbolPrice(
        symbol=symbol,
        price=format_price(ticker_result.last),
        updated_at=now or current_utc_datetime(),
        source=source,
        percent_change_1h=percent_change(ticker_result.last, price_1h_ago),
        percent_change_24h=float(ticker_result.percent_change * 100)
    )
