"""
Binance Spot REST API Client

Public market data from Binance spot.

API Documentation:
    https://binance-docs.github.io/apidocs/spot/en/

Endpoints Used:
    GET /api/v3/ticker/24hr
        [{"symbol": "BTCUSDT", "lastPrice": "100.0", "priceChangePercent": "5.000", ...}, ...]

    GET /api/v3/klines?symbol=BTCUSDT&interval=5m&startTime=..&endTime=..
        [
          [
            1499040000000,      // Open time (ms)
            "0.01634000",       // Open
            "0.80000000",       // High
            ...
          ]
        ]

    Errors come back as {"code": -1121, "msg": "Invalid symbol."}.

Notes:
    - priceChangePercent is already a percentage; it is divided by 100 so
      Ticker.percent_change stays a fraction like every other exchange.
    - The unfiltered ticker table costs 80 request-weight units (limit 6000/min).
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, List

from pydantic import BaseModel, Field, ValidationError

from core.decoder import BinanceErrorEnvelope, decode_response
from core.errors import MalformedResponseError, SymbolNotFoundError
from core.http_client import HTTPRequester
from core.logging import get_logger
from core.lookup import KLINE_WINDOW_SECONDS, earliest_kline, lookup_symbol
from core.schemas import Kline, Ticker
from core.utils.time import datetime_to_timestamp, to_utc_datetime


class BinanceTicker(BaseModel):
    """One entry of /api/v3/ticker/24hr."""

    symbol: str
    last_price: Decimal = Field(..., alias="lastPrice")
    price_change_percent: Decimal = Field(..., alias="priceChangePercent")

    def to_ticker(self) -> Ticker:
        return Ticker(last=self.last_price, percent_change=self.price_change_percent / 100)


class BinanceAPIClient:
    """
    Binance spot public API client.

    Attributes:
        BASE_URL: Binance spot API base URL
        INTERVALS: Candle widths in seconds mapped to Binance interval names
        requester: Shared HTTP requester
    """

    BASE_URL = "https://api.binance.com"

    INTERVALS = {
        60: "1m",
        180: "3m",
        300: "5m",
        900: "15m",
        1800: "30m",
        3600: "1h",
    }

    def __init__(self, requester: HTTPRequester):
        self.requester = requester
        self.logger = get_logger(__name__)

    async def get_ticker(self, symbol: str) -> Ticker:
        """
        Fetch the current ticker for one symbol from the full 24h ticker table.

        Raises:
            SymbolNotFoundError: If the symbol is not listed
        """
        raw = await self.requester.get(self.BASE_URL, "/api/v3/ticker/24hr")
        tickers = decode_response(raw, List[BinanceTicker], BinanceErrorEnvelope)

        entry = lookup_symbol(symbol, {t.symbol: t for t in tickers})
        if entry is None:
            raise SymbolNotFoundError("binance", symbol)
        return entry.to_ticker()

    async def get_kline_open_price(self, symbol: str, start: datetime, bucket_seconds: int) -> Decimal:
        """
        Open price of the first candle in [start, start + 30 min].

        Raises:
            ValueError: If bucket_seconds has no Binance interval
            NoDataError: If the window contains no candles
        """
        interval = self.INTERVALS.get(bucket_seconds)
        if interval is None:
            raise ValueError(
                f"Unsupported Binance bucket {bucket_seconds}s. "
                f"Must be one of: {sorted(self.INTERVALS)}"
            )

        end = start + timedelta(seconds=KLINE_WINDOW_SECONDS)
        start_ms = datetime_to_timestamp(start, milliseconds=True)
        end_ms = datetime_to_timestamp(end, milliseconds=True)

        raw = await self.requester.get(self.BASE_URL, "/api/v3/klines", {
            "symbol": symbol.upper(),
            "interval": interval,
            "startTime": str(start_ms),
            "endTime": str(end_ms),
        })
        rows = decode_response(raw, List[List[Any]], BinanceErrorEnvelope)

        try:
            klines = [Kline(date=int(row[0]) // 1000, open=row[1]) for row in rows]
        except (IndexError, TypeError, ValueError, ValidationError) as e:
            raise MalformedResponseError(f"Unexpected Binance kline row: {e}") from e

        first = earliest_kline(klines, "binance", symbol, start_ms, end_ms)

        self.logger.debug(
            f"binance - Kline for {start.isoformat()} uses open price at "
            f"{to_utc_datetime(first.date).isoformat()}"
        )
        return first.open
