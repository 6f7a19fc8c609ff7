"""
Bybit REST API Client

Public spot market data from the Bybit v5 API.

API Documentation:
    https://bybit-exchange.github.io/docs/v5/intro

Endpoints Used:
    GET /v5/market/tickers?category=spot
        {"retCode": 0, "retMsg": "OK",
         "result": {"category": "spot",
                    "list": [{"symbol": "BTCUSDT", "lastPrice": "100.0", "price24hPcnt": "0.05", ...}]}}

    GET /v5/market/kline?category=spot&symbol=BTCUSDT&interval=5&start=..&end=..
        {"retCode": 0, "retMsg": "OK",
         "result": {"symbol": "BTCUSDT", "category": "spot",
                    "list": [["1670608800000", "17071", "17073", "17027", "17055.5", "268611", "4582"], ...]}}

Notes:
    - Every response is wrapped in the retCode/retMsg envelope; retCode != 0 is an error
    - Kline rows are returned newest first
    - price24hPcnt is a fraction (0.05 == +5%)
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field, ValidationError

from core.decoder import BybitEnvelope, decode_response
from core.errors import MalformedResponseError, SymbolNotFoundError
from core.http_client import HTTPRequester
from core.logging import get_logger
from core.lookup import KLINE_WINDOW_SECONDS, earliest_kline, lookup_symbol
from core.schemas import Kline, Ticker
from core.utils.time import datetime_to_timestamp, to_utc_datetime


# ============================================
# Wire Models
# ============================================

class BybitTicker(BaseModel):
    symbol: str
    last_price: Decimal = Field(..., alias="lastPrice")
    price_24h_pcnt: Decimal = Field(..., alias="price24hPcnt")

    def to_ticker(self) -> Ticker:
        return Ticker(last=self.last_price, percent_change=self.price_24h_pcnt)


class BybitTickerResult(BaseModel):
    items: List[BybitTicker] = Field(..., alias="list")


class BybitTickersResponse(BaseModel):
    result: BybitTickerResult


class BybitKlineResult(BaseModel):
    items: List[List[str]] = Field(..., alias="list")


class BybitKlineResponse(BaseModel):
    result: BybitKlineResult


class BybitAPIClient:
    """
    Bybit v5 spot public API client.

    Attributes:
        BASE_URL: Bybit API base URL
        INTERVALS: Candle widths in seconds mapped to Bybit interval names
        requester: Shared HTTP requester
    """

    BASE_URL = "https://api.bybit.com"

    INTERVALS = {
        60: "1",
        180: "3",
        300: "5",
        900: "15",
        1800: "30",
        3600: "60",
    }

    def __init__(self, requester: HTTPRequester):
        self.requester = requester
        self.logger = get_logger(__name__)

    async def get_ticker(self, symbol: str) -> Ticker:
        """
        Fetch the current ticker for one symbol from the spot ticker table.

        Raises:
            SymbolNotFoundError: If the symbol is not listed
        """
        raw = await self.requester.get(self.BASE_URL, "/v5/market/tickers", {"category": "spot"})
        response = decode_response(raw, BybitTickersResponse, BybitEnvelope)

        entry = lookup_symbol(symbol, {t.symbol: t for t in response.result.items})
        if entry is None:
            raise SymbolNotFoundError("bybit", symbol)
        return entry.to_ticker()

    async def get_kline_open_price(self, symbol: str, start: datetime, bucket_seconds: int) -> Decimal:
        """
        Open price of the earliest candle in [start, start + 30 min].

        Raises:
            ValueError: If bucket_seconds has no Bybit interval
            NoDataError: If the window contains no candles
        """
        interval = self.INTERVALS.get(bucket_seconds)
        if interval is None:
            raise ValueError(
                f"Unsupported Bybit bucket {bucket_seconds}s. "
                f"Must be one of: {sorted(self.INTERVALS)}"
            )

        end = start + timedelta(seconds=KLINE_WINDOW_SECONDS)
        start_ms = datetime_to_timestamp(start, milliseconds=True)
        end_ms = datetime_to_timestamp(end, milliseconds=True)

        raw = await self.requester.get(self.BASE_URL, "/v5/market/kline", {
            "category": "spot",
            "symbol": symbol.upper(),
            "interval": interval,
            "start": str(start_ms),
            "end": str(end_ms),
        })
        response = decode_response(raw, BybitKlineResponse, BybitEnvelope)

        try:
            klines = [Kline(date=int(row[0]) // 1000, open=row[1]) for row in response.result.items]
        except (IndexError, ValueError, ValidationError) as e:
            raise MalformedResponseError(f"Unexpected Bybit kline row: {e}") from e

        # Rows arrive newest first; earliest_kline picks the oldest
        first = earliest_kline(klines, "bybit", symbol, start_ms, end_ms)

        self.logger.debug(
            f"bybit - Kline for {start.isoformat()} uses open price at "
            f"{to_utc_datetime(first.date).isoformat()}"
        )
        return first.open
