"""
Poloniex REST API Client

Public market data from the Poloniex legacy "public" command API.

API Documentation:
    https://poloniex.com/support/api/

Endpoints Used:
    GET /public?command=returnTicker
        {"BTC_USDT": {"last": "100.0", "percentChange": "0.05", ...}, ...}

    GET /public?command=returnChartData&currencyPair=BTC_USDT&start=..&end=..&period=300
        [{"date": 1704110400, "open": "80.0", ...}, ...]   (ascending by date)

    Errors come back as {"error": "..."}, usually with HTTP 200.

Supported chart periods (seconds): 300, 900, 1800, 7200, 14400, 86400.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, List

from core.decoder import ErrorEnvelope, decode_response
from core.errors import SymbolNotFoundError
from core.http_client import HTTPRequester
from core.logging import get_logger
from core.lookup import KLINE_WINDOW_SECONDS, earliest_kline, lookup_symbol
from core.schemas import Kline, Ticker
from core.utils.time import datetime_to_timestamp, to_utc_datetime


class PoloniexAPIClient:
    """
    Poloniex public API client.

    Attributes:
        BASE_URL: Poloniex API base URL
        PERIODS: Supported candle widths in seconds
        requester: Shared HTTP requester

    Example:
        >>> client = PoloniexAPIClient(requester)
        >>> ticker = await client.get_ticker("btc_usdt")
        >>> open_1h = await client.get_kline_open_price("BTC_USDT", one_hour_ago, 300)
    """

    BASE_URL = "https://poloniex.com/"
    PERIODS = (300, 900, 1800, 7200, 14400, 86400)

    def __init__(self, requester: HTTPRequester):
        self.requester = requester
        self.logger = get_logger(__name__)

    async def _get(self, params: Dict[str, str]) -> bytes:
        return await self.requester.get(self.BASE_URL, "public", params)

    async def get_tickers(self) -> Dict[str, Ticker]:
        """Fetch the full ticker table, keyed by currency pair."""
        raw = await self._get({"command": "returnTicker"})
        return decode_response(raw, Dict[str, Ticker], ErrorEnvelope)

    async def get_ticker(self, symbol: str) -> Ticker:
        """
        Fetch the current ticker for one currency pair.

        Raises:
            SymbolNotFoundError: If the pair is not in the ticker table
        """
        ticker = lookup_symbol(symbol, await self.get_tickers())
        if ticker is None:
            raise SymbolNotFoundError("poloniex", symbol)
        return ticker

    async def get_kline_open_price(self, symbol: str, start: datetime, period: int) -> Decimal:
        """
        Open price of the first candle in [start, start + 30 min].

        Args:
            symbol: Currency pair (e.g., "BTC_USDT")
            start: Window start
            period: Candle width in seconds (one of PERIODS)

        Raises:
            ValueError: If period is not supported by Poloniex
            NoDataError: If the window contains no candles
        """
        if period not in self.PERIODS:
            raise ValueError(f"Unsupported Poloniex period {period}. Must be one of: {self.PERIODS}")

        end = start + timedelta(seconds=KLINE_WINDOW_SECONDS)
        start_ts = datetime_to_timestamp(start)
        end_ts = datetime_to_timestamp(end)

        raw = await self._get({
            "command": "returnChartData",
            "currencyPair": symbol.upper(),
            "start": str(start_ts),
            "end": str(end_ts),
            "period": str(period),
        })
        klines = decode_response(raw, List[Kline], ErrorEnvelope)
        first = earliest_kline(klines, "poloniex", symbol, start_ts, end_ts)

        self.logger.debug(
            f"poloniex - Kline for {start.isoformat()} uses open price at "
            f"{to_utc_datetime(first.date).isoformat()}"
        )
        return first.open
