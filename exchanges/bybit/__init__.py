"""
Bybit Exchange Connector

Implements ExchangeInterface for Bybit spot markets (v5 API).

Endpoints Used:
    - GET /v5/market/tickers?category=spot - Spot ticker table
    - GET /v5/market/kline?category=spot   - Candle for the 1 hour ago price
"""

from core.exchange_interface import MarketDataExchange
from .api_client import BybitAPIClient


class BybitExchange(MarketDataExchange):
    """Bybit spot client."""

    name = "bybit"
    client_class = BybitAPIClient


def register(registry) -> None:
    """Register the Bybit client factory."""
    registry.register(BybitExchange.name, BybitExchange)
