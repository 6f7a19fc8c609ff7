"""
Binance Exchange Connector

Implements ExchangeInterface for Binance spot markets.

Endpoints Used:
    - GET /api/v3/ticker/24hr - Full 24h ticker table
    - GET /api/v3/klines      - Candle for the 1 hour ago price

Symbols are concatenated pairs, e.g. "BTCUSDT".
"""

from core.exchange_interface import MarketDataExchange
from .api_client import BinanceAPIClient


class BinanceExchange(MarketDataExchange):
    """Binance spot client."""

    name = "binance"
    client_class = BinanceAPIClient


def register(registry) -> None:
    """Register the Binance client factory."""
    registry.register(BinanceExchange.name, BinanceExchange)
