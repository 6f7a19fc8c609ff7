"""
Poloniex Exchange Connector

Implements ExchangeInterface for Poloniex spot markets using the public
command API (returnTicker + returnChartData).

Symbols use Poloniex's QUOTE_BASE underscore form, e.g. "BTC_USDT".
Lookups are case-insensitive; SymbolPrice.symbol keeps the caller's casing.
"""

from core.exchange_interface import MarketDataExchange
from .api_client import PoloniexAPIClient


class PoloniexExchange(MarketDataExchange):
    """
    Poloniex Exchange Client

    Example:
        >>> async with HTTPRequester() as requester:
        ...     exchange = PoloniexExchange(requester)
        ...     price = await exchange.get_symbol_price("BTC_USDT")
        ...     print(price.price, price.percent_change_1h)
    """

    name = "poloniex"
    client_class = PoloniexAPIClient


def register(registry) -> None:
    """Register the Poloniex client factory."""
    registry.register(PoloniexExchange.name, PoloniexExchange)
