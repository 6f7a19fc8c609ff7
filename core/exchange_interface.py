"""
Exchange Interface - Abstract Contract for All Exchanges

Every exchange client (Poloniex, Binance, Bybit, ...) implements this class,
so callers can ask any of them for a price the same way:

    exchange = registry.create("poloniex", requester)
    price = await exchange.get_symbol_price("BTC_USDT")

    exchange = registry.create("binance", requester)
    price = await exchange.get_symbol_price("BTCUSDT")

Design Philosophy:
    "Program to an interface, not an implementation"

    The HTTP surface and any outer scheduler work with ExchangeInterface and
    the registry only. Adding an exchange means adding a package under
    exchanges/ and registering it; no caller changes.

Construction:
    Clients are built by a registry factory with the shared HTTPRequester
    and optional credentials. They keep no mutable state between calls.
"""

from abc import ABC, abstractmethod
from typing import Optional, Type

from core.config import settings
from core.http_client import HTTPRequester
from core.price_aggregator import aggregate_symbol_price
from core.schemas import SymbolPrice


class ExchangeInterface(ABC):
    """
    Abstract Base Class for Exchange Clients

    Class Attributes:
        name: Unique identifier for the exchange (lowercase, e.g., "poloniex")

    Abstract Methods:
        - get_symbol_price: Current price plus 1h and 24h percent change

    Example Implementation:
        >>> class DummyExchange(ExchangeInterface):
        ...     name = "dummy"
        ...
        ...     async def get_symbol_price(self, symbol):
        ...         return SymbolPrice(...)
    """

    name: str
    """Unique exchange identifier (lowercase). Example: "poloniex", "binance" """

    def __init__(
        self,
        requester: HTTPRequester,
        api_key: Optional[str] = None,
        secret_key: Optional[str] = None
    ):
        """
        Args:
            requester: Shared HTTP requester
            api_key: Optional API key, defaults to the configured one
            secret_key: Optional secret key, defaults to the configured one
        """
        credentials = settings.credentials_for(self.name)
        self.requester = requester
        self.api_key = api_key or credentials["api_key"] or ""
        self.secret_key = secret_key or credentials["secret_key"] or ""

    def get_name(self) -> str:
        """Exchange name, as used for registry lookups and SymbolPrice.source."""
        return self.name

    @abstractmethod
    async def get_symbol_price(self, symbol: str) -> SymbolPrice:
        """
        Fetch the current price of a symbol with its 1h and 24h percent change.

        Args:
            symbol: Exchange-local market identifier, any casing
                    (e.g., "BTC_USDT" on Poloniex, "BTCUSDT" on Binance)

        Returns:
            SymbolPrice: symbol echoes the caller's casing; percent_change_1h
                         is None when the 1h-ago price was unavailable

        Raises:
            SymbolNotFoundError: The market is not listed on this exchange
            TransportError / RemoteError / MalformedResponseError: The ticker
                request failed
        """
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name='{self.name}')>"


class MarketDataExchange(ExchangeInterface):
    """
    Exchange backed by a public REST client with get_ticker and
    get_kline_open_price.

    Subclasses set name and client_class; the price is assembled by
    aggregate_symbol_price using settings.kline_bucket_seconds.

    Example:
        >>> class PoloniexExchange(MarketDataExchange):
        ...     name = "poloniex"
        ...     client_class = PoloniexAPIClient
    """

    client_class: Type

    def __init__(
        self,
        requester: HTTPRequester,
        api_key: Optional[str] = None,
        secret_key: Optional[str] = None
    ):
        super().__init__(requester, api_key=api_key, secret_key=secret_key)
        self.client = self.client_class(requester)

    async def get_symbol_price(self, symbol: str) -> SymbolPrice:
        return await aggregate_symbol_price(
            self.name,
            symbol,
            self.client.get_ticker,
            self.client.get_kline_open_price,
            bucket_seconds=settings.kline_bucket_seconds
        )
