"""
Error Taxonomy

Every failure raised by the price client derives from PriceWatchError so
callers can catch the whole family in one place, while still being able to
tell the kinds apart:

    TransportError          - network/HTTP layer failure (timeouts, resets, DNS)
    RemoteError             - the exchange answered with an explicit error payload
    MalformedResponseError  - the body did not match the expected shape
    SymbolNotFoundError     - the market does not exist on this exchange
    NoDataError             - a historical window returned no samples
    ExchangeNotFoundError   - no exchange registered under the requested name
    DuplicateExchangeError  - an exchange name is already bound to another factory

Usage:
    from core.errors import SymbolNotFoundError

    try:
        price = await client.get_symbol_price("BTC_USDT")
    except SymbolNotFoundError:
        ...
"""

from typing import List, Optional


class PriceWatchError(Exception):
    """Base class for all price client errors."""


class TransportError(PriceWatchError):
    """The HTTP request itself failed (connection error, timeout)."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Request to {url} failed: {reason}")


class RemoteError(PriceWatchError):
    """The exchange returned an error envelope instead of data."""

    def __init__(self, message: str, code: Optional[int] = None):
        self.message = message
        self.code = code
        super().__init__(message)


class MalformedResponseError(PriceWatchError):
    """The response body could not be decoded into the expected shape."""


class SymbolNotFoundError(PriceWatchError):
    """The requested market is not listed in the exchange's ticker table."""

    def __init__(self, exchange: str, symbol: str):
        self.exchange = exchange
        self.symbol = symbol
        super().__init__(f"Symbol '{symbol}' not found on {exchange}")


class NoDataError(PriceWatchError):
    """A historical kline window contained no samples."""

    def __init__(self, exchange: str, symbol: str, start: int, end: int):
        self.exchange = exchange
        self.symbol = symbol
        self.start = start
        self.end = end
        super().__init__(
            f"No kline data for {symbol} on {exchange} between {start} and {end}"
        )


class ExchangeNotFoundError(PriceWatchError, ValueError):
    """No factory is registered under the requested exchange name."""

    def __init__(self, name: str, available: List[str]):
        self.name = name
        self.available = available
        super().__init__(
            f"Exchange '{name}' is not supported. "
            f"Available exchanges: {', '.join(available) or 'none'}"
        )


class DuplicateExchangeError(PriceWatchError, ValueError):
    """A different factory is already registered under this exchange name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Exchange '{name}' is already registered. "
            f"Pass replace=True to overwrite it."
        )
