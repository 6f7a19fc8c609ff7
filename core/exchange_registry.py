"""
Exchange Registry - Name to Factory Mapping

The ExchangeRegistry maps exchange names to factories that build clients
bound to a shared HTTPRequester. It is an explicit object: build one at
startup (exchanges.build_registry() registers every built-in exchange) and
pass it to whatever needs to resolve exchanges. There is no global instance.

Architecture Pattern:
    Registry/Factory:
    - each exchange package exposes register(registry)
    - callers request clients by name
    - the registry returns a fresh client implementing ExchangeInterface

Duplicate Policy:
    - same name, same factory   -> no-op (registration is idempotent)
    - same name, other factory  -> DuplicateExchangeError
    - same name, replace=True   -> last registration wins, logged as a warning

Example Usage:
    registry = ExchangeRegistry()
    registry.register("poloniex", PoloniexExchange)

    async with HTTPRequester() as requester:
        client = registry.create("poloniex", requester)
        price = await client.get_symbol_price("BTC_USDT")
"""

from typing import Callable, Dict, List

from core.errors import DuplicateExchangeError, ExchangeNotFoundError
from core.exchange_interface import ExchangeInterface
from core.http_client import HTTPRequester
from core.logging import logger


ExchangeFactory = Callable[..., ExchangeInterface]


class ExchangeRegistry:
    """
    Registry of exchange client factories.

    Attributes:
        factories: Dictionary mapping lowercase exchange names to factories
                  Example: {"poloniex": PoloniexExchange, "binance": BinanceExchange}

    Example:
        >>> registry = ExchangeRegistry()
        >>> registry.register("poloniex", PoloniexExchange)
        >>> registry.list_exchanges()
        ['poloniex']
        >>> client = registry.create("Poloniex", requester)
    """

    def __init__(self):
        self.factories: Dict[str, ExchangeFactory] = {}

    @staticmethod
    def _key(name: str) -> str:
        return name.strip().lower()

    # ============================================
    # Registration
    # ============================================

    def register(self, name: str, factory: ExchangeFactory, replace: bool = False) -> None:
        """
        Register a factory under an exchange name.

        Args:
            name: Exchange name (case-insensitive)
            factory: Callable (requester, **kwargs) -> ExchangeInterface
            replace: Overwrite an existing, different factory instead of failing

        Raises:
            ValueError: If name is empty
            DuplicateExchangeError: If name is taken by another factory and
                                    replace is False
        """
        key = self._key(name)
        if not key:
            raise ValueError("Exchange name must not be empty")

        existing = self.factories.get(key)
        if existing is factory:
            logger.debug(f"Exchange '{key}' already registered with the same factory")
            return

        if existing is not None:
            if not replace:
                raise DuplicateExchangeError(key)
            logger.warning(f"Replacing factory for exchange '{key}'")

        self.factories[key] = factory
        logger.debug(f"Registered exchange: {key}")

    def unregister(self, name: str) -> None:
        """
        Remove an exchange from the registry.

        Raises:
            ExchangeNotFoundError: If the exchange is not registered
        """
        key = self._key(name)
        if key not in self.factories:
            raise ExchangeNotFoundError(key, self.list_exchanges())
        del self.factories[key]
        logger.debug(f"Unregistered exchange: {key}")

    # ============================================
    # Lookup
    # ============================================

    def create(self, name: str, requester: HTTPRequester, **kwargs) -> ExchangeInterface:
        """
        Build a client for the named exchange.

        Args:
            name: Exchange name (case-insensitive)
            requester: Shared HTTP requester the client will use
            **kwargs: Passed to the factory (e.g., api_key, secret_key)

        Returns:
            ExchangeInterface: A new client instance

        Raises:
            ExchangeNotFoundError: If the exchange is not registered
        """
        key = self._key(name)
        factory = self.factories.get(key)
        if factory is None:
            available = self.list_exchanges()
            logger.warning(f"Exchange '{key}' not found. Available: {', '.join(available)}")
            raise ExchangeNotFoundError(key, available)

        return factory(requester, **kwargs)

    def has_exchange(self, name: str) -> bool:
        """Check if an exchange is registered (case-insensitive)."""
        return self._key(name) in self.factories

    def list_exchanges(self) -> List[str]:
        """Registered exchange names, sorted."""
        return sorted(self.factories)

    # ============================================
    # Utility Methods
    # ============================================

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has_exchange(name)

    def __len__(self) -> int:
        return len(self.factories)

    def __repr__(self) -> str:
        return f"<ExchangeRegistry(exchanges={self.list_exchanges()})>"
