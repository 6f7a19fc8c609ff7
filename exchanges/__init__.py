"""
Exchange Connectors Package

Each exchange has its own subpackage with:
- api_client.py: REST calls and wire models (ticker table, klines)
- __init__.py: the ExchangeInterface implementation and register(registry)

build_registry() returns a fresh ExchangeRegistry holding every built-in
exchange. Adding an exchange means adding a subpackage and listing its
register function below.
"""

from core.exchange_registry import ExchangeRegistry

from . import binance, bybit, poloniex


BUILTIN_EXCHANGES = (poloniex, binance, bybit)


def register_all(registry: ExchangeRegistry) -> ExchangeRegistry:
    """Register every built-in exchange on registry and return it."""
    for module in BUILTIN_EXCHANGES:
        module.register(registry)
    return registry


def build_registry() -> ExchangeRegistry:
    """
    Build a registry with all built-in exchanges.

    Example:
        >>> registry = build_registry()
        >>> registry.list_exchanges()
        ['binance', 'bybit', 'poloniex']
    """
    return register_all(ExchangeRegistry())
