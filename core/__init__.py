"""
Core Package

Contains the exchange-agnostic core logic including:
- ExchangeInterface: Abstract base class every exchange client implements
- ExchangeRegistry: Name -> factory registry for exchange clients
- HTTPRequester: Shared aiohttp-based GET client
- decode_response: Error-envelope-aware response decoding
- aggregate_symbol_price: Ticker + 1h-ago kline -> SymbolPrice
- Schemas: Pydantic models (Ticker, Kline, SymbolPrice)
"""
