"""
FastAPI Application - Multi-Exchange Spot Price API

On-demand HTTP access to the price client: each request resolves an exchange
from the registry and runs one get_symbol_price() call. There is no polling
loop here; callers decide how often to ask.

Supported Exchanges:
    - Poloniex
    - Binance (spot)
    - Bybit (spot)

Usage:
    uvicorn app.main:app --reload --host 0.0.0.0 --port 8000

Docs:
    - Swagger: http://localhost:8000/docs
    - ReDoc: http://localhost:8000/redoc
"""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from core.config import settings, validate_configuration
from core.errors import ExchangeNotFoundError, PriceWatchError, SymbolNotFoundError
from core.exchange_registry import ExchangeRegistry
from core.http_client import HTTPRequester
from core.logging import logger
from core.schemas import SymbolPrice
from exchanges import build_registry


# ============================================
# Lifespan Management
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the registry and the shared HTTP requester; close it on shutdown."""
    logger.info("=== Application Starting ===")
    validate_configuration()

    app.state.registry = build_registry()
    app.state.requester = HTTPRequester()
    await app.state.requester.open()
    logger.info(f"Exchanges: {', '.join(app.state.registry.list_exchanges())}")
    logger.info("=== Started Successfully ===")

    yield

    logger.info("=== Shutting Down ===")
    await app.state.requester.close()
    logger.info("=== Shutdown Complete ===")


# ============================================
# FastAPI Application
# ============================================

app = FastAPI(
    title="pricewatch Spot Price API",
    description=(
        "Spot price with 1h and 24h percent change from public exchange APIs.\n\n"
        "## REST Endpoints\n"
        "- `GET /{exchange}/price/{symbol}` - Price for one symbol on one exchange\n"
        "- `GET /multi/price/{symbol}` - Same symbol on every exchange\n"
        "- `GET /exchanges` - List supported exchanges\n"
        "- `GET /health` - Health check\n\n"
        "`percent_change_1h` is `null` when the price one hour ago could not be obtained."
    ),
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)


def _registry(request: Request) -> ExchangeRegistry:
    return request.app.state.registry


def _requester(request: Request) -> HTTPRequester:
    return request.app.state.requester


# ============================================
# System Endpoints
# ============================================

@app.get("/", tags=["System"])
async def root(request: Request):
    """API information and available exchanges."""
    return {
        "name": "pricewatch Spot Price API",
        "version": "1.0.0",
        "status": "operational",
        "docs": "/docs",
        "exchanges": _registry(request).list_exchanges(),
        "symbols": settings.symbols_list
    }


@app.get("/health", tags=["System"])
async def health_check(request: Request):
    """Liveness check; does not call any exchange."""
    return {
        "status": "healthy",
        "exchanges": len(_registry(request))
    }


@app.get("/exchanges", tags=["System"])
async def list_exchanges(request: Request):
    """List all registered exchanges."""
    return {"exchanges": _registry(request).list_exchanges()}


# ============================================
# Price Endpoints
# NOTE: '/multi/...' must be defined BEFORE the generic '/{exchange}/...' route
# ============================================

@app.get("/multi/price/{symbol}", tags=["Market Data"])
async def get_multi_price(symbol: str, request: Request):
    """
    Get the price of the same symbol on every exchange concurrently.

    Exchanges that fail are listed under "errors" instead of failing the request.
    """
    registry = _registry(request)
    requester = _requester(request)

    names = registry.list_exchanges()
    clients = [registry.create(name, requester) for name in names]
    results = await asyncio.gather(
        *(client.get_symbol_price(symbol) for client in clients),
        return_exceptions=True
    )

    prices = {}
    errors = {}
    for name, result in zip(names, results):
        if isinstance(result, Exception):
            logger.error(f"Multi price error for {name}/{symbol}: {result}")
            errors[name] = str(result)
        elif isinstance(result, BaseException):
            raise result
        else:
            prices[name] = result

    return {"symbol": symbol, "prices": prices, "errors": errors}


@app.get("/{exchange}/price/{symbol}", response_model=SymbolPrice, tags=["Market Data"])
async def get_symbol_price(exchange: str, symbol: str, request: Request):
    """
    Get the current price of a symbol with its 1h and 24h percent change.

    Examples:
        GET /poloniex/price/BTC_USDT
        GET /binance/price/btcusdt
    """
    try:
        client = _registry(request).create(exchange, _requester(request))
    except ExchangeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    try:
        return await client.get_symbol_price(symbol)
    except SymbolNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PriceWatchError as e:
        logger.error(f"Price error {exchange}/{symbol}: {e}")
        raise HTTPException(status_code=502, detail=f"Failed to fetch price: {str(e)}")
