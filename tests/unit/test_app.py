"""
Unit Tests for the FastAPI Application

The real registry is swapped for one holding stub exchanges, so no request
leaves the process.

Run with:
    pytest tests/unit/test_app.py -v
"""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app.main import app
from core.errors import RemoteError, SymbolNotFoundError
from core.exchange_interface import ExchangeInterface
from core.exchange_registry import ExchangeRegistry
from core.schemas import SymbolPrice


class StubExchange(ExchangeInterface):
    name = "stub"

    async def get_symbol_price(self, symbol: str) -> SymbolPrice:
        if symbol.upper() == "MISSING":
            raise SymbolNotFoundError(self.name, symbol)
        if symbol.upper() == "BROKEN":
            raise RemoteError("Service unavailable")
        return SymbolPrice(
            symbol=symbol,
            price="100.0",
            updated_at=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
            source=self.name,
            percent_change_1h=None,
            percent_change_24h=5.0
        )


class FailingExchange(StubExchange):
    name = "failing"

    async def get_symbol_price(self, symbol: str) -> SymbolPrice:
        raise RemoteError("Maintenance")


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        registry = ExchangeRegistry()
        registry.register("stub", StubExchange)
        registry.register("failing", FailingExchange)
        app.state.registry = registry
        yield test_client


class TestSystemEndpoints:
    """Tests for /, /health and /exchanges"""

    def test_root_lists_exchanges(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["exchanges"] == ["failing", "stub"]

    def test_health(self, client):
        response = client.get("/health")
        assert response.json() == {"status": "healthy", "exchanges": 2}

    def test_list_exchanges(self, client):
        assert client.get("/exchanges").json() == {"exchanges": ["failing", "stub"]}


class TestPriceEndpoints:
    """Tests for the price routes"""

    def test_get_symbol_price(self, client):
        response = client.get("/stub/price/btc_usdt")

        assert response.status_code == 200
        body = response.json()
        assert body["symbol"] == "btc_usdt"
        assert body["price"] == "100.0"
        assert body["source"] == "stub"
        assert body["percent_change_1h"] is None
        assert body["percent_change_24h"] == 5.0

    def test_unknown_exchange_is_404(self, client):
        response = client.get("/kraken/price/BTC_USDT")
        assert response.status_code == 404
        assert "not supported" in response.json()["detail"]

    def test_unknown_symbol_is_404(self, client):
        response = client.get("/stub/price/MISSING")
        assert response.status_code == 404

    def test_remote_error_is_502(self, client):
        response = client.get("/stub/price/BROKEN")
        assert response.status_code == 502
        assert "Service unavailable" in response.json()["detail"]

    def test_multi_price_reports_failures_per_exchange(self, client):
        response = client.get("/multi/price/BTC_USDT")

        assert response.status_code == 200
        body = response.json()
        assert body["symbol"] == "BTC_USDT"
        assert body["prices"]["stub"]["price"] == "100.0"
        assert body["errors"] == {"failing": "Maintenance"}
