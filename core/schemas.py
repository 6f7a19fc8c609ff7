"""
Normalized Data Schemas

This module defines Pydantic models for the price data the client works with.

Models:
    - Ticker: Current market snapshot for one symbol (last price, 24h change)
    - Kline: One historical candle (only the open price is used)
    - SymbolPrice: The normalized record returned by get_symbol_price()

Ticker and Kline mirror the Poloniex wire format directly (so Poloniex
responses decode straight into them); other exchanges map their own wire
models onto these before handing them to the price aggregator.

Prices are kept as Decimal end to end and serialized as exact text in
SymbolPrice.price, so "100.0" from the exchange stays "100.0".
"""

import math
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator, ConfigDict


# ============================================
# Raw Market Data
# ============================================

class Ticker(BaseModel):
    """
    Current ticker for a single market.

    Attributes:
        last: Last traded price
        percent_change: 24h change as a fraction (0.05 == +5%)

    Example:
        >>> Ticker.model_validate({"last": "100.0", "percentChange": "0.05"})
        Ticker(last=Decimal('100.0'), percent_change=Decimal('0.05'))
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    last: Decimal = Field(..., description="Last traded price")

    percent_change: Decimal = Field(
        ...,
        alias="percentChange",
        description="24h price change as a fraction (multiply by 100 for percent)"
    )


class Kline(BaseModel):
    """
    Historical candle.

    Attributes:
        date: Bucket start time in unix seconds
        open: Opening price of the bucket
    """

    model_config = ConfigDict(frozen=True)

    date: int = Field(..., ge=0, description="Bucket start (unix seconds)")
    open: Decimal = Field(..., description="Opening price")


# ============================================
# Output Record
# ============================================

class SymbolPrice(BaseModel):
    """
    Normalized price record for one symbol on one exchange.

    Built fresh on every get_symbol_price() call and immutable afterwards.

    Attributes:
        symbol: Symbol exactly as the caller passed it (original casing)
        price: Last price as exact decimal text (never a binary float)
        updated_at: When the record was aggregated (not the exchange's trade time)
        source: Exchange name (lowercase)
        percent_change_1h: Percent change vs. the open one hour ago;
            None when the historical price was unavailable or zero
        percent_change_24h: Percent change over 24h as reported by the ticker

    Example:
        >>> SymbolPrice(
        ...     symbol="btc_usdt",
        ...     price="100.0",
        ...     updated_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        ...     source="poloniex",
        ...     percent_change_1h=25.0,
        ...     percent_change_24h=5.0,
        ... )
    """

    model_config = ConfigDict(frozen=True)

    symbol: str = Field(..., min_length=1, examples=["BTC_USDT", "btc_usdt", "ETHUSDT"])

    price: str = Field(..., description="Last price as exact decimal text", examples=["100.0"])

    updated_at: datetime = Field(..., description="Aggregation time in UTC")

    source: str = Field(..., description="Exchange name", examples=["poloniex", "binance"])

    percent_change_1h: Optional[float] = Field(
        default=None,
        description="1h percent change; null when unavailable"
    )

    percent_change_24h: float = Field(..., description="24h percent change")

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: str) -> str:
        """Ensure price is decimal text"""
        try:
            Decimal(v)
        except ArithmeticError:
            raise ValueError(f"price must be decimal text, got {v!r}")
        return v

    @field_validator("source")
    @classmethod
    def validate_source(cls, v: str) -> str:
        """Ensure source is lowercase"""
        return v.lower()

    @field_validator("percent_change_1h")
    @classmethod
    def validate_percent_change_1h(cls, v: Optional[float]) -> Optional[float]:
        """Non-finite values are reported as unavailable"""
        if v is not None and not math.isfinite(v):
            return None
        return v

    @property
    def has_percent_change_1h(self) -> bool:
        """True when the 1h change could be computed."""
        return self.percent_change_1h is not None
