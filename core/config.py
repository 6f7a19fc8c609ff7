"""
Configuration Management Module

This module handles loading, validating, and providing access to application configuration
from environment variables (.env file).

Uses Pydantic Settings for automatic validation and type conversion.

Key Features:
- Loads configuration from .env file
- Provides type-safe access to configuration values
- Optional per-exchange credentials (public market data does not need them)
- Converts comma-separated strings to lists (symbols, CORS origins)

Usage:
    from core.config import settings

    print(settings.request_timeout)
    print(settings.symbols_list)  # Returns a list of strings

Note:
    Exchange base URLs are fixed per exchange (see exchanges/<name>/api_client.py)
    and are intentionally not configurable here.
"""

from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """
    Application Settings

    Values are automatically loaded from environment variables or .env file.

    Attributes:
        log_level: Logging level for the "pricewatch" logger
        request_timeout: Per-request deadline for HTTP calls, in seconds
        kline_bucket_seconds: Candle width used for the 1h-ago lookup
        poloniex_api_key / poloniex_secret_key: Optional Poloniex credentials
        binance_api_key / binance_secret_key: Optional Binance credentials
        bybit_api_key / bybit_secret_key: Optional Bybit credentials
        default_symbols: Comma-separated symbols used by the HTTP surface
        app_host / app_port: FastAPI server binding
        cors_origins: Comma-separated list of allowed CORS origins
    """

    # ============================================
    # Logging & HTTP
    # ============================================

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    request_timeout: float = Field(
        default=10.0,
        description="HTTP request timeout in seconds"
    )

    kline_bucket_seconds: int = Field(
        default=300,
        description="Candle width (seconds) for the 1 hour ago price lookup"
    )

    # ============================================
    # Exchange Credentials (optional)
    # ============================================

    poloniex_api_key: str = Field(default="", description="Poloniex API key")
    poloniex_secret_key: str = Field(default="", description="Poloniex secret key")

    binance_api_key: str = Field(default="", description="Binance API key")
    binance_secret_key: str = Field(default="", description="Binance secret key")

    bybit_api_key: str = Field(default="", description="Bybit API key")
    bybit_secret_key: str = Field(default="", description="Bybit secret key")

    # ============================================
    # HTTP Surface
    # ============================================

    default_symbols: str = Field(
        default="BTC_USDT,ETH_USDT",
        description="Comma-separated list of symbols shown on the index route"
    )

    app_host: str = Field(default="0.0.0.0", description="FastAPI server host address")

    app_port: int = Field(default=8000, description="FastAPI server port")

    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed CORS origins"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False
    )

    @property
    def symbols_list(self) -> List[str]:
        """
        Convert comma-separated symbols string to a list.

        Example:
            >>> settings.symbols_list
            ['BTC_USDT', 'ETH_USDT']
        """
        return [s.strip() for s in self.default_symbols.split(",") if s.strip()]

    @property
    def cors_origins_list(self) -> List[str]:
        """Convert comma-separated CORS origins string to a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def credentials_for(self, exchange: str) -> dict:
        """
        Return the configured credentials for an exchange.

        Args:
            exchange: Exchange name (case-insensitive)

        Returns:
            Dict with "api_key" and "secret_key" (empty strings when unset)
        """
        prefix = exchange.lower()
        return {
            "api_key": getattr(self, f"{prefix}_api_key", ""),
            "secret_key": getattr(self, f"{prefix}_secret_key", ""),
        }


# ============================================
# Global Settings Instance
# ============================================

settings = Settings()


def validate_configuration(config: Settings = None) -> None:
    """
    Validate critical configuration settings on application startup.

    Raises:
        ValueError: If configuration is invalid
    """
    # logging.py imports config.py, so the logger can't be imported at module level
    from core.logging import logger

    config = config or settings

    if config.log_level.upper() not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid LOG_LEVEL: '{config.log_level}'. "
            f"Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if config.request_timeout <= 0:
        raise ValueError(f"REQUEST_TIMEOUT must be positive, got {config.request_timeout}")

    # The kline window is 30 minutes wide; a wider bucket may return nothing
    if not (60 <= config.kline_bucket_seconds <= 1800):
        raise ValueError(
            f"KLINE_BUCKET_SECONDS must be between 60 and 1800, got {config.kline_bucket_seconds}"
        )

    if not (1 <= config.app_port <= 65535):
        raise ValueError(f"Invalid port number: {config.app_port}. Must be between 1 and 65535")

    logger.info("Configuration validated successfully")
    logger.info(f"Request timeout: {config.request_timeout}s")
    logger.info(f"Kline bucket: {config.kline_bucket_seconds}s")
    logger.info(f"Log level: {config.log_level.upper()}")
