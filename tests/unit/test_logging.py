"""
Unit Tests for Logging Configuration

These tests verify that:
- Module loggers are children of the "pricewatch" logger
- set_log_level changes the level at runtime
- API request/response helpers log at DEBUG

Run with:
    pytest tests/unit/test_logging.py -v
"""

import logging

import pytest

from core.logging import (
    LOGGER_NAME,
    get_logger,
    log_api_request,
    log_api_response,
    logger,
    set_log_level,
)


@pytest.fixture
def restore_levels():
    """Put the application and root logger levels back after a test"""
    root = logging.getLogger()
    saved = (logger.level, root.level)
    yield
    logger.setLevel(saved[0])
    root.setLevel(saved[1])


class TestGetLogger:

    def test_child_of_application_logger(self):
        log = get_logger("exchanges.poloniex.api_client")
        assert log.name == f"{LOGGER_NAME}.exchanges.poloniex.api_client"


class TestSetLogLevel:

    def test_changes_application_and_root_level(self, restore_levels):
        set_log_level("debug")

        assert logger.level == logging.DEBUG
        assert logging.getLogger().level == logging.DEBUG

        set_log_level("ERROR")

        assert logger.level == logging.ERROR
        assert not get_logger("core.decoder").isEnabledFor(logging.WARNING)

    def test_unknown_level_falls_back_to_info(self, restore_levels):
        set_log_level("LOUD")
        assert logger.level == logging.INFO


class TestApiLogHelpers:

    def test_request_and_response_logged_at_debug(self, restore_levels, caplog):
        set_log_level("DEBUG")

        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            log_api_request("poloniex.com", "/public", {"command": "returnTicker"})
            log_api_response("poloniex.com", "/public", 200, 0.25)

        messages = [r.getMessage() for r in caplog.records]
        assert "API Request: poloniex.com /public | Params: {'command': 'returnTicker'}" in messages
        assert "API Response: poloniex.com /public | Status: 200 | Time: 0.250s" in messages
