"""
Unit Tests for the Response Decoder

These tests verify that decode_response:
- Turns a non-empty error envelope into RemoteError, whatever else the body holds
- Decodes clean bodies into the requested shape
- Reports invalid JSON and shape mismatches as MalformedResponseError
- Understands the Binance and Bybit envelopes

Run with:
    pytest tests/unit/test_decoder.py -v
"""

from decimal import Decimal
from typing import Any, Dict, List

import pytest

from core.decoder import (
    BinanceErrorEnvelope,
    BybitEnvelope,
    ErrorEnvelope,
    decode_response,
    probe_error,
)
from core.errors import MalformedResponseError, RemoteError
from core.schemas import Kline, Ticker


class TestErrorEnvelope:
    """Tests for the {"error": ...} probe"""

    def test_error_field_raises_remote_error(self):
        """Verify a bare error body raises RemoteError with the message"""
        with pytest.raises(RemoteError) as exc_info:
            decode_response(b'{"error": "Invalid currency pair."}', Dict[str, Ticker])

        assert exc_info.value.message == "Invalid currency pair."

    def test_error_wins_over_valid_looking_fields(self):
        """Verify the error field takes precedence over otherwise valid data"""
        raw = b'{"error": "Maintenance", "BTC_USDT": {"last": "100.0", "percentChange": "0.05"}}'

        with pytest.raises(RemoteError, match="Maintenance"):
            decode_response(raw, Dict[str, Any])

    def test_error_wins_over_malformed_body(self):
        """Verify an error envelope is reported even if the body would not decode"""
        with pytest.raises(RemoteError):
            decode_response(b'{"error": "Please slow down"}', List[Kline])

    def test_empty_error_field_is_ignored(self):
        """Verify an empty error string is not treated as an error"""
        result = decode_response(b'{"error": "", "other": 1}', Dict[str, Any])
        assert result == {"error": "", "other": 1}

    def test_array_body_has_no_envelope(self):
        """Verify array bodies are not mistaken for error envelopes"""
        assert probe_error(b'[{"date": 1, "open": "2"}]') is None


class TestDecodeShapes:
    """Tests for decoding into the requested shape"""

    def test_decodes_ticker_mapping(self):
        """Verify a Poloniex ticker table decodes into Ticker models"""
        raw = b'{"BTC_USDT": {"last": "100.0", "percentChange": "0.05", "baseVolume": "12.3"}}'

        result = decode_response(raw, Dict[str, Ticker])

        assert result["BTC_USDT"].last == Decimal("100.0")
        assert result["BTC_USDT"].percent_change == Decimal("0.05")

    def test_decodes_kline_list(self):
        """Verify a chart data array decodes into Kline models"""
        raw = b'[{"date": 1704110400, "open": "80.0"}, {"date": 1704110700, "open": 81.5}]'

        result = decode_response(raw, List[Kline])

        assert [k.date for k in result] == [1704110400, 1704110700]
        assert result[0].open == Decimal("80.0")
        assert result[1].open == Decimal("81.5")

    def test_invalid_json_raises_malformed(self):
        """Verify non-JSON bodies raise MalformedResponseError"""
        with pytest.raises(MalformedResponseError):
            decode_response(b"<html>502 Bad Gateway</html>", Dict[str, Ticker])

    def test_shape_mismatch_raises_malformed(self):
        """Verify a body of the wrong shape raises MalformedResponseError"""
        with pytest.raises(MalformedResponseError):
            decode_response(b'{"BTC_USDT": {"last": "abc"}}', Dict[str, Ticker])

    def test_object_where_list_expected_raises_malformed(self):
        """Verify an object body for a list shape raises MalformedResponseError"""
        with pytest.raises(MalformedResponseError):
            decode_response(b'{"date": 1}', List[Kline])


class TestExchangeEnvelopes:
    """Tests for exchange-specific envelopes"""

    def test_binance_error_envelope(self):
        """Verify Binance code/msg errors raise RemoteError with the code"""
        raw = b'{"code": -1121, "msg": "Invalid symbol."}'

        with pytest.raises(RemoteError) as exc_info:
            decode_response(raw, List[Any], BinanceErrorEnvelope)

        assert exc_info.value.message == "Invalid symbol."
        assert exc_info.value.code == -1121

    def test_bybit_nonzero_ret_code_raises(self):
        """Verify a non-zero Bybit retCode raises RemoteError"""
        raw = b'{"retCode": 10001, "retMsg": "params error", "result": {}}'

        with pytest.raises(RemoteError, match="params error"):
            decode_response(raw, Dict[str, Any], BybitEnvelope)

    def test_bybit_null_ret_msg_still_raises_remote_error(self):
        """Verify a null retMsg falls back to the retCode message"""
        raw = b'{"retCode": 10001, "retMsg": null}'

        with pytest.raises(RemoteError, match="Bybit retCode 10001") as exc_info:
            decode_response(raw, Dict[str, Any], BybitEnvelope)

        assert exc_info.value.code == 10001

    def test_bybit_zero_ret_code_decodes(self):
        """Verify retCode 0 is a success"""
        raw = b'{"retCode": 0, "retMsg": "OK", "result": {"list": []}}'

        result = decode_response(raw, Dict[str, Any], BybitEnvelope)

        assert result["result"] == {"list": []}

    def test_default_envelope_is_poloniex_style(self):
        """Verify Binance-style errors are not caught by the plain envelope"""
        assert probe_error(b'{"code": -1121, "msg": "Invalid symbol."}', ErrorEnvelope) is None
