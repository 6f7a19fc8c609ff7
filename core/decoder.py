"""
Response Decoder

Exchanges frequently answer with HTTP 200 and an error body, e.g.
Poloniex's {"error": "Invalid currency pair."}. So every body is first
probed with the exchange's error envelope and only then decoded into the
shape the caller asked for.

    decode_response(raw, Dict[str, Ticker])                        # Poloniex
    decode_response(raw, List[BinanceTicker], BinanceErrorEnvelope)
    decode_response(raw, BybitResult, BybitEnvelope)

A non-empty error message always wins, even if the rest of the body would
not have decoded.
"""

from functools import lru_cache
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from core.errors import MalformedResponseError, RemoteError


T = TypeVar("T")


# ============================================
# Error Envelopes
# ============================================

class ErrorEnvelope(BaseModel):
    """{"error": "..."} as returned by Poloniex."""

    error: Optional[str] = None

    def error_message(self) -> Optional[str]:
        return self.error or None

    def error_code(self) -> Optional[int]:
        return None


class BinanceErrorEnvelope(ErrorEnvelope):
    """{"code": -1121, "msg": "Invalid symbol."} as returned by Binance."""

    code: Optional[int] = None
    msg: Optional[str] = None

    def error_message(self) -> Optional[str]:
        if self.code is None:
            return None
        return self.msg or f"Binance error code {self.code}"

    def error_code(self) -> Optional[int]:
        return self.code


class BybitEnvelope(ErrorEnvelope):
    """{"retCode": 10001, "retMsg": "...", "result": {...}} as returned by Bybit v5."""

    ret_code: Optional[int] = Field(default=None, alias="retCode")
    ret_msg: Optional[str] = Field(default=None, alias="retMsg")

    def error_message(self) -> Optional[str]:
        if not self.ret_code:
            return None
        return self.ret_msg or f"Bybit retCode {self.ret_code}"

    def error_code(self) -> Optional[int]:
        return self.ret_code


# ============================================
# Decoding
# ============================================

@lru_cache(maxsize=None)
def _adapter(shape: Any) -> TypeAdapter:
    return TypeAdapter(shape)


def probe_error(raw: bytes, envelope: Type[ErrorEnvelope] = ErrorEnvelope) -> Optional[RemoteError]:
    """
    Return a RemoteError if raw carries a non-empty error envelope.

    Bodies that are not JSON objects (arrays, garbage) simply have no
    envelope; that is not an error here.
    """
    try:
        probe = envelope.model_validate_json(raw)
    except ValidationError:
        return None

    message = probe.error_message()
    if message:
        return RemoteError(message, code=probe.error_code())
    return None


def decode_response(raw: bytes, shape: Type[T], envelope: Type[ErrorEnvelope] = ErrorEnvelope) -> T:
    """
    Decode an exchange response body.

    Args:
        raw: Response body as read by HTTPRequester
        shape: Target type (pydantic model or typing construct)
        envelope: Error envelope model for this exchange

    Returns:
        The body validated into shape

    Raises:
        RemoteError: The body carries a non-empty error message
        MalformedResponseError: The body is not valid JSON or does not match shape
    """
    remote_error = probe_error(raw, envelope)
    if remote_error is not None:
        raise remote_error

    try:
        return _adapter(shape).validate_json(raw)
    except ValidationError as e:
        preview = raw[:200].decode("utf-8", errors="replace")
        raise MalformedResponseError(
            f"Unexpected response shape ({e.error_count()} error(s)): {preview}"
        ) from e
