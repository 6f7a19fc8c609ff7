"""
Test Suite

Structure:
- tests/conftest.py: FakeRequester, a canned-response stand-in for HTTPRequester
- tests/unit/: Tests for individual components (decoder, aggregator, registry,
  exchange clients, HTTP requester, config, FastAPI app)

Uses pytest with pytest-asyncio for testing async functionality.
No test talks to a real exchange.
"""
