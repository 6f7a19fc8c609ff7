"""
Shared test helpers.

FakeRequester stands in for core.http_client.HTTPRequester: responses are
keyed by the Poloniex "command" query parameter or, when there is none, by
the request path.
"""

import json

import pytest


class FakeRequester:
    """Canned-response replacement for HTTPRequester."""

    def __init__(self):
        self.responses = {}
        self.calls = []

    def respond(self, key, body):
        """
        Register a response.

        body may be bytes, str, a dict/list (JSON-encoded) or an exception
        instance (raised).
        """
        self.responses[key] = body

    def calls_for(self, key):
        return [c for c in self.calls if c[2].get("command", c[1]) == key]

    async def get(self, base_url, path, params=None):
        params = dict(params or {})
        self.calls.append((base_url, path, params))

        body = self.responses[params.get("command", path)]
        if isinstance(body, Exception):
            raise body
        if isinstance(body, (dict, list)):
            return json.dumps(body).encode()
        if isinstance(body, str):
            return body.encode()
        return body


@pytest.fixture
def requester():
    return FakeRequester()
