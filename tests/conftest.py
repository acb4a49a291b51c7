# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures for Airtable client tests.

Provides a fake clock for the throttle and a dummy HTTP layer that records
every request and replays pre-configured responses.
"""

import types

import pytest

from airtable_client.client import AirtableClient
from airtable_client.core._throttle import _Throttle

API_KEY = "pat_mock_123456789"
BASE_ID = "app_mock_123456789"
RECORD_ID = "rec_mock_123456789"
TABLE = "table_mock"
BASE = f"https://api.airtable.com/v0/{BASE_ID}"

_REASONS = {
    200: "OK",
    401: "Unauthorized",
    404: "Not Found",
    422: "Unprocessable Entity",
    429: "Too Many Requests",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


class FakeClock:
    """Monotonic clock that only moves when slept on or advanced."""

    def __init__(self, start=1000.0):
        self.now = start
        self.sleeps = []

    def monotonic(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds):
        self.now += seconds


class DummyHTTPClient:
    """Stand-in for ``_HttpClient`` replaying ``(status, body)`` pairs in order.

    A body that is a ``str`` simulates a non-JSON response.

    Attributes:
        calls: ``(method, url, kwargs, dispatched_at)`` for every request made.
    """

    def __init__(self, responses, clock):
        self._responses = list(responses)
        self._clock = clock
        self.calls = []

    def _request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs, self._clock.monotonic()))
        if not self._responses:
            raise AssertionError("No more dummy responses configured")
        status, body = self._responses.pop(0)
        resp = types.SimpleNamespace()
        resp.status_code = status
        resp.reason = _REASONS.get(status, "")

        def json_func():
            if isinstance(body, str):
                raise ValueError("non-json")
            return body

        resp.json = json_func
        return resp

    @property
    def methods(self):
        return [c[0] for c in self.calls]

    @property
    def urls(self):
        return [c[1] for c in self.calls]

    @property
    def bodies(self):
        return [c[2].get("json") for c in self.calls]


def record(rid, **fields):
    return {"id": rid, "createdTime": "2024-01-01T00:00:00.000Z", "fields": fields}


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def make_client(fake_clock):
    """Factory returning ``(client, http)`` wired to a fake clock and dummy HTTP layer."""

    def _make(responses=(), config=None, base_url=None):
        client = AirtableClient(API_KEY, BASE_ID, base_url=base_url, config=config)
        client._throttle = _Throttle(
            client._config.min_request_interval,
            clock=fake_clock.monotonic,
            sleep=fake_clock.sleep,
        )
        http = DummyHTTPClient(responses, fake_clock)
        client._get_rest()._http = http
        return client, http

    return _make
