from __future__ import annotations

import json
from email.message import Message
from typing import Any
from urllib.parse import parse_qs, urlparse

import pytest

import transport_utils

GOOGLE_DNS_PAYLOAD = {
    "status": "success",
    "country": "United States",
    "countryCode": "US",
    "region": "CA",
    "regionName": "California",
    "city": "Mountain View",
    "zip": "94043",
    "lat": 37.4223,
    "lon": -122.085,
    "timezone": "America/Los_Angeles",
    "isp": "Google LLC",
    "org": "Google Public DNS",
    "as": "AS15169 Google LLC",
    "query": "8.8.8.8",
}


class FakeResponse:
    def __init__(self, payload: Any = None, *, status: int = 200, reason: str = "OK", raw: bytes | None = None):
        self.status = status
        self.reason = reason
        self._body = raw if raw is not None else json.dumps(payload).encode("utf-8")
        self.headers = Message()
        self.headers["Content-Type"] = "application/json; charset=utf-8"

    def read(self) -> bytes:
        return self._body

    def getcode(self) -> int:
        return self.status

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info) -> bool:
        return False


class FakeTransport:
    """Stands in for ``urllib.request.urlopen`` and records every request."""

    def __init__(self) -> None:
        self.requests: list[Any] = []
        self.timeouts: list[float | None] = []
        self._queue: list[Any] = []

    def respond(self, payload: Any = None, **kwargs: Any) -> "FakeTransport":
        self._queue.append(FakeResponse(payload, **kwargs))
        return self

    def fail(self, error: BaseException) -> "FakeTransport":
        self._queue.append(error)
        return self

    def __call__(self, request, timeout=None):
        self.requests.append(request)
        self.timeouts.append(timeout)
        item = self._queue.pop(0) if self._queue else FakeResponse({})
        if isinstance(item, BaseException):
            raise item
        return item

    @property
    def last(self):
        return self.requests[-1]

    @property
    def last_url(self):
        return urlparse(self.last.full_url)

    @property
    def last_params(self) -> dict[str, list[str]]:
        return parse_qs(self.last_url.query)

    @property
    def last_json(self) -> Any:
        return json.loads(self.last.data.decode("utf-8"))


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    for name in ("IPAPI_API_TOKEN", "SEARCHAPI_API_KEY", "DEBUG", "IP_API_HOST", "SEARCHAPI_BASE_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def transport(monkeypatch) -> FakeTransport:
    fake = FakeTransport()
    monkeypatch.setattr(transport_utils.urllib.request, "urlopen", fake)
    return fake


@pytest.fixture
def anyio_backend():
    return "asyncio"
