"""Shared test fixtures for all test modules."""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from pihole_statsd.adapters.transport.in_memory import InMemoryTransport
from pihole_statsd.core.errors import FetchError


class FakeStatusSource:
    """StatusSourcePort fake returning a fixed body or raising FetchError."""

    def __init__(self, body: str = "{}", error: Exception | None = None) -> None:
        self.body = body
        self.error = error
        self.calls = 0

    async def fetch(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.body


class CaptureSink:
    """DiagnosticSinkPort fake recording every payload."""

    def __init__(self) -> None:
        self.payloads: list[str] = []

    def write(self, payload: str) -> None:
        self.payloads.append(payload)


@pytest.fixture
def status_document() -> dict[str, Any]:
    """A status document shaped like a Pi-hole /admin/api.php response."""
    return {
        "domains_being_blocked": 123456,
        "dns_queries_today": 18342,
        "ads_blocked_today": 2210,
        "ads_percentage_today": 12.048849,
        "unique_domains": 4021,
        "queries_forwarded": 9876,
        "queries_cached": 6256,
        "clients_ever_seen": 14,
        "unique_clients": 11,
        "status": "enabled",
        "gravity_last_updated": {
            "file_exists": True,
            "absolute": 1702300000,
            "relative": {"days": 1, "hours": 2, "minutes": 3},
        },
    }


@pytest.fixture
def status_body(status_document: dict[str, Any]) -> str:
    """The status document serialized as a response body."""
    return json.dumps(status_document)


@pytest.fixture
def fake_source(status_body: str) -> FakeStatusSource:
    """Status source that always returns the sample body."""
    return FakeStatusSource(body=status_body)


@pytest.fixture
def failing_source() -> FakeStatusSource:
    """Status source that always fails to connect."""
    return FakeStatusSource(
        error=FetchError("http://pi.hole/admin/api.php", "connection refused")
    )


@pytest.fixture
def transport() -> InMemoryTransport:
    """Fresh capturing transport."""
    return InMemoryTransport()


@pytest.fixture
def capture_sink() -> CaptureSink:
    """Fresh capturing diagnostic sink."""
    return CaptureSink()


@pytest.fixture
def mock_http_client():
    """Factory fixture that creates an httpx.AsyncClient over a MockTransport.

    Usage:
        async def test_something(mock_http_client):
            async with mock_http_client(lambda request: httpx.Response(200)) as client:
                ...
    """

    def _get_client(
        handler: Callable[[httpx.Request], httpx.Response],
    ) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _get_client


@pytest.fixture
def source_factory() -> type[FakeStatusSource]:
    """The FakeStatusSource class, for tests that need a custom body or error."""
    return FakeStatusSource
