"""Pytest configuration and fixtures."""

import json

import httpx
import pytest

from egdb.api import EpiGraphDBClient


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-api",
        action="store_true",
        default=False,
        help="Run tests that call the live EpiGraphDB API",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "api: mark test as requiring the live EpiGraphDB API")


def pytest_collection_modifyitems(config, items):
    """Skip api tests unless --run-api is provided."""
    if config.getoption("--run-api"):
        return

    skip_api = pytest.mark.skip(reason="Need --run-api option to run live API tests")
    for item in items:
        if "api" in item.keywords:
            item.add_marker(skip_api)


class FakeAPI:
    """Routes requests to canned JSON bodies and records what was sent."""

    def __init__(self, routes: dict[tuple[str, str], object] | None = None):
        self.routes = dict(routes or {})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"detail": "Not Found"})
        body = self.routes[key]
        if isinstance(body, httpx.Response):
            return body
        return httpx.Response(200, json=body)

    def payload(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)

    def client(self, **kwargs) -> EpiGraphDBClient:
        return mock_client(self, **kwargs)


def mock_client(handler, **kwargs) -> EpiGraphDBClient:
    """Client whose requests are answered by ``handler`` (no network, no backoff)."""
    return EpiGraphDBClient(
        base_url="https://api.test",
        backoff=0,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.fixture
def fake_api():
    """A FakeAPI with no routes; tests add entries to ``routes``."""
    return FakeAPI()


@pytest.fixture
def make_client():
    """Factory for clients backed by an arbitrary request handler."""
    return mock_client
