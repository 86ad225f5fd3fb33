"""Shared pytest fixtures: temporary cache, fixed clock and mocked HTTP."""

from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import httpx
import pytest

from deptrust.cache.store import CacheManager

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Fixed current time used by the scoring and zombie rules."""
    return NOW


@pytest.fixture
def cache(tmp_path: Path) -> CacheManager:
    """Empty cache backed by a temporary file."""
    return CacheManager(tmp_path / "cache.json")


@pytest.fixture
def make_client() -> Callable[[dict[str, Any]], httpx.AsyncClient]:
    """Build an httpx client whose transport answers from a route table.

    Routes map ``"https://host/path"`` (query string excluded) to either a
    JSON-serializable body (200), an ``httpx.Response`` or a callable taking
    the request. Unknown URLs get a 404. Every request is recorded on
    ``client.requests``.
    """

    def factory(routes: dict[str, Any]) -> httpx.AsyncClient:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            key = f"{request.url.scheme}://{request.url.host}{request.url.path}"
            if key not in routes:
                return httpx.Response(404, json={"error": "Not found"})
            route = routes[key]
            if callable(route):
                return route(request)
            if isinstance(route, httpx.Response):
                return route
            return httpx.Response(200, json=route)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client.requests = requests
        return client

    return factory
