import asyncio
from typing import Any, Callable

import httpx
import pytest

from services.directions.app import deps


@pytest.fixture()
def make_settings() -> Callable[..., deps.Settings]:
    """Settings with every provider unconfigured unless overridden."""

    def factory(**overrides: Any) -> deps.Settings:
        values: dict[str, Any] = {
            "openroute_api_key": None,
            "tomtom_api_key": None,
            "graphhopper_api_key": None,
            "geoapify_api_key": None,
            "mapbox_api_key": None,
            "osrm_servers": [],
        }
        values.update(overrides)
        return deps.Settings(_env_file=None, **values)

    return factory


@pytest.fixture()
def http_calls() -> list[httpx.Request]:
    return []


@pytest.fixture()
def run_with_client(http_calls: list[httpx.Request]):
    """Run ``fn(client)`` against a mocked transport and return its result."""

    def runner(
        handler: Callable[[httpx.Request], httpx.Response],
        fn: Callable[[httpx.AsyncClient], Any],
    ) -> Any:
        def recording(request: httpx.Request) -> httpx.Response:
            http_calls.append(request)
            return handler(request)

        async def go() -> Any:
            transport = httpx.MockTransport(recording)
            async with httpx.AsyncClient(transport=transport) as client:
                return await fn(client)

        return asyncio.run(go())

    return runner
