"""Failures raised by routing and geocoding provider calls."""

from __future__ import annotations

import httpx


class RoutingProviderError(Exception):
    """A provider HTTP call failed."""

    kind = "http error"

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(message)
        self.provider = provider


class RateLimitedError(RoutingProviderError):
    kind = "rate limit"


class AuthFailedError(RoutingProviderError):
    kind = "auth failed"


class HttpStatusError(RoutingProviderError):
    kind = "http error"

    def __init__(self, provider: str, status_code: int) -> None:
        super().__init__(provider, f"HTTP {status_code}")
        self.status_code = status_code


class NetworkError(RoutingProviderError):
    kind = "network error"


def raise_for_provider_status(provider: str, response: httpx.Response) -> None:
    """Translate a non-2xx response into the matching provider error."""

    if response.is_success:
        return
    if response.status_code == 429:
        raise RateLimitedError(provider, "Rate limit exceeded")
    if response.status_code in (401, 403):
        raise AuthFailedError(provider, f"Invalid API key (HTTP {response.status_code})")
    raise HttpStatusError(provider, response.status_code)


async def send(
    provider: str, client: httpx.AsyncClient, request: httpx.Request
) -> httpx.Response:
    """Send ``request`` and map transport problems and bad statuses to errors."""

    try:
        response = await client.send(request)
    except httpx.TimeoutException as exc:
        raise NetworkError(provider, "Request timed out") from exc
    except httpx.TransportError as exc:
        raise NetworkError(provider, f"Connection failed: {exc}") from exc
    except httpx.RequestError as exc:
        raise NetworkError(provider, f"Unreadable response: {exc}") from exc
    raise_for_provider_status(provider, response)
    return response
