"""Ordered provider waterfall that always yields a route."""

from __future__ import annotations

import logging
from typing import Sequence

import httpx
from opentelemetry import trace

from src.common.metrics import PROVIDER_LATENCY, PROVIDER_REQUESTS

from . import deps
from .estimate import fallback_route
from .models import (
    FALLBACK_PROVIDER,
    Abstain,
    Failure,
    Profile,
    ProviderOutcome,
    RoutePoint,
    RouteResult,
    Success,
)
from .providers import (
    GraphHopperProvider,
    OpenRouteServiceProvider,
    OsrmProvider,
    RouteProvider,
    TomTomProvider,
)

logger = logging.getLogger(__name__)


def _outcome_label(outcome: ProviderOutcome) -> str:
    if isinstance(outcome, Success):
        return "success"
    if isinstance(outcome, Abstain):
        return "abstain"
    return "failure"


class RoutingResolver:
    """Try providers one at a time, in a fixed order, until one answers.

    Providers are awaited sequentially: the order is a strict preference and
    the paid APIs should see at most one call per request. There are no
    retries; an abstention or failure is final for that provider. When every
    provider is exhausted the great-circle estimate is returned, so
    :meth:`get_directions` never raises.
    """

    _tracer = trace.get_tracer(__name__)

    def __init__(self, providers: Sequence[RouteProvider]) -> None:
        self._providers = list(providers)

    @classmethod
    def from_settings(
        cls, settings: deps.Settings, client: httpx.AsyncClient
    ) -> "RoutingResolver":
        providers: list[RouteProvider] = [
            OpenRouteServiceProvider(client, settings.openroute_api_key),
            TomTomProvider(client, settings.tomtom_api_key),
            GraphHopperProvider(client, settings.graphhopper_api_key),
        ]
        providers.extend(
            OsrmProvider(
                client,
                server,
                timeout=settings.osrm_timeout,
                user_agent=settings.user_agent,
            )
            for server in settings.osrm_servers
        )
        return cls(providers)

    @property
    def providers(self) -> list[RouteProvider]:
        return list(self._providers)

    async def get_directions(
        self, start: RoutePoint, end: RoutePoint, profile: Profile = "driving"
    ) -> RouteResult:
        for provider in self._providers:
            outcome = await self._attempt(provider, start, end, profile)
            if isinstance(outcome, Success):
                logger.info("Route resolved by %s", provider.name)
                return outcome.result
            if isinstance(outcome, Abstain):
                logger.info("Routing provider %s skipped: %s", provider.name, outcome.reason)
            else:
                logger.warning(
                    "Routing provider %s failed (%s): %s",
                    provider.name,
                    outcome.kind,
                    outcome.detail,
                )

        logger.info("All routing providers exhausted, using straight-line estimate")
        PROVIDER_REQUESTS.labels(FALLBACK_PROVIDER, "success").inc()
        return fallback_route(start, end, profile)

    async def _attempt(
        self,
        provider: RouteProvider,
        start: RoutePoint,
        end: RoutePoint,
        profile: Profile,
    ) -> ProviderOutcome:
        with self._tracer.start_as_current_span(
            f"routing.provider:{provider.name}"
        ) as span, PROVIDER_LATENCY.labels(provider.name).time():
            try:
                outcome = await provider.attempt(start, end, profile)
            except Exception as exc:
                logger.exception("Routing provider %s crashed", provider.name)
                outcome = Failure("unexpected", repr(exc))
            label = _outcome_label(outcome)
            span.set_attribute("routing.outcome", label)
        PROVIDER_REQUESTS.labels(provider.name, label).inc()
        return outcome


async def get_directions(
    start: RoutePoint,
    end: RoutePoint,
    profile: Profile = "driving",
    *,
    settings: deps.Settings | None = None,
) -> RouteResult:
    """Resolve one route with a short-lived HTTP client."""

    settings = settings or deps.get_settings()
    async with deps.build_http_client(settings) as client:
        resolver = RoutingResolver.from_settings(settings, client)
        return await resolver.get_directions(start, end, profile)
