"""Adapters for the external routing APIs.

Each adapter turns a provider-specific request/response into a
:class:`~.models.RouteResult`. ``fetch`` returns ``None`` when the payload is
unusable and raises :class:`~.errors.RoutingProviderError` when the HTTP call
fails; ``attempt`` folds both, plus missing credentials, into a
:data:`~.models.ProviderOutcome` for the resolver.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Protocol, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from . import errors
from .maneuvers import describe_osrm_step, describe_tomtom_maneuver
from .models import (
    ABSTAIN_INVALID_RESPONSE,
    ABSTAIN_UNCONFIGURED,
    Abstain,
    Failure,
    Profile,
    ProviderOutcome,
    RoutePoint,
    RouteResult,
    Success,
)

logger = logging.getLogger(__name__)

ORS_URL = "https://api.openrouteservice.org/v2/directions/{profile}"
TOMTOM_URL = "https://api.tomtom.com/routing/1/calculateRoute/{locations}/json"
GRAPHHOPPER_URL = "https://graphhopper.com/api/1/route"
DEFAULT_OSRM_SERVER = "https://router.project-osrm.org"

TOMTOM_DEFAULT_INSTRUCTIONS = (
    "Head towards your destination",
    "You have arrived at your destination",
)


def is_configured(api_key: str | None, placeholder: str | None) -> bool:
    """Return ``True`` when ``api_key`` is set and is not the placeholder, in any case."""

    if not api_key:
        return False
    return placeholder is None or api_key.lower() != placeholder.lower()


class PartialPayload(BaseModel):
    """Partial view of a provider payload; every field may be missing."""

    model_config = ConfigDict(extra="ignore")


M = TypeVar("M", bound=PartialPayload)


def decode(model: type[M], response: httpx.Response) -> M | None:
    """Decode ``response`` into ``model`` or return ``None`` if it does not fit."""

    try:
        return model.model_validate(response.json())
    except (ValueError, ValidationError):
        return None


def _lnglat(coordinates: Iterable[list[float]] | None) -> tuple[tuple[float, float], ...]:
    # Providers may append elevation as a third element.
    return tuple((c[0], c[1]) for c in coordinates or () if len(c) >= 2)


class RouteProvider(Protocol):
    name: str

    async def attempt(
        self, start: RoutePoint, end: RoutePoint, profile: Profile
    ) -> ProviderOutcome:
        ...


class RoutingProvider:
    """Base class for keyed routing providers."""

    name = "provider"
    placeholder: str | None = None

    def __init__(self, client: httpx.AsyncClient, api_key: str | None = None) -> None:
        self._client = client
        self._api_key = api_key

    @property
    def configured(self) -> bool:
        return is_configured(self._api_key, self.placeholder)

    async def fetch(
        self, start: RoutePoint, end: RoutePoint, profile: Profile
    ) -> RouteResult | None:
        raise NotImplementedError

    async def attempt(
        self, start: RoutePoint, end: RoutePoint, profile: Profile
    ) -> ProviderOutcome:
        if not self.configured:
            return Abstain(ABSTAIN_UNCONFIGURED)
        try:
            result = await self.fetch(start, end, profile)
        except errors.RoutingProviderError as exc:
            return Failure(exc.kind, str(exc))
        except Exception as exc:
            logger.exception("Routing provider %s crashed", self.name)
            return Failure("unexpected", repr(exc))
        if result is None:
            return Abstain(ABSTAIN_INVALID_RESPONSE)
        return Success(result)


# --- OpenRouteService -------------------------------------------------------


class _OrsStep(PartialPayload):
    instruction: str | None = None


class _OrsSegment(PartialPayload):
    distance: float | None = None
    duration: float | None = None
    steps: list[_OrsStep] | None = None


class _OrsProperties(PartialPayload):
    segments: list[_OrsSegment] | None = None


class _OrsGeometry(PartialPayload):
    coordinates: list[list[float]] | None = None


class _OrsFeature(PartialPayload):
    properties: _OrsProperties | None = None
    geometry: _OrsGeometry | None = None


class _OrsResponse(PartialPayload):
    features: list[_OrsFeature] | None = None


class OpenRouteServiceProvider(RoutingProvider):
    name = "OpenRouteService"
    placeholder = "your_openroute_api_key_here"

    _PROFILES = {"driving": "driving-car", "walking": "foot-walking"}

    async def fetch(
        self, start: RoutePoint, end: RoutePoint, profile: Profile
    ) -> RouteResult | None:
        request = self._client.build_request(
            "POST",
            ORS_URL.format(profile=self._PROFILES.get(profile, "driving-car")),
            headers={"Authorization": self._api_key or ""},
            json={
                "coordinates": [[start.lng, start.lat], [end.lng, end.lat]],
                "format": "geojson",
                "instructions": True,
            },
        )
        response = await errors.send(self.name, self._client, request)
        data = decode(_OrsResponse, response)
        if data is None or not data.features or data.features[0].properties is None:
            return None
        feature = data.features[0]
        segments = feature.properties.segments
        if not segments:
            return None
        segment = segments[0]
        return RouteResult(
            distance_meters=segment.distance or 0.0,
            duration_seconds=segment.duration or 0.0,
            instructions=tuple(
                step.instruction for step in segment.steps or () if step.instruction
            ),
            geometry=_lnglat(feature.geometry.coordinates if feature.geometry else None),
            provider=self.name,
        )


# --- TomTom -----------------------------------------------------------------


class _TomTomSummary(PartialPayload):
    lengthInMeters: float | None = None
    travelTimeInSeconds: float | None = None


class _TomTomPoint(PartialPayload):
    latitude: float | None = None
    longitude: float | None = None
    instruction: str | None = None


class _TomTomLeg(PartialPayload):
    points: list[_TomTomPoint] | None = None


class _TomTomInstruction(PartialPayload):
    message: str | None = None
    street: str | None = None
    maneuver: str | None = None


class _TomTomGuidance(PartialPayload):
    instructions: list[_TomTomInstruction] | None = None


class _TomTomRoute(PartialPayload):
    summary: _TomTomSummary | None = None
    legs: list[_TomTomLeg] | None = None
    guidance: _TomTomGuidance | None = None


class _TomTomResponse(PartialPayload):
    routes: list[_TomTomRoute] | None = None


class TomTomProvider(RoutingProvider):
    name = "TomTom"
    placeholder = "your_tomtom_api_key_here"

    _PROFILES = {"driving": "car", "walking": "pedestrian"}

    async def fetch(
        self, start: RoutePoint, end: RoutePoint, profile: Profile
    ) -> RouteResult | None:
        locations = f"{start.lat},{start.lng}:{end.lat},{end.lng}"
        request = self._client.build_request(
            "GET",
            TOMTOM_URL.format(locations=locations),
            params={
                "key": self._api_key or "",
                "travelMode": self._PROFILES.get(profile, "car"),
                "instructionsType": "text",
                "language": "en-GB",
                "routeType": "fastest",
            },
        )
        response = await errors.send(self.name, self._client, request)
        data = decode(_TomTomResponse, response)
        if data is None or not data.routes:
            return None
        route = data.routes[0]
        legs = route.legs or []
        points = [point for leg in legs for point in leg.points or ()]
        summary = route.summary or _TomTomSummary()
        return RouteResult(
            distance_meters=summary.lengthInMeters or 0.0,
            duration_seconds=summary.travelTimeInSeconds or 0.0,
            instructions=self._instructions(route.guidance, points),
            geometry=tuple(
                (point.longitude, point.latitude)
                for point in points
                if point.latitude is not None and point.longitude is not None
            ),
            provider=self.name,
        )

    @staticmethod
    def _instructions(
        guidance: _TomTomGuidance | None, points: list[_TomTomPoint]
    ) -> tuple[str, ...]:
        instructions: list[str] = []
        for item in (guidance.instructions if guidance else None) or ():
            if item.message:
                instructions.append(item.message)
            elif item.maneuver and item.street:
                instructions.append(
                    f"{describe_tomtom_maneuver(item.maneuver)} onto {item.street}"
                )
            elif item.maneuver:
                instructions.append(describe_tomtom_maneuver(item.maneuver))
        if not instructions:
            instructions = [point.instruction for point in points if point.instruction]
        return tuple(instructions) or TOMTOM_DEFAULT_INSTRUCTIONS


# --- GraphHopper ------------------------------------------------------------


class _GraphHopperInstruction(PartialPayload):
    text: str | None = None


class _GraphHopperPoints(PartialPayload):
    coordinates: list[list[float]] | None = None


class _GraphHopperPath(PartialPayload):
    distance: float | None = None
    time: float | None = None  # milliseconds
    instructions: list[_GraphHopperInstruction] | None = None
    points: _GraphHopperPoints | None = None


class _GraphHopperResponse(PartialPayload):
    paths: list[_GraphHopperPath] | None = None


class GraphHopperProvider(RoutingProvider):
    name = "GraphHopper"
    placeholder = "your_graphhopper_api_key_here"

    _PROFILES = {"driving": "car", "walking": "foot"}

    async def fetch(
        self, start: RoutePoint, end: RoutePoint, profile: Profile
    ) -> RouteResult | None:
        request = self._client.build_request(
            "GET",
            GRAPHHOPPER_URL,
            params=[
                ("point", f"{start.lat},{start.lng}"),
                ("point", f"{end.lat},{end.lng}"),
                ("vehicle", self._PROFILES.get(profile, "car")),
                ("instructions", "true"),
                ("points_encoded", "false"),
                ("key", self._api_key or ""),
            ],
        )
        response = await errors.send(self.name, self._client, request)
        data = decode(_GraphHopperResponse, response)
        if data is None or not data.paths:
            return None
        path = data.paths[0]
        return RouteResult(
            distance_meters=path.distance or 0.0,
            duration_seconds=(path.time or 0.0) / 1000,
            instructions=tuple(
                item.text for item in path.instructions or () if item.text
            ),
            geometry=_lnglat(path.points.coordinates if path.points else None),
            provider=self.name,
        )


# --- OSRM -------------------------------------------------------------------


class _OsrmGeometry(PartialPayload):
    coordinates: list[list[float]] | None = None


class _OsrmLeg(PartialPayload):
    steps: list[dict[str, Any]] | None = None


class _OsrmRoute(PartialPayload):
    distance: float | None = None
    duration: float | None = None
    geometry: _OsrmGeometry | None = None
    legs: list[_OsrmLeg] | None = None


class _OsrmResponse(PartialPayload):
    routes: list[_OsrmRoute] | None = None


class OsrmProvider(RoutingProvider):
    """A public OSRM instance; needs no key but gets a short timeout."""

    _PROFILES = {"driving": "driving", "walking": "foot"}

    def __init__(
        self,
        client: httpx.AsyncClient,
        server: str = DEFAULT_OSRM_SERVER,
        *,
        timeout: float = 5.0,
        user_agent: str = "HostelHQ/1.0",
    ) -> None:
        super().__init__(client)
        self._server = server.rstrip("/")
        self._timeout = timeout
        self._user_agent = user_agent
        self.name = f"OSRM ({self._server.split('//', 1)[-1]})"

    @property
    def configured(self) -> bool:
        return True

    async def fetch(
        self, start: RoutePoint, end: RoutePoint, profile: Profile
    ) -> RouteResult | None:
        coords = f"{start.lng},{start.lat};{end.lng},{end.lat}"
        osrm_profile = self._PROFILES.get(profile, "driving")
        request = self._client.build_request(
            "GET",
            f"{self._server}/route/v1/{osrm_profile}/{coords}",
            params={"overview": "full", "steps": "true", "geometries": "geojson"},
            headers={"User-Agent": self._user_agent},
            timeout=self._timeout,
        )
        response = await errors.send(self.name, self._client, request)
        data = decode(_OsrmResponse, response)
        if data is None or not data.routes:
            return None
        route = data.routes[0]
        steps = route.legs[0].steps if route.legs else None
        return RouteResult(
            distance_meters=route.distance or 0.0,
            duration_seconds=route.duration or 0.0,
            instructions=tuple(describe_osrm_step(step) for step in steps or ()),
            geometry=_lnglat(route.geometry.coordinates if route.geometry else None),
            provider=self.name,
        )
