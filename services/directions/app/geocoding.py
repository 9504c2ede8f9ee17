"""Address search and reverse geocoding with a Geoapify → Mapbox fallback."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import quote

import httpx

from . import deps, errors
from .providers import PartialPayload, decode, is_configured

logger = logging.getLogger(__name__)

GEOAPIFY_SEARCH_URL = "https://api.geoapify.com/v1/geocode/search"
MAPBOX_PLACES_URL = "https://api.mapbox.com/geocoding/v5/mapbox.places/{query}.json"


@dataclass(frozen=True)
class Place:
    lat: float
    lng: float
    address: str
    provider: str


class _GeoapifyGeometry(PartialPayload):
    coordinates: list[float] | None = None


class _GeoapifyProperties(PartialPayload):
    formatted: str | None = None
    address_line1: str | None = None


class _GeoapifyFeature(PartialPayload):
    geometry: _GeoapifyGeometry | None = None
    properties: _GeoapifyProperties | None = None


class _MapboxFeature(PartialPayload):
    center: list[float] | None = None
    place_name: str | None = None


class _GeoapifyResponse(PartialPayload):
    features: list[_GeoapifyFeature] | None = None


class _MapboxResponse(PartialPayload):
    features: list[_MapboxFeature] | None = None


def format_coordinates(lat: float, lng: float) -> str:
    return f"{lat:.6f}, {lng:.6f}"


class GeocodingService:
    """Resolve free-text queries to places and coordinates to addresses."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        geoapify_api_key: str | None = None,
        mapbox_api_key: str | None = None,
        country: str = "gh",
    ) -> None:
        self._client = client
        self._geoapify_key = geoapify_api_key
        self._mapbox_key = mapbox_api_key
        self._country = country

    @classmethod
    def from_settings(
        cls, settings: deps.Settings, client: httpx.AsyncClient
    ) -> "GeocodingService":
        return cls(
            client,
            geoapify_api_key=settings.geoapify_api_key,
            mapbox_api_key=settings.mapbox_api_key,
            country=settings.geocoding_country,
        )

    async def search(self, query: str, limit: int = 5) -> list[Place]:
        """Return matching places, best first; empty when nothing was found."""

        query = query.strip()
        if not query:
            return []
        for name, lookup in (
            ("Geoapify", self._search_geoapify),
            ("Mapbox", self._search_mapbox),
        ):
            try:
                places = await lookup(query, limit)
            except errors.RoutingProviderError as exc:
                logger.warning("Geocoding provider %s failed (%s): %s", name, exc.kind, exc)
                continue
            except Exception:
                logger.exception("Geocoding provider %s crashed", name)
                continue
            if places:
                return places
            logger.info("Geocoding provider %s had no results for %r", name, query)
        return []

    async def reverse(self, lat: float, lng: float) -> str:
        """Return the address at ``(lat, lng)`` or the coordinates themselves."""

        if is_configured(self._mapbox_key, "your_mapbox_api_key_here"):
            request = self._client.build_request(
                "GET",
                MAPBOX_PLACES_URL.format(query=f"{lng},{lat}"),
                params={"access_token": self._mapbox_key, "country": self._country},
            )
            try:
                response = await errors.send("Mapbox", self._client, request)
            except errors.RoutingProviderError as exc:
                logger.warning("Reverse geocoding failed (%s): %s", exc.kind, exc)
            except Exception:
                logger.exception("Reverse geocoding crashed")
            else:
                data = decode(_MapboxResponse, response)
                if data and data.features and data.features[0].place_name:
                    return data.features[0].place_name
        return format_coordinates(lat, lng)

    async def _search_geoapify(self, query: str, limit: int) -> list[Place]:
        if not is_configured(self._geoapify_key, "your_geoapify_api_key_here"):
            return []
        request = self._client.build_request(
            "GET",
            GEOAPIFY_SEARCH_URL,
            params={
                "text": query,
                "filter": f"countrycode:{self._country}",
                "limit": limit,
                "apiKey": self._geoapify_key,
            },
        )
        response = await errors.send("Geoapify", self._client, request)
        data = decode(_GeoapifyResponse, response)
        places = []
        for feature in (data.features if data else None) or ():
            coords = feature.geometry.coordinates if feature.geometry else None
            if not coords or len(coords) < 2:
                continue
            props = feature.properties or _GeoapifyProperties()
            places.append(
                Place(
                    lat=coords[1],
                    lng=coords[0],
                    address=props.formatted or props.address_line1 or query,
                    provider="Geoapify",
                )
            )
        return places

    async def _search_mapbox(self, query: str, limit: int) -> list[Place]:
        if not is_configured(self._mapbox_key, "your_mapbox_api_key_here"):
            return []
        request = self._client.build_request(
            "GET",
            MAPBOX_PLACES_URL.format(query=quote(query, safe="")),
            params={
                "access_token": self._mapbox_key,
                "country": self._country,
                "limit": limit,
            },
        )
        response = await errors.send("Mapbox", self._client, request)
        data = decode(_MapboxResponse, response)
        places = []
        for feature in (data.features if data else None) or ():
            if not feature.center or len(feature.center) < 2:
                continue
            places.append(
                Place(
                    lat=feature.center[1],
                    lng=feature.center[0],
                    address=feature.place_name or query,
                    provider="Mapbox",
                )
            )
        return places
