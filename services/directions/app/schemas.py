from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field

from .estimate import format_distance, format_duration
from .geocoding import Place
from .models import RoutePoint, RouteResult


class Point(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)

    def to_route_point(self) -> RoutePoint:
        return RoutePoint(lat=self.lat, lng=self.lng)


class DirectionsRequest(BaseModel):
    start: Point
    end: Point
    profile: Literal["driving", "walking"] = "driving"


class DirectionsResponse(BaseModel):
    distance_meters: float
    duration_seconds: float
    instructions: List[str]
    geometry: List[List[float]]
    provider: str
    is_estimate: bool
    distance_text: str
    duration_text: str

    @classmethod
    def from_result(cls, result: RouteResult) -> "DirectionsResponse":
        return cls(
            distance_meters=result.distance_meters,
            duration_seconds=result.duration_seconds,
            instructions=list(result.instructions),
            geometry=[list(pair) for pair in result.geometry],
            provider=result.provider,
            is_estimate=result.is_estimate,
            distance_text=format_distance(result.distance_meters),
            duration_text=format_duration(result.duration_seconds),
        )


class PlaceOut(BaseModel):
    lat: float
    lng: float
    address: str
    provider: str

    @classmethod
    def from_place(cls, place: Place) -> "PlaceOut":
        return cls(lat=place.lat, lng=place.lng, address=place.address, provider=place.provider)


class SearchResponse(BaseModel):
    places: List[PlaceOut]


class ReverseResponse(BaseModel):
    address: str
