"""Straight-line route estimate and the distance/duration formatters."""

from __future__ import annotations

import math

from .models import FALLBACK_PROVIDER, Profile, RoutePoint, RouteResult

EARTH_RADIUS_M = 6371000

SPEED_KMH: dict[str, float] = {
    "driving": 50.0,
    "walking": 5.0,
}


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def haversine(start: RoutePoint, end: RoutePoint) -> float:
    """Great-circle distance between two points in meters."""

    lat1 = math.radians(start.lat)
    lat2 = math.radians(end.lat)
    dlat = lat2 - lat1
    dlng = math.radians(end.lng - start.lng)
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def heading(start: RoutePoint, end: RoutePoint) -> str:
    """Dominant cardinal direction from ``start`` to ``end``."""

    dlat = end.lat - start.lat
    dlng = end.lng - start.lng
    if abs(dlat) > abs(dlng):
        return "north" if dlat > 0 else "south"
    return "east" if dlng > 0 else "west"


def format_distance(meters: float) -> str:
    if meters < 1000:
        return f"{_round_half_up(meters)}m"
    return f"{meters / 1000:.1f}km"


def format_duration(seconds: float) -> str:
    minutes = _round_half_up(seconds / 60)
    if minutes < 60:
        return f"{minutes} min"
    hours, rest = divmod(minutes, 60)
    return f"{hours}h {rest}m"


def fallback_route(
    start: RoutePoint, end: RoutePoint, profile: Profile = "driving"
) -> RouteResult:
    """Build the terminal estimate used when no provider produced a route."""

    distance = haversine(start, end)
    speed = SPEED_KMH.get(profile, SPEED_KMH["driving"])
    duration = distance / 1000 / speed * 3600
    return RouteResult(
        distance_meters=distance,
        duration_seconds=duration,
        instructions=(
            f"Head {heading(start, end)} towards destination",
            f"Continue for {format_distance(distance)}",
            "Arrive at destination",
        ),
        geometry=((start.lng, start.lat), (end.lng, end.lat)),
        provider=FALLBACK_PROVIDER,
    )
