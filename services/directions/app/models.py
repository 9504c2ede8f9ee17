"""Value types passed between the routing adapters and the resolver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

Profile = Literal["driving", "walking"]

FALLBACK_PROVIDER = "Fallback Estimation"

ABSTAIN_UNCONFIGURED = "unconfigured"
ABSTAIN_INVALID_RESPONSE = "invalid_response"


@dataclass(frozen=True)
class RoutePoint:
    lat: float
    lng: float


@dataclass(frozen=True)
class RouteResult:
    """A single resolved route.

    ``geometry`` holds ``(lng, lat)`` pairs in travel order.
    """

    distance_meters: float
    duration_seconds: float
    instructions: tuple[str, ...]
    geometry: tuple[tuple[float, float], ...]
    provider: str

    @property
    def is_estimate(self) -> bool:
        return self.provider == FALLBACK_PROVIDER


@dataclass(frozen=True)
class Success:
    result: RouteResult


@dataclass(frozen=True)
class Abstain:
    """The provider declined to answer (no credentials or unusable payload)."""

    reason: str


@dataclass(frozen=True)
class Failure:
    """The provider call itself failed."""

    kind: str
    detail: str


ProviderOutcome = Union[Success, Abstain, Failure]
