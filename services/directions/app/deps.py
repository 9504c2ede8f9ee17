from functools import lru_cache
from typing import AsyncGenerator

import httpx
from fastapi import Depends
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    openroute_api_key: str | None = None
    tomtom_api_key: str | None = None
    graphhopper_api_key: str | None = None
    geoapify_api_key: str | None = None
    mapbox_api_key: str | None = None
    osrm_servers: list[str] = ["https://router.project-osrm.org"]
    osrm_timeout: float = 5.0
    http_timeout: float = 10.0
    user_agent: str = "HostelHQ/1.0"
    geocoding_country: str = "gh"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=settings.http_timeout,
        headers={"User-Agent": settings.user_agent},
    )


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    async with build_http_client(get_settings()) as client:
        yield client


def get_resolver(client: httpx.AsyncClient = Depends(get_http_client)):
    from .resolver import RoutingResolver

    return RoutingResolver.from_settings(get_settings(), client)


def get_geocoder(client: httpx.AsyncClient = Depends(get_http_client)):
    from .geocoding import GeocodingService

    return GeocodingService.from_settings(get_settings(), client)
