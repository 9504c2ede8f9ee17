from fastapi import APIRouter, Depends, Query

from . import deps, schemas
from .geocoding import GeocodingService
from .resolver import RoutingResolver

router = APIRouter()


@router.post("/directions", response_model=schemas.DirectionsResponse)
async def get_directions(
    data: schemas.DirectionsRequest,
    resolver: RoutingResolver = Depends(deps.get_resolver),
) -> schemas.DirectionsResponse:
    result = await resolver.get_directions(
        data.start.to_route_point(), data.end.to_route_point(), data.profile
    )
    return schemas.DirectionsResponse.from_result(result)


@router.get("/geocode/search", response_model=schemas.SearchResponse)
async def search_places(
    q: str = Query(min_length=1),
    limit: int = Query(5, ge=1, le=10),
    geocoder: GeocodingService = Depends(deps.get_geocoder),
) -> schemas.SearchResponse:
    places = await geocoder.search(q, limit)
    return schemas.SearchResponse(places=[schemas.PlaceOut.from_place(p) for p in places])


@router.get("/geocode/reverse", response_model=schemas.ReverseResponse)
async def reverse_geocode(
    lat: float = Query(ge=-90, le=90),
    lng: float = Query(ge=-180, le=180),
    geocoder: GeocodingService = Depends(deps.get_geocoder),
) -> schemas.ReverseResponse:
    address = await geocoder.reverse(lat, lng)
    return schemas.ReverseResponse(address=address)
