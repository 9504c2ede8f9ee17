import logging

import httpx

from services.directions.app.geocoding import GeocodingService, Place

GEOAPIFY_PAYLOAD = {
    "type": "FeatureCollection",
    "features": [
        {
            "geometry": {"type": "Point", "coordinates": [-0.1869, 5.6502]},
            "properties": {"formatted": "Bani Hostel, University of Ghana, Legon"},
        },
        {
            "geometry": {"type": "Point", "coordinates": [-0.1901, 5.6481]},
            "properties": {"address_line1": "Pent Hostel"},
        },
        {"geometry": None, "properties": {"formatted": "no coordinates"}},
    ],
}

MAPBOX_PAYLOAD = {
    "features": [
        {"center": [-0.1862, 5.6037], "place_name": "Oxford Street, Osu, Accra, Ghana"}
    ]
}


def _service(client: httpx.AsyncClient, **keys: str) -> GeocodingService:
    return GeocodingService(client, country="gh", **keys)


def test_search_uses_geoapify_first(run_with_client, http_calls) -> None:
    places = run_with_client(
        lambda request: httpx.Response(200, json=GEOAPIFY_PAYLOAD),
        lambda client: _service(
            client, geoapify_api_key="geo-key", mapbox_api_key="mb-key"
        ).search("Bani Hostel", limit=3),
    )

    assert places == [
        Place(5.6502, -0.1869, "Bani Hostel, University of Ghana, Legon", "Geoapify"),
        Place(5.6481, -0.1901, "Pent Hostel", "Geoapify"),
    ]
    params = http_calls[0].url.params
    assert http_calls[0].url.host == "api.geoapify.com"
    assert params["text"] == "Bani Hostel"
    assert params["filter"] == "countrycode:gh"
    assert params["limit"] == "3"
    assert params["apiKey"] == "geo-key"
    assert len(http_calls) == 1


def test_search_falls_back_to_mapbox_when_geoapify_unconfigured(
    run_with_client, http_calls
) -> None:
    places = run_with_client(
        lambda request: httpx.Response(200, json=MAPBOX_PAYLOAD),
        lambda client: _service(
            client, geoapify_api_key="your_geoapify_api_key_here", mapbox_api_key="mb-key"
        ).search("Oxford Street"),
    )

    assert places == [Place(5.6037, -0.1862, "Oxford Street, Osu, Accra, Ghana", "Mapbox")]
    request = http_calls[0]
    assert request.url.host == "api.mapbox.com"
    assert request.url.path == "/geocoding/v5/mapbox.places/Oxford Street.json"
    assert request.url.params["access_token"] == "mb-key"
    assert request.url.params["country"] == "gh"


def test_search_falls_back_when_geoapify_fails(run_with_client, caplog) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "api.geoapify.com":
            return httpx.Response(401, json={"message": "Invalid apiKey"})
        return httpx.Response(200, json=MAPBOX_PAYLOAD)

    places = run_with_client(
        handler,
        lambda client: _service(
            client, geoapify_api_key="geo-key", mapbox_api_key="mb-key"
        ).search("Oxford Street"),
    )

    assert [p.provider for p in places] == ["Mapbox"]
    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert any("Geoapify" in w and "auth failed" in w for w in warnings)


def test_search_returns_empty_when_everything_fails(run_with_client) -> None:
    places = run_with_client(
        lambda request: httpx.Response(503, text="unavailable"),
        lambda client: _service(
            client, geoapify_api_key="geo-key", mapbox_api_key="mb-key"
        ).search("Legon"),
    )
    assert places == []


def test_blank_query_makes_no_calls(run_with_client, http_calls) -> None:
    places = run_with_client(
        lambda request: httpx.Response(200, json=GEOAPIFY_PAYLOAD),
        lambda client: _service(client, geoapify_api_key="geo-key").search("   "),
    )
    assert places == []
    assert http_calls == []


def test_reverse_returns_place_name(run_with_client, http_calls) -> None:
    address = run_with_client(
        lambda request: httpx.Response(200, json=MAPBOX_PAYLOAD),
        lambda client: _service(client, mapbox_api_key="mb-key").reverse(5.6037, -0.1862),
    )

    assert address == "Oxford Street, Osu, Accra, Ghana"
    assert http_calls[0].url.path == "/geocoding/v5/mapbox.places/-0.1862,5.6037.json"


def test_reverse_without_key_returns_coordinates(run_with_client, http_calls) -> None:
    address = run_with_client(
        lambda request: httpx.Response(200, json=MAPBOX_PAYLOAD),
        lambda client: _service(client).reverse(5.6037, -0.1862),
    )
    assert address == "5.603700, -0.186200"
    assert http_calls == []


def test_reverse_with_no_features_returns_coordinates(run_with_client) -> None:
    address = run_with_client(
        lambda request: httpx.Response(200, json={"features": []}),
        lambda client: _service(client, mapbox_api_key="mb-key").reverse(5.6, -0.2),
    )
    assert address == "5.600000, -0.200000"


def _undecodable(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip")


def test_search_survives_undecodable_bodies(run_with_client, caplog) -> None:
    places = run_with_client(
        _undecodable,
        lambda client: _service(
            client, geoapify_api_key="geo-key", mapbox_api_key="mb-key"
        ).search("Legon"),
    )

    assert places == []
    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert any("Geoapify" in w and "network error" in w for w in warnings)
    assert any("Mapbox" in w and "network error" in w for w in warnings)


def test_reverse_survives_undecodable_body(run_with_client) -> None:
    address = run_with_client(
        _undecodable,
        lambda client: _service(client, mapbox_api_key="mb-key").reverse(5.6, -0.2),
    )
    assert address == "5.600000, -0.200000"


def test_reverse_treats_uppercase_placeholder_as_unconfigured(
    run_with_client, http_calls
) -> None:
    address = run_with_client(
        lambda request: httpx.Response(200, json=MAPBOX_PAYLOAD),
        lambda client: _service(client, mapbox_api_key="YOUR_MAPBOX_API_KEY_HERE").reverse(
            5.6037, -0.1862
        ),
    )
    assert address == "5.603700, -0.186200"
    assert http_calls == []
