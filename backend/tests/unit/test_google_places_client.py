"""Unit tests for GooglePlacesNameClient."""

import json

import httpx
import pytest

from pingspot.infrastructure.places import GooglePlacesNameClient


def _client(handler, api_key="places-key") -> GooglePlacesNameClient:
    return GooglePlacesNameClient(
        api_key=api_key,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


@pytest.mark.asyncio
async def test_lookup_returns_first_display_name():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["headers"] = request.headers
        captured["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={"places": [{"displayName": {"text": "Joe's Diner", "languageCode": "en"}}]},
        )

    name = await _client(handler).lookup_name(40.7128, -74.0060)

    assert name == "Joe's Diner"
    assert captured["url"] == "https://places.googleapis.com/v1/places:searchNearby"
    assert captured["headers"]["X-Goog-Api-Key"] == "places-key"
    assert captured["headers"]["X-Goog-FieldMask"] == "places.displayName"
    assert captured["body"]["maxResultCount"] == 1
    circle = captured["body"]["locationRestriction"]["circle"]
    assert circle["center"] == {"latitude": 40.7128, "longitude": -74.0060}
    assert circle["radius"] == 50.0


@pytest.mark.asyncio
async def test_no_places_returns_none():
    def handler(request):
        return httpx.Response(200, json={})

    assert await _client(handler).lookup_name(0.0, 0.0) is None


@pytest.mark.asyncio
async def test_blank_display_name_returns_none():
    def handler(request):
        return httpx.Response(200, json={"places": [{"displayName": {"text": "  "}}]})

    assert await _client(handler).lookup_name(0.0, 0.0) is None


@pytest.mark.asyncio
async def test_error_status_returns_none():
    def handler(request):
        return httpx.Response(403, json={"error": {"message": "API key invalid"}})

    assert await _client(handler).lookup_name(0.0, 0.0) is None


@pytest.mark.asyncio
async def test_transport_error_returns_none():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    assert await _client(handler).lookup_name(0.0, 0.0) is None


@pytest.mark.asyncio
async def test_missing_key_skips_request():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={})

    assert await _client(handler, api_key=" ").lookup_name(0.0, 0.0) is None
    assert calls == []
