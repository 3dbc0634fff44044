"""
GeoJournal Backend — Google Geocoding Client Tests
====================================================

What:  Tests GoogleGeocodingService against canned API responses.
How:   httpx.MockTransport answers every request; no network access.

What we test:
    ✅ OK → first result's coordinates; request carries address and key
    ✅ ZERO_RESULTS / empty results → GeocodeError 422
    ✅ API error status, HTTP error, transport error, bad or non-object JSON → GeocodeError 502
"""

import httpx
import pytest

from geojournal.exceptions import GeocodeError
from geojournal.services.google_geocoding import GoogleGeocodingService

BASE_URL = "https://maps.example.com/geocode/json"


def make_service(handler, api_key="test-key"):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GoogleGeocodingService(api_key=api_key, base_url=BASE_URL, client=client)


def ok_payload(lat, lng):
    return {
        "status": "OK",
        "results": [{"geometry": {"location": {"lat": lat, "lng": lng}}}],
    }


class TestResolve:

    @pytest.mark.asyncio
    async def test_ok_returns_first_result(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            payload = ok_payload(14.5995, 120.9842)
            payload["results"].append({"geometry": {"location": {"lat": 0.0, "lng": 0.0}}})
            return httpx.Response(200, json=payload)

        service = make_service(handler)
        coordinates = await service.resolve("Manila, Philippines")
        await service.aclose()

        assert coordinates.latitude == 14.5995
        assert coordinates.longitude == 120.9842
        assert len(seen) == 1
        assert seen[0].method == "GET"
        assert seen[0].url.params["address"] == "Manila, Philippines"
        assert seen[0].url.params["key"] == "test-key"

    @pytest.mark.asyncio
    async def test_zero_results_is_422(self):
        service = make_service(
            lambda request: httpx.Response(200, json={"status": "ZERO_RESULTS", "results": []})
        )

        with pytest.raises(GeocodeError) as exc_info:
            await service.resolve("Atlantis")

        assert exc_info.value.status_code == 422
        assert exc_info.value.message == GoogleGeocodingService.NOT_FOUND_MESSAGE

    @pytest.mark.asyncio
    async def test_ok_without_results_is_422(self):
        service = make_service(
            lambda request: httpx.Response(200, json={"status": "OK", "results": []})
        )

        with pytest.raises(GeocodeError) as exc_info:
            await service.resolve("Nowhere")

        assert exc_info.value.status_code == 422

    @pytest.mark.asyncio
    async def test_request_denied_is_502(self):
        service = make_service(
            lambda request: httpx.Response(
                200,
                json={"status": "REQUEST_DENIED", "error_message": "The provided API key is invalid."},
            )
        )

        with pytest.raises(GeocodeError) as exc_info:
            await service.resolve("Baguio")

        assert exc_info.value.status_code == 502
        assert exc_info.value.context["api_status"] == "REQUEST_DENIED"
        # Provider detail stays out of the client-facing message
        assert "API key" not in exc_info.value.message

    @pytest.mark.asyncio
    async def test_http_error_is_502(self):
        service = make_service(lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(GeocodeError) as exc_info:
            await service.resolve("Baguio")

        assert exc_info.value.status_code == 502
        assert exc_info.value.context["upstream_status"] == 500

    @pytest.mark.asyncio
    async def test_transport_error_is_502(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        service = make_service(handler)

        with pytest.raises(GeocodeError) as exc_info:
            await service.resolve("Baguio")

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_non_json_body_is_502(self):
        service = make_service(lambda request: httpx.Response(200, text="<html>oops</html>"))

        with pytest.raises(GeocodeError) as exc_info:
            await service.resolve("Baguio")

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [["unexpected"], "OK", 42])
    async def test_json_that_is_not_an_object_is_502(self, body):
        service = make_service(lambda request: httpx.Response(200, json=body))

        with pytest.raises(GeocodeError) as exc_info:
            await service.resolve("Manila")

        assert exc_info.value.status_code == 502
        assert exc_info.value.context["error_type"] == "ValueError"

    @pytest.mark.asyncio
    async def test_malformed_result_is_502(self):
        service = make_service(
            lambda request: httpx.Response(200, json={"status": "OK", "results": [{"geometry": {}}]})
        )

        with pytest.raises(GeocodeError) as exc_info:
            await service.resolve("Baguio")

        assert exc_info.value.status_code == 502


class TestConfiguration:

    def test_configured_with_key(self):
        service = make_service(lambda request: httpx.Response(200))
        assert service.is_configured() is True

    def test_not_configured_without_key(self):
        service = make_service(lambda request: httpx.Response(200), api_key="")
        assert service.is_configured() is False

    @pytest.mark.asyncio
    async def test_aclose_closes_client(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        service = GoogleGeocodingService(api_key="k", base_url=BASE_URL, client=client)

        await service.aclose()

        assert client.is_closed
