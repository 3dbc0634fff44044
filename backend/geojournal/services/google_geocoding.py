"""
GeoJournal Backend — Google Maps Geocoding Client
==================================================

What:  Concrete GeocodingService backed by the Google Maps Geocoding JSON API.
How:   One shared `httpx.AsyncClient` (created at startup, closed at shutdown)
       issues GET {base_url}?address=...&key=... and reads the first result's
       geometry.location.
Who:   Instantiated in the application lifespan; injected into entry routes.

Response handling:
    status == "OK"            → first result's {lat, lng}
    status == "ZERO_RESULTS"  → GeocodeError 422 (the place does not exist)
    any other API status      → GeocodeError 502 (REQUEST_DENIED, OVER_QUERY_LIMIT, ...)
    HTTP error / transport    → GeocodeError 502

No retries are attempted; a failed lookup fails the entry creation.
"""

import logging
import time
from typing import Optional

import httpx

from geojournal.config import settings
from geojournal.exceptions import GeocodeError
from geojournal.schemas.entry import Coordinates
from geojournal.services.geocoding_base import GeocodingService

logger = logging.getLogger(__name__)


class GoogleGeocodingService(GeocodingService):
    """Google Maps Geocoding API implementation."""

    NOT_FOUND_MESSAGE = "Could not find location for the specified address."
    UPSTREAM_MESSAGE = "Location lookup is unavailable right now, please try again later."

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.google_maps_api_key
        self.base_url = base_url or settings.geocoding_base_url
        # `client` lets tests inject an httpx.MockTransport-backed client
        self._client = client or httpx.AsyncClient(
            timeout=timeout or settings.geocoding_timeout
        )

        logger.info(
            "GoogleGeocodingService initialized (configured=%s, timeout=%.1fs)",
            self.is_configured(),
            self._client.timeout.read or 0.0,
        )

    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def resolve(self, location_name: str) -> Coordinates:
        """
        Resolve `location_name` with a single API call.

        Raises:
            GeocodeError(422): the API found no match
            GeocodeError(502): the API or the network failed
        """
        start_time = time.perf_counter()

        try:
            response = await self._client.get(
                self.base_url,
                params={"address": location_name, "key": self.api_key},
            )
            response.raise_for_status()
            payload = response.json()
            if not isinstance(payload, dict):
                raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
        except httpx.HTTPStatusError as e:
            logger.error(
                "Geocoding HTTP error %d for %r",
                e.response.status_code,
                location_name,
            )
            raise GeocodeError(
                message=self.UPSTREAM_MESSAGE,
                status_code=502,
                context={"upstream_status": e.response.status_code},
            )
        except (httpx.HTTPError, ValueError) as e:
            # ValueError: body was not a JSON object
            logger.error("Geocoding request failed for %r: %s", location_name, str(e))
            raise GeocodeError(
                message=self.UPSTREAM_MESSAGE,
                status_code=502,
                context={"error_type": type(e).__name__},
            )

        duration_ms = (time.perf_counter() - start_time) * 1000
        api_status = payload.get("status")
        results = payload.get("results") or []

        if api_status == "ZERO_RESULTS" or (api_status == "OK" and not results):
            logger.warning("Geocoding found no match for %r (%.0fms)", location_name, duration_ms)
            raise GeocodeError(message=self.NOT_FOUND_MESSAGE, status_code=422)

        if api_status != "OK":
            logger.error(
                "Geocoding API returned status=%s for %r: %s",
                api_status,
                location_name,
                payload.get("error_message", ""),
            )
            raise GeocodeError(
                message=self.UPSTREAM_MESSAGE,
                status_code=502,
                context={"api_status": api_status},
            )

        try:
            location = results[0]["geometry"]["location"]
            coordinates = Coordinates(latitude=location["lat"], longitude=location["lng"])
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Unexpected geocoding payload for %r: %s", location_name, str(e))
            raise GeocodeError(
                message=self.UPSTREAM_MESSAGE,
                status_code=502,
                context={"error_type": type(e).__name__},
            )

        logger.info(
            "Geocoded %r → (%.5f, %.5f) in %.0fms",
            location_name,
            coordinates.latitude,
            coordinates.longitude,
            duration_ms,
        )
        return coordinates

    async def aclose(self) -> None:
        await self._client.aclose()
