"""
GeoJournal Backend — Shared Route Dependencies
===============================================

What:  FastAPI dependencies that hand lifespan-owned resources to routes.
Why:   The geocoder and database live on `app.state`; routes ask for them
       through Depends() so tests can swap them with dependency_overrides.
"""

from fastapi import Request

from geojournal.services.geocoding_base import GeocodingService
from geojournal.store import get_store  # noqa: F401  (re-exported for routers)


def get_geocoder(request: Request) -> GeocodingService:
    """Return the process-wide geocoding client created at startup."""
    return request.app.state.geocoder
