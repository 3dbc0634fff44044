"""
GeoJournal Backend — Abstract Geocoding Interface
==================================================

What:  Abstract base class for turning a free-text place name into coordinates.
Why:   Entry creation depends only on `resolve()`. Providers can be swapped
       (Google → Nominatim → a fixed table in tests) without touching
       EntryService.
How:   Concrete implementations inherit from GeocodingService and implement
       resolve(), health_check() and aclose().
Who:   Called by EntryService.create_entry() before anything is persisted.
"""

from abc import ABC, abstractmethod

from geojournal.schemas.entry import Coordinates


class GeocodingService(ABC):
    """
    Abstract interface for address → coordinates lookup.

    Contract:
        - resolve() returns a complete Coordinates (never half-populated)
        - every failure is raised as GeocodeError, carrying the HTTP status
          the API should report; callers pass it through unchanged
        - no retries: one upstream call per resolve()

    Implementations:
        - GoogleGeocodingService: Google Maps Geocoding API over httpx
    """

    @abstractmethod
    async def resolve(self, location_name: str) -> Coordinates:
        """
        Resolve a place name to latitude/longitude.

        Raises:
            GeocodeError: No match for the name, or the provider failed.
        """
        ...

    @abstractmethod
    def is_configured(self) -> bool:
        """True when the provider has the credentials it needs."""
        ...

    async def aclose(self) -> None:
        """Release any network resources. Called on application shutdown."""
        return None
