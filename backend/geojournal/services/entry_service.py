"""
GeoJournal Backend — Entry Service (Journal Entry Handlers)
============================================================

What:  The five entry operations: get one, list by author, create, update, delete.
Why:   Keeps business rules and error classification independent of HTTP.
How:   Receives its collaborators per call (DataStore, GeocodingService) and
       turns every failure of those calls into exactly one application error.
Who:   Called by the journal route handlers.

Create Flow (POST /api/journal):
    ┌──────────┐    ┌──────────────┐    ┌──────────────┐    ┌──────────┐
    │ Validate │───▶│   Geocode    │───▶│  Build Entry │───▶│  Insert  │
    │ (schema) │    │ (GeocodeErr  │    │ (id, photo,  │    │ (commit) │
    └──────────┘    │  passthrough)│    │  coordinates)│    └──────────┘
                    └──────────────┘    └──────────────┘

    Geocoding runs before the record exists, so a geocoding failure leaves
    nothing behind. If the insert fails, the resolved coordinates are dropped.

Error Classification:
    record absent                    → NotFoundError (404)
    gateway raised                   → StoreUnavailableError (500)
    geocoder raised GeocodeError     → propagated unchanged
"""

import logging
import uuid
from typing import List

from uuid6 import uuid7

from geojournal.config import settings
from geojournal.exceptions import GeoJournalError, NotFoundError, StoreUnavailableError
from geojournal.models.entry import Entry
from geojournal.schemas.entry import EntryCreate, EntryResponse, EntryUpdate
from geojournal.services.geocoding_base import GeocodingService
from geojournal.store import DataStore

logger = logging.getLogger(__name__)


class EntryService:
    """
    Handler set for journal entries.

    Stateless: the store and geocoder are passed into each call, so one
    instance serves every request.
    """

    async def get_entry(self, store: DataStore, entry_id: uuid.UUID) -> EntryResponse:
        """
        Retrieve one entry by id.

        Raises:
            NotFoundError: no entry has this id
            StoreUnavailableError: the lookup itself failed
        """
        entry = await self._load(
            store,
            entry_id,
            failure_message="Something went wrong, could not find an entry.",
        )
        if entry is None:
            raise NotFoundError(
                resource="entry",
                resource_id=str(entry_id),
                message="Could not find an entry for the provided id.",
            )
        return EntryResponse.from_model(entry)

    async def list_entries_by_user(
        self, store: DataStore, user_id: uuid.UUID
    ) -> List[EntryResponse]:
        """
        All entries whose author is `user_id`, oldest first.

        An author with no entries gets an empty list, not an error.
        """
        author = str(user_id)
        try:
            entries = await store.find_many(
                Entry,
                Entry.author == author,
                order_by=(Entry.created_at, Entry.id),
            )
        except Exception as e:
            logger.error("Database error listing entries for %s: %s", author, str(e), exc_info=True)
            raise StoreUnavailableError(
                message="Fetching entries failed, please try again later.",
                context={"user_id": author, "error_type": type(e).__name__},
            )

        logger.debug("Found %d entries for author %s", len(entries), author)
        return [EntryResponse.from_model(entry) for entry in entries]

    async def create_entry(
        self,
        store: DataStore,
        geocoder: GeocodingService,
        data: EntryCreate,
    ) -> EntryResponse:
        """
        Geocode the location, then persist a new entry.

        Raises:
            GeocodeError: the location could not be resolved (nothing persisted)
            StoreUnavailableError: the insert failed
        """
        # GeocodeError is deliberately not caught: its status is the response status
        coordinates = await geocoder.resolve(data.location_name)

        entry = Entry(
            id=uuid7(),
            headline=data.headline,
            journal_text=data.journal_text,
            photo=settings.default_photo_url,
            location_name=data.location_name,
            latitude=coordinates.latitude,
            longitude=coordinates.longitude,
            author=str(data.author),
        )

        try:
            await store.insert(entry)
        except Exception as e:
            logger.error("Database error creating entry: %s", str(e), exc_info=True)
            raise StoreUnavailableError(
                message="Creating entry failed, please try again.",
                context={"author": entry.author, "error_type": type(e).__name__},
            )

        logger.info("Entry %s created for author %s", entry.id, entry.author)
        return EntryResponse.from_model(entry)

    async def update_entry(
        self,
        store: DataStore,
        entry_id: uuid.UUID,
        data: EntryUpdate,
    ) -> EntryResponse:
        """
        Overwrite headline and journal text of an existing entry.

        Location, coordinates, author and photo are left exactly as stored.

        Raises:
            NotFoundError: no entry has this id
            StoreUnavailableError: lookup or save failed
        """
        failure_message = "Something went wrong, could not update entry."
        entry = await self._load(store, entry_id, failure_message=failure_message)
        if entry is None:
            raise NotFoundError(resource="entry", resource_id=str(entry_id))

        entry.headline = data.headline
        entry.journal_text = data.journal_text

        try:
            await store.save(entry)
        except Exception as e:
            logger.error("Database error saving entry %s: %s", entry_id, str(e), exc_info=True)
            raise StoreUnavailableError(
                message=failure_message,
                context={"entry_id": str(entry_id), "error_type": type(e).__name__},
            )

        logger.info("Entry %s updated", entry_id)
        return EntryResponse.from_model(entry)

    async def delete_entry(self, store: DataStore, entry_id: uuid.UUID) -> None:
        """
        Remove an entry.

        Raises:
            NotFoundError: no entry has this id
            StoreUnavailableError: lookup or removal failed
        """
        failure_message = "Something went wrong, could not delete entry."
        entry = await self._load(store, entry_id, failure_message=failure_message)
        if entry is None:
            raise NotFoundError(
                resource="entry",
                resource_id=str(entry_id),
                message="Could not find entry for this id.",
            )

        try:
            await store.remove(entry)
        except Exception as e:
            logger.error("Database error deleting entry %s: %s", entry_id, str(e), exc_info=True)
            raise StoreUnavailableError(
                message=failure_message,
                context={"entry_id": str(entry_id), "error_type": type(e).__name__},
            )

        logger.info("Entry %s deleted", entry_id)

    async def _load(
        self,
        store: DataStore,
        entry_id: uuid.UUID,
        failure_message: str,
    ) -> Entry | None:
        """find_by_id with store failures classified; None means absent."""
        try:
            return await store.find_by_id(Entry, entry_id)
        except GeoJournalError:
            raise
        except Exception as e:
            logger.error("Database error fetching entry %s: %s", entry_id, str(e), exc_info=True)
            raise StoreUnavailableError(
                message=failure_message,
                context={"entry_id": str(entry_id), "error_type": type(e).__name__},
            )


# ── Singleton Instance ────────────────────────────────────────────────────
entry_service = EntryService()
