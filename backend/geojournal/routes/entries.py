"""
GeoJournal Backend — Journal Entry Route Handlers
==================================================

What:  HTTP surface for journal entries.
How:   Path parameters and bodies are validated by FastAPI/Pydantic (422 on
       failure, before any store access); everything else is delegated to
       EntryService.

Routes:
    GET    /api/journal/{entry_id}       → {"entry": ...}
    GET    /api/journal/user/{user_id}   → {"entries": [...]}
    POST   /api/journal                  → 201 {"entry": ...}
    PATCH  /api/journal/{entry_id}       → {"entry": ...}
    DELETE /api/journal/{entry_id}       → {"message": "Deleted entry."}
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from geojournal.dependencies import get_geocoder, get_store
from geojournal.schemas.common import ErrorResponse, MessageResponse
from geojournal.schemas.entry import (
    EntryCreate,
    EntryEnvelope,
    EntryListResponse,
    EntryUpdate,
)
from geojournal.services.entry_service import entry_service
from geojournal.services.geocoding_base import GeocodingService
from geojournal.store import DataStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/journal", tags=["Journal"])

_ERRORS = {
    422: {"description": "Invalid input", "model": ErrorResponse},
    500: {"description": "Store unavailable", "model": ErrorResponse},
}


@router.get(
    "/user/{user_id}",
    response_model=EntryListResponse,
    responses=_ERRORS,
    summary="List a user's journal entries",
)
async def list_entries_by_user(
    user_id: UUID,
    store: DataStore = Depends(get_store),
) -> EntryListResponse:
    """Entries authored by `user_id`, oldest first. Empty list when there are none."""
    entries = await entry_service.list_entries_by_user(store, user_id)
    return EntryListResponse(entries=entries)


@router.get(
    "/{entry_id}",
    response_model=EntryEnvelope,
    responses={404: {"description": "Entry not found", "model": ErrorResponse}, **_ERRORS},
    summary="Get a journal entry by id",
)
async def get_entry(
    entry_id: UUID,
    store: DataStore = Depends(get_store),
) -> EntryEnvelope:
    entry = await entry_service.get_entry(store, entry_id)
    return EntryEnvelope(entry=entry)


@router.post(
    "",
    status_code=201,
    response_model=EntryEnvelope,
    responses={
        502: {"description": "Geocoding provider failed", "model": ErrorResponse},
        **_ERRORS,
    },
    summary="Create a journal entry",
    description=(
        "Resolves `locationName` to coordinates, then stores the entry with a "
        "placeholder photo. Nothing is stored when the location cannot be resolved."
    ),
)
async def create_entry(
    body: EntryCreate,
    store: DataStore = Depends(get_store),
    geocoder: GeocodingService = Depends(get_geocoder),
) -> EntryEnvelope:
    entry = await entry_service.create_entry(store, geocoder, body)
    return EntryEnvelope(entry=entry)


@router.patch(
    "/{entry_id}",
    response_model=EntryEnvelope,
    responses={404: {"description": "Entry not found", "model": ErrorResponse}, **_ERRORS},
    summary="Update headline and text of a journal entry",
)
async def update_entry(
    entry_id: UUID,
    body: EntryUpdate,
    store: DataStore = Depends(get_store),
) -> EntryEnvelope:
    entry = await entry_service.update_entry(store, entry_id, body)
    return EntryEnvelope(entry=entry)


@router.delete(
    "/{entry_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Entry not found", "model": ErrorResponse}, **_ERRORS},
    summary="Delete a journal entry",
)
async def delete_entry(
    entry_id: UUID,
    store: DataStore = Depends(get_store),
) -> MessageResponse:
    await entry_service.delete_entry(store, entry_id)
    return MessageResponse(message="Deleted entry.")
