"""
GeoJournal Backend — Journal Entry Schemas
===========================================

What:  Pydantic models defining the entry API contract.
Why:   Input validation happens here, before a handler touches the store;
       a failed validation becomes a 422 with no side effects.
How:   JSON uses camelCase (`journalText`, `locationName`); snake_case field
       names are accepted on input as well.
"""

import uuid
from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from geojournal.config import settings
from geojournal.models.entry import Entry


class CamelModel(BaseModel):
    """Base for API models: camelCase on the wire, stripped strings on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class EntryCreate(CamelModel):
    """
    What:  Body of POST /api/journal.

    author:
        Parsed as a UUID, then stored as its canonical string form. The list
        endpoint parses its path parameter the same way, so the two always
        compare equal for the same user.
    """
    headline: str = Field(min_length=settings.headline_min_length, max_length=200)
    journal_text: str = Field(min_length=1)
    location_name: str = Field(min_length=1, max_length=255)
    author: uuid.UUID


class EntryUpdate(CamelModel):
    """Body of PATCH /api/journal/{entry_id}. Only these two fields are mutable."""
    headline: str = Field(min_length=settings.headline_min_length, max_length=200)
    journal_text: str = Field(min_length=1)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class Coordinates(CamelModel):
    """A resolved latitude/longitude pair. Always present as a whole."""
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class EntryResponse(CamelModel):
    """Full representation of a journal entry."""
    id: uuid.UUID
    headline: str
    journal_text: str
    photo: str
    location_name: str
    coordinates: Coordinates
    author: str
    created_at: datetime

    @classmethod
    def from_model(cls, entry: Entry) -> "EntryResponse":
        return cls(
            id=entry.id,
            headline=entry.headline,
            journal_text=entry.journal_text,
            photo=entry.photo,
            location_name=entry.location_name,
            coordinates=Coordinates(latitude=entry.latitude, longitude=entry.longitude),
            author=entry.author,
            created_at=entry.created_at,
        )


class EntryEnvelope(BaseModel):
    """`{"entry": {...}}` — single-entry response body."""
    entry: EntryResponse


class EntryListResponse(BaseModel):
    """`{"entries": [...]}` — entries of one author, oldest first."""
    entries: List[EntryResponse]
