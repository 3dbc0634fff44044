"""
GeoJournal Backend — Journal Entry SQLAlchemy Model
====================================================

What:  ORM model representing the `entries` table.
Who:   Used by EntryService through the Data Store Gateway, and by Alembic.

Table Design Rationale:
    - UUIDv7 primary key generated in Python; ids sort in creation order
    - latitude/longitude: two NOT NULL columns, so coordinates can never be
      half-populated
    - author: plain string copy of the owning user's id (canonical UUID text).
      There is no foreign key; deleting a user leaves their entries in place.
    - created_at: drives the "creation order" of list-by-author

Lifecycle:
    1. Created with geocoded coordinates and the default photo
    2. Headline and journal text may be overwritten; nothing else changes
    3. Deleted outright (no soft delete)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Float, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from uuid6 import uuid7

from geojournal.database import Base, UTCDateTime


class Entry(Base):
    """A journal entry pinned to a geocoded place."""

    __tablename__ = "entries"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid7,
        comment="Unique identifier, assigned at creation",
    )

    headline: Mapped[str] = mapped_column(String(200), nullable=False)

    # TEXT: no artificial length limit on the body of an entry
    journal_text: Mapped[str] = mapped_column(Text, nullable=False)

    photo: Mapped[str] = mapped_column(
        String(2048),
        nullable=False,
        comment="URL of the entry's photo",
    )

    location_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Free-text place name as typed by the author",
    )

    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)

    author: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        comment="str(User.id) of the owner; not a foreign key",
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        comment="When this entry was created (UTC)",
    )

    # Composite index serves WHERE author = :uid ORDER BY created_at
    __table_args__ = (
        Index("idx_entries_author_created_at", "author", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Entry(id={self.id}, author='{self.author}', "
            f"headline='{self.headline}')>"
        )
