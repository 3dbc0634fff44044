"""
GeoJournal Backend — User SQLAlchemy Model
===========================================

What:  ORM model representing the `users` table.
Who:   Used by UserService through the Data Store Gateway, and by Alembic.

Table Design Rationale:
    - UUIDv7 primary key, generated in Python so the id is known before insert
    - email: unique index; lookups by email drive both signup and login
    - password_hash: bcrypt output (60 chars); the plaintext is never stored
    - no update/delete paths exist for users
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from uuid6 import uuid7

from geojournal.database import Base, UTCDateTime


class User(Base):
    """A registered journal author."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid7,
        comment="Unique identifier, assigned at signup",
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    mobile_number: Mapped[str] = mapped_column(String(32), nullable=False)

    # Stored lower-cased by the signup schema, so equality lookups are case-insensitive
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Login identifier, unique across users",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the user's password",
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        comment="When the user signed up (UTC)",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
