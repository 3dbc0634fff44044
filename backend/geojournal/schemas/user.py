"""
GeoJournal Backend — User Schemas
==================================

What:  Pydantic models for signup, login and user listings.

Security:
    No response model in this module has a password field. The ORM model's
    `password_hash` is simply never copied into a response.
"""

import uuid
from datetime import datetime
from typing import List

from pydantic import BaseModel, EmailStr, Field, field_validator

from geojournal.config import settings
from geojournal.models.user import User
from geojournal.schemas.entry import CamelModel


class UserSignup(CamelModel):
    """Body of POST /api/users/signup."""
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    mobile_number: str = Field(min_length=1, max_length=32)
    email: EmailStr
    password: str = Field(min_length=settings.password_min_length, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserLogin(CamelModel):
    """
    Body of POST /api/users/login.

    The email is not format-checked here: a malformed address simply matches
    no user and yields the same 401 as any other bad login.
    """
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserResponse(CamelModel):
    """Public view of a user."""
    id: uuid.UUID
    first_name: str
    last_name: str
    mobile_number: str
    email: str
    created_at: datetime

    @classmethod
    def from_model(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            mobile_number=user.mobile_number,
            email=user.email,
            created_at=user.created_at,
        )


class UserEnvelope(BaseModel):
    """`{"user": {...}}` — returned by signup."""
    user: UserResponse


class UserListResponse(BaseModel):
    """`{"users": [...]}`."""
    users: List[UserResponse]


class LoginResponse(CamelModel):
    """Login confirmation. No session or token is issued."""
    message: str = "Logged in!"
    user_id: uuid.UUID
    email: str
