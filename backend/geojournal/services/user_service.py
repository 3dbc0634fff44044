"""
GeoJournal Backend — User Service (User Handlers)
==================================================

What:  List users, sign up, log in.
Why:   Keeps credential handling and error classification out of the routes.
How:   Same shape as EntryService: a DataStore is passed into each call and
       every gateway failure is re-raised as one application error.

Credentials:
    Passwords are hashed with bcrypt on signup and verified with
    bcrypt.checkpw on login. Login issues no token; a successful response
    only confirms the user's id and email.
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from uuid6 import uuid7

from geojournal.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    StoreUnavailableError,
)
from geojournal.models.user import User
from geojournal.schemas.user import LoginResponse, UserLogin, UserResponse, UserSignup
from geojournal.security import DUMMY_PASSWORD_HASH, hash_password, verify_password
from geojournal.store import DataStore

logger = logging.getLogger(__name__)


class UserService:
    """Handler set for users. Stateless; one instance serves every request."""

    async def list_users(self, store: DataStore) -> List[UserResponse]:
        """All users, oldest first, without any password data."""
        try:
            users = await store.find_many(User, order_by=(User.created_at, User.id))
        except Exception as e:
            logger.error("Database error listing users: %s", str(e), exc_info=True)
            raise StoreUnavailableError(
                message="Fetching users failed, please try again later.",
                context={"error_type": type(e).__name__},
            )
        return [UserResponse.from_model(user) for user in users]

    async def signup(self, store: DataStore, data: UserSignup) -> UserResponse:
        """
        Register a new user.

        Raises:
            ConflictError: the email is already registered
            StoreUnavailableError: the existence check or the insert failed
        """
        try:
            existing = await store.find_one(User, User.email == data.email)
        except Exception as e:
            logger.error("Database error checking email for signup: %s", str(e), exc_info=True)
            raise StoreUnavailableError(
                message="Signing up failed, please try again later.",
                context={"error_type": type(e).__name__},
            )

        if existing is not None:
            logger.warning("Signup rejected: email already registered (user %s)", existing.id)
            raise ConflictError()

        user = User(
            id=uuid7(),
            first_name=data.first_name,
            last_name=data.last_name,
            mobile_number=data.mobile_number,
            email=data.email,
            password_hash=hash_password(data.password),
        )

        try:
            await store.insert(user)
        except IntegrityError:
            # Another signup with the same email committed after our check
            logger.warning("Signup rejected: unique email violated on insert")
            raise ConflictError()
        except Exception as e:
            logger.error("Database error creating user: %s", str(e), exc_info=True)
            raise StoreUnavailableError(
                message="Signing up failed, please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("User %s signed up", user.id)
        return UserResponse.from_model(user)

    async def login(self, store: DataStore, data: UserLogin) -> LoginResponse:
        """
        Check an email/password pair.

        Raises:
            InvalidCredentialsError: unknown email or wrong password (same message)
            StoreUnavailableError: the lookup failed
        """
        try:
            user = await store.find_one(User, User.email == data.email)
        except Exception as e:
            logger.error("Database error during login: %s", str(e), exc_info=True)
            raise StoreUnavailableError(
                message="Logging in failed, please try again later.",
                context={"error_type": type(e).__name__},
            )

        if user is None:
            verify_password(data.password, DUMMY_PASSWORD_HASH)
            logger.warning("Login failed: unknown email")
            raise InvalidCredentialsError()

        if not verify_password(data.password, user.password_hash):
            logger.warning("Login failed: wrong password for user %s", user.id)
            raise InvalidCredentialsError()

        logger.info("User %s logged in", user.id)
        return LoginResponse(user_id=user.id, email=user.email)


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
