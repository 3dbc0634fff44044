"""
GeoJournal Backend — User Route Handlers
=========================================

Routes:
    GET  /api/users          → {"users": [...]}
    POST /api/users/signup   → 201 {"user": ...}
    POST /api/users/login    → {"message": "Logged in!", "userId": ..., "email": ...}
"""

import logging

from fastapi import APIRouter, Depends

from geojournal.dependencies import get_store
from geojournal.schemas.common import ErrorResponse
from geojournal.schemas.user import (
    LoginResponse,
    UserEnvelope,
    UserListResponse,
    UserLogin,
    UserSignup,
)
from geojournal.services.user_service import user_service
from geojournal.store import DataStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get(
    "",
    response_model=UserListResponse,
    responses={500: {"description": "Store unavailable", "model": ErrorResponse}},
    summary="List users",
)
async def list_users(store: DataStore = Depends(get_store)) -> UserListResponse:
    users = await user_service.list_users(store)
    return UserListResponse(users=users)


@router.post(
    "/signup",
    status_code=201,
    response_model=UserEnvelope,
    responses={
        422: {"description": "Invalid input or email already registered", "model": ErrorResponse},
        500: {"description": "Store unavailable", "model": ErrorResponse},
    },
    summary="Register a new user",
)
async def signup(
    body: UserSignup,
    store: DataStore = Depends(get_store),
) -> UserEnvelope:
    user = await user_service.signup(store, body)
    return UserEnvelope(user=user)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        401: {"description": "Invalid credentials", "model": ErrorResponse},
        500: {"description": "Store unavailable", "model": ErrorResponse},
    },
    summary="Check email and password",
)
async def login(
    body: UserLogin,
    store: DataStore = Depends(get_store),
) -> LoginResponse:
    """Confirms the credentials. No session or token is issued."""
    return await user_service.login(store, body)
