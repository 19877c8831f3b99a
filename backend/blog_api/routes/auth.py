"""
Blog Backend — Auth Route Handlers
===================================

What:  POST /api/auth/register, POST /api/auth/login, GET /api/auth/me.
How:   Thin adapters: parse the body, inject the store and service, return
       the service's response model. Errors are raised as BlogError
       subclasses and rendered by the global handlers in main.py.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from blog_api.context import Identity
from blog_api.dependencies import get_auth_service, get_store, require_identity
from blog_api.repository import BlogStore
from blog_api.schemas.auth import AuthResponse, LoginRequest, MeResponse, RegisterRequest
from blog_api.schemas.common import ErrorResponse
from blog_api.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/register",
    status_code=201,
    response_model=AuthResponse,
    responses={
        400: {"description": "Missing email/password or password too short", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Register a new account",
)
async def register(
    payload: Optional[RegisterRequest] = None,
    store: BlogStore = Depends(get_store),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Create an account and return it together with a bearer token.

    The password must be at least 6 characters; it is stored only as a
    bcrypt digest.
    """
    return await auth_service.register(store, payload or RegisterRequest())


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        400: {"description": "Missing email or password", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Log in with email and password",
)
async def login(
    payload: Optional[LoginRequest] = None,
    store: BlogStore = Depends(get_store),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Exchange credentials for a bearer token.

    Unknown email and wrong password both answer 401 "Invalid credentials".
    """
    return await auth_service.login(store, payload or LoginRequest())


@router.get(
    "/me",
    response_model=MeResponse,
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        404: {"description": "Account no longer exists", "model": ErrorResponse},
    },
    summary="Current user",
)
async def me(
    identity: Identity = Depends(require_identity),
    store: BlogStore = Depends(get_store),
    auth_service: AuthService = Depends(get_auth_service),
) -> MeResponse:
    return await auth_service.current_user(store, identity)
