"""
Blog Backend — Auth Service
============================

What:  Registration, login, and current-user lookup.
How:   Composes the Credential Hasher, the Session Token Service and the
       persistence store. Built once by `create_app()` with its collaborators
       injected; the per-request store is passed to each call.

Registration pipeline:
    shape check → email not taken (409) → hash → insert → issue token
Login pipeline:
    shape check → find user → verify password → issue token
    Unknown email and wrong password end in the same UnauthorizedError so a
    caller cannot tell which one failed.
"""

import logging
from typing import Optional

from starlette.concurrency import run_in_threadpool

from blog_api.context import Identity
from blog_api.exceptions import BadRequestError, ConflictError, NotFoundError, UnauthorizedError
from blog_api.models import User
from blog_api.repository import BlogStore
from blog_api.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    RegisterRequest,
    UserResponse,
)
from blog_api.services.passwords import PasswordHasher
from blog_api.services.tokens import TokenClaim, TokenService

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
INVALID_CREDENTIALS = "Invalid credentials"


def user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        created_at=user.created_at,
    )


class AuthService:
    """
    Attributes:
        hasher: PasswordHasher used for both registration and login
        tokens: TokenService issuing the bearer tokens
    """

    def __init__(self, hasher: PasswordHasher, tokens: TokenService):
        self.hasher = hasher
        self.tokens = tokens
        # Verified against when the email is unknown, so both login failure
        # paths pay the same bcrypt cost
        self._dummy_digest = hasher.hash("dummy-password-for-timing")

    def _issue_token(self, user: User) -> str:
        return self.tokens.issue(TokenClaim(id=user.id, email=user.email))

    async def register(self, store: BlogStore, payload: RegisterRequest) -> AuthResponse:
        """
        Create an account and return it with a fresh token.

        Raises:
            BadRequestError: email/password missing, password too short
            ConflictError:   an account with this email exists
        """
        if not payload.email or not payload.password:
            raise BadRequestError("Email and password are required")
        if len(payload.password) < MIN_PASSWORD_LENGTH:
            raise BadRequestError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                field="password",
            )

        if await store.find_user_by_email(payload.email) is not None:
            raise ConflictError(context={"email": payload.email})

        # bcrypt is CPU-bound; keep it off the event loop
        password_hash = await run_in_threadpool(self.hasher.hash, payload.password)
        user = await store.create_user(
            email=payload.email,
            password_hash=password_hash,
            name=payload.name or None,
        )
        logger.info("User registered: id=%s", user.id)

        return AuthResponse(
            message="User registered successfully",
            user=user_response(user),
            token=self._issue_token(user),
        )

    async def login(self, store: BlogStore, payload: LoginRequest) -> AuthResponse:
        """
        Exchange email + password for a token.

        Raises:
            BadRequestError:   email/password missing
            UnauthorizedError: "Invalid credentials" for unknown email or
                               wrong password alike
        """
        if not payload.email or not payload.password:
            raise BadRequestError("Email and password are required")

        user: Optional[User] = await store.find_user_by_email(payload.email)
        digest = user.password if user is not None else self._dummy_digest
        password_ok = await run_in_threadpool(self.hasher.verify, payload.password, digest)
        if user is None or not password_ok:
            logger.warning("Rejected login attempt")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        logger.info("User logged in: id=%s", user.id)
        return AuthResponse(
            message="Login successful",
            user=user_response(user),
            token=self._issue_token(user),
        )

    async def current_user(self, store: BlogStore, identity: Identity) -> MeResponse:
        """The caller's own account; 404 if it no longer exists."""
        user = await store.find_user_by_id(identity.id)
        if user is None:
            raise NotFoundError(resource="user", resource_id=identity.id)
        return MeResponse(user=user_response(user))
