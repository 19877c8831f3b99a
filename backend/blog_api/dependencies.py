"""
Blog Backend — FastAPI Dependencies
====================================

What:  The Authorization Guard and the accessors that hand app-scoped
       collaborators (built in `create_app()`) to route handlers.

Authorization Guard (`require_identity`):
    Unauthenticated ──(valid bearer token)──▶ Authenticated(Identity)
          │
          └──(missing header / bad token)──▶ 401, handler never runs

    The transition happens once, before the route body, for every route that
    declares `identity: Identity = Depends(require_identity)`.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.context import Identity
from blog_api.database import get_db_session
from blog_api.exceptions import UnauthorizedError
from blog_api.repository import BlogStore
from blog_api.services.auth_service import AuthService
from blog_api.services.comment_service import CommentService
from blog_api.services.post_service import PostService
from blog_api.services.tokens import TokenError, TokenService

# auto_error=False: a missing header must produce our 401 body, not
# FastAPI's default 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_post_service(request: Request) -> PostService:
    return request.app.state.post_service


def get_comment_service(request: Request) -> CommentService:
    return request.app.state.comment_service


async def get_store(session: AsyncSession = Depends(get_db_session)) -> BlogStore:
    return BlogStore(session)


async def require_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> Identity:
    """
    Resolve the caller from `Authorization: Bearer <token>`.

    Raises:
        UnauthorizedError: no bearer credentials, or the token failed
            verification (message taken from the verification failure)
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Missing or malformed authorization header")

    try:
        claim = tokens.verify(credentials.credentials)
    except TokenError as e:
        raise UnauthorizedError(e.message) from e

    return Identity.from_claim(claim)
