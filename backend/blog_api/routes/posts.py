"""
Blog Backend — Post Route Handlers
===================================

What:  /api/posts — public listing and detail, author-only create, update
       and delete.

Order of checks on protected routes:
    guard (401) → id / body shape (400) → existence (404) → ownership (403)
"""

from typing import Optional

from fastapi import APIRouter, Depends

from blog_api.context import Identity
from blog_api.dependencies import get_post_service, get_store, require_identity
from blog_api.repository import BlogStore
from blog_api.schemas.common import ErrorResponse, MessageResponse
from blog_api.schemas.post import (
    PostCreateRequest,
    PostDetailResponse,
    PostListResponse,
    PostMutationResponse,
    PostUpdateRequest,
)
from blog_api.services.post_service import PostService
from blog_api.validation import parse_id

router = APIRouter(prefix="/api/posts", tags=["Posts"])

_AUTH_ERRORS = {
    401: {"description": "Missing or invalid token", "model": ErrorResponse},
}


@router.get("", response_model=PostListResponse, summary="List published posts")
async def list_posts(
    store: BlogStore = Depends(get_store),
    post_service: PostService = Depends(get_post_service),
) -> PostListResponse:
    """Published posts, newest first. Drafts never appear here."""
    return await post_service.list_published(store)


@router.get(
    "/{post_id}",
    response_model=PostDetailResponse,
    responses={
        400: {"description": "Non-numeric id", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
    },
    summary="Get a post with its comments",
)
async def get_post(
    post_id: str,
    store: BlogStore = Depends(get_store),
    post_service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    return await post_service.get_post(store, parse_id(post_id, "post"))


@router.post(
    "",
    status_code=201,
    response_model=PostMutationResponse,
    responses={
        **_AUTH_ERRORS,
        400: {"description": "Missing title or content", "model": ErrorResponse},
    },
    summary="Create a post",
)
async def create_post(
    identity: Identity = Depends(require_identity),
    payload: Optional[PostCreateRequest] = None,
    store: BlogStore = Depends(get_store),
    post_service: PostService = Depends(get_post_service),
) -> PostMutationResponse:
    """
    Create a post owned by the caller.

    `published` defaults to false; the post stays a draft until updated.
    """
    return await post_service.create_post(store, identity, payload or PostCreateRequest())


@router.patch(
    "/{post_id}",
    response_model=PostMutationResponse,
    responses={
        **_AUTH_ERRORS,
        400: {"description": "Non-numeric id", "model": ErrorResponse},
        403: {"description": "Caller is not the author", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
    },
    summary="Update a post",
)
async def update_post(
    post_id: str,
    identity: Identity = Depends(require_identity),
    payload: Optional[PostUpdateRequest] = None,
    store: BlogStore = Depends(get_store),
    post_service: PostService = Depends(get_post_service),
) -> PostMutationResponse:
    return await post_service.update_post(
        store, identity, parse_id(post_id, "post"), payload or PostUpdateRequest()
    )


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    responses={
        **_AUTH_ERRORS,
        400: {"description": "Non-numeric id", "model": ErrorResponse},
        403: {"description": "Caller is not the author", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
    },
    summary="Delete a post and its comments",
)
async def delete_post(
    post_id: str,
    identity: Identity = Depends(require_identity),
    store: BlogStore = Depends(get_store),
    post_service: PostService = Depends(get_post_service),
) -> MessageResponse:
    return await post_service.delete_post(store, identity, parse_id(post_id, "post"))
