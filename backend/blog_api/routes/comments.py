"""
Blog Backend — Comment Route Handlers
======================================

What:  /api/comments — public listing per post, author-only create, update
       and delete.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from blog_api.context import Identity
from blog_api.dependencies import get_comment_service, get_store, require_identity
from blog_api.repository import BlogStore
from blog_api.schemas.comment import (
    CommentCreatedResponse,
    CommentCreateRequest,
    CommentListResponse,
    CommentMutationResponse,
    CommentUpdateRequest,
)
from blog_api.schemas.common import ErrorResponse, MessageResponse
from blog_api.services.comment_service import CommentService
from blog_api.validation import parse_id

router = APIRouter(prefix="/api/comments", tags=["Comments"])

_OWNER_ERRORS = {
    400: {"description": "Invalid id or body", "model": ErrorResponse},
    401: {"description": "Missing or invalid token", "model": ErrorResponse},
    403: {"description": "Caller is not the author", "model": ErrorResponse},
    404: {"description": "Comment not found", "model": ErrorResponse},
}


@router.get(
    "/post/{post_id}",
    response_model=CommentListResponse,
    responses={400: {"description": "Non-numeric id", "model": ErrorResponse}},
    summary="List comments of a post",
)
async def list_comments(
    post_id: str,
    store: BlogStore = Depends(get_store),
    comment_service: CommentService = Depends(get_comment_service),
) -> CommentListResponse:
    return await comment_service.list_for_post(store, parse_id(post_id, "post"))


@router.post(
    "",
    status_code=201,
    response_model=CommentCreatedResponse,
    responses={
        400: {"description": "Missing text or postId", "model": ErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
    },
    summary="Comment on a post",
)
async def create_comment(
    identity: Identity = Depends(require_identity),
    payload: Optional[CommentCreateRequest] = None,
    store: BlogStore = Depends(get_store),
    comment_service: CommentService = Depends(get_comment_service),
) -> CommentCreatedResponse:
    """
    Add a comment authored by the caller.

    Drafts accept comments too; only the post's existence is checked.
    """
    return await comment_service.create_comment(
        store, identity, payload or CommentCreateRequest()
    )


@router.patch(
    "/{comment_id}",
    response_model=CommentMutationResponse,
    responses=_OWNER_ERRORS,
    summary="Edit a comment",
)
async def update_comment(
    comment_id: str,
    identity: Identity = Depends(require_identity),
    payload: Optional[CommentUpdateRequest] = None,
    store: BlogStore = Depends(get_store),
    comment_service: CommentService = Depends(get_comment_service),
) -> CommentMutationResponse:
    return await comment_service.update_comment(
        store, identity, parse_id(comment_id, "comment"), payload or CommentUpdateRequest()
    )


@router.delete(
    "/{comment_id}",
    response_model=MessageResponse,
    responses=_OWNER_ERRORS,
    summary="Delete a comment",
)
async def delete_comment(
    comment_id: str,
    identity: Identity = Depends(require_identity),
    store: BlogStore = Depends(get_store),
    comment_service: CommentService = Depends(get_comment_service),
) -> MessageResponse:
    return await comment_service.delete_comment(
        store, identity, parse_id(comment_id, "comment")
    )
