"""
Blog Backend — Comment Service
===============================

What:  Listing comments of a post, and create / update / delete.
How:   Same four-stage pipeline as PostService, and the same ownership rule
       (access_policy.enforce_ownership) for update and delete.
"""

import logging

from blog_api.context import Identity
from blog_api.exceptions import BadRequestError, NotFoundError
from blog_api.repository import BlogStore
from blog_api.schemas.comment import (
    CommentCreatedResponse,
    CommentCreateRequest,
    CommentListResponse,
    CommentMutationResponse,
    CommentUpdateRequest,
    CreatedCommentResponse,
    PostSummary,
)
from blog_api.schemas.common import MessageResponse
from blog_api.services.access_policy import enforce_ownership
from blog_api.services.post_service import author_summary, comment_response
from blog_api.validation import id_in_range

logger = logging.getLogger(__name__)


class CommentService:

    async def list_for_post(self, store: BlogStore, post_id: int) -> CommentListResponse:
        """
        Comments of a post, newest first.

        An unknown post id yields an empty list, not a 404.
        """
        comments = await store.find_comments_by_post(post_id)
        return CommentListResponse(
            comments=[comment_response(c) for c in comments],
            count=len(comments),
        )

    async def create_comment(
        self, store: BlogStore, identity: Identity, payload: CommentCreateRequest
    ) -> CommentCreatedResponse:
        if not payload.text or not payload.post_id:
            raise BadRequestError("Text and postId are required")

        # An id no row can carry is simply an unknown post
        if not id_in_range(payload.post_id) or await store.find_post_by_id(payload.post_id) is None:
            raise NotFoundError(resource="post", resource_id=payload.post_id)

        comment = await store.create_comment(
            author_id=identity.id,
            post_id=payload.post_id,
            text=payload.text,
        )
        logger.info(
            "Comment %s created on post %s by user %s",
            comment.id,
            comment.post_id,
            identity.id,
        )
        return CommentCreatedResponse(
            message="Comment created successfully",
            comment=CreatedCommentResponse(
                id=comment.id,
                text=comment.text,
                post_id=comment.post_id,
                author_id=comment.author_id,
                created_at=comment.created_at,
                author=author_summary(comment.author),
                post=PostSummary(id=comment.post.id, title=comment.post.title),
            ),
        )

    async def update_comment(
        self,
        store: BlogStore,
        identity: Identity,
        comment_id: int,
        payload: CommentUpdateRequest,
    ) -> CommentMutationResponse:
        if not payload.text:
            raise BadRequestError("Text is required", field="text")

        comment = await store.find_comment_by_id(comment_id)
        if comment is None:
            raise NotFoundError(resource="comment", resource_id=comment_id)
        enforce_ownership(comment, identity, action="update", noun="comments")

        comment = await store.update_comment(comment, payload.text)
        logger.info("Comment %s updated", comment.id)
        return CommentMutationResponse(
            message="Comment updated successfully",
            comment=comment_response(comment),
        )

    async def delete_comment(
        self, store: BlogStore, identity: Identity, comment_id: int
    ) -> MessageResponse:
        comment = await store.find_comment_by_id(comment_id)
        if comment is None:
            raise NotFoundError(resource="comment", resource_id=comment_id)
        enforce_ownership(comment, identity, action="delete", noun="comments")

        await store.delete_comment(comment)
        logger.info("Comment %s deleted by user %s", comment_id, identity.id)
        return MessageResponse(message="Comment deleted successfully")
