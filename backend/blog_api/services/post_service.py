"""
Blog Backend — Post Service
============================

What:  Business logic for posts: public listing and detail, and the
       author-only create / update / delete operations.

Pipeline (every mutating operation):
    1. Shape validation       → BadRequestError
    2. Existence check        → NotFoundError("Post not found")
    3. Ownership check        → ForbiddenError (access_policy)
    4. One store operation and response shaping

Steps 2 and 3 are never swapped: a missing post is reported as missing even
when the caller could not have owned it.
"""

import logging
from typing import Any, Dict

from blog_api.context import Identity
from blog_api.exceptions import BadRequestError, NotFoundError
from blog_api.models import Comment, Post, User
from blog_api.repository import BlogStore
from blog_api.schemas.comment import CommentResponse
from blog_api.schemas.common import AuthorSummary, MessageResponse
from blog_api.schemas.post import (
    PostCreateRequest,
    PostDetail,
    PostDetailResponse,
    PostListItem,
    PostListResponse,
    PostMutationResponse,
    PostResponse,
    PostUpdateRequest,
)
from blog_api.services.access_policy import enforce_ownership

logger = logging.getLogger(__name__)


def author_summary(user: User) -> AuthorSummary:
    return AuthorSummary(id=user.id, name=user.name, email=user.email)


def comment_response(comment: Comment) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        text=comment.text,
        post_id=comment.post_id,
        author_id=comment.author_id,
        created_at=comment.created_at,
        author=author_summary(comment.author),
    )


def _post_fields(post: Post) -> Dict[str, Any]:
    return {
        "id": post.id,
        "title": post.title,
        "content": post.content,
        "published": post.published,
        "author_id": post.author_id,
        "created_at": post.created_at,
        "author": author_summary(post.author),
    }


class PostService:
    """
    Stateless; one shared instance serves every request.
    The per-request BlogStore is passed to each method.
    """

    async def list_published(self, store: BlogStore) -> PostListResponse:
        """Published posts only, newest first, with comment counts."""
        rows = await store.list_published_posts()
        posts = [
            PostListItem(**_post_fields(post), comment_count=count)
            for post, count in rows
        ]
        return PostListResponse(posts=posts, count=len(posts))

    async def get_post(self, store: BlogStore, post_id: int) -> PostDetailResponse:
        """
        A single post with its comments, by id.

        Drafts are reachable here by id; only the listing filters on
        `published`.
        """
        post = await store.find_post_by_id(post_id, with_comments=True)
        if post is None:
            raise NotFoundError(resource="post", resource_id=post_id)

        detail = PostDetail(
            **_post_fields(post),
            comments=[comment_response(c) for c in post.comments],
        )
        return PostDetailResponse(post=detail)

    async def create_post(
        self, store: BlogStore, identity: Identity, payload: PostCreateRequest
    ) -> PostMutationResponse:
        if not payload.title or not payload.content:
            raise BadRequestError("Title and content are required")

        post = await store.create_post(
            author_id=identity.id,
            title=payload.title,
            content=payload.content,
            published=bool(payload.published),
        )
        logger.info("Post %s created by user %s", post.id, identity.id)
        return PostMutationResponse(
            message="Post created successfully",
            post=PostResponse(**_post_fields(post)),
        )

    async def update_post(
        self,
        store: BlogStore,
        identity: Identity,
        post_id: int,
        payload: PostUpdateRequest,
    ) -> PostMutationResponse:
        """
        Partial update by the post's author.

        Empty title/content are ignored rather than blanking the post;
        `published` is applied whenever the client sent it.
        """
        post = await store.find_post_by_id(post_id)
        if post is None:
            raise NotFoundError(resource="post", resource_id=post_id)
        enforce_ownership(post, identity, action="update", noun="posts")

        changes: Dict[str, Any] = {}
        if payload.title:
            changes["title"] = payload.title
        if payload.content:
            changes["content"] = payload.content
        if payload.published is not None:
            changes["published"] = payload.published

        post = await store.update_post(post, **changes)
        logger.info("Post %s updated (%s)", post.id, ", ".join(sorted(changes)) or "no changes")
        return PostMutationResponse(
            message="Post updated successfully",
            post=PostResponse(**_post_fields(post)),
        )

    async def delete_post(
        self, store: BlogStore, identity: Identity, post_id: int
    ) -> MessageResponse:
        """Delete a post and, by cascade, all of its comments."""
        post = await store.find_post_by_id(post_id)
        if post is None:
            raise NotFoundError(resource="post", resource_id=post_id)
        enforce_ownership(post, identity, action="delete", noun="posts")

        await store.delete_post(post)
        logger.info("Post %s deleted by user %s", post_id, identity.id)
        return MessageResponse(message="Post deleted successfully")
