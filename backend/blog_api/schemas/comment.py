"""
Blog Backend — Comment Schemas
===============================

What:  Request bodies and response payloads for /api/comments.
"""

from datetime import datetime
from typing import List, Optional

from blog_api.schemas.common import AuthorSummary, CamelModel


class CommentCreateRequest(CamelModel):
    text: Optional[str] = None
    post_id: Optional[int] = None


class CommentUpdateRequest(CamelModel):
    text: Optional[str] = None


class PostSummary(CamelModel):
    id: int
    title: str


class CommentResponse(CamelModel):
    id: int
    text: str
    post_id: int
    author_id: int
    created_at: datetime
    author: AuthorSummary


class CreatedCommentResponse(CommentResponse):
    """A freshly created comment also names the post it belongs to."""
    post: PostSummary


class CommentListResponse(CamelModel):
    comments: List[CommentResponse]
    count: int


class CommentMutationResponse(CamelModel):
    message: str
    comment: CommentResponse


class CommentCreatedResponse(CamelModel):
    message: str
    comment: CreatedCommentResponse
