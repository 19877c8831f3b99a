"""
Blog Backend — Post Schemas
============================

What:  Request bodies and response payloads for /api/posts.

Response shapes:
    list   → {posts: [PostListItem], count}   (author + commentCount)
    detail → {post: PostDetail}               (author + comments with authors)
    create/update → {message, post: PostResponse}
"""

from datetime import datetime
from typing import List, Optional

from blog_api.schemas.comment import CommentResponse
from blog_api.schemas.common import AuthorSummary, CamelModel


class PostCreateRequest(CamelModel):
    title: Optional[str] = None
    content: Optional[str] = None
    published: Optional[bool] = None


class PostUpdateRequest(CamelModel):
    """
    Partial update. Empty or absent title/content are left untouched;
    `published` is applied whenever it is present.
    """
    title: Optional[str] = None
    content: Optional[str] = None
    published: Optional[bool] = None


class PostResponse(CamelModel):
    id: int
    title: str
    content: str
    published: bool
    author_id: int
    created_at: datetime
    author: AuthorSummary


class PostListItem(PostResponse):
    comment_count: int = 0


class PostDetail(PostResponse):
    comments: List[CommentResponse] = []


class PostListResponse(CamelModel):
    posts: List[PostListItem]
    count: int


class PostDetailResponse(CamelModel):
    post: PostDetail


class PostMutationResponse(CamelModel):
    message: str
    post: PostResponse
