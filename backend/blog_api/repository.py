"""
Blog Backend — Persistence Collaborator
========================================

What:  `BlogStore`, the only code that builds SQL. One instance wraps one
       request's AsyncSession.
Why:   Services express the pipeline (validate → exists → owner → persist)
       against a narrow interface, so they can be unit-tested with an
       AsyncMock store.
How:   Writes `flush()` (never commit); the session dependency commits once
       the route returns. Relations needed by responses are eager-loaded with
       `selectinload` because async sessions cannot lazy-load.

Atomicity:
    Each method is one logical operation. Nothing here spans calls, so an
    existence check followed by an update can race a concurrent delete; the
    update then fails and surfaces as an internal error.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from blog_api.exceptions import ConflictError
from blog_api.models import Comment, Post, User

logger = logging.getLogger(__name__)


class BlogStore:
    """Persistence operations for users, posts, and comments."""

    def __init__(self, session: AsyncSession):
        self.session = session

    # ── Users ─────────────────────────────────────────────────────────────

    async def find_user_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def find_user_by_id(self, user_id: int) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def create_user(
        self, email: str, password_hash: str, name: Optional[str] = None
    ) -> User:
        """
        Insert a user.

        Raises:
            ConflictError: the unique email constraint fired (a concurrent
                registration won the race after our pre-check)
        """
        user = User(email=email, password=password_hash, name=name)
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError:
            logger.info("Duplicate registration rejected by unique constraint")
            raise ConflictError(context={"email": email})
        return user

    # ── Posts ─────────────────────────────────────────────────────────────

    async def list_published_posts(self) -> List[Tuple[Post, int]]:
        """
        Published posts, newest first, each paired with its comment count.

        Query plan:
            SELECT posts.*, (SELECT count(*) FROM comments
                             WHERE comments.post_id = posts.id)
            FROM posts WHERE published ORDER BY created_at DESC
            → idx_posts_published_created_at
        """
        comment_count = (
            select(func.count(Comment.id))
            .where(Comment.post_id == Post.id)
            .correlate(Post)
            .scalar_subquery()
        )
        result = await self.session.execute(
            select(Post, comment_count)
            .where(Post.published.is_(True))
            .options(selectinload(Post.author))
            .order_by(Post.created_at.desc(), Post.id.desc())
        )
        return [(post, count) for post, count in result.all()]

    async def find_post_by_id(
        self, post_id: int, with_comments: bool = False
    ) -> Optional[Post]:
        """
        Fetch a post with its author, optionally with comments and their authors.

        populate_existing: the post may already sit in the identity map
        without these relations loaded (e.g. right after creation).
        """
        options = [selectinload(Post.author)]
        if with_comments:
            options.append(selectinload(Post.comments).selectinload(Comment.author))
        result = await self.session.execute(
            select(Post)
            .where(Post.id == post_id)
            .options(*options)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create_post(
        self, author_id: int, title: str, content: str, published: bool = False
    ) -> Post:
        post = Post(title=title, content=content, published=published, author_id=author_id)
        self.session.add(post)
        await self.session.flush()
        # Reload so the author relation is available for the response
        return await self.find_post_by_id(post.id)

    async def update_post(self, post: Post, **changes) -> Post:
        """Apply `changes` (column name → value) to an already-loaded post."""
        for field, value in changes.items():
            setattr(post, field, value)
        await self.session.flush()
        return post

    async def delete_post(self, post: Post) -> None:
        """Delete a post; its comments go with it (ORM + FK cascade)."""
        await self.session.delete(post)
        await self.session.flush()

    # ── Comments ──────────────────────────────────────────────────────────

    async def find_comments_by_post(self, post_id: int) -> List[Comment]:
        result = await self.session.execute(
            select(Comment)
            .where(Comment.post_id == post_id)
            .options(selectinload(Comment.author))
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        return list(result.scalars().all())

    async def find_comment_by_id(self, comment_id: int) -> Optional[Comment]:
        result = await self.session.execute(
            select(Comment)
            .where(Comment.id == comment_id)
            .options(selectinload(Comment.author))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create_comment(self, author_id: int, post_id: int, text: str) -> Comment:
        comment = Comment(text=text, post_id=post_id, author_id=author_id)
        self.session.add(comment)
        await self.session.flush()
        result = await self.session.execute(
            select(Comment)
            .where(Comment.id == comment.id)
            .options(selectinload(Comment.author), selectinload(Comment.post))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def update_comment(self, comment: Comment, text: str) -> Comment:
        comment.text = text
        await self.session.flush()
        return comment

    async def delete_comment(self, comment: Comment) -> None:
        await self.session.delete(comment)
        await self.session.flush()
