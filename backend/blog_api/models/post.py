"""
Blog Backend — Post SQLAlchemy Model
=====================================

What:  ORM model representing the `posts` table.

Relationships:
    author   → User (many-to-one, required)
    comments → Comment (one-to-many). Deleting a post deletes its comments,
               both through the ORM cascade and the FK's ON DELETE CASCADE.

Index on (published, created_at):
    Serves the public listing (`WHERE published ORDER BY created_at DESC`).
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, List

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blog_api.database import Base

if TYPE_CHECKING:
    from blog_api.models.comment import Comment
    from blog_api.models.user import User


class Post(Base):
    """
    A blog post owned by exactly one user.

    Lifecycle:
        1. Created by its author (published defaults to False)
        2. Updated/deleted only by its author
        3. Deleted together with all of its comments
    """

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Drafts (False) are visible by direct id but never in the public listing
    published: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    author: Mapped["User"] = relationship("User")

    comments: Mapped[List["Comment"]] = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.created_at.desc()",
    )

    def __repr__(self) -> str:
        return (
            f"<Post(id={self.id}, author_id={self.author_id}, "
            f"published={self.published})>"
        )


Index("idx_posts_published_created_at", Post.published, Post.created_at.desc())
