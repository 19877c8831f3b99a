"""
Blog Backend — User SQLAlchemy Model
=====================================

What:  ORM model representing the `users` table.
Who:   Created by registration; read by login, `/api/auth/me`, and as the
       author of posts and comments.

Table Design Rationale:
    - Integer primary key: the id is the identity claim carried in tokens
    - email: UNIQUE constraint is the source of truth for "one account per
      email"; the registration pre-check only produces a friendlier error
    - password: bcrypt digest, never serialized by any response schema
    - created_at: UTC with timezone
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from blog_api.database import Base


class User(Base):
    """
    A registered account.

    Lifecycle:
        Created at registration; never mutated or deleted by the API.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Login identifier, unique across all users",
    )

    # What: bcrypt digest of the password (salt and cost embedded)
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt password digest",
    )

    name: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
        comment="Optional display name",
    )

    # Python-side default so the value is available right after flush
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When the account was created (UTC)",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
