"""
ORM models.

Importing this package registers every table with `Base.metadata` so that
string-based relationships resolve and Alembic autogenerate sees all tables.
"""

from blog_api.models.user import User
from blog_api.models.post import Post
from blog_api.models.comment import Comment

__all__ = ["User", "Post", "Comment"]
