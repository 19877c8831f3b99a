"""
Blog Backend — Resource Access Policy
======================================

What:  The single ownership rule for mutating posts and comments.
Rule:  Only the author may update or delete a resource.

Every mutable resource type goes through `enforce_ownership`; none carries
its own copy of the comparison. Existence is checked by the caller first, so
a missing row is reported as NotFound and never reaches this module.
"""

import enum
from typing import Protocol

from blog_api.exceptions import ForbiddenError


class Access(enum.Enum):
    ALLOW = "allow"
    DENY = "deny"


class OwnedResource(Protocol):
    author_id: int


class Requester(Protocol):
    id: int


def authorize(author_id: int, requester_id: int) -> Access:
    """Pure ownership decision. No I/O, no side effects."""
    return Access.ALLOW if author_id == requester_id else Access.DENY


def enforce_ownership(
    resource: OwnedResource,
    requester: Requester,
    *,
    action: str,
    noun: str,
) -> None:
    """
    Raise ForbiddenError unless `requester` authored `resource`.

    Example:
        enforce_ownership(post, identity, action="update", noun="posts")
        → ForbiddenError("You can only update your own posts")
    """
    if authorize(resource.author_id, requester.id) is Access.DENY:
        raise ForbiddenError(
            message=f"You can only {action} your own {noun}",
            context={"author_id": resource.author_id, "requester_id": requester.id},
        )
