"""
Blog Backend — Access Policy Tests
===================================

What we test:
    ✅ authorize() is a pure author == requester comparison
    ✅ enforce_ownership() raises ForbiddenError with the resource-specific message
"""

from types import SimpleNamespace

import pytest

from blog_api.context import Identity
from blog_api.exceptions import ForbiddenError
from blog_api.services.access_policy import Access, authorize, enforce_ownership


class TestAuthorize:

    def test_author_is_allowed(self):
        assert authorize(3, 3) is Access.ALLOW

    def test_other_user_is_denied(self):
        assert authorize(3, 4) is Access.DENY


class TestEnforceOwnership:

    def test_owner_passes(self):
        post = SimpleNamespace(author_id=1)
        enforce_ownership(post, Identity(id=1, email="a@example.com"), action="update", noun="posts")

    @pytest.mark.parametrize(
        "action, noun, expected",
        [
            ("update", "posts", "You can only update your own posts"),
            ("delete", "posts", "You can only delete your own posts"),
            ("update", "comments", "You can only update your own comments"),
            ("delete", "comments", "You can only delete your own comments"),
        ],
    )
    def test_non_owner_is_forbidden(self, action, noun, expected):
        resource = SimpleNamespace(author_id=1)
        with pytest.raises(ForbiddenError) as exc_info:
            enforce_ownership(resource, Identity(id=2, email="b@example.com"), action=action, noun=noun)
        assert exc_info.value.message == expected
        assert exc_info.value.status_code == 403
        assert exc_info.value.context == {"author_id": 1, "requester_id": 2}
