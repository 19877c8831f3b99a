"""
Blog Backend — Comment Service Unit Tests
==========================================

What we test:
    ✅ Create checks shape, then that the post exists
    ✅ Created comment carries a summary of its post
    ✅ Update/delete: 404 before 403, store untouched on denial
"""

import pytest
from conftest import make_comment, make_post, make_user

from blog_api.context import Identity
from blog_api.exceptions import BadRequestError, ForbiddenError, NotFoundError
from blog_api.schemas.comment import CommentCreateRequest, CommentUpdateRequest
from blog_api.services.comment_service import CommentService

ALICE = Identity(id=1, email="alice@example.com")
BOB = Identity(id=2, email="bob@example.com")


class TestCommentServiceCreate:

    def setup_method(self):
        self.service = CommentService()

    @pytest.mark.asyncio
    async def test_create(self, mock_store):
        post = make_post(post_id=3)
        mock_store.find_post_by_id.return_value = post
        mock_store.create_comment.return_value = make_comment(
            comment_id=10, post=post, author=make_user(user_id=1), text="Great read"
        )

        result = await self.service.create_comment(
            mock_store, ALICE, CommentCreateRequest(text="Great read", post_id=3)
        )

        assert result.message == "Comment created successfully"
        assert result.comment.id == 10
        assert result.comment.post.id == 3
        assert result.comment.post.title == "Hello"
        mock_store.create_comment.assert_awaited_once_with(author_id=1, post_id=3, text="Great read")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            CommentCreateRequest(text="Hi"),
            CommentCreateRequest(post_id=3),
            CommentCreateRequest(text="", post_id=3),
        ],
    )
    async def test_create_shape(self, mock_store, payload):
        with pytest.raises(BadRequestError) as exc_info:
            await self.service.create_comment(mock_store, ALICE, payload)
        assert exc_info.value.message == "Text and postId are required"
        mock_store.find_post_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_on_impossible_post_id_skips_store(self, mock_store):
        with pytest.raises(NotFoundError):
            await self.service.create_comment(
                mock_store, ALICE, CommentCreateRequest(text="Hi", post_id=2**63)
            )
        mock_store.find_post_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_on_missing_post(self, mock_store):
        mock_store.find_post_by_id.return_value = None
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.create_comment(
                mock_store, ALICE, CommentCreateRequest(text="Hi", post_id=404)
            )
        assert exc_info.value.message == "Post not found"
        mock_store.create_comment.assert_not_awaited()


class TestCommentServiceList:

    @pytest.mark.asyncio
    async def test_list(self, mock_store):
        post = make_post(post_id=3)
        mock_store.find_comments_by_post.return_value = [
            make_comment(comment_id=2, post=post),
            make_comment(comment_id=1, post=post),
        ]
        result = await CommentService().list_for_post(mock_store, 3)
        assert result.count == 2
        assert [c.id for c in result.comments] == [2, 1]

    @pytest.mark.asyncio
    async def test_unknown_post_is_empty(self, mock_store):
        mock_store.find_comments_by_post.return_value = []
        result = await CommentService().list_for_post(mock_store, 12345)
        assert result.count == 0
        assert result.comments == []


class TestCommentServiceMutations:

    def setup_method(self):
        self.service = CommentService()

    @pytest.mark.asyncio
    async def test_update_by_author(self, mock_store):
        comment = make_comment(author=make_user(user_id=1))
        mock_store.find_comment_by_id.return_value = comment
        mock_store.update_comment.return_value = comment

        result = await self.service.update_comment(
            mock_store, ALICE, 1, CommentUpdateRequest(text="Edited")
        )
        assert result.message == "Comment updated successfully"
        mock_store.update_comment.assert_awaited_once_with(comment, "Edited")

    @pytest.mark.asyncio
    async def test_update_requires_text(self, mock_store):
        with pytest.raises(BadRequestError) as exc_info:
            await self.service.update_comment(mock_store, ALICE, 1, CommentUpdateRequest())
        assert exc_info.value.message == "Text is required"

    @pytest.mark.asyncio
    async def test_update_by_other_user(self, mock_store):
        mock_store.find_comment_by_id.return_value = make_comment(author=make_user(user_id=1))
        with pytest.raises(ForbiddenError) as exc_info:
            await self.service.update_comment(mock_store, BOB, 1, CommentUpdateRequest(text="x"))
        assert exc_info.value.message == "You can only update your own comments"
        mock_store.update_comment.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_missing(self, mock_store):
        mock_store.find_comment_by_id.return_value = None
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.delete_comment(mock_store, BOB, 77)
        assert exc_info.value.message == "Comment not found"

    @pytest.mark.asyncio
    async def test_delete_by_other_user(self, mock_store):
        mock_store.find_comment_by_id.return_value = make_comment(author=make_user(user_id=1))
        with pytest.raises(ForbiddenError) as exc_info:
            await self.service.delete_comment(mock_store, BOB, 1)
        assert exc_info.value.message == "You can only delete your own comments"
        mock_store.delete_comment.assert_not_awaited()
