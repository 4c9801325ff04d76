"""Unit tests for PostService."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    AlreadyLikedError,
    CommentNotFoundError,
    ForbiddenError,
    NotLikedError,
    PostNotFoundError,
    UserNotFoundError,
)
from domain.entities.post import Comment, Like, Post
from domain.entities.user import User
from domain.services.post_service import PostService
from tests.unit.conftest import FakeUnitOfWork, echo


@pytest.fixture
def service(uow: FakeUnitOfWork) -> PostService:
    return PostService(lambda: uow)


@pytest.fixture
def post(user_id: UUID) -> Post:
    return Post(user_id=user_id, text="hello", name="Alice")


# --- create ---


class TestCreate:
    async def test_snapshots_author_name_and_avatar(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, author: User
    ):
        uow.users.get.return_value = author
        uow.posts.create.side_effect = echo

        result = await service.create(user_id, "hello")

        assert result.text == "hello"
        assert result.user_id == user_id
        assert result.name == "Alice"
        assert result.avatar == author.avatar
        assert result.likes == []
        assert result.comments == []
        assert uow.committed

    async def test_snapshot_does_not_follow_later_renames(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, author: User
    ):
        uow.users.get.return_value = author
        uow.posts.create.side_effect = echo

        result = await service.create(user_id, "hello")
        author.name = "Alicia"

        assert result.name == "Alice"

    async def test_raises_when_author_missing(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.users.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.create(user_id, "hello")

        uow.posts.create.assert_not_called()


# --- get_by_id ---


class TestGetById:
    async def test_returns_post(self, service: PostService, uow: FakeUnitOfWork, post: Post):
        uow.posts.get.return_value = post

        result = await service.get_by_id(str(post.id))

        assert result is post
        uow.posts.get.assert_called_once_with(post.id)

    async def test_raises_not_found_when_missing(
        self, service: PostService, uow: FakeUnitOfWork
    ):
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.get_by_id(str(uuid4()))

    async def test_malformed_id_is_not_found(self, service: PostService, uow: FakeUnitOfWork):
        with pytest.raises(PostNotFoundError):
            await service.get_by_id("not-a-valid-id")

        uow.posts.get.assert_not_called()


# --- delete ---


class TestDelete:
    async def test_owner_can_delete(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        uow.posts.get.return_value = post

        await service.delete(str(post.id), user_id)

        uow.posts.delete.assert_called_once_with(post.id)
        assert uow.committed

    async def test_non_owner_is_forbidden(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, other_user_id: UUID
    ):
        uow.posts.get.return_value = post

        with pytest.raises(ForbiddenError) as exc_info:
            await service.delete(str(post.id), other_user_id)

        assert exc_info.value.status_code == 401
        uow.posts.delete.assert_not_called()
        assert not uow.committed


# --- like / unlike ---


class TestLike:
    async def test_prepends_like(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID,
        other_user_id: UUID,
    ):
        post.likes = [Like(user_id=other_user_id)]
        uow.posts.get.return_value = post
        uow.posts.update.side_effect = echo

        likes = await service.like(str(post.id), user_id)

        assert likes == [Like(user_id=user_id), Like(user_id=other_user_id)]
        assert uow.committed

    async def test_second_like_is_rejected(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        post.likes = [Like(user_id=user_id)]
        uow.posts.get.return_value = post

        with pytest.raises(AlreadyLikedError) as exc_info:
            await service.like(str(post.id), user_id)

        assert exc_info.value.status_code == 400
        assert post.likes == [Like(user_id=user_id)]
        uow.posts.update.assert_not_called()

    async def test_like_missing_post(self, service: PostService, uow: FakeUnitOfWork, user_id: UUID):
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.like(str(uuid4()), user_id)


class TestUnlike:
    async def test_removes_only_first_matching_like(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID,
        other_user_id: UUID,
    ):
        post.likes = [Like(user_id=other_user_id), Like(user_id=user_id)]
        uow.posts.get.return_value = post
        uow.posts.update.side_effect = echo

        likes = await service.unlike(str(post.id), user_id)

        assert likes == [Like(user_id=other_user_id)]
        assert uow.committed

    async def test_unlike_without_like_is_rejected(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID,
        other_user_id: UUID,
    ):
        post.likes = [Like(user_id=other_user_id)]
        uow.posts.get.return_value = post

        with pytest.raises(NotLikedError):
            await service.unlike(str(post.id), user_id)

        assert post.likes == [Like(user_id=other_user_id)]
        uow.posts.update.assert_not_called()


# --- comments ---


class TestAddComment:
    async def test_prepends_comment_with_author_snapshot(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID,
        author: User,
    ):
        older = Comment(user_id=uuid4(), text="first", name="Bob")
        post.comments = [older]
        uow.users.get.return_value = author
        uow.posts.get.return_value = post
        uow.posts.update.side_effect = echo

        comments = await service.add_comment(str(post.id), user_id, "nice")

        assert [c.text for c in comments] == ["nice", "first"]
        assert comments[0].name == "Alice"
        assert comments[0].user_id == user_id
        assert uow.committed

    async def test_comment_on_missing_post(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, author: User
    ):
        uow.users.get.return_value = author
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.add_comment(str(uuid4()), user_id, "nice")


class TestDeleteComment:
    async def test_removes_only_the_targeted_comment(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        first = Comment(user_id=user_id, text="first", name="Alice")
        second = Comment(user_id=user_id, text="second", name="Alice")
        post.comments = [second, first]
        uow.posts.get.return_value = post
        uow.posts.update.side_effect = echo

        comments = await service.delete_comment(str(post.id), str(first.id), user_id)

        assert comments == [second]

    async def test_missing_comment(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        uow.posts.get.return_value = post

        with pytest.raises(CommentNotFoundError) as exc_info:
            await service.delete_comment(str(post.id), str(uuid4()), user_id)

        assert exc_info.value.message == "Comment does not exist"

    async def test_malformed_comment_id(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        uow.posts.get.return_value = post

        with pytest.raises(CommentNotFoundError):
            await service.delete_comment(str(post.id), "zzz", user_id)

    async def test_other_users_comment_is_forbidden(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID,
        other_user_id: UUID,
    ):
        comment = Comment(user_id=other_user_id, text="mine", name="Bob")
        post.comments = [comment]
        uow.posts.get.return_value = post

        with pytest.raises(ForbiddenError):
            await service.delete_comment(str(post.id), str(comment.id), user_id)

        assert post.comments == [comment]
        uow.posts.update.assert_not_called()
