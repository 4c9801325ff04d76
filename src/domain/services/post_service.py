"""Post service layer: the feed, likes and comments.

Every mutation loads the post document, changes it in memory and writes the
whole document back in the same unit of work. The repository's version check
turns a lost update into ConcurrentModificationError.
"""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    AlreadyLikedError,
    CommentNotFoundError,
    ForbiddenError,
    NotLikedError,
    PostNotFoundError,
    UserNotFoundError,
)
from core.ids import parse_id
from domain.entities.post import Comment, Like, Post
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class PostService:
    """Service layer for Post business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(self, user_id: UUID, text: str) -> Post:
        """Create a post, snapshotting the author's current name and avatar."""
        async with self._uow_factory() as uow:
            author = await self._require_user(uow, user_id)

            post = Post(
                user_id=user_id,
                text=text,
                name=author.name,
                avatar=author.avatar,
            )

            created = await uow.posts.create(post)
            await uow.commit()
            logger.info("post_created", post_id=str(created.id), user_id=str(user_id))
            return created

    async def get_all(self) -> list[Post]:
        """Get every post, newest first."""
        async with self._uow_factory() as uow:
            return await uow.posts.get_all()  # type: ignore[no-any-return]

    async def get_by_id(self, post_id: str | UUID) -> Post:
        """Get a post. Malformed ids are reported as not found."""
        async with self._uow_factory() as uow:
            return await self._require_post(uow, post_id)

    async def delete(self, post_id: str | UUID, user_id: UUID) -> None:
        """Delete a post owned by the requester."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if not post.is_owned_by(user_id):
                raise ForbiddenError()

            await uow.posts.delete(post.id)
            await uow.commit()
            logger.info("post_deleted", post_id=str(post.id), user_id=str(user_id))

    async def like(self, post_id: str | UUID, user_id: UUID) -> list[Like]:
        """Like a post once. A second like from the same user is rejected."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if post.has_like_from(user_id):
                raise AlreadyLikedError(str(post.id))

            post.add_like(user_id)
            updated = await uow.posts.update(post)
            await uow.commit()
            logger.info("post_liked", post_id=str(post.id), user_id=str(user_id))
            return updated.likes

    async def unlike(self, post_id: str | UUID, user_id: UUID) -> list[Like]:
        """Remove the requester's like from a post."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if not post.remove_like(user_id):
                raise NotLikedError(str(post.id))

            updated = await uow.posts.update(post)
            await uow.commit()
            logger.info("post_unliked", post_id=str(post.id), user_id=str(user_id))
            return updated.likes

    async def add_comment(
        self, post_id: str | UUID, user_id: UUID, text: str
    ) -> list[Comment]:
        """Prepend a comment, snapshotting the author's name and avatar."""
        async with self._uow_factory() as uow:
            author = await self._require_user(uow, user_id)
            post = await self._require_post(uow, post_id)

            post.add_comment(
                Comment(
                    user_id=user_id,
                    text=text,
                    name=author.name,
                    avatar=author.avatar,
                )
            )
            updated = await uow.posts.update(post)
            await uow.commit()
            logger.info("comment_added", post_id=str(post.id), user_id=str(user_id))
            return updated.comments

    async def delete_comment(
        self, post_id: str | UUID, comment_id: str | UUID, user_id: UUID
    ) -> list[Comment]:
        """Delete one comment written by the requester.

        The comment is removed by its own id, so other comments by the same
        author on this post are kept.
        """
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)

            parsed_comment_id = parse_id(comment_id)
            comment = post.find_comment(parsed_comment_id) if parsed_comment_id else None
            if not comment:
                raise CommentNotFoundError(str(comment_id))
            if comment.user_id != user_id:
                raise ForbiddenError()

            post.remove_comment(comment.id)
            updated = await uow.posts.update(post)
            await uow.commit()
            logger.info(
                "comment_deleted",
                post_id=str(post.id),
                comment_id=str(comment.id),
                user_id=str(user_id),
            )
            return updated.comments

    async def _require_post(self, uow: IUnitOfWork, post_id: str | UUID) -> Post:
        parsed = parse_id(post_id)
        post = await uow.posts.get(parsed) if parsed else None
        if not post:
            raise PostNotFoundError(str(post_id))
        return post

    async def _require_user(self, uow: IUnitOfWork, user_id: UUID) -> User:
        user = await uow.users.get(user_id)
        if not user:
            raise UserNotFoundError(str(user_id))
        return user
