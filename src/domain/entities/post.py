"""Post domain entity with its embedded likes and comments."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass(frozen=True, slots=True)
class Like:
    """A single user's like on a post."""

    user_id: UUID


@dataclass
class Comment:
    """A comment embedded in a post.

    ``name`` and ``avatar`` are copied from the author when the comment is
    written and never refreshed.
    """

    user_id: UUID
    text: str
    name: str
    id: UUID = field(default_factory=uuid4)
    avatar: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Post:
    """Domain entity for a Post.

    Likes and comments are ordered most recent first.
    """

    user_id: UUID
    text: str
    name: str
    id: UUID = field(default_factory=uuid4)
    avatar: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    likes: list[Like] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    version: int = 1

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.user_id == user_id

    def has_like_from(self, user_id: UUID) -> bool:
        return any(like.user_id == user_id for like in self.likes)

    def add_like(self, user_id: UUID) -> None:
        """Prepend a like. Callers check ``has_like_from`` first."""
        self.likes.insert(0, Like(user_id=user_id))

    def remove_like(self, user_id: UUID) -> bool:
        """Remove the first like from ``user_id``. Returns False if none."""
        for index, like in enumerate(self.likes):
            if like.user_id == user_id:
                del self.likes[index]
                return True
        return False

    def add_comment(self, comment: Comment) -> None:
        self.comments.insert(0, comment)

    def find_comment(self, comment_id: UUID) -> Comment | None:
        return next((c for c in self.comments if c.id == comment_id), None)

    def remove_comment(self, comment_id: UUID) -> None:
        """Remove the comment with this id (not every comment by its author)."""
        self.comments = [c for c in self.comments if c.id != comment_id]
