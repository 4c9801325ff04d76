"""Pydantic schemas for Post API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from api.schemas.common import require_text
from domain.entities.post import Comment, Like, Post


class PostCreate(BaseModel):
    """Schema for creating a Post."""

    text: str = Field(..., max_length=5000)

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return require_text(v, "Text")


class CommentCreate(BaseModel):
    """Schema for commenting on a Post."""

    text: str = Field(..., max_length=2000)

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return require_text(v, "Text")


class LikeResponse(BaseModel):
    """A like, identified by the user who gave it."""

    user: UUID

    @classmethod
    def from_entity(cls, like: Like) -> "LikeResponse":
        return cls(user=like.user_id)


class CommentResponse(BaseModel):
    """Schema for Comment response."""

    id: UUID
    user: UUID
    text: str
    name: str
    avatar: str | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, comment: Comment) -> "CommentResponse":
        return cls(
            id=comment.id,
            user=comment.user_id,
            text=comment.text,
            name=comment.name,
            avatar=comment.avatar,
            created_at=comment.created_at,
        )


class PostResponse(BaseModel):
    """Schema for Post response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user": "456e4567-e89b-12d3-a456-426614174000",
                "text": "first post",
                "name": "Alice",
                "avatar": "https://www.gravatar.com/avatar/0bc8?s=200&r=pg&d=mm",
                "created_at": "2026-01-28T10:00:00",
                "likes": [{"user": "456e4567-e89b-12d3-a456-426614174000"}],
                "comments": [],
            }
        },
    )

    id: UUID
    user: UUID
    text: str
    name: str
    avatar: str | None = None
    created_at: datetime
    likes: list[LikeResponse]
    comments: list[CommentResponse]

    @classmethod
    def from_entity(cls, post: Post) -> "PostResponse":
        return cls(
            id=post.id,
            user=post.user_id,
            text=post.text,
            name=post.name,
            avatar=post.avatar,
            created_at=post.created_at,
            likes=[LikeResponse.from_entity(like) for like in post.likes],
            comments=[CommentResponse.from_entity(c) for c in post.comments],
        )
