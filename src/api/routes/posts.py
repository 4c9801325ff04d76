"""Post API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_post_service
from api.schemas.common import MessageResponse
from api.schemas.post import (
    CommentCreate,
    CommentResponse,
    LikeResponse,
    PostCreate,
    PostResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post(
    "",
    response_model=PostResponse,
    summary="Create a post",
    responses={400: {"description": "Text is required"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    body: PostCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Create a post as the authenticated user."""
    post = await service.create(user_id=user.id, text=body.text)
    return PostResponse.from_entity(post)


@router.get(
    "",
    response_model=list[PostResponse],
    summary="List all posts",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_posts(
    request: Request,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[PostResponse]:
    """Get every post, newest first."""
    posts = await service.get_all()
    return [PostResponse.from_entity(post) for post in posts]


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    summary="Get a post",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_post(
    request: Request,
    post_id: str,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Get a single post by id."""
    post = await service.get_by_id(post_id)
    return PostResponse.from_entity(post)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete a post",
    responses={
        401: {"description": "Not the owner of the post"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_post(
    request: Request,
    post_id: str,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> MessageResponse:
    """Delete a post owned by the authenticated user."""
    await service.delete(post_id, user.id)
    return MessageResponse(msg="Post removed")


@router.put(
    "/like/{post_id}",
    response_model=list[LikeResponse],
    summary="Like a post",
    responses={
        400: {"description": "Post already liked"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def like_post(
    request: Request,
    post_id: str,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[LikeResponse]:
    """Like a post. Each user can like a post once."""
    likes = await service.like(post_id, user.id)
    return [LikeResponse.from_entity(like) for like in likes]


@router.put(
    "/unlike/{post_id}",
    response_model=list[LikeResponse],
    summary="Unlike a post",
    responses={
        400: {"description": "Post has not yet been liked"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def unlike_post(
    request: Request,
    post_id: str,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[LikeResponse]:
    """Remove the authenticated user's like."""
    likes = await service.unlike(post_id, user.id)
    return [LikeResponse.from_entity(like) for like in likes]


@router.post(
    "/comment/{post_id}",
    response_model=list[CommentResponse],
    summary="Comment on a post",
    responses={
        400: {"description": "Text is required"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_comment(
    request: Request,
    post_id: str,
    body: CommentCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[CommentResponse]:
    """Add a comment to a post."""
    comments = await service.add_comment(post_id, user.id, body.text)
    return [CommentResponse.from_entity(comment) for comment in comments]


@router.delete(
    "/comment/{post_id}/{comment_id}",
    response_model=list[CommentResponse],
    summary="Delete a comment",
    responses={
        401: {"description": "Not the author of the comment"},
        404: {"description": "Post or comment not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_comment(
    request: Request,
    post_id: str,
    comment_id: str,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[CommentResponse]:
    """Delete one of the authenticated user's comments."""
    comments = await service.delete_comment(post_id, comment_id, user.id)
    return [CommentResponse.from_entity(comment) for comment in comments]
