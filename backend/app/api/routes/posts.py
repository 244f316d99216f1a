"""Posts Routes - create, list, read, delete, like/unlike and comment on posts.

Invariants:
    - Every endpoint requires an authenticated caller
    - Path ids are UUIDs; malformed ids are rejected as validation errors (400)
    - Like/unlike return the post's likes; comment add/delete return its comments
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_current_identity, get_post_service
from app.core.aggregates import Identity
from app.core.domain_types import CommentId, PostId
from app.schemas.post import (
    CommentCreate, CommentResponse, LikeResponse, PostCreate, PostResponse,
)
from app.services.post_service import PostService

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])


@router.post(
    "", response_model=PostResponse, status_code=status.HTTP_201_CREATED,
)
async def create_post(
    body: PostCreate,
    identity: Identity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
):
    """Create a post authored by the caller."""
    post = await service.create(body.text, identity)
    return PostResponse.from_domain(post)


@router.get("", response_model=list[PostResponse])
async def list_posts(
    identity: Identity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
):
    """All posts, newest first."""
    return [PostResponse.from_domain(p) for p in await service.list_all()]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: UUID,
    identity: Identity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
):
    return PostResponse.from_domain(await service.get_by_id(PostId(post_id)))


@router.delete("/{post_id}")
async def delete_post(
    post_id: UUID,
    identity: Identity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
):
    """Delete a post. Only its owner may do so."""
    await service.delete_by_id(PostId(post_id), identity.user_id)
    return {"message": "Post removed"}


@router.put("/like/{post_id}", response_model=list[LikeResponse])
async def like_post(
    post_id: UUID,
    identity: Identity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
):
    likes = await service.like(PostId(post_id), identity.user_id)
    return [LikeResponse.from_domain(like) for like in likes]


@router.put("/unlike/{post_id}", response_model=list[LikeResponse])
async def unlike_post(
    post_id: UUID,
    identity: Identity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
):
    likes = await service.unlike(PostId(post_id), identity.user_id)
    return [LikeResponse.from_domain(like) for like in likes]


@router.put("/comment/{post_id}", response_model=list[CommentResponse])
async def add_comment(
    post_id: UUID,
    body: CommentCreate,
    identity: Identity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
):
    comments = await service.add_comment(PostId(post_id), body.text, identity)
    return [CommentResponse.from_domain(c) for c in comments]


@router.delete(
    "/comment/{post_id}/{comment_id}", response_model=list[CommentResponse],
)
async def delete_comment(
    post_id: UUID,
    comment_id: UUID,
    identity: Identity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
):
    """Delete a comment. Only its author may do so."""
    comments = await service.delete_comment(
        PostId(post_id), CommentId(comment_id), identity.user_id,
    )
    return [CommentResponse.from_domain(c) for c in comments]
