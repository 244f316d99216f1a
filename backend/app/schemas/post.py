"""Post Schemas - Pydantic request/response models for the posts API.

Invariants:
    - PostCreate.text / CommentCreate.text: stripped, non-empty, <= 5000 chars
    - Responses expose ids as UUIDs and timestamps as ISO datetimes
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.core.aggregates import Comment, Like, Post


class _TextBody(BaseModel):
    text: str = Field(max_length=5_000)

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Text is required")
        return v


class PostCreate(_TextBody):
    """Body of POST /posts."""


class CommentCreate(_TextBody):
    """Body of PUT /posts/comment/{post_id}."""


class LikeResponse(BaseModel):
    user_id: UUID

    @classmethod
    def from_domain(cls, like: Like) -> "LikeResponse":
        return cls(user_id=like.user_id)


class CommentResponse(BaseModel):
    id: UUID
    text: str
    author_id: UUID
    author_name: str
    author_avatar: str | None
    created_at: datetime

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentResponse":
        return cls(
            id=comment.id,
            text=comment.text,
            author_id=comment.author_id,
            author_name=comment.author_name,
            author_avatar=comment.author_avatar,
            created_at=comment.created_at,
        )


class PostResponse(BaseModel):
    id: UUID
    text: str
    owner_id: UUID
    author_name: str
    author_avatar: str | None
    created_at: datetime
    likes: list[LikeResponse]
    comments: list[CommentResponse]

    @classmethod
    def from_domain(cls, post: Post) -> "PostResponse":
        return cls(
            id=post.id,
            text=post.text,
            owner_id=post.owner_id,
            author_name=post.author.name,
            author_avatar=post.author.avatar,
            created_at=post.created_at,
            likes=[LikeResponse.from_domain(like) for like in post.likes],
            comments=[CommentResponse.from_domain(c) for c in post.comments],
        )
