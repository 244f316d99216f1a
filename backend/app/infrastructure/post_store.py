"""Post Store - SQLAlchemy implementation of the PostStore protocol.

Invariants:
    - One row per aggregate; likes and comments round-trip through JSON documents
    - save() inserts when version == 0, otherwise updates WHERE version == loaded version
    - A stale update touches zero rows and raises ConcurrencyError; the aggregate's
      version is only bumped after a successful commit
    - load() always refreshes from the database (populate_existing), so a reload
      after a conflict sees the winning write

Design Decisions:
    - Whole-document compare-and-swap over per-field atomic operators: works the same
      on PostgreSQL and SQLite, and the service re-applies the mutation on conflict
"""

import logging
import uuid
from datetime import datetime

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.aggregates import Author, Comment, Like, Post
from app.core.domain_types import CommentId, PostId, UserId
from app.core.errors import ConcurrencyError, ErrorContext
from app.core.prepend_list import PrependList
from app.models.post import Post as PostModel

logger = logging.getLogger(__name__)


def _like_to_doc(like: Like) -> dict:
    return {"user_id": str(like.user_id)}


def _like_from_doc(doc: dict) -> Like:
    return Like(user_id=UserId(uuid.UUID(doc["user_id"])))


def _comment_to_doc(comment: Comment) -> dict:
    return {
        "id": str(comment.id),
        "text": comment.text,
        "author_id": str(comment.author_id),
        "author_name": comment.author_name,
        "author_avatar": comment.author_avatar,
        "created_at": comment.created_at.isoformat(),
    }


def _comment_from_doc(doc: dict) -> Comment:
    return Comment(
        id=CommentId(uuid.UUID(doc["id"])),
        text=doc["text"],
        author_id=UserId(uuid.UUID(doc["author_id"])),
        author_name=doc["author_name"],
        author_avatar=doc.get("author_avatar"),
        created_at=datetime.fromisoformat(doc["created_at"]),
    )


def _to_post(row: PostModel) -> Post:
    return Post(
        id=PostId(row.id),
        text=row.text,
        owner_id=UserId(row.owner_id),
        author=Author(name=row.author_name, avatar=row.author_avatar),
        created_at=row.created_at,
        likes=PrependList(_like_from_doc(d) for d in row.likes or []),
        comments=PrependList(_comment_from_doc(d) for d in row.comments or []),
        version=row.version,
    )


def _mutable_columns(post: Post) -> dict:
    return {
        "text": post.text,
        "likes": [_like_to_doc(like) for like in post.likes],
        "comments": [_comment_to_doc(c) for c in post.comments],
    }


class SqlPostStore:
    """PostStore over an AsyncSession. Each write commits."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def load(self, post_id: PostId) -> Post | None:
        result = await self.db.execute(
            select(PostModel)
            .where(PostModel.id == post_id)
            .execution_options(populate_existing=True),
        )
        row = result.scalar_one_or_none()
        return _to_post(row) if row else None

    async def load_all(self) -> list[Post]:
        result = await self.db.execute(
            select(PostModel)
            .order_by(PostModel.created_at.desc())
            .execution_options(populate_existing=True),
        )
        return [_to_post(row) for row in result.scalars().all()]

    async def save(self, post: Post) -> None:
        if post.version == 0:
            await self._insert(post)
        else:
            await self._compare_and_swap(post)

    async def _insert(self, post: Post) -> None:
        self.db.add(PostModel(
            id=post.id,
            owner_id=post.owner_id,
            author_name=post.author.name,
            author_avatar=post.author.avatar,
            created_at=post.created_at,
            version=1,
            **_mutable_columns(post),
        ))
        await self.db.commit()
        post.version = 1

    async def _compare_and_swap(self, post: Post) -> None:
        result = await self.db.execute(
            update(PostModel)
            .where(PostModel.id == post.id, PostModel.version == post.version)
            .values(version=post.version + 1, **_mutable_columns(post))
            .execution_options(synchronize_session=False),
        )
        if result.rowcount == 0:
            await self.db.rollback()
            logger.debug(
                f"Stale save of post {post.id} at version {post.version}",
                extra={"post_id": str(post.id)},
            )
            raise ConcurrencyError(
                f"Post '{post.id}' was modified concurrently",
                ErrorContext(resource_type="Post", resource_id=str(post.id)),
            )
        await self.db.commit()
        post.version += 1

    async def delete(self, post_id: PostId) -> None:
        await self.db.execute(delete(PostModel).where(PostModel.id == post_id))
        await self.db.commit()

    async def delete_by_owner(self, owner_id: UserId, commit: bool = True) -> int:
        """Remove every post owned by owner_id. commit=False leaves it pending."""
        result = await self.db.execute(
            delete(PostModel).where(PostModel.owner_id == owner_id),
        )
        if commit:
            await self.db.commit()
        return result.rowcount

    async def rollback(self) -> None:
        await self.db.rollback()
