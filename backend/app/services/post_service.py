"""Post Service - create, read, delete, like/unlike and comment on posts.

Invariants:
    - Existence is checked first, ownership second, mutation last
    - Every nested mutation is load -> pure rule -> save, re-run on version conflict
    - Like/Unlike never succeed twice in a row for the same (post, user)
    - Returned likes/comments are the persisted state after the mutation

Design Decisions:
    - Depends on the PostStore protocol only: no SQLAlchemy in this module
    - Deletion needs no retry: it is a single keyed statement after the ownership check
"""

import logging

from app.core.aggregates import Comment, Identity, Like, Post
from app.core.domain_types import CommentId, PostId, UserId
from app.core.errors import ResourceNotFoundError
from app.core.post_rules import (
    add_comment, add_like, check_post_owner, new_post, newest_first,
    remove_comment, remove_like,
)
from app.core.repository_protocols import PostStore
from app.services.mutation_retry import retry_on_conflict

logger = logging.getLogger(__name__)


class PostService:
    """Post aggregate operations on behalf of an authenticated caller."""

    def __init__(self, store: PostStore, max_attempts: int = 3):
        self._store = store
        self._max_attempts = max_attempts

    async def _load_or_404(self, post_id: PostId) -> Post:
        post = await self._store.load(post_id)
        if post is None:
            raise ResourceNotFoundError("Post", str(post_id))
        return post

    async def create(self, text: str, identity: Identity) -> Post:
        post = new_post(text, identity)
        await self._store.save(post)
        logger.info(
            f"Post {post.id} created",
            extra={"post_id": str(post.id), "user_id": str(identity.user_id)},
        )
        return post

    async def list_all(self) -> list[Post]:
        return newest_first(await self._store.load_all())

    async def get_by_id(self, post_id: PostId) -> Post:
        return await self._load_or_404(post_id)

    async def delete_by_id(self, post_id: PostId, user_id: UserId) -> None:
        post = await self._load_or_404(post_id)
        check_post_owner(post, user_id)
        await self._store.delete(post_id)
        logger.info(
            f"Post {post_id} deleted",
            extra={"post_id": str(post_id), "user_id": str(user_id)},
        )

    async def like(self, post_id: PostId, user_id: UserId) -> list[Like]:
        async def mutation() -> list[Like]:
            post = await self._load_or_404(post_id)
            add_like(post, user_id)
            await self._store.save(post)
            return post.likes.to_list()

        return await self._retry(mutation, post_id, user_id)

    async def unlike(self, post_id: PostId, user_id: UserId) -> list[Like]:
        async def mutation() -> list[Like]:
            post = await self._load_or_404(post_id)
            remove_like(post, user_id)
            await self._store.save(post)
            return post.likes.to_list()

        return await self._retry(mutation, post_id, user_id)

    async def add_comment(
        self, post_id: PostId, text: str, identity: Identity,
    ) -> list[Comment]:
        async def mutation() -> list[Comment]:
            post = await self._load_or_404(post_id)
            add_comment(post, text, identity.user_id, identity.author_snapshot())
            await self._store.save(post)
            return post.comments.to_list()

        return await self._retry(mutation, post_id, identity.user_id)

    async def delete_comment(
        self, post_id: PostId, comment_id: CommentId, user_id: UserId,
    ) -> list[Comment]:
        async def mutation() -> list[Comment]:
            post = await self._load_or_404(post_id)
            remove_comment(post, comment_id, user_id)
            await self._store.save(post)
            return post.comments.to_list()

        return await self._retry(mutation, post_id, user_id)

    async def _retry(self, mutation, post_id: PostId, user_id: UserId):
        return await retry_on_conflict(
            mutation, self._max_attempts,
            post_id=str(post_id), user_id=str(user_id),
        )
