"""Post Rules - pure mutations and guards for the Post aggregate.

Invariants:
    - Every function is synchronous and IO-free; callers persist the result
    - Guards raise before any mutation is applied (check, then mutate)
    - Like/unlike is a two-state machine per (post, user): a repeated transition raises
    - Comment deletion rights belong to the comment author only, never the post owner

Design Decisions:
    - Mutations operate in place on the loaded aggregate: the service owns the
      load -> mutate -> save cycle and reloads on a version conflict
"""

from app.core.aggregates import Author, Comment, Identity, Like, Post
from app.core.domain_types import CommentId, UserId
from app.core.errors import (
    AlreadyLikedError, CommentNotFoundError, ErrorContext,
    FieldValidationError, NotLikedError, UnauthorizedError,
)


def require_text(text: str | None, field: str = "text") -> str:
    """Reject missing or whitespace-only text. Returns the stripped text."""
    stripped = (text or "").strip()
    if not stripped:
        raise FieldValidationError("Text is required", field)
    return stripped


def new_post(text: str, identity: Identity) -> Post:
    """Build an unsaved post owned by the caller with empty likes/comments."""
    return Post(
        text=require_text(text),
        owner_id=identity.user_id,
        author=identity.author_snapshot(),
    )


def check_post_owner(post: Post, user_id: UserId) -> None:
    if post.owner_id != user_id:
        raise UnauthorizedError(
            context=ErrorContext(
                resource_type="Post", resource_id=str(post.id), user_id=str(user_id),
            ),
        )


def has_liked(post: Post, user_id: UserId) -> bool:
    return post.likes.any(lambda like: like.user_id == user_id)


def add_like(post: Post, user_id: UserId) -> None:
    """NotLiked -> Liked. Raises AlreadyLikedError from the Liked state."""
    if has_liked(post, user_id):
        raise AlreadyLikedError(
            ErrorContext(resource_type="Post", resource_id=str(post.id), user_id=str(user_id)),
        )
    post.likes.prepend(Like(user_id=user_id))


def remove_like(post: Post, user_id: UserId) -> None:
    """Liked -> NotLiked. Raises NotLikedError from the NotLiked state."""
    if not has_liked(post, user_id):
        raise NotLikedError(
            ErrorContext(resource_type="Post", resource_id=str(post.id), user_id=str(user_id)),
        )
    post.likes.remove_where(lambda like: like.user_id == user_id)


def add_comment(post: Post, text: str, author_id: UserId, author: Author) -> Comment:
    comment = Comment(
        text=require_text(text),
        author_id=author_id,
        author_name=author.name,
        author_avatar=author.avatar,
    )
    post.comments.prepend(comment)
    return comment


def remove_comment(post: Post, comment_id: CommentId, user_id: UserId) -> None:
    """Existence first, then authorship, then removal."""
    comment = post.comments.find(lambda c: c.id == comment_id)
    if comment is None:
        raise CommentNotFoundError(str(comment_id))
    if comment.author_id != user_id:
        raise UnauthorizedError(
            context=ErrorContext(
                resource_type="Comment", resource_id=str(comment_id), user_id=str(user_id),
            ),
        )
    post.comments.remove_where(lambda c: c.id == comment_id)


def newest_first(posts: list[Post]) -> list[Post]:
    return sorted(posts, key=lambda p: p.created_at, reverse=True)
