"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - save() is an insert when version == 0, otherwise a compare-and-swap on version;
      a lost race raises ConcurrencyError and bumps nothing
    - Each call is atomic for a single aggregate
    - delete_by_owner(commit=False) leaves the removal pending so a cascading caller
      can commit it together with its own delete, or discard it with rollback()

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO; the pure rules that act on the
      loaded aggregates are never async
"""

from typing import Protocol

from app.core.aggregates import Identity, OwnerSummary, Post, Profile
from app.core.domain_types import PostId, UserId


class PostStore(Protocol):
    """Contract for Post aggregate persistence - implemented by shell."""
    async def load(self, post_id: PostId) -> Post | None: ...
    async def load_all(self) -> list[Post]: ...
    async def save(self, post: Post) -> None: ...
    async def delete(self, post_id: PostId) -> None: ...
    async def delete_by_owner(self, owner_id: UserId, commit: bool = True) -> int: ...
    async def rollback(self) -> None: ...


class ProfileStore(Protocol):
    """Contract for Profile aggregate persistence, keyed by owner - implemented by shell."""
    async def load(self, owner_id: UserId) -> Profile | None: ...
    async def load_all(self) -> list[Profile]: ...
    async def save(self, profile: Profile) -> None: ...
    async def delete(self, owner_id: UserId) -> bool: ...


class UserDirectory(Protocol):
    """Read-only view of user records owned by the auth subsystem."""
    async def get_identity(self, user_id: UserId) -> Identity | None: ...
    async def get_owner_summaries(
        self, user_ids: list[UserId],
    ) -> dict[UserId, OwnerSummary]: ...
