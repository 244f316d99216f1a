"""Profile Service - upsert, read, delete profiles and manage experience/education.

Invariants:
    - owner_id is both lookup key and upsert key: repeated upserts touch one record
    - Omitted optional fields never clear stored values
    - Entry removal by unknown id is a no-op, not an error
    - Read operations attach the owner's display fields (resolved, not stored)
    - Delete removes the profile and, when cascade is enabled, the owner's posts;
      the user record is left to the auth subsystem
    - The cascade is one transaction over the request session: if the profile
      delete fails, the pending post removal is rolled back

Design Decisions:
    - Cascade goes through PostStore, never PostService: aggregates stay independent
    - Unchanged profiles are not re-saved when a removal matched nothing
"""

import logging

from app.core.aggregates import (
    EducationEntry, ExperienceEntry, Profile, ProfileFields,
)
from app.core.domain_types import EntryId, UserId
from app.core.errors import ResourceNotFoundError
from app.core.profile_rules import (
    add_education, add_experience, apply_upsert,
    remove_education, remove_experience,
)
from app.core.repository_protocols import PostStore, ProfileStore, UserDirectory
from app.services.mutation_retry import retry_on_conflict

logger = logging.getLogger(__name__)


class ProfileService:
    """Profile aggregate operations keyed by owner."""

    def __init__(
        self,
        store: ProfileStore,
        users: UserDirectory,
        posts: PostStore | None = None,
        max_attempts: int = 3,
        cascade_posts: bool = True,
    ):
        self._store = store
        self._users = users
        self._posts = posts
        self._max_attempts = max_attempts
        self._cascade_posts = cascade_posts

    async def _load_or_404(self, owner_id: UserId) -> Profile:
        profile = await self._store.load(owner_id)
        if profile is None:
            raise ResourceNotFoundError("Profile", str(owner_id))
        return profile

    async def _with_owners(self, profiles: list[Profile]) -> list[Profile]:
        owners = await self._users.get_owner_summaries([p.owner_id for p in profiles])
        for profile in profiles:
            profile.owner = owners.get(profile.owner_id)
        return profiles

    async def _with_owner(self, profile: Profile) -> Profile:
        return (await self._with_owners([profile]))[0]

    async def upsert(self, owner_id: UserId, fields: ProfileFields) -> Profile:
        async def mutation() -> Profile:
            existing = await self._store.load(owner_id)
            profile = apply_upsert(existing, owner_id, fields)
            await self._store.save(profile)
            if existing is None:
                logger.info(f"Profile created for {owner_id}", extra={"user_id": str(owner_id)})
            return profile

        profile = await retry_on_conflict(
            mutation, self._max_attempts, user_id=str(owner_id),
        )
        return await self._with_owner(profile)

    async def get_own(self, owner_id: UserId) -> Profile:
        return await self._with_owner(await self._load_or_404(owner_id))

    async def get_by_user_id(self, user_id: UserId) -> Profile:
        return await self._with_owner(await self._load_or_404(user_id))

    async def list_all(self) -> list[Profile]:
        return await self._with_owners(await self._store.load_all())

    async def delete(self, owner_id: UserId) -> None:
        if not (self._cascade_posts and self._posts is not None):
            removed = await self._store.delete(owner_id)
            logger.info(
                f"Profile delete for {owner_id}: profile_removed={removed}",
                extra={"user_id": str(owner_id)},
            )
            return
        # Post removal stays pending until the profile delete commits both
        removed_posts = await self._posts.delete_by_owner(owner_id, commit=False)
        try:
            removed = await self._store.delete(owner_id)
        except Exception:
            await self._posts.rollback()
            raise
        logger.info(
            f"Profile delete for {owner_id}: profile_removed={removed}, "
            f"posts_removed={removed_posts}",
            extra={"user_id": str(owner_id)},
        )

    async def add_experience(self, owner_id: UserId, entry: ExperienceEntry) -> Profile:
        return await self._mutate(owner_id, lambda p: add_experience(p, entry))

    async def remove_experience(self, owner_id: UserId, entry_id: EntryId) -> Profile:
        return await self._mutate(
            owner_id, lambda p: remove_experience(p, entry_id) > 0,
        )

    async def add_education(self, owner_id: UserId, entry: EducationEntry) -> Profile:
        return await self._mutate(owner_id, lambda p: add_education(p, entry))

    async def remove_education(self, owner_id: UserId, entry_id: EntryId) -> Profile:
        return await self._mutate(
            owner_id, lambda p: remove_education(p, entry_id) > 0,
        )

    async def _mutate(self, owner_id: UserId, apply) -> Profile:
        """Load, apply, save. apply() returning False means nothing changed."""
        async def mutation() -> Profile:
            profile = await self._load_or_404(owner_id)
            if apply(profile) is not False:
                await self._store.save(profile)
            return profile

        profile = await retry_on_conflict(
            mutation, self._max_attempts, user_id=str(owner_id),
        )
        return await self._with_owner(profile)
