"""User Directory - read-only lookups of user display fields for the content services.

Invariants:
    - Never writes the users table
    - Unknown ids are simply absent from get_owner_summaries() results
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.aggregates import Identity, OwnerSummary
from app.core.domain_types import UserId
from app.models.user import User


class SqlUserDirectory:
    """UserDirectory over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_identity(self, user_id: UserId) -> Identity | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if not user:
            return None
        return Identity(user_id=UserId(user.id), name=user.name, avatar=user.avatar)

    async def get_owner_summaries(
        self, user_ids: list[UserId],
    ) -> dict[UserId, OwnerSummary]:
        if not user_ids:
            return {}
        result = await self.db.execute(
            select(User).where(User.id.in_(set(user_ids))),
        )
        return {
            UserId(u.id): OwnerSummary(user_id=UserId(u.id), name=u.name, avatar=u.avatar)
            for u in result.scalars().all()
        }
