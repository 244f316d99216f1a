"""Profile Store - SQLAlchemy implementation of the ProfileStore protocol.

Invariants:
    - owner_id is the storage key: at most one row per user
    - save() inserts when version == 0, otherwise compare-and-swap on version
    - A duplicate-key insert (another request created the profile first) raises
      ConcurrencyError so the caller reloads and merges instead of duplicating
    - Profile.owner is never written; it is resolved by the service on read

Design Decisions:
    - Dates inside experience/education stored as ISO strings in JSON documents
"""

import logging
import uuid
from datetime import date

from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.aggregates import EducationEntry, ExperienceEntry, Profile
from app.core.domain_types import EntryId, SocialPlatform, UserId
from app.core.errors import ConcurrencyError, ErrorContext
from app.core.prepend_list import PrependList
from app.infrastructure.database import to_database_error
from app.models.profile import Profile as ProfileModel

logger = logging.getLogger(__name__)


def _date_or_none(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def _experience_to_doc(entry: ExperienceEntry) -> dict:
    return {
        "id": str(entry.id),
        "title": entry.title,
        "company": entry.company,
        "location": entry.location,
        "from": entry.from_date.isoformat(),
        "to": entry.to_date.isoformat() if entry.to_date else None,
        "current": entry.current,
        "description": entry.description,
    }


def _experience_from_doc(doc: dict) -> ExperienceEntry:
    return ExperienceEntry(
        id=EntryId(uuid.UUID(doc["id"])),
        title=doc["title"],
        company=doc["company"],
        location=doc.get("location"),
        from_date=date.fromisoformat(doc["from"]),
        to_date=_date_or_none(doc.get("to")),
        current=bool(doc.get("current", False)),
        description=doc.get("description"),
    )


def _education_to_doc(entry: EducationEntry) -> dict:
    return {
        "id": str(entry.id),
        "school": entry.school,
        "degree": entry.degree,
        "field_of_study": entry.field_of_study,
        "from": entry.from_date.isoformat(),
        "to": entry.to_date.isoformat() if entry.to_date else None,
        "current": entry.current,
        "description": entry.description,
    }


def _education_from_doc(doc: dict) -> EducationEntry:
    return EducationEntry(
        id=EntryId(uuid.UUID(doc["id"])),
        school=doc["school"],
        degree=doc["degree"],
        field_of_study=doc["field_of_study"],
        from_date=date.fromisoformat(doc["from"]),
        to_date=_date_or_none(doc.get("to")),
        current=bool(doc.get("current", False)),
        description=doc.get("description"),
    )


def _to_profile(row: ProfileModel) -> Profile:
    known = {p.value for p in SocialPlatform}
    return Profile(
        owner_id=UserId(row.owner_id),
        status=row.status,
        skills=list(row.skills or []),
        company=row.company,
        website=row.website,
        location=row.location,
        bio=row.bio,
        github_username=row.github_username,
        social={
            SocialPlatform(k): v for k, v in (row.social or {}).items() if k in known
        },
        experience=PrependList(_experience_from_doc(d) for d in row.experience or []),
        education=PrependList(_education_from_doc(d) for d in row.education or []),
        created_at=row.created_at,
        version=row.version,
    )


def _mutable_columns(profile: Profile) -> dict:
    return {
        "status": profile.status,
        "company": profile.company,
        "website": profile.website,
        "location": profile.location,
        "bio": profile.bio,
        "github_username": profile.github_username,
        "skills": list(profile.skills),
        "social": {p.value: url for p, url in profile.social.items()},
        "experience": [_experience_to_doc(e) for e in profile.experience],
        "education": [_education_to_doc(e) for e in profile.education],
    }


class SqlProfileStore:
    """ProfileStore over an AsyncSession. Each write commits."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def load(self, owner_id: UserId) -> Profile | None:
        result = await self.db.execute(
            select(ProfileModel)
            .where(ProfileModel.owner_id == owner_id)
            .execution_options(populate_existing=True),
        )
        row = result.scalar_one_or_none()
        return _to_profile(row) if row else None

    async def load_all(self) -> list[Profile]:
        result = await self.db.execute(
            select(ProfileModel)
            .order_by(ProfileModel.created_at)
            .execution_options(populate_existing=True),
        )
        return [_to_profile(row) for row in result.scalars().all()]

    async def save(self, profile: Profile) -> None:
        if profile.version == 0:
            await self._insert(profile)
        else:
            await self._compare_and_swap(profile)

    async def _insert(self, profile: Profile) -> None:
        self.db.add(ProfileModel(
            owner_id=profile.owner_id,
            created_at=profile.created_at,
            version=1,
            **_mutable_columns(profile),
        ))
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if await self._exists(profile.owner_id):
                logger.debug(
                    f"Profile for {profile.owner_id} inserted concurrently",
                    extra={"user_id": str(profile.owner_id)},
                )
                raise ConcurrencyError(
                    f"Profile for user '{profile.owner_id}' was created concurrently",
                    ErrorContext(resource_type="Profile", resource_id=str(profile.owner_id)),
                ) from e
            raise to_database_error(e) from e
        profile.version = 1

    async def _compare_and_swap(self, profile: Profile) -> None:
        result = await self.db.execute(
            update(ProfileModel)
            .where(
                ProfileModel.owner_id == profile.owner_id,
                ProfileModel.version == profile.version,
            )
            .values(version=profile.version + 1, **_mutable_columns(profile))
            .execution_options(synchronize_session=False),
        )
        if result.rowcount == 0:
            await self.db.rollback()
            logger.debug(
                f"Stale save of profile {profile.owner_id} at version {profile.version}",
                extra={"user_id": str(profile.owner_id)},
            )
            raise ConcurrencyError(
                f"Profile for user '{profile.owner_id}' was modified concurrently",
                ErrorContext(resource_type="Profile", resource_id=str(profile.owner_id)),
            )
        await self.db.commit()
        profile.version += 1

    async def _exists(self, owner_id: UserId) -> bool:
        result = await self.db.execute(
            select(ProfileModel.owner_id).where(ProfileModel.owner_id == owner_id),
        )
        return result.scalar_one_or_none() is not None

    async def delete(self, owner_id: UserId) -> bool:
        result = await self.db.execute(
            delete(ProfileModel).where(ProfileModel.owner_id == owner_id),
        )
        await self.db.commit()
        return result.rowcount > 0
