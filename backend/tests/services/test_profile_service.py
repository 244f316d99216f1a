"""Profile Service - upsert, read, delete and entry management over SQL stores.

Tests cover:
    - upsert creates once and merges afterwards (one record per owner)
    - reads attach owner display fields
    - experience/education add and remove, including unknown-id no-ops
    - delete cascades to the owner's posts when enabled, and only then
"""

from datetime import date
from uuid import uuid4

import pytest

from app.core.aggregates import (
    EducationEntry, ExperienceEntry, Identity, ProfileFields,
)
from app.core.domain_types import EntryId, SocialPlatform, UserId
from app.core.errors import DatabaseError, FieldValidationError, ResourceNotFoundError
from app.core.post_rules import new_post
from app.infrastructure.post_store import SqlPostStore
from app.infrastructure.profile_store import SqlProfileStore
from app.infrastructure.user_directory import SqlUserDirectory
from app.services.profile_service import ProfileService


class FailingDeleteProfileStore(SqlProfileStore):
    """Profile store whose delete fails as if the connection dropped."""

    async def delete(self, owner_id):
        raise DatabaseError("Connection or operational error", "execute")


def _service(db, cascade_posts: bool = True) -> ProfileService:
    return ProfileService(
        SqlProfileStore(db), SqlUserDirectory(db),
        posts=SqlPostStore(db), cascade_posts=cascade_posts,
    )


@pytest.fixture
def service(test_db) -> ProfileService:
    return _service(test_db)


def _experience(title: str = "Engineer") -> ExperienceEntry:
    return ExperienceEntry(title=title, company="Acme", from_date=date(2020, 1, 1))


def _education() -> EducationEntry:
    return EducationEntry(
        school="MIT", degree="BSc", field_of_study="CS", from_date=date(2015, 9, 1),
    )


# ─── upsert ──────────────────────────────────────────────────────

async def test_upsert_creates_then_merges_single_record(service, make_user):
    user = await make_user("Ada")
    owner = UserId(user.id)

    await service.upsert(owner, ProfileFields(status="Dev", skills="go,rust"))
    profile = await service.upsert(
        owner, ProfileFields(status="Dev", skills="go,rust,ts"),
    )

    assert profile.skills == ["go", "rust", "ts"]
    assert profile.version == 2
    all_profiles = await service.list_all()
    assert len(all_profiles) == 1
    assert all_profiles[0].skills == ["go", "rust", "ts"]


async def test_upsert_keeps_omitted_fields(service, make_user):
    owner = UserId((await make_user()).id)
    await service.upsert(owner, ProfileFields(
        status="Dev", skills="go", company="Acme",
        social={SocialPlatform.LINKEDIN: "https://linkedin.com/in/ada"},
    ))
    profile = await service.upsert(owner, ProfileFields(status="Lead", skills="go"))

    assert profile.status == "Lead"
    assert profile.company == "Acme"
    assert profile.social == {SocialPlatform.LINKEDIN: "https://linkedin.com/in/ada"}


async def test_upsert_requires_status(service, make_user):
    owner = UserId((await make_user()).id)
    with pytest.raises(FieldValidationError):
        await service.upsert(owner, ProfileFields(status=" ", skills="go"))
    with pytest.raises(ResourceNotFoundError):
        await service.get_own(owner)


# ─── reads ───────────────────────────────────────────────────────

async def test_get_own_attaches_owner_summary(service, make_user):
    user = await make_user("Ada", avatar="https://a.test/ada.png")
    owner = UserId(user.id)
    await service.upsert(owner, ProfileFields(status="Dev", skills="go"))

    profile = await service.get_own(owner)
    assert profile.owner is not None
    assert profile.owner.name == "Ada"
    assert profile.owner.avatar == "https://a.test/ada.png"


async def test_get_by_user_id_missing_is_not_found(service):
    with pytest.raises(ResourceNotFoundError) as exc:
        await service.get_by_user_id(UserId(uuid4()))
    assert exc.value.http_status == 404


async def test_list_all_attaches_each_owner(service, make_user):
    names = []
    for name in ("Ada", "Grace"):
        user = await make_user(name)
        names.append(name)
        await service.upsert(UserId(user.id), ProfileFields(status="Dev", skills="go"))

    profiles = await service.list_all()
    assert sorted(p.owner.name for p in profiles) == names


async def test_list_all_empty(service):
    assert await service.list_all() == []


# ─── experience / education ─────────────────────────────────────

async def test_add_experience_requires_profile(service, make_user):
    owner = UserId((await make_user()).id)
    with pytest.raises(ResourceNotFoundError):
        await service.add_experience(owner, _experience())


async def test_experience_add_and_remove(service, make_user):
    owner = UserId((await make_user()).id)
    await service.upsert(owner, ProfileFields(status="Dev", skills="go"))

    await service.add_experience(owner, _experience("Junior"))
    profile = await service.add_experience(owner, _experience("Senior"))
    assert [e.title for e in profile.experience] == ["Senior", "Junior"]

    profile = await service.remove_experience(owner, profile.experience[0].id)
    assert [e.title for e in profile.experience] == ["Junior"]


async def test_remove_unknown_experience_is_noop(service, make_user):
    owner = UserId((await make_user()).id)
    await service.upsert(owner, ProfileFields(status="Dev", skills="go"))
    await service.add_experience(owner, _experience())

    profile = await service.remove_experience(owner, EntryId(uuid4()))
    assert len(profile.experience) == 1
    assert profile.version == 2


async def test_education_add_and_remove(service, make_user):
    owner = UserId((await make_user()).id)
    await service.upsert(owner, ProfileFields(status="Dev", skills="go"))

    profile = await service.add_education(owner, _education())
    assert profile.education[0].school == "MIT"

    profile = await service.remove_education(owner, profile.education[0].id)
    assert len(profile.education) == 0
    assert len((await service.get_own(owner)).education) == 0


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_cascades_to_owned_posts(test_db, service, make_user):
    user = await make_user()
    other = await make_user()
    owner = UserId(user.id)
    posts = SqlPostStore(test_db)
    await service.upsert(owner, ProfileFields(status="Dev", skills="go"))
    await posts.save(new_post("mine", Identity(owner, user.name)))
    kept = new_post("theirs", Identity(UserId(other.id), other.name))
    await posts.save(kept)

    await service.delete(owner)

    with pytest.raises(ResourceNotFoundError):
        await service.get_own(owner)
    assert [p.id for p in await posts.load_all()] == [kept.id]


async def test_delete_without_cascade_keeps_posts(test_db, make_user):
    service = _service(test_db, cascade_posts=False)
    user = await make_user()
    owner = UserId(user.id)
    posts = SqlPostStore(test_db)
    await service.upsert(owner, ProfileFields(status="Dev", skills="go"))
    await posts.save(new_post("mine", Identity(owner, user.name)))

    await service.delete(owner)
    assert len(await posts.load_all()) == 1


async def test_delete_missing_profile_is_not_an_error(service, make_user):
    owner = UserId((await make_user()).id)
    await service.delete(owner)


async def test_failed_profile_delete_keeps_owned_posts(test_db, make_user):
    user = await make_user()
    owner = UserId(user.id)
    posts = SqlPostStore(test_db)
    await _service(test_db).upsert(owner, ProfileFields(status="Dev", skills="go"))
    await posts.save(new_post("mine", Identity(owner, user.name)))
    service = ProfileService(
        FailingDeleteProfileStore(test_db), SqlUserDirectory(test_db), posts=posts,
    )

    with pytest.raises(DatabaseError):
        await service.delete(owner)

    assert (await service.get_own(owner)).owner_id == owner
    assert len(await posts.load_all()) == 1
