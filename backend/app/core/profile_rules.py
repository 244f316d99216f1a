"""Profile Rules - pure upsert merge, skills normalization and entry mutations.

Invariants:
    - split_skills: comma-split, trim, drop empty fragments, keep order, no dedup
    - merge_fields: omitted or empty optional fields never clear stored values
    - Social links merge per platform
    - Entry removal is a set difference by id: removing an unknown id is a no-op

Design Decisions:
    - One upsert path (apply_upsert) for both create and update: the store key is
      owner_id, so a second upsert can only ever touch the same record
"""

from app.core.aggregates import (
    EducationEntry, ExperienceEntry, Profile, ProfileFields,
)
from app.core.domain_types import EntryId, UserId
from app.core.errors import FieldValidationError


_OPTIONAL_SCALARS = ("company", "website", "location", "bio", "github_username")


def split_skills(raw: str) -> list[str]:
    return [s.strip() for s in raw.split(",") if s.strip()]


def _require(value: str | None, field: str, label: str) -> str:
    if value is None or not str(value).strip():
        raise FieldValidationError(f"{label} is required", field)
    return value


def validate_fields(fields: ProfileFields) -> list[str]:
    """Check required upsert fields. Returns the normalized skills list."""
    _require(fields.status, "status", "Status")
    _require(fields.skills, "skills", "Skills")
    skills = split_skills(fields.skills)
    if not skills:
        raise FieldValidationError("Skills is required", "skills")
    return skills


def apply_upsert(existing: Profile | None, owner_id: UserId, fields: ProfileFields) -> Profile:
    """Create a new profile or merge the provided fields into the existing one."""
    skills = validate_fields(fields)
    profile = existing or Profile(owner_id=owner_id, status=fields.status)
    profile.status = fields.status
    profile.skills = skills
    for name in _OPTIONAL_SCALARS:
        value = getattr(fields, name)
        if value:
            setattr(profile, name, value)
    for platform, url in fields.social.items():
        if url:
            profile.social[platform] = url
    return profile


def add_experience(profile: Profile, entry: ExperienceEntry) -> None:
    _require(entry.title, "title", "Title")
    _require(entry.company, "company", "Company")
    if entry.from_date is None:
        raise FieldValidationError("From date is required", "from")
    profile.experience.prepend(entry)


def add_education(profile: Profile, entry: EducationEntry) -> None:
    _require(entry.school, "school", "School")
    _require(entry.degree, "degree", "Degree")
    _require(entry.field_of_study, "fieldofstudy", "Field of study")
    if entry.from_date is None:
        raise FieldValidationError("From date is required", "from")
    profile.education.prepend(entry)


def remove_experience(profile: Profile, entry_id: EntryId) -> int:
    return profile.experience.remove_where(lambda e: e.id == entry_id)


def remove_education(profile: Profile, entry_id: EntryId) -> int:
    return profile.education.remove_where(lambda e: e.id == entry_id)
