"""Profile Schemas - Pydantic request/response models for the profile API.

Invariants:
    - ProfileUpsert requires non-blank status and skills
    - Experience requires title, company, from; education requires school, degree,
      fieldofstudy, from
    - "to" may not precede "from"
    - Request bodies accept the public field names (githubusername, fieldofstudy,
      from, to) through aliases

Design Decisions:
    - Validation lives here, at the HTTP boundary; core rules only keep minimal guards
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.core.aggregates import (
    EducationEntry, ExperienceEntry, OwnerSummary, Profile, ProfileFields,
)
from app.core.domain_types import SocialPlatform


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be empty")
    return v


class ProfileUpsert(BaseModel):
    """Body of POST /profile. Empty optional fields leave stored values untouched."""
    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(max_length=100)
    skills: str = Field(max_length=1_000)
    company: str | None = Field(None, max_length=200)
    website: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=200)
    bio: str | None = Field(None, max_length=5_000)
    github_username: str | None = Field(
        None, alias="githubusername", max_length=100,
    )
    youtube: str | None = Field(None, max_length=500)
    facebook: str | None = Field(None, max_length=500)
    linkedin: str | None = Field(None, max_length=500)
    twitter: str | None = Field(None, max_length=500)
    instagram: str | None = Field(None, max_length=500)

    @field_validator("status", "skills")
    @classmethod
    def required_text(cls, v: str) -> str:
        return _strip_required(v)

    def to_fields(self) -> ProfileFields:
        return ProfileFields(
            status=self.status,
            skills=self.skills,
            company=self.company,
            website=self.website,
            location=self.location,
            bio=self.bio,
            github_username=self.github_username,
            social={p: getattr(self, p.value) for p in SocialPlatform},
        )


class _DatedEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_date: date = Field(alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = Field(None, max_length=5_000)

    @model_validator(mode="after")
    def check_date_range(self):
        if self.to_date and self.to_date < self.from_date:
            raise ValueError("'to' date must not precede 'from' date")
        return self


class ExperienceCreate(_DatedEntry):
    """Body of PUT /profile/experience."""
    title: str = Field(max_length=200)
    company: str = Field(max_length=200)
    location: str | None = Field(None, max_length=200)

    @field_validator("title", "company")
    @classmethod
    def required_text(cls, v: str) -> str:
        return _strip_required(v)

    def to_entry(self) -> ExperienceEntry:
        return ExperienceEntry(
            title=self.title,
            company=self.company,
            location=self.location,
            from_date=self.from_date,
            to_date=self.to_date,
            current=self.current,
            description=self.description,
        )


class EducationCreate(_DatedEntry):
    """Body of PUT /profile/education."""
    school: str = Field(max_length=200)
    degree: str = Field(max_length=200)
    field_of_study: str = Field(alias="fieldofstudy", max_length=200)

    @field_validator("school", "degree", "field_of_study")
    @classmethod
    def required_text(cls, v: str) -> str:
        return _strip_required(v)

    def to_entry(self) -> EducationEntry:
        return EducationEntry(
            school=self.school,
            degree=self.degree,
            field_of_study=self.field_of_study,
            from_date=self.from_date,
            to_date=self.to_date,
            current=self.current,
            description=self.description,
        )


class OwnerResponse(BaseModel):
    id: UUID
    name: str
    avatar: str | None

    @classmethod
    def from_domain(cls, owner: OwnerSummary) -> "OwnerResponse":
        return cls(id=owner.user_id, name=owner.name, avatar=owner.avatar)


class ExperienceResponse(BaseModel):
    id: UUID
    title: str
    company: str
    location: str | None
    from_date: date
    to_date: date | None
    current: bool
    description: str | None


class EducationResponse(BaseModel):
    id: UUID
    school: str
    degree: str
    field_of_study: str
    from_date: date
    to_date: date | None
    current: bool
    description: str | None


class ProfileResponse(BaseModel):
    owner_id: UUID
    owner: OwnerResponse | None
    status: str
    skills: list[str]
    company: str | None
    website: str | None
    location: str | None
    bio: str | None
    github_username: str | None
    social: dict[str, str]
    experience: list[ExperienceResponse]
    education: list[EducationResponse]
    created_at: datetime

    @classmethod
    def from_domain(cls, profile: Profile) -> "ProfileResponse":
        return cls(
            owner_id=profile.owner_id,
            owner=OwnerResponse.from_domain(profile.owner) if profile.owner else None,
            status=profile.status,
            skills=list(profile.skills),
            company=profile.company,
            website=profile.website,
            location=profile.location,
            bio=profile.bio,
            github_username=profile.github_username,
            social={p.value: url for p, url in profile.social.items()},
            experience=[
                ExperienceResponse(
                    id=e.id, title=e.title, company=e.company, location=e.location,
                    from_date=e.from_date, to_date=e.to_date, current=e.current,
                    description=e.description,
                )
                for e in profile.experience
            ],
            education=[
                EducationResponse(
                    id=e.id, school=e.school, degree=e.degree,
                    field_of_study=e.field_of_study, from_date=e.from_date,
                    to_date=e.to_date, current=e.current, description=e.description,
                )
                for e in profile.education
            ],
            created_at=profile.created_at,
        )
