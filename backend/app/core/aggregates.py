"""Aggregates - Post and Profile roots with their nested owned collections.

Invariants:
    - Post.likes holds at most one Like per user_id
    - Nested collections are PrependList (newest first)
    - version == 0 means "never saved"; stores bump it on every successful save
    - Profile.owner is resolved at read time, never persisted

Design Decisions:
    - Plain dataclasses, no ORM coupling: core rules operate on these, stores map them
    - Entry ids default to fresh UUIDs so a new entry is identified before it is stored
"""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from app.core.domain_types import (
    PostId, UserId, CommentId, EntryId, SocialPlatform,
)
from app.core.prepend_list import PrependList


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ─── Identity ────────────────────────────────────────────────────

@dataclass(frozen=True)
class Author:
    """Display snapshot of a user, copied onto posts and comments."""
    name: str
    avatar: str | None = None


@dataclass(frozen=True)
class Identity:
    """Authenticated caller supplied by the identity provider."""
    user_id: UserId
    name: str
    avatar: str | None = None

    def author_snapshot(self) -> Author:
        return Author(name=self.name, avatar=self.avatar)


@dataclass(frozen=True)
class OwnerSummary:
    """Public display fields of a profile owner."""
    user_id: UserId
    name: str
    avatar: str | None = None


# ─── Post ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Like:
    user_id: UserId


@dataclass(frozen=True)
class Comment:
    text: str
    author_id: UserId
    author_name: str
    author_avatar: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    id: CommentId = field(default_factory=lambda: CommentId(uuid.uuid4()))


@dataclass
class Post:
    """Post aggregate root."""
    text: str
    owner_id: UserId
    author: Author
    created_at: datetime = field(default_factory=_utcnow)
    likes: PrependList[Like] = field(default_factory=PrependList)
    comments: PrependList[Comment] = field(default_factory=PrependList)
    id: PostId = field(default_factory=lambda: PostId(uuid.uuid4()))
    version: int = 0


# ─── Profile ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class ExperienceEntry:
    title: str
    company: str
    from_date: date
    location: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None
    id: EntryId = field(default_factory=lambda: EntryId(uuid.uuid4()))


@dataclass(frozen=True)
class EducationEntry:
    school: str
    degree: str
    field_of_study: str
    from_date: date
    to_date: date | None = None
    current: bool = False
    description: str | None = None
    id: EntryId = field(default_factory=lambda: EntryId(uuid.uuid4()))


@dataclass
class ProfileFields:
    """Upsert input. None (or empty) optional fields leave stored values untouched."""
    status: str
    skills: str
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = None
    social: dict[SocialPlatform, str | None] = field(default_factory=dict)


@dataclass
class Profile:
    """Profile aggregate root, keyed by owner_id."""
    owner_id: UserId
    status: str
    skills: list[str] = field(default_factory=list)
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = None
    social: dict[SocialPlatform, str] = field(default_factory=dict)
    experience: PrependList[ExperienceEntry] = field(default_factory=PrependList)
    education: PrependList[EducationEntry] = field(default_factory=PrependList)
    created_at: datetime = field(default_factory=_utcnow)
    version: int = 0
    owner: OwnerSummary | None = None
