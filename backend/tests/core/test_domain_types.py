"""Domain Types - verifies identity wrappers and enum values."""

from uuid import uuid4

from app.core.domain_types import (
    CommentId, EntryId, PostId, SocialPlatform, UserId,
)


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert PostId(uid) == uid
    assert UserId(uid) == uid
    assert CommentId(uid) == uid
    assert EntryId(uid) == uid


def test_social_platforms_are_the_five_supported():
    assert {p.value for p in SocialPlatform} == {
        "youtube", "facebook", "linkedin", "twitter", "instagram",
    }
