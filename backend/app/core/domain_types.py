"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - PostId, UserId, CommentId, EntryId wrap UUIDs; never use bare UUID in domain logic
    - Social platforms are a closed set encoded as an Enum, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

PostId = NewType("PostId", UUID)
UserId = NewType("UserId", UUID)
CommentId = NewType("CommentId", UUID)
EntryId = NewType("EntryId", UUID)      # experience / education entries


# ─── Enums ───────────────────────────────────────────────────────

class SocialPlatform(str, Enum):
    """Platforms a profile may link to."""
    YOUTUBE = "youtube"
    FACEBOOK = "facebook"
    LINKEDIN = "linkedin"
    TWITTER = "twitter"
    INSTAGRAM = "instagram"
