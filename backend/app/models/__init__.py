"""ORM Models - SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Post and Profile are aggregate roots; nested collections live in JSON columns

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from app.models.user import User  # noqa: F401
from app.models.post import Post  # noqa: F401
from app.models.profile import Profile  # noqa: F401
