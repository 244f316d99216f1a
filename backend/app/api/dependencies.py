"""API Dependencies - identity provider and per-request service factories.

Invariants:
    - get_current_identity resolves a bearer token to an existing user or raises
      UnauthenticatedError (401); routes never see an anonymous caller
    - Services are built per request over the request's AsyncSession (get_db is
      cached per request, so stores and the identity lookup share one session)
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.core.aggregates import Identity
from app.core.errors import UnauthenticatedError
from app.infrastructure.database import get_db
from app.infrastructure.identity import decode_access_token
from app.infrastructure.post_store import SqlPostStore
from app.infrastructure.profile_store import SqlProfileStore
from app.infrastructure.user_directory import SqlUserDirectory
from app.services.post_service import PostService
from app.services.profile_service import ProfileService

_bearer = HTTPBearer(auto_error=False)


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    db: AsyncSession = Depends(get_db),
) -> Identity:
    """Identity provider: bearer token -> Identity, or 401."""
    if credentials is None:
        raise UnauthenticatedError("No token, authorization denied")
    user_id = decode_access_token(credentials.credentials, get_settings())
    identity = await SqlUserDirectory(db).get_identity(user_id)
    if identity is None:
        raise UnauthenticatedError("Token user no longer exists")
    return identity


async def get_post_service(db: AsyncSession = Depends(get_db)) -> PostService:
    return PostService(
        SqlPostStore(db), max_attempts=get_settings().mutation_max_attempts,
    )


async def get_profile_service(db: AsyncSession = Depends(get_db)) -> ProfileService:
    settings = get_settings()
    return ProfileService(
        SqlProfileStore(db),
        SqlUserDirectory(db),
        posts=SqlPostStore(db),
        max_attempts=settings.mutation_max_attempts,
        cascade_posts=settings.profile_delete_cascades_posts,
    )
