"""Conflict Retry - re-runs a read-modify-persist mutation after a lost version race.

Invariants:
    - Only ConcurrencyError triggers a retry; domain errors and DatabaseError propagate
      on the first occurrence
    - Each attempt reloads the aggregate, so every invariant is re-checked against the
      winning write
    - After max_attempts conflicts the last ConcurrencyError is raised to the caller
"""

import logging
from typing import Awaitable, Callable, TypeVar

from app.core.errors import ConcurrencyError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry_on_conflict(
    mutation: Callable[[], Awaitable[T]],
    max_attempts: int,
    **log_extra: str,
) -> T:
    """Run mutation(), retrying on ConcurrencyError up to max_attempts times."""
    attempt = 1
    while True:
        try:
            return await mutation()
        except ConcurrencyError as e:
            if attempt >= max_attempts:
                logger.error(
                    f"Giving up after {attempt} conflicting attempts: {e.message}",
                    extra={"attempt": attempt, "error_code": e.code, **log_extra},
                )
                raise
            logger.warning(
                f"Version conflict, retrying ({attempt}/{max_attempts})",
                extra={"attempt": attempt, **log_extra},
            )
            attempt += 1
