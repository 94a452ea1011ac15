"""Stream services."""

import logging
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from stormtrooper.models import Stream, User
from stormtrooper.schemas.stream import StreamCreate

logger = logging.getLogger(__name__)


async def get_stream_for_user(db: AsyncSession, user_id: str) -> Optional[Stream]:
    """Retrieve the stream owned by a user, or None."""
    return await db.scalar(select(Stream).where(Stream.user_id == user_id))


async def get_or_create_stream(
    db: AsyncSession,
    user: User,
    stream_in: StreamCreate,
) -> Tuple[Stream, bool]:
    """Return the user's stream, creating it from ``stream_in`` if missing.

    Returns:
        Tuple of the stream and whether it was created by this call.
    """
    user_id = user.id
    stream = await get_stream_for_user(db, user_id)
    if stream is not None:
        return stream, False

    stream = Stream(
        user_id=user_id,
        csync_path=stream_in.stream_path,
        stream_name=stream_in.stream_name,
        description=stream_in.stream_description,
    )
    db.add(stream)
    try:
        await db.commit()
    except IntegrityError:
        # Another request created the stream first
        await db.rollback()
        existing = await get_stream_for_user(db, user_id)
        if existing is None:
            raise
        return existing, False

    logger.info(f"Created stream {stream.id} for user {user_id}")
    return stream, True
