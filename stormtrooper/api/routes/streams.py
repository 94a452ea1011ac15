"""Stream API Routes"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from stormtrooper.auth.dependencies import CurrentUser
from stormtrooper.db.session import get_db
from stormtrooper.middleware.error_handler import NotFoundException
from stormtrooper.schemas.stream import StreamCreate, StreamResponse
from stormtrooper.services import streams

router = APIRouter(prefix="/streams", tags=["streams"])


@router.post(
    "",
    response_model=StreamResponse,
    status_code=status.HTTP_201_CREATED,
    responses={200: {"model": StreamResponse, "description": "Existing stream"}},
)
async def get_or_create_stream(
    stream_in: StreamCreate,
    response: Response,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> StreamResponse:
    """Get the current user's stream, creating it if it does not exist."""
    stream, created = await streams.get_or_create_stream(db, current_user, stream_in)
    if not created:
        response.status_code = status.HTTP_200_OK
    return StreamResponse.model_validate(stream)


@router.get("/me", response_model=StreamResponse)
async def read_own_stream(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> StreamResponse:
    """Get the current user's stream."""
    stream = await streams.get_stream_for_user(db, current_user.id)
    if stream is None:
        raise NotFoundException(
            message="Stream not found",
            resource_type="stream",
            resource_id=current_user.id,
        )
    return StreamResponse.model_validate(stream)
