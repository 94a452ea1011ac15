"""Stream Schemas for Stormtrooper."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class StreamCreate(BaseModel):
    """Schema for creating a stream.

    The mobile client sends camelCase keys; snake_case is accepted too.
    """

    model_config = ConfigDict(populate_by_name=True)

    stream_path: Optional[str] = Field(
        None,
        alias="streamPath",
        max_length=255,
        description="Realtime sync path of the broadcast",
    )
    stream_name: Optional[str] = Field(
        None,
        alias="streamName",
        max_length=255,
        description="Display name of the stream",
    )
    stream_description: Optional[str] = Field(
        None,
        alias="streamDescription",
        description="Stream description",
    )


class StreamResponse(BaseModel):
    """Schema for stream response."""

    id: int = Field(..., description="Stream ID")
    user_id: str = Field(..., description="Owning user ID")
    csync_path: Optional[str] = Field(None, description="Realtime sync path")
    stream_name: Optional[str] = Field(None, description="Stream name")
    description: Optional[str] = Field(None, description="Stream description")

    model_config = {"from_attributes": True}
