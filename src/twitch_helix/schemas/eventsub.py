"""Schemas for EventSub conduits and their shards."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from twitch_helix.schemas.common import (
    DataResponse,
    HelixModel,
    HelixRequestModel,
    PaginatedResponse,
)


class Conduit(HelixModel):
    id: Optional[str] = None
    shard_count: Optional[int] = None


class GetConduitsResponse(DataResponse[Conduit]):
    pass


class CreateConduitRequest(HelixRequestModel):
    shard_count: int


class CreateConduitResponse(DataResponse[Conduit]):
    pass


class UpdateConduitRequest(HelixRequestModel):
    id: str
    shard_count: int


class UpdateConduitResponse(DataResponse[Conduit]):
    pass


# ---------------------------------------------------------------------------
# Shards
# ---------------------------------------------------------------------------


class ShardTransport(HelixModel):
    """Transport of a shard as reported by Twitch.

    ``callback`` is set for webhooks; ``session_id`` and the connection
    timestamps are set for websockets.
    """

    method: Optional[str] = None
    callback: Optional[str] = None
    session_id: Optional[str] = None
    connected_at: Optional[str] = None
    disconnected_at: Optional[str] = None


class Shard(HelixModel):
    id: Optional[str] = None
    status: Optional[str] = None
    transport: Optional[ShardTransport] = None


class GetConduitShardsResponse(PaginatedResponse[Shard]):
    pass


class ShardTransportUpdate(HelixRequestModel):
    method: str
    callback: Optional[str] = None
    secret: Optional[str] = None
    session_id: Optional[str] = None


class ShardUpdate(HelixRequestModel):
    id: str
    transport: ShardTransportUpdate


class UpdateConduitShardsRequest(HelixRequestModel):
    conduit_id: str
    shards: list[ShardUpdate]


class ShardError(HelixModel):
    id: Optional[str] = None
    message: Optional[str] = None
    code: Optional[str] = None


class UpdateConduitShardsResponse(HelixModel):
    """Shards Twitch accepted (``data``) and those it rejected (``errors``)."""

    shards: list[Shard] = Field(default_factory=list, alias="data")
    errors: list[ShardError] = Field(default_factory=list)
