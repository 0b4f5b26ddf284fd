"""EventSub component: conduits and conduit shards.

Conduit endpoints require an app access token.
"""

from __future__ import annotations

import logging

from twitch_helix.core.base import ApiBase
from twitch_helix.core.exceptions import MissingParameterError, OutOfRangeError
from twitch_helix.core.request_builder import HttpMethod, QueryParams
from twitch_helix.core.validation import (
    require_length,
    require_member,
    require_range,
    require_string,
)
from twitch_helix.schemas.eventsub import (
    CreateConduitRequest,
    CreateConduitResponse,
    GetConduitShardsResponse,
    GetConduitsResponse,
    ShardUpdate,
    UpdateConduitRequest,
    UpdateConduitResponse,
    UpdateConduitShardsRequest,
    UpdateConduitShardsResponse,
)

logger = logging.getLogger(__name__)

MAX_SHARD_COUNT: int = 20_000

SHARD_STATUSES: frozenset[str] = frozenset(
    {
        "enabled",
        "webhook_callback_verification_pending",
        "webhook_callback_verification_failed",
        "notification_failures_exceeded",
        "websocket_disconnected",
        "websocket_failed_ping_pong",
        "websocket_received_inbound_traffic",
        "websocket_connection_unused",
        "websocket_internal_error",
        "websocket_network_timeout",
        "websocket_network_error",
        "websocket_failed_to_reconnect",
    }
)

TRANSPORT_METHODS: frozenset[str] = frozenset({"webhook", "websocket"})

MIN_WEBHOOK_SECRET_LENGTH: int = 10
MAX_WEBHOOK_SECRET_LENGTH: int = 100


class EventSub(ApiBase):
    """Wraps the ``/eventsub/conduits`` endpoints."""

    component_name = "eventsub"

    async def get_conduits(
        self,
        *,
        access_token: str | None = None,
    ) -> GetConduitsResponse | None:
        return await self._call_for_value(
            HttpMethod.GET,
            "/eventsub/conduits",
            GetConduitsResponse,
            access_token=access_token,
        )

    async def create_conduit(
        self,
        shard_count: int,
        *,
        access_token: str | None = None,
    ) -> CreateConduitResponse | None:
        """Create a conduit with 1 to 20000 shards."""
        require_range(shard_count, "shard_count", 1, MAX_SHARD_COUNT)

        return await self._call_for_value(
            HttpMethod.POST,
            "/eventsub/conduits",
            CreateConduitResponse,
            body=CreateConduitRequest(shard_count=shard_count),
            access_token=access_token,
        )

    async def update_conduit(
        self,
        conduit_id: str,
        shard_count: int,
        *,
        access_token: str | None = None,
    ) -> UpdateConduitResponse | None:
        require_string(conduit_id, "conduit_id")
        require_range(shard_count, "shard_count", 1, MAX_SHARD_COUNT)

        return await self._call_for_value(
            HttpMethod.PATCH,
            "/eventsub/conduits",
            UpdateConduitResponse,
            body=UpdateConduitRequest(id=conduit_id, shard_count=shard_count),
            access_token=access_token,
        )

    async def delete_conduit(
        self,
        conduit_id: str,
        *,
        access_token: str | None = None,
    ) -> bool:
        require_string(conduit_id, "conduit_id")

        params = QueryParams().add("id", conduit_id)
        return await self._call_for_success(
            HttpMethod.DELETE,
            "/eventsub/conduits",
            params=params,
            access_token=access_token,
        )

    # ------------------------------------------------------------------
    # Shards
    # ------------------------------------------------------------------

    async def get_conduit_shards(
        self,
        conduit_id: str,
        status: str | None = None,
        after: str | None = None,
        *,
        access_token: str | None = None,
    ) -> GetConduitShardsResponse | None:
        """List a conduit's shards, optionally only those in *status*."""
        require_string(conduit_id, "conduit_id")
        if status is not None:
            require_member(status, "status", SHARD_STATUSES)

        params = (
            QueryParams()
            .add("conduit_id", conduit_id)
            .add_optional("status", status)
            .add_optional("after", after)
        )
        return await self._call_for_value(
            HttpMethod.GET,
            "/eventsub/conduits/shards",
            GetConduitShardsResponse,
            params=params,
            access_token=access_token,
        )

    async def update_conduit_shards(
        self,
        conduit_id: str,
        shards: list[ShardUpdate],
        *,
        access_token: str | None = None,
    ) -> UpdateConduitShardsResponse | None:
        """Point one or more shards at a webhook or websocket transport.

        A webhook transport needs ``callback`` and ``secret``; a websocket
        transport needs ``session_id``.  Shards Twitch rejects are reported
        in the response's ``errors`` list rather than raised.
        """
        require_string(conduit_id, "conduit_id")
        if not shards:
            raise MissingParameterError("shards", "must contain at least 1 item(s)")
        if len(shards) > MAX_SHARD_COUNT:
            raise OutOfRangeError(
                "shards", f"must contain at most {MAX_SHARD_COUNT} items (got {len(shards)})"
            )
        for index, shard in enumerate(shards):
            prefix = f"shards[{index}]"
            require_string(shard.id, f"{prefix}.id")
            transport = shard.transport
            require_member(transport.method, f"{prefix}.transport.method", TRANSPORT_METHODS)
            if transport.method == "webhook":
                require_string(transport.callback, f"{prefix}.transport.callback")
                require_length(
                    transport.secret,
                    f"{prefix}.transport.secret",
                    MIN_WEBHOOK_SECRET_LENGTH,
                    MAX_WEBHOOK_SECRET_LENGTH,
                )
            else:
                require_string(transport.session_id, f"{prefix}.transport.session_id")

        body = UpdateConduitShardsRequest(conduit_id=conduit_id, shards=list(shards))
        return await self._call_for_value(
            HttpMethod.PATCH,
            "/eventsub/conduits/shards",
            UpdateConduitShardsResponse,
            body=body,
            access_token=access_token,
        )
