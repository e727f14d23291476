"""Data models returned by delegated network calls."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from guildgraph.core.errors import DecodeError
from guildgraph.core.identity import ChannelID, GuildID, WebhookID


@dataclass(frozen=True, slots=True)
class Webhook:
    """Channel webhook.

    Attributes:
        id: Webhook identifier.
        channel_id: Channel the webhook posts into.
        guild_id: Guild of that channel, if known.
        name: Default display name.
        avatar: Avatar hash.
        token: Secure token; absent for webhooks listed without it.
    """

    id: WebhookID
    channel_id: ChannelID
    guild_id: GuildID | None = None
    name: str | None = None
    avatar: str | None = None
    token: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Webhook:
        """Create from a webhook payload.

        Raises:
            DecodeError: If id or channel_id is missing or malformed.
        """
        if not isinstance(data, Mapping):
            raise DecodeError(f"Webhook payload must be an object, got {type(data).__name__}")
        webhook_id = WebhookID.parse(data.get("id"))
        if webhook_id is None:
            raise DecodeError(f"Invalid webhook id {data.get('id')!r}", "id")
        channel_id = ChannelID.parse(data.get("channel_id"))
        if channel_id is None:
            raise DecodeError(f"Invalid webhook channel_id {data.get('channel_id')!r}", "channel_id")

        def text(key: str) -> str | None:
            value = data.get(key)
            return value if isinstance(value, str) else None

        return cls(
            id=webhook_id,
            channel_id=channel_id,
            guild_id=GuildID.parse(data.get("guild_id")),
            name=text("name"),
            avatar=text("avatar"),
            token=text("token"),
        )
