"""Client context protocol.

The root context owns the canonical guild registry and the network
collaborator. Channels only hold a weak reference to it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from guildgraph.config import ChannelSettings
from guildgraph.core.identity import ChannelID, GuildID, MessageID

if TYPE_CHECKING:
    from guildgraph.graph.guild import Guild
    from guildgraph.transport.models import Webhook


@runtime_checkable
class ClientContext(Protocol):
    """What channels require from their root context."""

    settings: ChannelSettings

    @property
    def guilds(self) -> Mapping[GuildID, Guild]:
        """Guild registry keyed by guild id."""
        ...

    async def create_webhook(self, channel_id: ChannelID, options: dict[str, str]) -> Webhook:
        """Create a webhook in a channel."""
        ...

    async def delete_all_reactions(self, channel_id: ChannelID, message_id: MessageID) -> None:
        """Delete every reaction from a message."""
        ...

    async def get_webhooks(self, channel_id: ChannelID) -> list[Webhook]:
        """List a channel's webhooks."""
        ...
