"""Client: root context owning the guild registry and the transport.

Usage:
    client = Client(transport)

    # Apply gateway events in delivery order
    client.on_guild_create(guild_payload)
    channel = client.on_channel_create(channel_payload)

    # Channels delegate network calls back through the client
    webhook = await channel.create_webhook(name="ci")
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from guildgraph.config import ChannelSettings
from guildgraph.core.channel import Channel, decode_channel
from guildgraph.core.errors import ChannelDecodeError, DecodeError
from guildgraph.core.identity import ChannelID, GuildID, MessageID
from guildgraph.graph.guild import Guild, Role
from guildgraph.transport import Transport, Webhook

logger = logging.getLogger(__name__)


class Client:
    """Root entity context.

    Owns the canonical guild registry. Events are applied one at a time by
    the caller (single writer); no locking is done here.

    Args:
        transport: Network collaborator used for delegated commands.
        settings: Decode and command policy. Loaded from the environment if omitted.
    """

    def __init__(self, transport: Transport, settings: ChannelSettings | None = None):
        self._transport = transport
        self.settings = settings or ChannelSettings()
        self._guilds: dict[GuildID, Guild] = {}
        # Channels whose guild was not yet known when they arrived
        self._unlinked: dict[ChannelID, Channel] = {}

    @property
    def guilds(self) -> Mapping[GuildID, Guild]:
        return MappingProxyType(self._guilds)

    def get_guild(self, guild_id: GuildID) -> Guild | None:
        return self._guilds.get(guild_id)

    def get_channel(self, channel_id: ChannelID) -> Channel | None:
        """Find a registered channel in any guild."""
        for guild in self._guilds.values():
            channel = guild.get_channel(channel_id)
            if channel is not None:
                return channel
        return self._unlinked.get(channel_id)

    # Registry management

    def add_guild(self, guild: Guild) -> Guild:
        """Register a guild and adopt channels that were waiting for it."""
        if guild.id in self._guilds:
            warnings.warn(
                f"Guild {guild.id} already registered; replacing it.",
                stacklevel=2,
            )
        return self._register_guild(guild)

    def _register_guild(self, guild: Guild) -> Guild:
        previous = self._guilds.get(guild.id)
        if previous is not None:
            previous.clear()
        self._guilds[guild.id] = guild
        self._relink_pending(guild)
        logger.debug("Registered guild %s", guild.id)
        return guild

    def remove_guild(self, guild_id: GuildID) -> Guild | None:
        """Unregister a guild and destroy its channels."""
        guild = self._guilds.pop(guild_id, None)
        if guild is not None:
            guild.clear()
            logger.debug("Removed guild %s", guild_id)
        return guild

    def close(self) -> None:
        """Tear down every guild. Outstanding channel back-references go absent."""
        for guild_id in list(self._guilds):
            self.remove_guild(guild_id)
        self._unlinked.clear()

    def _relink_pending(self, guild: Guild) -> None:
        for channel_id, channel in list(self._unlinked.items()):
            if channel.guild_id == guild.id:
                del self._unlinked[channel_id]
                guild.add_channel(channel.relink(self))

    # Gateway event application

    def on_guild_create(self, data: Mapping[str, Any]) -> Guild:
        """Build and register a guild with its roles and channels.

        Malformed roles and channels inside the payload are skipped and logged;
        a malformed guild id fails the whole event.

        Raises:
            DecodeError: If the guild id is missing or malformed.
        """
        guild_id = GuildID.parse(data.get("id"))
        if guild_id is None:
            raise DecodeError(f"Invalid guild id {data.get('id')!r}", "id")

        roles: list[Role] = []
        for raw_role in data.get("roles") or []:
            if not isinstance(raw_role, Mapping):
                logger.warning("Skipping non-object role in guild %s", guild_id)
                continue
            try:
                roles.append(Role.from_dict(raw_role))
            except DecodeError as e:
                logger.warning("Skipping malformed role in guild %s: %s", guild_id, e)

        if guild_id in self._guilds:
            # Gateway repeats guild create after reconnects and outages
            logger.debug("Replacing guild %s from repeated guild create", guild_id)

        name = data.get("name")
        guild = self._register_guild(
            Guild(guild_id, name=name if isinstance(name, str) else None, roles=roles)
        )

        for raw_channel in data.get("channels") or []:
            if not isinstance(raw_channel, Mapping):
                logger.warning("Skipping non-object channel in guild %s", guild_id)
                continue
            # Channels nested in a guild payload omit their guild_id
            payload = {**raw_channel, "guild_id": str(guild_id)}
            try:
                channel = decode_channel(payload, self)
            except ChannelDecodeError as e:
                logger.warning("Skipping malformed channel in guild %s: %s", guild_id, e)
                continue
            guild.add_channel(channel)
        return guild

    def on_guild_delete(self, data: Mapping[str, Any]) -> Guild | None:
        guild_id = GuildID.parse(data.get("id"))
        if guild_id is None:
            raise DecodeError(f"Invalid guild id {data.get('id')!r}", "id")
        for channel_id, channel in list(self._unlinked.items()):
            if channel.guild_id == guild_id:
                del self._unlinked[channel_id]
        return self.remove_guild(guild_id)

    def on_channel_create(self, data: Mapping[str, Any]) -> Channel:
        """Decode a channel and register it with its guild.

        A channel whose guild is unknown is held until that guild is created.

        Raises:
            ChannelDecodeError: Structurally invalid payload. Nothing is registered.
        """
        channel = decode_channel(data, self)
        guild = channel.guild
        if guild is not None:
            self._unlinked.pop(channel.id, None)
            guild.add_channel(channel)
        elif channel.guild_id is not None:
            self._unlinked[channel.id] = channel
        return channel

    def on_channel_update(self, data: Mapping[str, Any]) -> Channel:
        """Replace a channel snapshot, overwrites included."""
        return self.on_channel_create(data)

    def on_channel_delete(self, data: Mapping[str, Any]) -> Channel | None:
        """Remove a channel from its guild. Returns the removed snapshot, if any.

        Raises:
            ChannelDecodeError: If the channel id is missing or malformed.
        """
        channel_id = ChannelID.parse(data.get("id"))
        if channel_id is None:
            raise ChannelDecodeError(f"Invalid channel id {data.get('id')!r}", "id")

        removed = self._unlinked.pop(channel_id, None)
        guild_id = GuildID.parse(data.get("guild_id"))
        guilds = [self._guilds[guild_id]] if guild_id in self._guilds else self._guilds.values()
        for guild in guilds:
            channel = guild.remove_channel(channel_id)
            if channel is not None:
                removed = channel
                break
        return removed

    # Delegated network calls

    async def create_webhook(self, channel_id: ChannelID, options: dict[str, str]) -> Webhook:
        """Create a webhook in a channel.

        Raises:
            RequestError: Passed through from the transport.
        """
        payload = await self._transport.create_webhook(channel_id, options)
        return Webhook.from_dict(payload)

    async def delete_all_reactions(self, channel_id: ChannelID, message_id: MessageID) -> None:
        """Delete every reaction from a message.

        Raises:
            RequestError: Passed through from the transport.
        """
        await self._transport.delete_all_reactions(channel_id, message_id)

    async def get_webhooks(self, channel_id: ChannelID) -> list[Webhook]:
        """List a channel's webhooks.

        Raises:
            RequestError: Passed through from the transport.
            DecodeError: If the response is not a list of webhooks.
        """
        payload = await self._transport.get_webhooks(channel_id)
        if not isinstance(payload, list):
            raise DecodeError(f"Expected webhook list, got {type(payload).__name__}")
        return [Webhook.from_dict(item) for item in payload]
