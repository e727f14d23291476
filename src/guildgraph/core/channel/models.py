"""Guild channel and permission overwrite records.

Records are immutable snapshots. A permission update produces a new Channel
via with_overwrites(); the owning Guild swaps the snapshot in its registry.

Usage:
    channel = decode_channel(payload, client)
    channel.guild            # Guild | None, resolved through the client's registry
    await channel.create_webhook(name="hook")
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from guildgraph.core.errors import UnsupportedChannelKindError
from guildgraph.core.identity import ChannelID, GuildID, MessageID, OverwriteID

if TYPE_CHECKING:
    from guildgraph.graph.guild import Guild
    from guildgraph.graph.protocol import ClientContext
    from guildgraph.transport.models import Webhook

logger = logging.getLogger(__name__)


class ChannelType(IntEnum):
    """Channel kind as sent in the payload's integer `type` field."""

    TEXT = 0
    DM = 1
    VOICE = 2
    GROUP_DM = 3
    CATEGORY = 4
    NEWS = 5
    STORE = 6


class OverwriteType(Enum):
    """Whether an overwrite targets a role or a single member."""

    ROLE = "role"
    MEMBER = "member"


@dataclass(frozen=True, slots=True)
class Overwrite:
    """Allow/deny permission pair attached to a channel.

    allow & deny may overlap; server data is taken as-is.
    """

    id: OverwriteID
    type: OverwriteType
    allow: int = 0
    deny: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert back to the wire shape."""
        return {
            "id": str(self.id),
            "type": self.type.value,
            "allow": self.allow,
            "deny": self.deny,
        }


def _freeze(overwrites: Mapping[OverwriteID, Overwrite] | Iterable[Overwrite]) -> Mapping[OverwriteID, Overwrite]:
    if isinstance(overwrites, Mapping):
        return MappingProxyType(dict(overwrites))
    return MappingProxyType({ow.id: ow for ow in overwrites})


@dataclass(frozen=True, slots=True, eq=True)
class Channel:
    """Guild-scoped channel snapshot.

    Back-references are non-owning: the client context is held through a
    weakref and the guild is looked up by id in the context's registry. Both
    resolve to None once the owner is gone.

    Attributes:
        id: Channel identifier.
        type: Channel kind.
        guild_id: Guild id carried by the payload, if any.
        linked_guild_id: Guild id that was found in the registry at decode or
            relink time. None while the guild is unknown.
        overwrites: Read-only mapping of overwrite target to Overwrite.
    """

    id: ChannelID
    type: ChannelType
    guild_id: GuildID | None = None
    name: str | None = None
    topic: str | None = None
    bitrate: int | None = None
    user_limit: int | None = None
    position: int | None = None
    is_nsfw: bool = False
    is_private: bool | None = None
    last_message_id: MessageID | None = None
    last_pin_timestamp: datetime | None = None
    overwrites: Mapping[OverwriteID, Overwrite] = field(
        default_factory=lambda: MappingProxyType({})
    )
    linked_guild_id: GuildID | None = field(default=None, compare=False)
    context_ref: weakref.ref[ClientContext] | None = field(
        default=None, compare=False, repr=False
    )

    def __post_init__(self) -> None:
        if not isinstance(self.overwrites, MappingProxyType):
            object.__setattr__(self, "overwrites", _freeze(self.overwrites))

    def __hash__(self) -> int:
        return hash(self.id)

    # Graph back-references

    @property
    def client(self) -> ClientContext | None:
        """Owning client context, or None if it has been torn down."""
        if self.context_ref is None:
            return None
        return self.context_ref()

    @property
    def guild(self) -> Guild | None:
        """Owning guild, or None if unlinked, removed, or the client is gone."""
        context = self.client
        if context is None or self.linked_guild_id is None:
            return None
        return context.guilds.get(self.linked_guild_id)

    @property
    def is_voice(self) -> bool:
        return self.type is ChannelType.VOICE

    # Snapshot transitions

    def with_overwrites(
        self, overwrites: Mapping[OverwriteID, Overwrite] | Iterable[Overwrite]
    ) -> Channel:
        """Return a snapshot whose overwrites are replaced wholesale."""
        return replace(self, overwrites=_freeze(overwrites))

    def relink(self, context: ClientContext | None = None) -> Channel:
        """Return a snapshot linked to its guild if the guild is now known.

        Args:
            context: Client context to link against. Defaults to the current one.

        Returns:
            Linked snapshot, or self if there is nothing to link to.
        """
        context = context if context is not None else self.client
        if context is None or self.guild_id is None:
            return self
        if self.guild_id not in context.guilds:
            return self
        return replace(
            self,
            linked_guild_id=self.guild_id,
            context_ref=weakref.ref(context),
        )

    # Delegated commands

    def _dispatch_target(self, operation: str) -> ClientContext | None:
        """Resolve the context to dispatch through, or None to suppress the call.

        Raises:
            UnsupportedChannelKindError: Voice channel and strict mode is on.
        """
        context = self.client
        if context is None:
            logger.debug("%s on detached channel %s suppressed", operation, self.id)
            return None
        if self.is_voice:
            if context.settings.strict_channel_kind:
                raise UnsupportedChannelKindError(operation, self.type.name.lower())
            logger.debug("%s on voice channel %s suppressed", operation, self.id)
            return None
        return context

    async def create_webhook(
        self, name: str | None = None, avatar: str | None = None
    ) -> Webhook | None:
        """Create a webhook for this channel.

        Args:
            name: Webhook name.
            avatar: Avatar image, base64 data URI.

        Returns:
            The created Webhook, or None when the call was suppressed.

        Raises:
            RequestError: Passed through from the transport.
        """
        context = self._dispatch_target("create_webhook")
        if context is None:
            return None
        options: dict[str, str] = {}
        if name is not None:
            options["name"] = name
        if avatar is not None:
            options["avatar"] = avatar
        return await context.create_webhook(self.id, options)

    async def delete_reactions(self, message_id: MessageID) -> bool:
        """Delete all reactions from a message in this channel.

        Returns:
            True once the transport completed, False when the call was suppressed.
        """
        context = self._dispatch_target("delete_reactions")
        if context is None:
            return False
        await context.delete_all_reactions(self.id, message_id)
        return True

    async def get_webhooks(self) -> list[Webhook] | None:
        """List this channel's webhooks, or None when the call was suppressed."""
        context = self._dispatch_target("get_webhooks")
        if context is None:
            return None
        return await context.get_webhooks(self.id)
