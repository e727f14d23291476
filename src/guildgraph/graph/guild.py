"""Guild, role and member models.

A Guild owns its channel registry. Channels are immutable snapshots, so
updates replace the registered snapshot rather than mutating it.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from guildgraph.core.channel import Channel, Overwrite
from guildgraph.core.errors import DecodeError
from guildgraph.core.identity import ChannelID, GuildID, OverwriteID, RoleID, UserID

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Role:
    """Guild role and its base permission bitmask."""

    id: RoleID
    name: str = ""
    permissions: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Role:
        """Create from a role payload. permissions may be an int or decimal string.

        Raises:
            DecodeError: If the id is missing or malformed.
        """
        role_id = RoleID.parse(data.get("id"))
        if role_id is None:
            raise DecodeError(f"Invalid role id {data.get('id')!r}", "id")
        raw = data.get("permissions")
        if isinstance(raw, str) and raw.isascii() and raw.isdigit():
            permissions = int(raw)
        elif isinstance(raw, int) and not isinstance(raw, bool):
            permissions = raw
        else:
            permissions = 0
        name = data.get("name")
        return cls(id=role_id, name=name if isinstance(name, str) else "", permissions=permissions)


@dataclass(frozen=True, slots=True)
class Member:
    """A user's membership in a guild: who they are and which roles they hold.

    The @everyone role is implicit and need not appear in role_ids.
    """

    user_id: UserID
    role_ids: frozenset[RoleID] = field(default_factory=frozenset)


class Guild:
    """Guild with its roles and owned channel registry.

    Args:
        id: Guild identifier.
        name: Display name.
        roles: Roles defined in the guild, including @everyone.
    """

    def __init__(self, id: GuildID, name: str | None = None, roles: Iterable[Role] = ()):
        self.id = id
        self.name = name
        self.roles: dict[RoleID, Role] = {role.id: role for role in roles}
        self._channels: dict[ChannelID, Channel] = {}

    def __repr__(self) -> str:
        return f"Guild(id={self.id!s}, name={self.name!r}, channels={len(self._channels)})"

    @property
    def everyone_role(self) -> Role | None:
        """The @everyone role, whose id equals the guild id."""
        return self.roles.get(RoleID.everyone(self.id))

    @property
    def channels(self) -> Mapping[ChannelID, Channel]:
        """Read-only view of the channel registry."""
        return self._channels.copy()

    def __iter__(self) -> Iterator[Channel]:
        return iter(list(self._channels.values()))

    def __len__(self) -> int:
        return len(self._channels)

    def __contains__(self, channel_id: object) -> bool:
        return channel_id in self._channels

    def get_channel(self, channel_id: ChannelID) -> Channel | None:
        return self._channels.get(channel_id)

    def add_channel(self, channel: Channel) -> bool:
        """Register or replace a channel snapshot.

        Args:
            channel: Channel to register. Its guild_id must match this guild.

        Returns:
            True if registered, False if the channel belongs to another guild.
        """
        if channel.guild_id != self.id:
            warnings.warn(
                f"Channel {channel.id} belongs to guild {channel.guild_id}, not {self.id}. "
                f"Ignoring.",
                stacklevel=2,
            )
            return False
        replaced = channel.id in self._channels
        self._channels[channel.id] = channel
        logger.debug("%s channel %s in guild %s", "Updated" if replaced else "Added", channel.id, self.id)
        return True

    def remove_channel(self, channel_id: ChannelID) -> Channel | None:
        """Remove a channel from the registry. Returns the removed snapshot."""
        channel = self._channels.pop(channel_id, None)
        if channel is not None:
            logger.debug("Removed channel %s from guild %s", channel_id, self.id)
        return channel

    def apply_permission_update(
        self,
        channel_id: ChannelID,
        overwrites: Mapping[OverwriteID, Overwrite] | Iterable[Overwrite],
    ) -> Channel | None:
        """Replace a registered channel's overwrites wholesale.

        Returns:
            The new snapshot, or None if the channel is not registered.
        """
        current = self._channels.get(channel_id)
        if current is None:
            return None
        updated = current.with_overwrites(overwrites)
        self._channels[channel_id] = updated
        return updated

    def clear(self) -> None:
        """Drop every channel. Called when the guild is destroyed."""
        self._channels.clear()
