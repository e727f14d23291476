"""Core primitives: identities, channel records and permission resolution."""

from guildgraph.core.channel import (
    Channel,
    ChannelType,
    Overwrite,
    OverwriteType,
    decode_channel,
    decode_overwrite,
    serialize_overwrites,
)
from guildgraph.core.errors import (
    ChannelDecodeError,
    DecodeError,
    GuildGraphError,
    OverwriteDecodeError,
    UnsupportedChannelKindError,
)
from guildgraph.core.identity import (
    ChannelID,
    GuildID,
    MessageID,
    OverwriteID,
    RoleID,
    Snowflake,
    UserID,
    WebhookID,
    parse,
)
from guildgraph.core.permissions import (
    ALL_PERMISSIONS,
    Permission,
    compute_base_permissions,
    resolve_permissions,
)

__all__ = [
    # Identity
    "Snowflake",
    "ChannelID",
    "MessageID",
    "OverwriteID",
    "GuildID",
    "UserID",
    "RoleID",
    "WebhookID",
    "parse",
    # Channel records
    "Channel",
    "ChannelType",
    "Overwrite",
    "OverwriteType",
    "decode_channel",
    "decode_overwrite",
    "serialize_overwrites",
    # Permissions
    "Permission",
    "ALL_PERMISSIONS",
    "compute_base_permissions",
    "resolve_permissions",
    # Errors
    "GuildGraphError",
    "DecodeError",
    "ChannelDecodeError",
    "OverwriteDecodeError",
    "UnsupportedChannelKindError",
]
